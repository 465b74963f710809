from sqlalchemy import Column, Integer, String, Date, Text, DateTime
from clinic.database import Base, utcnow


class Admission(Base):
    __tablename__ = "admissions"

    id = Column(Integer, primary_key=True, index=True)
    # References are advisory: no DB constraint, reads tolerate dangling ids
    patient_id = Column(Integer, index=True)  # patients.id
    doctor_id = Column(Integer, index=True)  # doctors.id
    admission_date = Column(Date, nullable=False)
    discharge_date = Column(Date)
    room_number = Column(String)
    bed_number = Column(String)
    status = Column(String(20), nullable=False, default="admitted", index=True)  # admitted | discharged
    diagnosis = Column(Text)
    treatment = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
