from sqlalchemy import Column, Integer, String, Date, Text, DateTime
from clinic.database import Base, utcnow


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    # References are advisory: no DB constraint, reads tolerate dangling ids
    patient_id = Column(Integer, index=True)  # patients.id
    doctor_id = Column(Integer, index=True)  # doctors.id
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(String, nullable=False)  # free text, e.g. "10:30"
    status = Column(String(20), nullable=False, default="scheduled")  # scheduled | completed | cancelled
    reason = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
