from sqlalchemy import Column, Integer, String, Date, Text, DateTime
from clinic.database import Base, utcnow


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    # References are advisory: no DB constraint, deletes never cascade or block
    user_id = Column(String, index=True)  # users.id
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String)
    phone = Column(String)
    date_of_birth = Column(Date)
    gender = Column(String)
    address = Column(Text)
    emergency_contact = Column(String)
    medical_history = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
