from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime
from clinic.database import Base, utcnow


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    # References are advisory: no DB constraint, deletes never cascade or block
    user_id = Column(String, index=True)  # users.id
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String)
    phone = Column(String)
    specialization = Column(String, nullable=False)
    experience = Column(Integer)  # years
    qualification = Column(String)
    license_number = Column(String)
    consultation_fee = Column(Numeric(10, 2))
    rating = Column(Numeric(3, 2))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
