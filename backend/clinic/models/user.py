from sqlalchemy import Column, String, DateTime
from clinic.database import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)  # opaque identity from the sign-in provider
    email = Column(String, unique=True)
    first_name = Column(String)
    last_name = Column(String)
    profile_image_url = Column(String)
    role = Column(String(20), nullable=False, default="patient")  # "patient" | "doctor" | "admin"
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
