from sqlalchemy import Column, Integer, String, Date, Text, Numeric, DateTime
from clinic.database import Base, utcnow


class Drug(Base):
    __tablename__ = "drugs"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String)
    manufacturer = Column(String)
    dosage = Column(String)
    unit = Column(String, nullable=False)  # tablet, ml, mg, ...
    stock_quantity = Column(Integer, nullable=False, default=0, index=True)
    unit_price = Column(Numeric(10, 2))
    expiry_date = Column(Date)
    batch_number = Column(String)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
