from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from clinic.models import Patient, Doctor, Drug, Appointment, Admission
from clinic.schemas.dashboard import DashboardStats
from clinic.services.storage import LOW_STOCK_THRESHOLD


class StatsService:
    """Dashboard counts. Six independent queries, not a consistent snapshot."""

    async def summary(self, db: AsyncSession, today: date) -> DashboardStats:
        total_patients = await db.scalar(select(func.count(Patient.id))) or 0
        active_admissions = await db.scalar(
            select(func.count(Admission.id)).where(Admission.status == "admitted")
        ) or 0
        doctors_available = await db.scalar(
            select(func.count(Doctor.id)).where(Doctor.is_active.is_(True))
        ) or 0
        drug_items = await db.scalar(select(func.count(Drug.id))) or 0
        appointments_today = await db.scalar(
            select(func.count(Appointment.id)).where(Appointment.appointment_date == today)
        ) or 0
        low_stock_drugs = await db.scalar(
            select(func.count(Drug.id)).where(Drug.stock_quantity <= LOW_STOCK_THRESHOLD)
        ) or 0

        return DashboardStats(
            total_patients=total_patients,
            active_admissions=active_admissions,
            doctors_available=doctors_available,
            drug_items=drug_items,
            appointments_today=appointments_today,
            low_stock_drugs=low_stock_drugs,
        )


stats_service = StatsService()
