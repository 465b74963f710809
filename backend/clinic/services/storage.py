"""
Data-access layer: one coroutine per entity per operation.

Every write is a single statement followed by a commit. Reads that carry a
related entity use LEFT OUTER JOINs, so a dangling foreign key yields ``None``
for the related side instead of dropping the row.
"""

from dataclasses import dataclass
from typing import Any, Optional
from fastapi import Depends
from sqlalchemy import Select, select, update, delete, or_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from clinic.database import get_db, utcnow
from clinic.models import User, Patient, Doctor, Drug, Appointment, Admission

LOW_STOCK_THRESHOLD = 10

# INSERT ... ON CONFLICT DO UPDATE is dialect-specific
_DIALECT_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


@dataclass
class PatientWithUser:
    patient: Patient
    user: Optional[User]


@dataclass
class DoctorWithUser:
    doctor: Doctor
    user: Optional[User]


@dataclass
class AppointmentWithDetails:
    appointment: Appointment
    patient: Optional[Patient]
    doctor: Optional[Doctor]


@dataclass
class AdmissionWithDetails:
    admission: Admission
    patient: Optional[Patient]
    doctor: Optional[Doctor]


def _like(query: str) -> str:
    return f"%{query}%"


class ClinicStorage:
    def __init__(self, session: AsyncSession):
        self.session = session

    # -- shared write helpers -------------------------------------------------

    async def _insert(self, model, fields: dict[str, Any]):
        row = model(**fields)
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return row

    async def _update(self, model, row_id: int, fields: dict[str, Any]):
        """Overwrite only ``fields``; ``updated_at`` is always refreshed."""
        stmt = (
            update(model)
            .where(model.id == row_id)
            .values(**fields, updated_at=utcnow())
            .returning(model)
        )
        row = await self.session.scalar(stmt)
        await self.session.commit()
        if row is None:
            return None
        await self.session.refresh(row)
        return row

    async def _delete(self, model, row_id: int) -> None:
        await self.session.execute(delete(model).where(model.id == row_id))
        await self.session.commit()

    # -- users ----------------------------------------------------------------

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.session.scalar(select(User).where(User.id == user_id))

    async def upsert_user(self, fields: dict[str, Any]) -> User:
        """Insert the user, or overwrite the supplied fields if the id exists. One statement."""
        insert = _DIALECT_INSERTS[self.session.bind.dialect.name]
        now = utcnow()
        changes = {key: value for key, value in fields.items() if key != "id"}
        stmt = (
            insert(User)
            .values(**fields, created_at=now, updated_at=now)
            .on_conflict_do_update(index_elements=[User.id], set_={**changes, "updated_at": now})
            .returning(User)
            .execution_options(populate_existing=True)
        )
        user = await self.session.scalar(stmt)
        await self.session.commit()
        return user

    # -- patients -------------------------------------------------------------

    def _patients_with_user(self) -> Select:
        return (
            select(Patient, User)
            .outerjoin(User, Patient.user_id == User.id)
            .order_by(Patient.created_at.desc(), Patient.id.desc())
        )

    async def list_patients(self) -> list[PatientWithUser]:
        result = await self.session.execute(self._patients_with_user())
        return [PatientWithUser(p, u) for p, u in result.all()]

    async def get_patient(self, patient_id: int) -> Optional[PatientWithUser]:
        result = await self.session.execute(
            self._patients_with_user().where(Patient.id == patient_id)
        )
        row = result.first()
        return PatientWithUser(*row) if row else None

    async def create_patient(self, fields: dict[str, Any]) -> Patient:
        return await self._insert(Patient, fields)

    async def update_patient(self, patient_id: int, fields: dict[str, Any]) -> Optional[Patient]:
        return await self._update(Patient, patient_id, fields)

    async def delete_patient(self, patient_id: int) -> None:
        await self._delete(Patient, patient_id)

    async def search_patients(self, query: str) -> list[PatientWithUser]:
        pattern = _like(query)
        stmt = self._patients_with_user().where(
            or_(
                Patient.first_name.ilike(pattern),
                Patient.last_name.ilike(pattern),
                Patient.email.ilike(pattern),
                Patient.phone.ilike(pattern),
            )
        )
        result = await self.session.execute(stmt)
        return [PatientWithUser(p, u) for p, u in result.all()]

    # -- doctors --------------------------------------------------------------

    def _doctors_with_user(self) -> Select:
        return (
            select(Doctor, User)
            .outerjoin(User, Doctor.user_id == User.id)
            .order_by(Doctor.created_at.desc(), Doctor.id.desc())
        )

    async def list_doctors(self) -> list[DoctorWithUser]:
        result = await self.session.execute(self._doctors_with_user())
        return [DoctorWithUser(d, u) for d, u in result.all()]

    async def get_doctor(self, doctor_id: int) -> Optional[DoctorWithUser]:
        result = await self.session.execute(
            self._doctors_with_user().where(Doctor.id == doctor_id)
        )
        row = result.first()
        return DoctorWithUser(*row) if row else None

    async def create_doctor(self, fields: dict[str, Any]) -> Doctor:
        return await self._insert(Doctor, fields)

    async def update_doctor(self, doctor_id: int, fields: dict[str, Any]) -> Optional[Doctor]:
        return await self._update(Doctor, doctor_id, fields)

    async def delete_doctor(self, doctor_id: int) -> None:
        await self._delete(Doctor, doctor_id)

    async def search_doctors(self, query: str) -> list[DoctorWithUser]:
        pattern = _like(query)
        stmt = self._doctors_with_user().where(
            or_(
                Doctor.first_name.ilike(pattern),
                Doctor.last_name.ilike(pattern),
                Doctor.specialization.ilike(pattern),
                Doctor.email.ilike(pattern),
            )
        )
        result = await self.session.execute(stmt)
        return [DoctorWithUser(d, u) for d, u in result.all()]

    # -- drugs ----------------------------------------------------------------

    async def list_drugs(self) -> list[Drug]:
        result = await self.session.execute(
            select(Drug).order_by(Drug.created_at.desc(), Drug.id.desc())
        )
        return list(result.scalars().all())

    async def get_drug(self, drug_id: int) -> Optional[Drug]:
        return await self.session.scalar(select(Drug).where(Drug.id == drug_id))

    async def create_drug(self, fields: dict[str, Any]) -> Drug:
        return await self._insert(Drug, fields)

    async def update_drug(self, drug_id: int, fields: dict[str, Any]) -> Optional[Drug]:
        return await self._update(Drug, drug_id, fields)

    async def delete_drug(self, drug_id: int) -> None:
        await self._delete(Drug, drug_id)

    async def search_drugs(self, query: str) -> list[Drug]:
        pattern = _like(query)
        result = await self.session.execute(
            select(Drug)
            .where(
                or_(
                    Drug.name.ilike(pattern),
                    Drug.category.ilike(pattern),
                    Drug.manufacturer.ilike(pattern),
                )
            )
            .order_by(Drug.created_at.desc(), Drug.id.desc())
        )
        return list(result.scalars().all())

    async def get_low_stock_drugs(self) -> list[Drug]:
        result = await self.session.execute(
            select(Drug)
            .where(Drug.stock_quantity <= LOW_STOCK_THRESHOLD)
            .order_by(Drug.stock_quantity, Drug.id)
        )
        return list(result.scalars().all())

    # -- appointments ---------------------------------------------------------

    def _appointments_with_details(self) -> Select:
        return (
            select(Appointment, Patient, Doctor)
            .outerjoin(Patient, Appointment.patient_id == Patient.id)
            .outerjoin(Doctor, Appointment.doctor_id == Doctor.id)
            .order_by(Appointment.appointment_date.desc(), Appointment.id.desc())
        )

    async def _appointments(self, stmt: Select) -> list[AppointmentWithDetails]:
        result = await self.session.execute(stmt)
        return [AppointmentWithDetails(a, p, d) for a, p, d in result.all()]

    async def list_appointments(self) -> list[AppointmentWithDetails]:
        return await self._appointments(self._appointments_with_details())

    async def get_appointment(self, appointment_id: int) -> Optional[AppointmentWithDetails]:
        rows = await self._appointments(
            self._appointments_with_details().where(Appointment.id == appointment_id)
        )
        return rows[0] if rows else None

    async def create_appointment(self, fields: dict[str, Any]) -> Appointment:
        return await self._insert(Appointment, fields)

    async def update_appointment(
        self, appointment_id: int, fields: dict[str, Any]
    ) -> Optional[Appointment]:
        return await self._update(Appointment, appointment_id, fields)

    async def delete_appointment(self, appointment_id: int) -> None:
        await self._delete(Appointment, appointment_id)

    async def get_appointments_by_doctor(self, doctor_id: int) -> list[AppointmentWithDetails]:
        return await self._appointments(
            self._appointments_with_details().where(Appointment.doctor_id == doctor_id)
        )

    async def get_appointments_by_patient(self, patient_id: int) -> list[AppointmentWithDetails]:
        return await self._appointments(
            self._appointments_with_details().where(Appointment.patient_id == patient_id)
        )

    # -- admissions -----------------------------------------------------------

    def _admissions_with_details(self) -> Select:
        return (
            select(Admission, Patient, Doctor)
            .outerjoin(Patient, Admission.patient_id == Patient.id)
            .outerjoin(Doctor, Admission.doctor_id == Doctor.id)
            .order_by(Admission.admission_date.desc(), Admission.id.desc())
        )

    async def _admissions(self, stmt: Select) -> list[AdmissionWithDetails]:
        result = await self.session.execute(stmt)
        return [AdmissionWithDetails(a, p, d) for a, p, d in result.all()]

    async def list_admissions(self) -> list[AdmissionWithDetails]:
        return await self._admissions(self._admissions_with_details())

    async def get_admission(self, admission_id: int) -> Optional[AdmissionWithDetails]:
        rows = await self._admissions(
            self._admissions_with_details().where(Admission.id == admission_id)
        )
        return rows[0] if rows else None

    async def create_admission(self, fields: dict[str, Any]) -> Admission:
        return await self._insert(Admission, fields)

    async def update_admission(
        self, admission_id: int, fields: dict[str, Any]
    ) -> Optional[Admission]:
        return await self._update(Admission, admission_id, fields)

    async def delete_admission(self, admission_id: int) -> None:
        await self._delete(Admission, admission_id)

    async def get_active_admissions(self) -> list[AdmissionWithDetails]:
        return await self._admissions(
            self._admissions_with_details().where(Admission.status == "admitted")
        )


def get_storage(db: AsyncSession = Depends(get_db)) -> ClinicStorage:
    return ClinicStorage(db)
