"""Data-access layer tests, run directly against ClinicStorage without HTTP."""

import asyncio
from datetime import date, timedelta
from decimal import Decimal
from sqlalchemy import select, func
from clinic.models import User
from clinic.services.storage import ClinicStorage


async def test_create_then_get_returns_same_fields_and_timestamps(storage):
    fields = {
        "first_name": "Mei",
        "last_name": "Tanaka",
        "email": "mei@mail.example",
        "phone": "555-0101",
        "date_of_birth": date(1990, 4, 2),
        "gender": "Female",
    }
    created = await storage.create_patient(fields)

    row = await storage.get_patient(created.id)

    assert row is not None
    for key, value in fields.items():
        assert getattr(row.patient, key) == value
    assert row.patient.created_at is not None
    assert row.patient.updated_at >= row.patient.created_at
    assert row.user is None


async def test_update_changes_only_supplied_field_and_bumps_updated_at(storage):
    created = await storage.create_drug({"name": "Paracetamol", "unit": "tablet", "stock_quantity": 40})
    before = created.updated_at

    updated = await storage.update_drug(created.id, {"stock_quantity": 12})

    assert updated.stock_quantity == 12
    assert updated.name == "Paracetamol"
    assert updated.unit == "tablet"
    assert updated.updated_at > before
    assert updated.created_at == created.created_at


async def test_update_with_no_fields_only_touches_timestamp(storage):
    created = await storage.create_drug({"name": "Cetirizine", "unit": "tablet"})
    before = created.updated_at

    touched = await storage.update_drug(created.id, {})

    assert touched.name == "Cetirizine"
    assert touched.updated_at > before


async def test_update_missing_row_returns_none(storage):
    assert await storage.update_patient(404, {"first_name": "Nobody"}) is None


async def test_delete_is_idempotent(storage):
    doctor = await storage.create_doctor(
        {"first_name": "Kwame", "last_name": "Mensah", "specialization": "Cardiology"}
    )

    await storage.delete_doctor(doctor.id)
    await storage.delete_doctor(doctor.id)

    assert await storage.get_doctor(doctor.id) is None


async def test_doctor_is_active_defaults_to_true(storage):
    doctor = await storage.create_doctor(
        {"first_name": "Elena", "last_name": "Rossi", "specialization": "Neurology"}
    )
    assert doctor.is_active is True


async def test_doctor_decimals_round_trip(storage):
    doctor = await storage.create_doctor({
        "first_name": "Raj",
        "last_name": "Singh",
        "specialization": "Oncology",
        "consultation_fee": Decimal("750.00"),
        "rating": Decimal("4.50"),
    })
    row = await storage.get_doctor(doctor.id)
    assert row.doctor.consultation_fee == Decimal("750")
    assert row.doctor.rating == Decimal("4.5")


async def test_patient_joins_its_user(storage):
    await storage.upsert_user({"id": "u-1", "email": "omar@mail.example", "first_name": "Omar"})
    patient = await storage.create_patient({"first_name": "Omar", "last_name": "Haddad", "user_id": "u-1"})

    row = await storage.get_patient(patient.id)

    assert row.user is not None
    assert row.user.email == "omar@mail.example"


async def test_dangling_references_degrade_to_none(storage):
    await storage.create_patient({"first_name": "Ghost", "last_name": "Link", "user_id": "no-such-user"})
    await storage.create_appointment({
        "patient_id": 999,
        "doctor_id": 998,
        "appointment_date": date.today(),
        "appointment_time": "10:00",
    })

    patients = await storage.list_patients()
    appointments = await storage.list_appointments()

    assert len(patients) == 1 and patients[0].user is None
    assert len(appointments) == 1
    assert appointments[0].patient is None
    assert appointments[0].doctor is None


async def test_deleting_referenced_patient_leaves_appointment_readable(storage):
    patient = await storage.create_patient({"first_name": "Sofia", "last_name": "Alvarez"})
    appointment = await storage.create_appointment({
        "patient_id": patient.id,
        "appointment_date": date.today(),
        "appointment_time": "09:30",
    })

    await storage.delete_patient(patient.id)

    row = await storage.get_appointment(appointment.id)
    assert row is not None
    assert row.appointment.patient_id == patient.id
    assert row.patient is None


async def test_list_patients_newest_first(storage):
    first = await storage.create_patient({"first_name": "Liam", "last_name": "Brennan"})
    second = await storage.create_patient({"first_name": "Zara", "last_name": "Kim"})

    rows = await storage.list_patients()

    assert [r.patient.id for r in rows] == [second.id, first.id]


async def test_search_patients_matches_name_email_or_phone(storage):
    await storage.create_patient({"first_name": "Hannah", "last_name": "Novak", "phone": "555-7777"})
    await storage.create_patient({"first_name": "Ivan", "last_name": "Schmidt", "email": "ivan@novak.example"})
    await storage.create_patient({"first_name": "Diego", "last_name": "Santos"})

    by_name_or_email = await storage.search_patients("novak")
    by_phone = await storage.search_patients("7777")

    assert sorted(r.patient.first_name for r in by_name_or_email) == ["Hannah", "Ivan"]
    assert [r.patient.first_name for r in by_phone] == ["Hannah"]


async def test_search_doctors_matches_specialization(storage):
    await storage.create_doctor({"first_name": "Yuki", "last_name": "Kim", "specialization": "Pediatrics"})
    await storage.create_doctor({"first_name": "Noah", "last_name": "Patel", "specialization": "Dermatology"})

    rows = await storage.search_doctors("pedia")

    assert [r.doctor.first_name for r in rows] == ["Yuki"]


async def test_search_drugs_matches_category_and_manufacturer(storage):
    await storage.create_drug({"name": "Amoxicillin", "unit": "capsule", "category": "Antibiotic"})
    await storage.create_drug({"name": "Omeprazole", "unit": "capsule", "manufacturer": "Cipla"})
    await storage.create_drug({"name": "Ibuprofen", "unit": "tablet", "category": "Analgesic"})

    assert [d.name for d in await storage.search_drugs("antibio")] == ["Amoxicillin"]
    assert [d.name for d in await storage.search_drugs("cipla")] == ["Omeprazole"]


async def test_low_stock_drugs_sorted_ascending(storage):
    for qty in [5, 15, 10, 0]:
        await storage.create_drug({"name": f"Drug {qty}", "unit": "tablet", "stock_quantity": qty})

    low = await storage.get_low_stock_drugs()

    assert [d.stock_quantity for d in low] == [0, 5, 10]


async def test_active_admissions_ignore_discharge_date(storage):
    today = date.today()
    await storage.create_admission({"admission_date": today, "status": "admitted"})
    await storage.create_admission({
        "admission_date": today - timedelta(days=3),
        "discharge_date": today,
        "status": "admitted",
    })
    await storage.create_admission({
        "admission_date": today - timedelta(days=5),
        "discharge_date": today - timedelta(days=1),
        "status": "discharged",
    })

    active = await storage.get_active_admissions()

    assert len(active) == 2
    assert all(r.admission.status == "admitted" for r in active)
    assert active[0].admission.admission_date == today


async def test_appointments_by_doctor_and_patient(storage):
    doctor = await storage.create_doctor({"first_name": "Omar", "last_name": "Haddad", "specialization": "ENT"})
    other = await storage.create_doctor({"first_name": "Lucas", "last_name": "Rossi", "specialization": "ENT"})
    patient = await storage.create_patient({"first_name": "Priya", "last_name": "Patel"})
    today = date.today()
    await storage.create_appointment({
        "patient_id": patient.id, "doctor_id": doctor.id,
        "appointment_date": today - timedelta(days=1), "appointment_time": "11:00",
    })
    await storage.create_appointment({
        "patient_id": patient.id, "doctor_id": doctor.id,
        "appointment_date": today, "appointment_time": "12:00",
    })
    await storage.create_appointment({
        "doctor_id": other.id, "appointment_date": today, "appointment_time": "13:00",
    })

    by_doctor = await storage.get_appointments_by_doctor(doctor.id)
    by_patient = await storage.get_appointments_by_patient(patient.id)

    assert [r.appointment.appointment_time for r in by_doctor] == ["12:00", "11:00"]
    assert all(r.doctor.id == doctor.id for r in by_doctor)
    assert len(by_patient) == 2
    assert all(r.patient.first_name == "Priya" for r in by_patient)


async def test_upsert_user_inserts_then_overwrites(storage):
    inserted = await storage.upsert_user({"id": "u-9", "email": "a@mail.example", "first_name": "A"})
    assert inserted.role == "patient"

    updated = await storage.upsert_user({"id": "u-9", "email": "b@mail.example", "first_name": "B"})

    assert updated.email == "b@mail.example"
    assert updated.first_name == "B"
    assert updated.role == "patient"
    assert updated.updated_at > inserted.created_at
    assert (await storage.get_user("u-9")).email == "b@mail.example"


async def test_concurrent_first_sign_ins_share_one_row(session_factory):
    async def sign_in(first_name):
        async with session_factory() as session:
            return await ClinicStorage(session).upsert_user({"id": "u-race", "first_name": first_name})

    users = await asyncio.gather(sign_in("Ada"), sign_in("Grace"))

    assert [u.id for u in users] == ["u-race", "u-race"]
    async with session_factory() as session:
        count = await session.scalar(select(func.count(User.id)).where(User.id == "u-race"))
        stored = await ClinicStorage(session).get_user("u-race")
    assert count == 1
    assert stored.first_name in ("Ada", "Grace")
    assert stored.role == "patient"


async def test_upsert_user_leaves_unsupplied_fields(storage):
    await storage.upsert_user({"id": "u-5", "email": "k@mail.example", "role": "doctor"})

    user = await storage.upsert_user({"id": "u-5", "first_name": "Kofi"})

    assert user.email == "k@mail.example"
    assert user.role == "doctor"
    assert user.first_name == "Kofi"
