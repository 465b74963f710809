"""
Generate synthetic clinic data: doctors, patients, drugs, appointments, admissions.
Run with: python -m scripts.seed_clinic
Run with: python -m scripts.seed_clinic --patients 100 --force  (seed even if data exists)
"""

import argparse
import asyncio
import random
from datetime import date, timedelta
from decimal import Decimal
from sqlalchemy import select, func
from clinic.database import engine, async_session, Base
from clinic.models import Patient, Doctor, Drug, Appointment, Admission

FIRST_NAMES = [
    "Amara", "Noah", "Priya", "Lucas", "Mei", "Omar", "Elena", "Kwame", "Sofia", "Raj",
    "Hannah", "Diego", "Yuki", "Ivan", "Fatima", "Liam", "Zara", "Mateo", "Ingrid", "Hassan",
]

LAST_NAMES = [
    "Okafor", "Schmidt", "Patel", "Nguyen", "Santos", "Kowalski", "Tanaka", "Haddad",
    "Johansson", "Mensah", "Rossi", "Kim", "Alvarez", "Novak", "Singh", "Brennan",
]

SPECIALIZATIONS = [
    "Cardiology", "Pediatrics", "Orthopedics", "Dermatology", "Neurology",
    "General Medicine", "Gynecology", "Psychiatry", "Oncology", "ENT",
]

QUALIFICATIONS = ["MBBS", "MBBS, MD", "MBBS, MS", "MD, DM", "MBBS, DNB"]

DRUGS = [
    # name, category, unit, dosage
    ("Paracetamol", "Analgesic", "tablet", "500mg"),
    ("Amoxicillin", "Antibiotic", "capsule", "250mg"),
    ("Metformin", "Antidiabetic", "tablet", "500mg"),
    ("Amlodipine", "Antihypertensive", "tablet", "5mg"),
    ("Salbutamol", "Bronchodilator", "inhaler", "100mcg"),
    ("Omeprazole", "Antacid", "capsule", "20mg"),
    ("Cetirizine", "Antihistamine", "tablet", "10mg"),
    ("Ibuprofen", "Analgesic", "tablet", "400mg"),
    ("Atorvastatin", "Statin", "tablet", "20mg"),
    ("Cough Syrup", "Antitussive", "ml", "10ml"),
    ("Insulin Glargine", "Antidiabetic", "ml", "100IU/ml"),
    ("Azithromycin", "Antibiotic", "tablet", "500mg"),
]

MANUFACTURERS = ["Cipla", "Sun Pharma", "Pfizer", "Novartis", "Lupin", "Dr. Reddy's"]

REASONS = [
    "Routine check-up", "Follow-up visit", "Chest pain", "Persistent cough",
    "Skin rash", "Joint pain", "Headache", "Blood pressure review", "Vaccination",
]

DIAGNOSES = [
    "Pneumonia", "Appendicitis", "Fractured femur", "Dengue fever",
    "Acute gastroenteritis", "Myocardial infarction", "Asthma exacerbation",
]


def random_name() -> tuple[str, str]:
    return random.choice(FIRST_NAMES), random.choice(LAST_NAMES)


def random_phone() -> str:
    return f"+1-555-{random.randint(100, 999)}-{random.randint(1000, 9999)}"


def generate_dob(min_age: int = 1, max_age: int = 90) -> date:
    age = random.randint(min_age, max_age)
    return date.today() - timedelta(days=age * 365 + random.randint(0, 364))


def build_doctor() -> Doctor:
    first, last = random_name()
    return Doctor(
        first_name=first,
        last_name=last,
        email=f"dr.{first.lower()}.{last.lower()}@clinic.example",
        phone=random_phone(),
        specialization=random.choice(SPECIALIZATIONS),
        experience=random.randint(1, 35),
        qualification=random.choice(QUALIFICATIONS),
        license_number=f"LIC-{random.randint(10000, 99999)}",
        consultation_fee=Decimal(random.choice([300, 500, 750, 1000, 1500])).quantize(Decimal("0.01")),
        rating=Decimal(str(round(random.uniform(3.0, 5.0), 1))),
        is_active=random.random() < 0.85,
    )


def build_patient() -> Patient:
    first, last = random_name()
    return Patient(
        first_name=first,
        last_name=last,
        email=f"{first.lower()}.{last.lower()}{random.randint(1, 99)}@mail.example",
        phone=random_phone(),
        date_of_birth=generate_dob(),
        gender=random.choice(["Male", "Female", "Other"]),
        address=f"{random.randint(1, 999)} {random.choice(['Oak', 'Elm', 'Lake', 'Hill'])} Street",
        emergency_contact=random_phone(),
        medical_history=random.choice([None, "Hypertension", "Type 2 Diabetes", "Asthma", "No known conditions"]),
    )


def build_drug(name: str, category: str, unit: str, dosage: str) -> Drug:
    return Drug(
        name=name,
        category=category,
        manufacturer=random.choice(MANUFACTURERS),
        dosage=dosage,
        unit=unit,
        # roughly a quarter of the catalog starts out low on stock
        stock_quantity=random.randint(0, 10) if random.random() < 0.25 else random.randint(11, 500),
        unit_price=Decimal(str(round(random.uniform(0.5, 45.0), 2))),
        expiry_date=date.today() + timedelta(days=random.randint(30, 900)),
        batch_number=f"B{random.randint(100000, 999999)}",
    )


async def seed(patient_count: int, force: bool = False):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        count = await db.scalar(select(func.count(Patient.id)))
        if count and not force:
            print(f"Database already has {count} patients. Skipping seeding (use --force).")
            return

        print("Creating doctors and drugs...")
        doctors = [build_doctor() for _ in range(max(3, patient_count // 10))]
        db.add_all(doctors)
        db.add_all(build_drug(*entry) for entry in DRUGS)

        print(f"Creating {patient_count} patients...")
        patients = [build_patient() for _ in range(patient_count)]
        db.add_all(patients)
        await db.flush()

        print("Scheduling appointments and admissions...")
        today = date.today()
        for patient in patients:
            for _ in range(random.randint(0, 3)):
                offset = random.randint(-30, 30)
                db.add(Appointment(
                    patient_id=patient.id,
                    doctor_id=random.choice(doctors).id,
                    appointment_date=today + timedelta(days=offset),
                    appointment_time=f"{random.randint(9, 17):02d}:{random.choice(['00', '15', '30', '45'])}",
                    status="scheduled" if offset >= 0 else random.choice(["completed", "cancelled"]),
                    reason=random.choice(REASONS),
                ))
            if random.random() < 0.15:
                admitted_on = today - timedelta(days=random.randint(0, 20))
                discharged = random.random() < 0.5
                db.add(Admission(
                    patient_id=patient.id,
                    doctor_id=random.choice(doctors).id,
                    admission_date=admitted_on,
                    discharge_date=admitted_on + timedelta(days=random.randint(1, 10)) if discharged else None,
                    room_number=str(random.randint(100, 450)),
                    bed_number=random.choice("ABCD"),
                    status="discharged" if discharged else "admitted",
                    diagnosis=random.choice(DIAGNOSES),
                ))

        await db.commit()
        print(f"Seeded {len(doctors)} doctors, {len(DRUGS)} drugs and {patient_count} patients.")

    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the clinic database with synthetic data")
    parser.add_argument("--patients", type=int, default=50, help="Number of patients to create")
    parser.add_argument("--force", action="store_true", help="Seed even if patients already exist")
    args = parser.parse_args()

    asyncio.run(seed(args.patients, force=args.force))
