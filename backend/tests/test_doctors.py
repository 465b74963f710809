from decimal import Decimal

NEW_DOCTOR = {
    "firstName": "Kwame",
    "lastName": "Mensah",
    "email": "kwame@clinic.example",
    "specialization": "Cardiology",
    "experience": 12,
    "qualification": "MBBS, MD",
    "licenseNumber": "LIC-20411",
    "consultationFee": "750.00",
    "rating": 4.5,
}


async def test_create_doctor_defaults_to_active(client):
    response = await client.post("/api/doctors", json=NEW_DOCTOR)

    assert response.status_code == 201
    doctor = response.json()
    assert doctor["isActive"] is True
    assert Decimal(doctor["consultationFee"]) == Decimal("750")
    assert Decimal(doctor["rating"]) == Decimal("4.5")


async def test_create_doctor_requires_specialization(client):
    body = {k: v for k, v in NEW_DOCTOR.items() if k != "specialization"}
    response = await client.post("/api/doctors", json=body)

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["specialization"]


async def test_create_doctor_rejects_non_integer_experience(client):
    response = await client.post("/api/doctors", json={**NEW_DOCTOR, "experience": "a lot"})
    assert response.status_code == 400


async def test_get_doctor_has_null_user_key(client):
    doctor = (await client.post("/api/doctors", json=NEW_DOCTOR)).json()

    body = (await client.get(f"/api/doctors/{doctor['id']}")).json()

    assert body["specialization"] == "Cardiology"
    assert body["user"] is None


async def test_deactivate_doctor(client):
    doctor = (await client.post("/api/doctors", json=NEW_DOCTOR)).json()

    response = await client.put(f"/api/doctors/{doctor['id']}", json={"isActive": False})

    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert response.json()["lastName"] == "Mensah"


async def test_search_doctors_by_specialization(client):
    await client.post("/api/doctors", json=NEW_DOCTOR)
    await client.post("/api/doctors", json={"firstName": "Mei", "lastName": "Tanaka", "specialization": "Neurology"})

    response = await client.get("/api/doctors/search", params={"q": "neuro"})

    assert [d["firstName"] for d in response.json()] == ["Mei"]


async def test_doctor_appointments(client):
    doctor = (await client.post("/api/doctors", json=NEW_DOCTOR)).json()
    for day in ("2026-03-01", "2026-03-09"):
        await client.post("/api/appointments", json={
            "doctorId": doctor["id"], "appointmentDate": day, "appointmentTime": "08:45",
        })

    rows = (await client.get(f"/api/doctors/{doctor['id']}/appointments")).json()

    assert [r["appointmentDate"] for r in rows] == ["2026-03-09", "2026-03-01"]
    assert rows[0]["doctor"]["lastName"] == "Mensah"
    assert rows[0]["patient"] is None


async def test_delete_doctor(client):
    doctor = (await client.post("/api/doctors", json=NEW_DOCTOR)).json()

    assert (await client.delete(f"/api/doctors/{doctor['id']}")).status_code == 204
    assert (await client.get(f"/api/doctors/{doctor['id']}")).status_code == 404
