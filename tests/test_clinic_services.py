# tests/test_clinic_services.py
from medibridge.bridge import registry


def _add_patient(db, name="Nimal Perera"):
    return registry.invoke("patients.add", db, {"fullName": name, "nic": "851234567V"})["id"]


def test_patient_and_appointment_end_to_end(db):
    patient_id = _add_patient(db)

    appointment = registry.invoke(
        "appointments.add",
        db,
        {"patientId": patient_id, "scheduledFor": "2024-06-01T09:30", "clinicRoom": "Room 2"},
    )
    appointments = registry.invoke("appointments.list", db)

    assert appointment["id"] >= 1
    assert len(appointments) == 1
    assert appointments[0]["patientName"] == "Nimal Perera"
    assert appointments[0]["status"] == "scheduled"
    assert appointments[0]["clinicRoom"] == "Room 2"


def test_patients_are_listed_newest_first(db):
    first = _add_patient(db, "First")
    second = _add_patient(db, "Second")

    patients = registry.invoke("patients.list", db)

    assert [patient["id"] for patient in patients] == [second, first]
    assert patients[0]["fullName"] == "Second"
    assert patients[1]["nic"] == "851234567V"


def test_prescriptions_join_patient_name(db):
    patient_id = _add_patient(db)
    registry.invoke(
        "prescriptions.add",
        db,
        {"patientId": patient_id, "diagnosis": "URTI", "medication": "Amoxicillin", "dosage": "500mg tds", "duration": "5 days"},
    )

    prescriptions = registry.invoke("prescriptions.list", db)

    assert prescriptions[0]["patientName"] == "Nimal Perera"
    assert prescriptions[0]["medication"] == "Amoxicillin"
    assert prescriptions[0]["issuedAt"]


def test_revenue_is_zero_without_billing_rows(db):
    overview = registry.invoke("analytics.overview", db)

    assert overview["totals"]["revenueLKR"] == 0
    assert overview["totals"]["totalPatients"] == 0
    assert overview["topMedications"] == []


def test_recorded_payments_are_paid_in_lkr(db):
    patient_id = _add_patient(db)
    registry.invoke("billing.recordPayment", db, {"patientId": patient_id, "amount": 1500, "paymentMethod": "cash"})
    registry.invoke("billing.recordPayment", db, {"patientId": patient_id, "amount": 750.5})

    records = registry.invoke("billing.list", db)
    overview = registry.invoke("analytics.overview", db)

    assert {record["status"] for record in records} == {"paid"}
    assert {record["currency"] for record in records} == {"LKR"}
    assert records[0]["patientName"] == "Nimal Perera"
    assert overview["totals"]["revenueLKR"] == 2250.5


def test_overview_counts_and_top_medications(db):
    patient_id = _add_patient(db)
    registry.invoke("appointments.add", db, {"patientId": patient_id, "scheduledFor": "2024-06-01"})
    registry.invoke("appointments.add", db, {"patientId": patient_id, "scheduledFor": "2024-06-02"})
    db.prepare("UPDATE appointments SET status = 'completed' WHERE scheduled_for = '2024-06-01'").run()

    medications = ["Paracetamol"] * 3 + ["Amoxicillin"] * 2 + ["A", "B", "C", "D"]
    for medication in medications:
        registry.invoke(
            "prescriptions.add",
            db,
            {"patientId": patient_id, "diagnosis": "-", "medication": medication, "dosage": "-", "duration": "-"},
        )

    overview = registry.invoke("analytics.overview", db)

    assert overview["totals"]["totalPatients"] == 1
    assert overview["totals"]["upcomingAppointments"] == 1
    assert overview["totals"]["completedAppointments"] == 1
    assert len(overview["topMedications"]) == 5
    assert overview["topMedications"][0] == {"medication": "Paracetamol", "count": 3}
    assert overview["topMedications"][1] == {"medication": "Amoxicillin", "count": 2}


def test_inventory_insert_then_update(db):
    created = registry.invoke("inventory.upsert", db, {"itemName": "Paracetamol 500mg", "quantity": 100})

    registry.invoke(
        "inventory.upsert",
        db,
        {"id": created["id"], "itemName": "Paracetamol 500mg", "quantity": 40, "reorderLevel": 50},
    )
    items = registry.invoke("inventory.list", db)

    assert len(items) == 1
    assert items[0]["id"] == created["id"]
    assert items[0]["quantity"] == 40
    assert items[0]["reorderLevel"] == 50


def test_inventory_defaults_and_ordering(db):
    registry.invoke("inventory.upsert", db, {"itemName": "Zinc"})
    registry.invoke("inventory.upsert", db, {"itemName": "Amoxicillin", "unitPrice": 12.5})

    items = registry.invoke("inventory.list", db)

    assert [item["itemName"] for item in items] == ["Amoxicillin", "Zinc"]
    assert items[1]["quantity"] == 0
    assert items[1]["reorderLevel"] == 10
    assert items[0]["unitPrice"] == 12.5


def test_inventory_update_of_missing_id_reports_that_id(db):
    result = registry.invoke("inventory.upsert", db, {"id": 42, "itemName": "Ghost"})

    assert result == {"id": 42}
    assert registry.invoke("inventory.list", db) == []


def test_certificate_values_are_stored_as_given(db):
    patient_id = _add_patient(db)

    registry.invoke(
        "medicalCertificates.add",
        db,
        {
            "patientId": patient_id,
            "certificateType": "sick_leave",
            "fromDate": "2024-06-01",
            "toDate": "2024-06-03",
            "daysCount": 7,
            "restrictions": "No heavy lifting",
        },
    )
    certificate = registry.invoke("medicalCertificates.list", db)[0]

    assert certificate["fromDate"] == "2024-06-01"
    assert certificate["toDate"] == "2024-06-03"
    assert certificate["daysCount"] == 7
    assert certificate["patientName"] == "Nimal Perera"
    assert certificate["additionalNotes"] is None


def test_collaboration_notes(db):
    registry.invoke("collaboration.add", db, {"author": "Dr. Silva", "message": "Covering Friday clinic", "tag": "cover"})
    registry.invoke("collaboration.add", db, {"author": "Dr. Perera", "message": "Referral sent"})

    notes = registry.invoke("collaboration.list", db)

    assert [note["author"] for note in notes] == ["Dr. Perera", "Dr. Silva"]
    assert notes[1]["tag"] == "cover"
