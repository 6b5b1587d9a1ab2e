# medibridge/modules/appointments/appointments_service.py
"""Appointments service for business logic."""

import logging
from typing import Any, Dict, List

from medibridge.common.database.database import Connection
from .schemas import AppointmentCreateRequest

logger = logging.getLogger(__name__)


def list_appointments(db: Connection) -> List[Dict[str, Any]]:
    """Return all appointments with patient names, latest slot first."""
    return db.prepare(
        """
        SELECT a.id, a.patient_id AS patientId, p.full_name AS patientName,
               a.scheduled_for AS scheduledFor, a.status, a.doctor_notes AS doctorNotes,
               a.clinic_room AS clinicRoom, a.created_at AS createdAt
        FROM appointments a
        LEFT JOIN patients p ON a.patient_id = p.id
        ORDER BY a.scheduled_for DESC, a.id DESC
        """
    ).all()


def add_appointment(db: Connection, request: AppointmentCreateRequest) -> Dict[str, Any]:
    """Book an appointment; status starts as the column default ('scheduled')."""
    insert = db.prepare(
        """
        INSERT INTO appointments (patient_id, scheduled_for, doctor_notes, clinic_room)
        VALUES (:patient_id, :scheduled_for, :doctor_notes, :clinic_room)
        """
    )
    result = insert.run(request.model_dump())
    logger.info(f"Appointment added: ID {result.last_insert_rowid} for patient {request.patient_id}")
    return {"id": result.last_insert_rowid}
