# medibridge/modules/prescriptions/prescriptions_service.py
"""Prescriptions service for business logic."""

import logging
from typing import Any, Dict, List

from medibridge.common.database.database import Connection
from .schemas import PrescriptionCreateRequest

logger = logging.getLogger(__name__)


def list_prescriptions(db: Connection) -> List[Dict[str, Any]]:
    return db.prepare(
        """
        SELECT pr.id, pr.patient_id AS patientId, p.full_name AS patientName, pr.diagnosis,
               pr.medication, pr.dosage, pr.duration, pr.issued_at AS issuedAt
        FROM prescriptions pr
        LEFT JOIN patients p ON pr.patient_id = p.id
        ORDER BY pr.issued_at DESC, pr.id DESC
        """
    ).all()


def add_prescription(db: Connection, request: PrescriptionCreateRequest) -> Dict[str, Any]:
    insert = db.prepare(
        """
        INSERT INTO prescriptions (patient_id, diagnosis, medication, dosage, duration)
        VALUES (:patient_id, :diagnosis, :medication, :dosage, :duration)
        """
    )
    result = insert.run(request.model_dump())
    logger.info(f"Prescription added: ID {result.last_insert_rowid}")
    return {"id": result.last_insert_rowid}
