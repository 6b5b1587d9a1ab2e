# medibridge/modules/patients/patients_service.py
"""Patients service for business logic."""

import logging
from typing import Any, Dict, List

from medibridge.common.database.database import Connection
from .schemas import PatientCreateRequest

logger = logging.getLogger(__name__)


def list_patients(db: Connection) -> List[Dict[str, Any]]:
    """Return every patient, newest first."""
    return db.prepare(
        """
        SELECT id, full_name AS fullName, nic, contact, dob, allergies, notes,
               created_at AS createdAt
        FROM patients
        ORDER BY created_at DESC, id DESC
        """
    ).all()


def add_patient(db: Connection, request: PatientCreateRequest) -> Dict[str, Any]:
    """Insert a patient and return its id."""
    insert = db.prepare(
        """
        INSERT INTO patients (full_name, nic, contact, dob, allergies, notes)
        VALUES (:full_name, :nic, :contact, :dob, :allergies, :notes)
        """
    )
    result = insert.run(request.model_dump())
    logger.info(f"Patient added: ID {result.last_insert_rowid}")
    return {"id": result.last_insert_rowid}
