# medibridge/modules/medical_certificates/medical_certificates_service.py
"""Service layer for medical certificates."""

import logging
from typing import Any, Dict, List

from medibridge.common.database.database import Connection
from .schemas import MedicalCertificateCreateRequest

logger = logging.getLogger(__name__)


def list_certificates(db: Connection) -> List[Dict[str, Any]]:
    certificates = db.prepare(
        """
        SELECT mc.id, mc.patient_id AS patientId, p.full_name AS patientName,
               mc.certificate_type AS certificateType, mc.diagnosis,
               mc.from_date AS fromDate, mc.to_date AS toDate, mc.days_count AS daysCount,
               mc.restrictions, mc.additional_notes AS additionalNotes, mc.issued_at AS issuedAt
        FROM medical_certificates mc
        LEFT JOIN patients p ON mc.patient_id = p.id
        ORDER BY mc.issued_at DESC, mc.id DESC
        """
    ).all()
    logger.info(f"Medical certificates list: {len(certificates)} records")
    return certificates


def add_certificate(db: Connection, request: MedicalCertificateCreateRequest) -> Dict[str, Any]:
    insert = db.prepare(
        """
        INSERT INTO medical_certificates (
            patient_id, certificate_type, diagnosis, from_date, to_date,
            days_count, restrictions, additional_notes, issued_at
        )
        VALUES (
            :patient_id, :certificate_type, :diagnosis, :from_date, :to_date,
            :days_count, :restrictions, :additional_notes, CURRENT_TIMESTAMP
        )
        """
    )
    result = insert.run(request.model_dump())
    logger.info(f"Medical certificate added: ID {result.last_insert_rowid}")
    return {"id": result.last_insert_rowid}
