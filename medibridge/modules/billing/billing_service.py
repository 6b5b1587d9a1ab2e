# medibridge/modules/billing/billing_service.py
"""Service layer for billing business logic."""

import logging
from typing import Any, Dict, List

from medibridge.common.database.database import Connection
from medibridge.models.models import BillingStatus
from .schemas import PaymentCreateRequest

logger = logging.getLogger(__name__)


def list_billing_records(db: Connection) -> List[Dict[str, Any]]:
    return db.prepare(
        """
        SELECT b.id, b.patient_id AS patientId, p.full_name AS patientName, b.amount, b.currency,
               b.status, b.payment_method AS paymentMethod, b.notes, b.created_at AS createdAt
        FROM billing_records b
        LEFT JOIN patients p ON b.patient_id = p.id
        ORDER BY b.created_at DESC, b.id DESC
        """
    ).all()


def record_payment(db: Connection, request: PaymentCreateRequest) -> Dict[str, Any]:
    """Insert a billing record that is already settled.

    There is no partial payment or refund model: every recorded payment is
    stored with status 'paid'.
    """
    insert = db.prepare(
        """
        INSERT INTO billing_records (patient_id, amount, status, payment_method, notes)
        VALUES (:patient_id, :amount, :status, :payment_method, :notes)
        """
    )
    result = insert.run({**request.model_dump(), "status": BillingStatus.PAID.value})
    logger.info(f"Payment recorded: ID {result.last_insert_rowid}, amount {request.amount}")
    return {"id": result.last_insert_rowid}
