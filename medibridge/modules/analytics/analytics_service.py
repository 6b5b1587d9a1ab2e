# medibridge/modules/analytics/analytics_service.py
"""Analytics service: practice-wide aggregates."""

from typing import Any, Dict

from medibridge.common.database.database import Connection
from medibridge.models.models import AppointmentStatus, BillingStatus

TOP_MEDICATIONS_LIMIT = 5


def get_overview(db: Connection) -> Dict[str, Any]:
    """Headline totals plus the most frequently prescribed medications."""
    totals = db.prepare(
        """
        SELECT
            (SELECT COUNT(1) FROM patients) AS totalPatients,
            (SELECT COUNT(1) FROM appointments WHERE status = :scheduled) AS upcomingAppointments,
            (SELECT COUNT(1) FROM appointments WHERE status = :completed) AS completedAppointments,
            (SELECT IFNULL(SUM(amount), 0) FROM billing_records WHERE status = :paid) AS revenueLKR
        """
    ).get({
        "scheduled": AppointmentStatus.SCHEDULED.value,
        "completed": AppointmentStatus.COMPLETED.value,
        "paid": BillingStatus.PAID.value,
    })

    # Ties keep SQLite's natural row order.
    top_medications = db.prepare(
        """
        SELECT medication, COUNT(1) AS count
        FROM prescriptions
        GROUP BY medication
        ORDER BY count DESC
        LIMIT :limit
        """
    ).all({"limit": TOP_MEDICATIONS_LIMIT})

    return {
        "totals": totals,
        "topMedications": top_medications,
    }
