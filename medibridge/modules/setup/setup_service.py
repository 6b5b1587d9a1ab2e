# medibridge/modules/setup/setup_service.py
"""Service layer for first-run setup and the doctor profile."""

import logging
from typing import Any, Dict

from medibridge.common.database.database import Connection
from medibridge.modules.feature_modules.catalog import PRACTICE_TYPE_LABELS, default_modules_for
from medibridge.modules.feature_modules.modules_service import replace_enabled_modules
from .schemas import CompleteSetupRequest

logger = logging.getLogger(__name__)


def is_setup_complete(db: Connection) -> bool:
    """Setup is complete once the singleton doctor profile row exists."""
    row = db.prepare("SELECT COUNT(1) AS count FROM doctor_profile").get()
    return bool(row and row["count"] > 0)


def get_profile(db: Connection) -> Dict[str, Any]:
    profile = db.prepare(
        """
        SELECT id, name, specialty, practice_type AS practiceType, centre_name AS centreName,
               location, password, created_at AS createdAt
        FROM doctor_profile
        WHERE id = 1
        """
    ).get()
    modules = db.prepare(
        'SELECT module_key AS "key", enabled, metadata FROM enabled_modules ORDER BY id'
    ).all()
    return {"profile": profile, "modules": modules}


def _upsert_profile(db: Connection, request: CompleteSetupRequest) -> None:
    # created_at is only set by the first insert.
    db.prepare(
        """
        INSERT INTO doctor_profile (id, name, specialty, practice_type, centre_name, location, password, created_at)
        VALUES (1, :name, :specialty, :practice_type, :centre_name, :location, :password, CURRENT_TIMESTAMP)
        ON CONFLICT(id) DO UPDATE SET
            name = excluded.name,
            specialty = excluded.specialty,
            practice_type = excluded.practice_type,
            centre_name = excluded.centre_name,
            location = excluded.location,
            password = excluded.password
        """
    ).run({
        "name": request.name,
        "specialty": request.specialty,
        "practice_type": request.practice_type.value,
        "centre_name": request.centre_name,
        "location": request.location,
        "password": request.password,
    })


def complete_setup(db: Connection, request: CompleteSetupRequest) -> Dict[str, Any]:
    """Save the doctor profile and the enabled module set in one transaction."""
    modules = request.modules
    if modules is None:
        modules = default_modules_for(request.practice_type)

    logger.info(
        f"Setup complete: saving profile for {request.name} "
        f"({request.specialty}, {PRACTICE_TYPE_LABELS[request.practice_type]}) with {len(modules)} modules"
    )

    def save():
        _upsert_profile(db, request)
        return replace_enabled_modules(db, modules)

    db.transaction(save)()
    return {"success": True}
