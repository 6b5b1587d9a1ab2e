# medibridge/modules/feature_modules/modules_service.py
"""Service layer for enabling and disabling feature modules."""

import logging
from typing import Any, Dict, Iterable, List

from medibridge.common.database.database import Connection
from .catalog import MODULES
from .schemas import UpdateModulesRequest

logger = logging.getLogger(__name__)


def get_enabled_keys(db: Connection) -> List[str]:
    rows = db.prepare(
        "SELECT module_key FROM enabled_modules WHERE enabled = 1"
    ).all()
    return [row["module_key"] for row in rows]


def get_modules(db: Connection) -> List[Dict[str, Any]]:
    """Every catalog module, flagged with whether it is currently enabled."""
    enabled = set(get_enabled_keys(db))
    return [
        {
            "key": module.key,
            "name": module.name,
            "description": module.description,
            "icon": module.icon,
            "enabled": module.key in enabled,
        }
        for module in MODULES
    ]


def replace_enabled_modules(db: Connection, module_keys: Iterable[str]) -> int:
    """Delete every enabled module row and insert one row per key.

    Callers are expected to run this inside ``db.transaction``.
    """
    db.prepare("DELETE FROM enabled_modules").run()
    insert = db.prepare(
        "INSERT INTO enabled_modules (module_key, enabled) VALUES (:module_key, 1)"
    )
    count = 0
    for module_key in module_keys:
        insert.run({"module_key": module_key})
        count += 1
    return count


def update_modules(db: Connection, request: UpdateModulesRequest) -> Dict[str, Any]:
    count = db.transaction(lambda: replace_enabled_modules(db, request.modules))()
    logger.info(f"Modules updated: {count} enabled")
    return {"success": True}
