# medibridge/modules/inventory/inventory_service.py
"""Service layer for pharmacy inventory."""

import logging
from typing import Any, Dict, List

from medibridge.common.database.database import Connection
from .schemas import InventoryUpsertRequest

logger = logging.getLogger(__name__)


def list_inventory(db: Connection) -> List[Dict[str, Any]]:
    """Return stock items alphabetically by name."""
    return db.prepare(
        """
        SELECT id, item_name AS itemName, sku, quantity, reorder_level AS reorderLevel,
               supplier, unit_price AS unitPrice, updated_at AS updatedAt
        FROM inventory_items
        ORDER BY item_name, id
        """
    ).all()


def upsert_inventory_item(db: Connection, request: InventoryUpsertRequest) -> Dict[str, Any]:
    """Insert or update a stock item depending on whether ``id`` was supplied.

    The update is not preceded by an existence check: an unknown id changes
    no rows and the caller's id is still returned.
    """
    params = request.model_dump()

    if request.id:
        update = db.prepare(
            """
            UPDATE inventory_items
            SET item_name = :item_name,
                sku = :sku,
                quantity = :quantity,
                reorder_level = :reorder_level,
                supplier = :supplier,
                unit_price = :unit_price,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = :id
            """
        )
        result = update.run(params)
        if result.changes == 0:
            logger.warning(f"Inventory update matched no rows for ID {request.id}")
        return {"id": request.id}

    insert = db.prepare(
        """
        INSERT INTO inventory_items (item_name, sku, quantity, reorder_level, supplier, unit_price)
        VALUES (:item_name, :sku, :quantity, :reorder_level, :supplier, :unit_price)
        """
    )
    result = insert.run(params)
    logger.info(f"Inventory item added: ID {result.last_insert_rowid}")
    return {"id": result.last_insert_rowid}
