# medibridge/modules/collaboration/collaboration_service.py
"""Service layer for the shared note feed."""

from typing import Any, Dict, List

from medibridge.common.database.database import Connection
from .schemas import CollaborationNoteCreateRequest


def list_notes(db: Connection) -> List[Dict[str, Any]]:
    return db.prepare(
        """
        SELECT id, author, message, tag, created_at AS createdAt
        FROM collaboration_notes
        ORDER BY created_at DESC, id DESC
        """
    ).all()


def add_note(db: Connection, request: CollaborationNoteCreateRequest) -> Dict[str, Any]:
    insert = db.prepare(
        "INSERT INTO collaboration_notes (author, message, tag) VALUES (:author, :message, :tag)"
    )
    result = insert.run(request.model_dump())
    return {"id": result.last_insert_rowid}
