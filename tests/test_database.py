# tests/test_database.py
import sqlite3

import pytest

from medibridge.common.database.database import (
    DatabaseManager,
    DatabaseNotInitializedError,
    TransactionInProgressError,
)

EXPECTED_TABLES = {
    "doctor_profile",
    "enabled_modules",
    "patients",
    "appointments",
    "prescriptions",
    "medical_certificates",
    "billing_records",
    "inventory_items",
    "collaboration_notes",
}


def _tables(db):
    rows = db.prepare("SELECT name FROM sqlite_master WHERE type = 'table'").all()
    return {row["name"] for row in rows}


def _patient_count(db):
    return db.prepare("SELECT COUNT(1) AS count FROM patients").get()["count"]


def _insert_patient(db, name="Kamal Silva"):
    return db.prepare("INSERT INTO patients (full_name) VALUES (:full_name)").run({"full_name": name})


def test_connection_before_initialize_raises(db_path):
    manager = DatabaseManager(db_path)

    with pytest.raises(DatabaseNotInitializedError):
        manager.connection


def test_initialize_creates_schema_and_file(database, db_path):
    assert db_path.exists()
    assert EXPECTED_TABLES <= _tables(database.connection)
    assert not database.dirty


def test_initialize_is_idempotent(database, db_path):
    _insert_patient(database.connection)
    connection = database.connection

    database.initialize()

    assert database.connection is connection
    assert _patient_count(database.connection) == 1


def test_reopen_keeps_existing_rows(db_path):
    first = DatabaseManager(db_path)
    first.initialize()
    _insert_patient(first.connection, "Sunil Fernando")
    first.close()

    second = DatabaseManager(db_path)
    second.initialize()
    try:
        rows = second.connection.prepare("SELECT full_name FROM patients").all()
        assert rows == [{"full_name": "Sunil Fernando"}]
    finally:
        second.close()


def test_write_rewrites_file_and_read_does_not(database, db_path):
    before = db_path.read_bytes()

    database.connection.prepare("SELECT * FROM patients").all()
    database.connection.prepare("SELECT COUNT(1) AS count FROM patients").get()
    assert db_path.read_bytes() == before

    _insert_patient(database.connection)
    assert db_path.read_bytes() != before
    assert not database.dirty


def test_run_reports_changes_and_rowid(db):
    first = _insert_patient(db, "A")
    second = _insert_patient(db, "B")

    assert first.changes == 1
    assert second.last_insert_rowid == first.last_insert_rowid + 1

    update = db.prepare("UPDATE patients SET notes = :notes WHERE id = :id").run({"notes": "x", "id": 999})
    assert update.changes == 0


def test_statement_params_must_be_a_mapping(db):
    with pytest.raises(TypeError):
        db.prepare("SELECT :value AS value").get([1])


def test_get_returns_none_for_no_rows(db):
    assert db.prepare("SELECT id FROM patients WHERE id = :id").get({"id": 1}) is None


def test_exec_runs_script(db):
    db.exec(
        """
        INSERT INTO collaboration_notes (author, message) VALUES ('Dr. A', 'one');
        INSERT INTO collaboration_notes (author, message) VALUES ('Dr. B', 'two');
        """
    )

    assert db.prepare("SELECT COUNT(1) AS count FROM collaboration_notes").get()["count"] == 2


def test_transaction_commits_and_persists(database, db_path):
    db = database.connection
    before = db_path.read_bytes()

    def body():
        _insert_patient(db, "A")
        _insert_patient(db, "B")
        return "done"

    assert db.transaction(body)() == "done"
    assert not db.in_transaction
    assert _patient_count(db) == 2
    assert db_path.read_bytes() != before


def test_transaction_rollback_leaves_memory_and_disk_unchanged(database, db_path):
    db = database.connection
    _insert_patient(db, "Existing")
    before = db_path.read_bytes()

    def body():
        _insert_patient(db, "Doomed")
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        db.transaction(body)()

    assert not db.in_transaction
    assert _patient_count(db) == 1
    assert db_path.read_bytes() == before
    assert not database.dirty


def test_script_inside_failed_transaction_is_rolled_back(database, db_path):
    db = database.connection
    before = db_path.read_bytes()

    def body():
        db.exec(
            """
            INSERT INTO collaboration_notes (author, message) VALUES ('Dr. A', 'first; still first');
            INSERT INTO collaboration_notes (author, message) VALUES ('Dr. B', 'second');
            """
        )
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        db.transaction(body)()

    assert db.prepare("SELECT COUNT(1) AS count FROM collaboration_notes").get()["count"] == 0
    assert db_path.read_bytes() == before
    assert not database.dirty


def test_script_inside_committed_transaction_is_kept(db):
    def body():
        db.exec("INSERT INTO collaboration_notes (author, message) VALUES ('Dr. A', 'a; b')")
        _insert_patient(db, "Inside")

    db.transaction(body)()

    note = db.prepare("SELECT message FROM collaboration_notes").get()
    assert note == {"message": "a; b"}
    assert _patient_count(db) == 1


def test_failed_first_write_leaves_manager_uninitialized(db_path, monkeypatch):
    def failing_replace(src, dst):
        raise OSError("disk full")

    manager = DatabaseManager(db_path)
    monkeypatch.setattr("medibridge.common.database.database.os.replace", failing_replace)

    with pytest.raises(OSError, match="disk full"):
        manager.initialize()

    assert not manager.is_initialized
    with pytest.raises(DatabaseNotInitializedError):
        manager.connection

    monkeypatch.undo()
    manager.initialize()
    try:
        assert manager.is_initialized
        assert db_path.exists()
    finally:
        manager.close()


def test_nested_transaction_is_rejected(db):
    def inner():
        _insert_patient(db, "inner")

    def outer():
        _insert_patient(db, "outer")
        db.transaction(inner)()

    with pytest.raises(TransactionInProgressError):
        db.transaction(outer)()

    assert _patient_count(db) == 0


def test_additive_columns_patch_older_schema(db_path):
    db_path.parent.mkdir(parents=True)
    legacy = sqlite3.connect(db_path)
    legacy.execute(
        """
        CREATE TABLE doctor_profile (
            id INTEGER PRIMARY KEY CHECK (id = 1),
            name TEXT NOT NULL,
            specialty TEXT NOT NULL,
            practice_type TEXT NOT NULL,
            location TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    legacy.execute(
        "INSERT INTO doctor_profile (id, name, specialty, practice_type) "
        "VALUES (1, 'Dr. Old', 'GP', 'dispensary')"
    )
    legacy.commit()
    legacy.close()

    manager = DatabaseManager(db_path)
    manager.initialize()
    try:
        columns = {row["name"] for row in manager.connection.prepare("PRAGMA table_info(doctor_profile)").all()}
        assert {"centre_name", "password"} <= columns

        profile = manager.connection.prepare("SELECT name, centre_name FROM doctor_profile").get()
        assert profile == {"name": "Dr. Old", "centre_name": None}
    finally:
        manager.close()

    # A second start finds the columns already present.
    again = DatabaseManager(db_path)
    again.initialize()
    again.close()


def test_close_persists_and_resets(database, db_path):
    _insert_patient(database.connection)
    database.close()

    assert not database.is_initialized
    with pytest.raises(DatabaseNotInitializedError):
        database.connection

    reopened = sqlite3.connect(db_path)
    try:
        assert reopened.execute("SELECT COUNT(1) FROM patients").fetchone()[0] == 1
    finally:
        reopened.close()
