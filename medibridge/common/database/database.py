import logging
import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection as SAConnection, CursorResult, Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from medibridge.common.utils.global_messages import GlobalMessages
from medibridge.models.models import ADDITIVE_COLUMNS, Base

logger = logging.getLogger(__name__)

T = TypeVar("T")
Row = Dict[str, Any]


class DatabaseNotInitializedError(RuntimeError):
    """Raised when the connection is requested before ``initialize()``."""

    def __init__(self, message: str = GlobalMessages.DATABASE_NOT_INITIALIZED):
        super().__init__(message)


class TransactionInProgressError(RuntimeError):
    """Raised when a transaction is started while another one is open."""

    def __init__(self, message: str = GlobalMessages.TRANSACTION_IN_PROGRESS):
        super().__init__(message)


@dataclass(frozen=True)
class RunResult:
    changes: int
    last_insert_rowid: int


def _bind(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Turn a caller mapping into bind values for the ``:name`` markers."""
    if params is None:
        return {}
    if not isinstance(params, Mapping):
        raise TypeError("Statement parameters must be a mapping of names to values")
    return {str(key): value for key, value in params.items()}


def _split_script(sql: str) -> List[str]:
    """Split a script into complete statements, keeping ``;`` inside literals and triggers."""
    statements: List[str] = []
    parts = sql.split(";")
    buffer = ""

    for part in parts[:-1]:
        buffer += part + ";"
        if sqlite3.complete_statement(buffer):
            if buffer.strip(" \t\r\n;"):
                statements.append(buffer.strip())
            buffer = ""

    tail = (buffer + parts[-1]).strip()
    if tail:
        statements.append(tail)
    return statements


class Statement:
    """A single precompiled SQL statement bound to a live connection.

    ``run`` always marks the image dirty and triggers a persist, even when the
    statement changed nothing, so every write rewrites the whole image.
    """

    def __init__(self, connection: "Connection", sql: str):
        self._connection = connection
        self.sql = sql
        self._clause = text(sql)

    def _execute(self, params: Optional[Mapping[str, Any]]) -> CursorResult:
        return self._connection.sa_connection.execute(self._clause, _bind(params))

    def run(self, params: Optional[Mapping[str, Any]] = None) -> RunResult:
        result = self._execute(params)
        try:
            changes = max(result.rowcount, 0)
        finally:
            result.close()

        last_insert_rowid = self._connection.last_insert_rowid()
        self._connection.mark_dirty()
        self._connection.persist_if_dirty()

        return RunResult(changes=changes, last_insert_rowid=last_insert_rowid)

    def get(self, params: Optional[Mapping[str, Any]] = None) -> Optional[Row]:
        result = self._execute(params)
        try:
            row = result.mappings().first()
            return dict(row) if row is not None else None
        finally:
            result.close()

    def all(self, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        result = self._execute(params)
        try:
            return [dict(row) for row in result.mappings().all()]
        finally:
            result.close()


class Connection:
    """Statement preparation, raw scripts and transactions over the live image."""

    def __init__(self, manager: "DatabaseManager", sa_connection: SAConnection, raw: sqlite3.Connection):
        self._manager = manager
        self.sa_connection = sa_connection
        self._raw = raw
        self._in_transaction = False

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    def prepare(self, sql: str) -> Statement:
        return Statement(self, sql)

    def exec(self, sql: str) -> None:
        if self._in_transaction:
            # executescript() would COMMIT the open transaction first.
            for statement in _split_script(sql):
                self.sa_connection.exec_driver_sql(statement)
        else:
            self._raw.executescript(sql)
        self.mark_dirty()
        self.persist_if_dirty()

    def transaction(self, body: Callable[[], T]) -> Callable[[], T]:
        """Wrap ``body`` so that calling the result runs it inside BEGIN/COMMIT.

        On failure the transaction is rolled back, the exception from
        ``body`` is re-raised and nothing is written to disk.
        """

        def run_transaction() -> T:
            if self._in_transaction:
                raise TransactionInProgressError()

            was_dirty = self._manager.dirty
            self.sa_connection.exec_driver_sql("BEGIN TRANSACTION")
            self._in_transaction = True

            try:
                result = body()
            except Exception:
                self._in_transaction = False
                if self._raw.in_transaction:
                    self.sa_connection.exec_driver_sql("ROLLBACK")
                self._manager.restore_dirty(was_dirty)
                raise

            try:
                self.sa_connection.exec_driver_sql("COMMIT")
            finally:
                self._in_transaction = False

            self._manager.persist_if_dirty(force=True)
            return result

        return run_transaction

    def mark_dirty(self) -> None:
        self._manager.mark_dirty()

    def persist_if_dirty(self, force: bool = False) -> None:
        # Writes are deferred until COMMIT so a rollback leaves the file untouched.
        if self._in_transaction:
            return
        self._manager.persist_if_dirty(force=force)

    def last_insert_rowid(self) -> int:
        value = self.sa_connection.exec_driver_sql("SELECT last_insert_rowid()").scalar()
        try:
            return int(value or 0)
        except (TypeError, ValueError):
            return 0


class DatabaseManager:
    """Owns the in-memory SQLite image and its file on disk.

    The whole database lives in memory. It is loaded from ``path`` on
    ``initialize()`` and written back as one blob whenever a write marks it
    dirty, or when ``persist()`` forces it.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._raw: Optional[sqlite3.Connection] = None
        self._engine: Optional[Engine] = None
        self._sa_connection: Optional[SAConnection] = None
        self._connection: Optional[Connection] = None
        self._dirty = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def is_initialized(self) -> bool:
        return self._raw is not None

    def initialize(self) -> None:
        """Open the database image, bootstrap the schema and write it out."""
        if self._raw is not None:
            return

        self._path.parent.mkdir(parents=True, exist_ok=True)

        raw = sqlite3.connect(":memory:", check_same_thread=False)
        try:
            if self._path.exists() and self._path.stat().st_size > 0:
                raw.deserialize(self._path.read_bytes())
                logger.info(f"Loaded database image from {self._path}")
            else:
                logger.info(f"Creating new database image for {self._path}")

            engine = create_engine(
                "sqlite://",
                creator=lambda: raw,
                poolclass=StaticPool,
                isolation_level="AUTOCOMMIT",
                echo=False,
            )
            sa_connection = engine.connect()
            self._bootstrap(sa_connection)
            self._write_image(raw)
        except Exception:
            raw.close()
            raise

        self._dirty = False
        self._raw = raw
        self._engine = engine
        self._sa_connection = sa_connection

    @property
    def connection(self) -> Connection:
        if self._raw is None or self._sa_connection is None:
            raise DatabaseNotInitializedError()

        if self._connection is None:
            self._connection = Connection(self, self._sa_connection, self._raw)

        return self._connection

    def persist(self) -> None:
        """Force a write of the current image, used as a shutdown safety net."""
        self.persist_if_dirty(force=True)

    def close(self) -> None:
        if self._raw is None:
            return

        self.persist()
        if self._sa_connection is not None:
            self._sa_connection.close()
        if self._engine is not None:
            self._engine.dispose()
        self._raw.close()

        self._raw = None
        self._engine = None
        self._sa_connection = None
        self._connection = None
        self._dirty = False
        logger.info(f"Closed database image for {self._path}")

    def mark_dirty(self) -> None:
        self._dirty = True

    def restore_dirty(self, dirty: bool) -> None:
        self._dirty = dirty

    def persist_if_dirty(self, force: bool = False) -> None:
        if self._raw is None or (not self._dirty and not force):
            return

        self._write_image(self._raw)
        self._dirty = False

    def _write_image(self, raw: sqlite3.Connection) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_bytes(raw.serialize())
        os.replace(tmp_path, self._path)

    def _bootstrap(self, sa_connection: SAConnection) -> None:
        Base.metadata.create_all(sa_connection)

        for table, column, column_type in ADDITIVE_COLUMNS:
            try:
                sa_connection.exec_driver_sql(f"ALTER TABLE {table} ADD COLUMN {column} {column_type}")
            except OperationalError as e:
                if "duplicate column name" not in str(e).lower():
                    raise
                # Column already exists.

        self.mark_dirty()
