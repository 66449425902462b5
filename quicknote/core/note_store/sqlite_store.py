"""
SQLite note store implementation using aiosqlite.

One connection is opened by ``initialize`` and shared by every later
call. Transactions are serialized with an asyncio lock so concurrent
callers never interleave statements on that connection.
"""

import asyncio
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from quicknote.core import codec
from quicknote.core.note_store.base import NoteStore
from quicknote.models.note import Note, NoteDraft
from quicknote.utils.exceptions import NotFoundError, StorageUnavailableError, ValidationError
from quicknote.utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "id, title, content, keywords, audio_uri, created_at, updated_at, is_sync, device_id"
)

# SQLite INTEGER is a signed 64-bit value
_MIN_ROWID = -(2**63)
_MAX_ROWID = 2**63 - 1


def _is_rowid(note_id: int) -> bool:
    return _MIN_ROWID <= note_id <= _MAX_ROWID


class SQLiteNoteStore(NoteStore):
    """
    SQLite-based store for notes.

    Features:
    - Single local database file
    - Keywords stored through the record codec
    - One transaction per mutating operation
    - WAL journal for crash safety
    """

    def __init__(self, db_path: str = "data/notes.db"):
        """
        Initialize SQLite note store.

        Args:
            db_path: Path to SQLite database file (or ":memory:")
        """
        self.db_path = db_path
        self.connection: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Open the database and create the notes schema."""
        if self.connection is None:
            await self._open()

        try:
            await self.connection.execute(
                """
                CREATE TABLE IF NOT EXISTS notes (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    keywords TEXT NOT NULL,
                    audio_uri TEXT,
                    created_at INTEGER NOT NULL,
                    updated_at INTEGER NOT NULL,
                    is_sync INTEGER NOT NULL DEFAULT 0,
                    device_id TEXT NOT NULL
                )
            """
            )
            await self.connection.execute(
                "CREATE INDEX IF NOT EXISTS idx_notes_updated ON notes(updated_at)"
            )
            await self.connection.commit()
        except sqlite3.Error as e:
            logger.error(
                f"Failed to create notes schema: {e}",
                extra={"operation": "initialize", "db_path": self.db_path},
            )
            raise StorageUnavailableError(
                f"Cannot create notes schema: {e}", context={"db_path": self.db_path}
            ) from e

        logger.info(f"Note store ready at {self.db_path}")

    async def _open(self) -> None:
        """Create the parent directory and connect."""
        connection = None
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            connection = await aiosqlite.connect(self.db_path)
            await connection.execute("PRAGMA journal_mode = WAL")
        except (OSError, sqlite3.Error) as e:
            if connection is not None:
                await connection.close()
            logger.error(
                f"Failed to open database: {e}",
                extra={"operation": "initialize", "db_path": self.db_path},
            )
            raise StorageUnavailableError(
                f"Cannot open database at {self.db_path}: {e}",
                context={"db_path": self.db_path},
            ) from e

        self.connection = connection

    def _require_connection(self) -> aiosqlite.Connection:
        if self.connection is None:
            raise StorageUnavailableError(
                "Note store is not initialized", context={"db_path": self.db_path}
            )
        return self.connection

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Run a block inside BEGIN/COMMIT, rolling back on any error."""
        connection = self._require_connection()
        async with self._lock:
            await connection.execute("BEGIN")
            try:
                yield connection
                await connection.commit()
            except BaseException:
                await connection.rollback()
                raise

    # ═══════════════════════════════════════════════════════════
    # NOTE OPERATIONS
    # ═══════════════════════════════════════════════════════════

    async def insert(self, draft: NoteDraft) -> Note:
        """Insert a note and return it with its new id."""
        if not draft.has_content():
            raise ValidationError(
                "A note needs text content or an audio recording",
                context={"operation": "insert"},
            )
        if draft.updated_at < draft.created_at:
            raise ValidationError(
                "updated_at cannot precede created_at",
                context={"created_at": draft.created_at, "updated_at": draft.updated_at},
            )
        self._check_encodable(draft)

        keywords = codec.encode(draft.keywords)

        try:
            async with self._transaction() as connection:
                cursor = await connection.execute(
                    """
                    INSERT INTO notes (
                        title, content, keywords, audio_uri,
                        created_at, updated_at, is_sync, device_id
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        draft.title,
                        draft.content,
                        keywords,
                        draft.audio_uri or None,
                        draft.created_at,
                        draft.updated_at,
                        int(draft.is_sync),
                        draft.device_id,
                    ),
                )
                note_id = cursor.lastrowid

                cursor = await connection.execute(
                    f"SELECT {_COLUMNS} FROM notes WHERE id = ?", (note_id,)
                )
                row = await cursor.fetchone()
                note = self._row_to_note(row)
        except sqlite3.Error as e:
            raise StorageUnavailableError(
                f"Failed to insert note: {e}", context={"operation": "insert"}
            ) from e

        logger.debug(f"Inserted note {note.id}")
        return note

    async def list_all(self) -> list[Note]:
        """List notes ordered by updated_at descending, id ascending."""
        connection = self._require_connection()

        try:
            async with self._lock:
                cursor = await connection.execute(
                    f"SELECT {_COLUMNS} FROM notes ORDER BY updated_at DESC, id ASC"
                )
                rows = await cursor.fetchall()
        except sqlite3.Error as e:
            raise StorageUnavailableError(
                f"Failed to list notes: {e}", context={"operation": "list_all"}
            ) from e

        return [self._row_to_note(row) for row in rows]

    async def get(self, note_id: int) -> Note | None:
        """Retrieve a note by id."""
        connection = self._require_connection()
        if not _is_rowid(note_id):
            return None

        try:
            async with self._lock:
                cursor = await connection.execute(
                    f"SELECT {_COLUMNS} FROM notes WHERE id = ?", (note_id,)
                )
                row = await cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageUnavailableError(
                f"Failed to read note {note_id}: {e}", context={"note_id": note_id}
            ) from e

        if not row:
            return None

        return self._row_to_note(row)

    async def delete_by_id(self, note_id: int) -> None:
        """Delete a note, failing if it does not exist."""
        if not _is_rowid(note_id):
            raise NotFoundError(f"Note {note_id} not found", context={"note_id": note_id})

        try:
            async with self._transaction() as connection:
                cursor = await connection.execute("DELETE FROM notes WHERE id = ?", (note_id,))
                if cursor.rowcount == 0:
                    raise NotFoundError(f"Note {note_id} not found", context={"note_id": note_id})
        except sqlite3.Error as e:
            raise StorageUnavailableError(
                f"Failed to delete note {note_id}: {e}", context={"note_id": note_id}
            ) from e

        logger.debug(f"Deleted note {note_id}")

    async def count(self) -> int:
        """Count stored notes."""
        connection = self._require_connection()

        try:
            async with self._lock:
                cursor = await connection.execute("SELECT COUNT(*) FROM notes")
                row = await cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageUnavailableError(
                f"Failed to count notes: {e}", context={"operation": "count"}
            ) from e

        return row[0] if row else 0

    async def close(self) -> None:
        """Close the connection."""
        if self.connection is not None:
            await self.connection.close()
            self.connection = None

    # ═══════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════

    def _row_to_note(self, row: tuple) -> Note:
        """Convert database row to Note object."""
        return Note(
            id=row[0],
            title=row[1],
            content=row[2],
            keywords=codec.decode(row[3]),
            audio_uri=row[4],
            created_at=row[5],
            updated_at=row[6],
            is_sync=bool(row[7]),
            device_id=row[8],
        )

    def _check_encodable(self, draft: NoteDraft) -> None:
        """Reject text SQLite cannot store, such as lone surrogates."""
        fields = {
            "title": draft.title,
            "content": draft.content,
            "device_id": draft.device_id,
            "audio_uri": draft.audio_uri or "",
        }
        fields.update({f"keywords[{i}]": keyword for i, keyword in enumerate(draft.keywords)})

        for name, value in fields.items():
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise ValidationError(
                    f"Field {name} contains text that is not valid UTF-8",
                    context={"field": name, "position": e.start},
                ) from e
