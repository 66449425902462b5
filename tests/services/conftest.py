"""Fixtures for service tests.

Stores use a temp SQLite file per test; audio collaborators are
in-memory fakes.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest

from quicknote.core.audio.base import AudioRecorder, PermissionService
from quicknote.core.note_store.sqlite_store import SQLiteNoteStore
from quicknote.services.note_service import NoteService


class FakeRecorder(AudioRecorder):
    """Recorder that hands out numbered file URIs."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.recordings = 0
        self.played: list[str] = []

    async def start(self) -> str:
        if self.fail_on == "start":
            raise OSError("microphone busy")
        self.recordings += 1
        return f"handle-{self.recordings}"

    async def stop(self) -> str:
        if self.fail_on == "stop":
            raise OSError("write failed")
        return f"file:///recordings/clip-{self.recordings}.m4a"

    async def play(self, reference: str) -> None:
        if self.fail_on == "play":
            raise OSError("no such file")
        self.played.append(reference)


class FakePermissions(PermissionService):
    """Permission service with a fixed answer."""

    def __init__(self, granted: bool = True):
        self.granted = granted
        self.requested: list[str] = []

    async def ensure_granted(self, capability: str) -> bool:
        self.requested.append(capability)
        return self.granted


class SteppingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        moment = self.current
        self.current += timedelta(seconds=1)
        return moment


@pytest.fixture
async def note_store(tmp_path) -> AsyncGenerator:
    """Initialized SQLite store."""
    store = SQLiteNoteStore(db_path=str(tmp_path / "notes.db"))
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock(datetime(2024, 3, 15, 8, 30, 0))


@pytest.fixture
def service(note_store, clock) -> NoteService:
    """Note service over a real store and a deterministic clock."""
    return NoteService(store=note_store, device_id="test-device", clock=clock)


@pytest.fixture
def recorder() -> FakeRecorder:
    return FakeRecorder()


@pytest.fixture
def permissions() -> FakePermissions:
    return FakePermissions()


@pytest.fixture
def make_recorder():
    """Build FakeRecorder instances with custom failure modes."""
    return FakeRecorder


@pytest.fixture
def make_permissions():
    """Build FakePermissions instances with a custom answer."""
    return FakePermissions
