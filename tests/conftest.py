from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from voidsync.config import settings
from voidsync.main import app
from voidsync.mind.memory import LocalMemory
from voidsync.void.store import void_store


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture(autouse=True)
def restore_settings():
    tracked = {
        'app_env': settings.app_env,
        'expose_internal_error_details': settings.expose_internal_error_details,
        'void_max_body_bytes': settings.void_max_body_bytes,
        'mind_role': settings.mind_role,
        'mind_state_dir': settings.mind_state_dir,
        'mind_sync_endpoint': settings.mind_sync_endpoint,
        'mind_insight_interval_s': settings.mind_insight_interval_s,
        'mind_sync_interval_s': settings.mind_sync_interval_s,
        'mind_consciousness_limit': settings.mind_consciousness_limit,
        'mind_sync_window': settings.mind_sync_window,
    }
    # Keep local state out of the working directory unless a test opts in.
    settings.mind_state_dir = ''
    yield settings
    for key, value in tracked.items():
        setattr(settings, key, value)


@pytest.fixture(autouse=True)
def reset_void():
    void_store.clear()
    yield
    void_store.clear()


@pytest.fixture
def memory(tmp_path) -> LocalMemory:
    return LocalMemory(tmp_path / 'state')


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 14, 9, 15, 0))
