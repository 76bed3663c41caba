"""Pytest fixtures for all tests."""

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config, NonceConfig
from textnonce import MonotonicClock, NonceGenerator
from ui.app import create_app


class FakeTimeSource:
    """Settable wall clock returning integer nanoseconds."""

    def __init__(self, seconds=1_000_000, nanoseconds=0):
        self.nanos = seconds * 1_000_000_000 + nanoseconds

    def __call__(self):
        return self.nanos

    def set(self, seconds, nanoseconds=0):
        self.nanos = seconds * 1_000_000_000 + nanoseconds

    def advance(self, nanos):
        self.nanos += nanos


def zero_bytes(n):
    return bytes(n)


@pytest.fixture
def time_source():
    return FakeTimeSource()


@pytest.fixture
def clock(time_source):
    return MonotonicClock(time_source=time_source)


@pytest.fixture
def generator(clock):
    """Deterministic generator: fake clock, all-zero random bytes."""
    return NonceGenerator(clock=clock, random_bytes=zero_bytes)


@pytest.fixture
def app_config():
    return Config(nonce=NonceConfig(max_length=128, max_batch=20))


@pytest.fixture
async def app(app_config):
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
