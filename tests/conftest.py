import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config


class RecordingLogger:
    """RequestLogger that keeps calls in memory."""

    def __init__(self):
        self.relays = []
        self.probes = []
        self.errors = []

    def log_relay(self, method, path, target_url, status, elapsed_ms, *, headers=None):
        self.relays.append((method, path, target_url, status, elapsed_ms))

    def log_probe(self, latency, upstream_status):
        self.probes.append((latency, upstream_status))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def client(config, logger):
    app = create_app(config, logger)
    with TestClient(app) as test_client:
        yield test_client
