"""Shared test fixtures for team sync tests."""
import asyncio

import pytest

from teamsync.cache.view_cache import TeamViewCache
from teamsync.tools.stub_services import StubStore, get_stub_gateway
from teamsync.utils.metrics import MetricsCollector
from teamsync.utils.notifier import Notifier
from teamsync.workflow.orchestrator import TeamMutationOrchestrator

ORG_ID = 1
FIXED_NOW = "2025-06-01T12:00:00+00:00"


def run_async(coro):
    """Helper to run async coroutine in sync test."""
    return asyncio.run(coro)


class RecordingNotifier(Notifier):
    """Collects toasts instead of printing them"""

    def __init__(self):
        self.messages = []

    def success(self, message):
        self.messages.append(("success", message))

    def error(self, message):
        self.messages.append(("error", message))


@pytest.fixture
def store():
    return StubStore()


@pytest.fixture
def gateway(store):
    return get_stub_gateway(store, latency=0.0)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def cache(gateway):
    return TeamViewCache(gateway)


@pytest.fixture
def orchestrator(gateway, cache, notifier, metrics):
    return TeamMutationOrchestrator(gateway, cache, notifier, metrics=metrics,
                                    clock=lambda: FIXED_NOW)
