"""Shared test fixtures for scylla tests."""

from pathlib import Path

import pytest

from scylla.db import init_schema, insert_agent
from scylla.models import AgentRecord
from tests.fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def agents():
    return [
        AgentRecord(id="a1", hostname="web-01", ip="10.0.0.1", status="online",
                    os="Linux", last_seen="2026-01-01 10:00:00", location="Paris",
                    note="edge"),
        AgentRecord(id="b2", hostname="db-01", ip="10.0.0.2", status="offline"),
        AgentRecord(id="c3", hostname="ws-07", ip="10.0.0.3", status="idle",
                    os="Windows"),
    ]


@pytest.fixture
def agent_db(tmp_path, agents) -> Path:
    """An agent store holding the ``agents`` fixture, in order."""
    db_path = tmp_path / "c2.db"
    init_schema(db_path)
    for agent in agents:
        insert_agent(db_path, agent)
    return db_path
