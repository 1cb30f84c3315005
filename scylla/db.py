"""SQLite agent store.

The dashboard reads the agent table exactly once at startup. Any failure to
read the store is reported as ``SourceError``; ``load_agents_or_empty`` turns
that into an empty list so the dashboard always starts.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from .exceptions import SourceError
from .models import COLUMNS, AgentRecord

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("c2.db")

SELECT_AGENTS = f"SELECT {', '.join(COLUMNS)} FROM agents"


@contextmanager
def get_connection(db_path: Path, read_only: bool = True) -> Generator[sqlite3.Connection, None, None]:
    """Open a connection to the agent store.

    Read-only connections never create the database file.

    Yields:
        SQLite connection with dict-like rows
    """
    if read_only:
        uri = Path(db_path).resolve().as_uri() + "?mode=ro"
        conn = sqlite3.connect(uri, uri=True, timeout=5.0)
    else:
        conn = sqlite3.connect(db_path, timeout=5.0)
    conn.row_factory = sqlite3.Row
    # Undecodable text becomes U+FFFD instead of failing the whole query
    conn.text_factory = lambda b: b.decode("utf-8", errors="replace")

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_schema(db_path: Path) -> None:
    """Create the agents table if it doesn't exist."""
    with get_connection(db_path, read_only=False) as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS agents (
                id TEXT PRIMARY KEY,
                hostname TEXT NOT NULL,
                ip TEXT NOT NULL,
                os TEXT,
                status TEXT NOT NULL,
                last_seen TEXT,
                location TEXT,
                note TEXT
            )
        """)


def insert_agent(db_path: Path, agent: AgentRecord) -> None:
    """Insert or replace a single agent row."""
    placeholders = ", ".join("?" for _ in COLUMNS)
    with get_connection(db_path, read_only=False) as conn:
        conn.execute(
            f"INSERT OR REPLACE INTO agents ({', '.join(COLUMNS)}) VALUES ({placeholders})",
            tuple(getattr(agent, name) for name in COLUMNS),
        )


def load_agents(db_path: Path = DEFAULT_DB_PATH) -> list[AgentRecord]:
    """Read every agent from the store, in query order.

    Rows missing a required column are skipped.

    Raises:
        SourceError: If the file is missing or the query fails.
    """
    db_path = Path(db_path)
    if not db_path.is_file():
        raise SourceError(f"Agent store not found: {db_path}", path=str(db_path))

    try:
        with get_connection(db_path) as conn:
            rows = conn.execute(SELECT_AGENTS).fetchall()
    except sqlite3.Error as e:
        raise SourceError(f"Failed to read agents from {db_path}: {e}", path=str(db_path)) from e

    agents = []
    for row in rows:
        agent = AgentRecord.from_row(row)
        if agent is None:
            logger.debug("Skipping agent row with missing required column: %s", tuple(row))
            continue
        agents.append(agent)
    return agents


def load_agents_or_empty(db_path: Path = DEFAULT_DB_PATH) -> list[AgentRecord]:
    """Load agents, falling back to an empty list on any store failure."""
    try:
        agents = load_agents(db_path)
    except SourceError as e:
        logger.warning("Agent source unavailable, showing no agents: %s", e)
        return []
    logger.info("Loaded %d agents from %s", len(agents), db_path)
    return agents
