"""Dashboard session and event loop.

One thread, one loop. Each tick draws the current state, then waits for a
key until the next tick boundary, then applies the key to the selection:

    render -> poll(remaining) -> selection.handle(key) -> advance boundary

The loop ends only on a quit key (or Ctrl-C). The terminal is acquired once
before the loop and released once after it, on every exit path.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence

from .exceptions import SourceError
from .layout import Rect, dashboard_layout
from .models import AgentRecord
from .render import Panel, compose_frame
from .selection import NavKey, SelectionState

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 0.2  # seconds


class Terminal(Protocol):
    def acquire(self): ...

    def release(self): ...

    def size(self) -> Rect: ...

    def poll(self, timeout: float) -> Optional[NavKey]: ...

    def draw(self, panels: Sequence[Panel]): ...


AgentSource = Callable[[], Sequence[AgentRecord]]


@dataclass
class Session:
    """Everything the loop mutates, in one place."""
    terminal: Terminal
    agents: tuple[AgentRecord, ...] = ()
    selection: SelectionState = field(default_factory=SelectionState)
    margin: int = 1
    running: bool = True
    last_tick: float = 0.0

    def frame(self) -> list[Panel]:
        """Panels for the terminal's current size."""
        regions = dashboard_layout(self.terminal.size(), self.margin)
        return compose_frame(self.agents, self.selection, regions)


def load_session_agents(source: AgentSource) -> tuple[AgentRecord, ...]:
    """Consult the agent source once. Any failure gives an empty list."""
    try:
        return tuple(source())
    except SourceError as e:
        logger.warning("Agent source unavailable, showing no agents: %s", e)
    except Exception:
        logger.warning("Agent source failed, showing no agents", exc_info=True)
    return ()


class EventScheduler:
    """Fixed-interval render/poll loop.

    Args:
        tick_interval: Seconds between tick boundaries
        clock: Monotonic clock, injectable for tests
    """

    def __init__(self, tick_interval: float = DEFAULT_TICK_INTERVAL,
                 clock: Callable[[], float] = time.monotonic):
        self.tick_interval = tick_interval
        self.clock = clock

    def remaining(self, session: Session) -> float:
        """Seconds left until the next tick boundary, never negative."""
        return max(0.0, self.tick_interval - (self.clock() - session.last_tick))

    def tick(self, session: Session) -> None:
        session.terminal.draw(session.frame())

        key = session.terminal.poll(self.remaining(session))
        if not session.selection.handle(key):
            session.running = False

        now = self.clock()
        if now - session.last_tick >= self.tick_interval:
            session.last_tick = now

    def run(self, session: Session) -> None:
        session.last_tick = self.clock()
        while session.running:
            self.tick(session)


def run_dashboard(terminal: Terminal, source: AgentSource,
                  tick_interval: float = DEFAULT_TICK_INTERVAL, margin: int = 1,
                  clock: Callable[[], float] = time.monotonic) -> Session:
    """Acquire the terminal, load agents, run until quit, release the terminal.

    ``release`` runs on every path, including a failed ``acquire``.
    """
    session = Session(terminal=terminal, margin=margin)
    scheduler = EventScheduler(tick_interval, clock=clock)
    try:
        terminal.acquire()
        session.agents = load_session_agents(source)
        session.selection = SelectionState(count=len(session.agents))
        logger.info("Dashboard started with %d agents", len(session.agents))
        scheduler.run(session)
    except KeyboardInterrupt:
        session.running = False
        logger.info("Dashboard interrupted")
    except Exception:
        # Logged before release so a failing release can't hide the cause
        logger.exception("Dashboard loop failed")
        raise
    finally:
        terminal.release()
    logger.info("Dashboard stopped")
    return session
