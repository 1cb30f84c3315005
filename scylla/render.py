"""Render pipeline: turn dashboard state into draw instructions.

Nothing here touches the terminal. ``compose_frame`` returns one ``Panel``
per region; ``screen.paint`` draws them.
"""

from dataclasses import dataclass
from typing import Sequence

from .layout import DashboardRegions, Rect
from .models import AgentRecord
from .selection import SelectionState

LOGO_TITLE = "Scylla"
MENU_TITLE = "Menu"
AGENT_LIST_TITLE = "Agent list"
DETAIL_TITLE = "Datasheet / Map"
STATUS_TITLE = "Terminal · [j/k] select  [q] quit"

NO_SELECTION = "No agent selected"

# (label, field) pairs shown in the detail panel, in order
DETAIL_FIELDS = (
    ("ID", "id"),
    ("Hostname", "hostname"),
    ("IP", "ip"),
    ("OS", "os"),
    ("Status", "status"),
    ("Last seen", "last_seen"),
    ("Location", "location"),
    ("Note", "note"),
)


@dataclass(frozen=True)
class Line:
    text: str
    highlighted: bool = False


@dataclass(frozen=True)
class Panel:
    """A bordered box with a title and some lines of text."""
    name: str
    title: str
    rect: Rect
    lines: tuple[Line, ...] = ()


def inner_rows(rect: Rect) -> int:
    """Rows available for text inside a panel's border."""
    return max(0, rect.height - 2)


def format_agent_line(agent: AgentRecord) -> str:
    return f"{agent.id} | {agent.hostname} | {agent.ip} | {agent.status}"


def scroll_offset(index: int | None, visible_rows: int) -> int:
    """First row to show so that ``index`` stays inside the visible window."""
    if index is None or visible_rows <= 0:
        return 0
    return max(0, index - visible_rows + 1)


def agent_list_lines(agents: Sequence[AgentRecord], selection: SelectionState,
                     visible_rows: int | None = None) -> tuple[Line, ...]:
    """One line per agent, the selected one highlighted.

    With ``visible_rows`` only that many lines are returned, scrolled so the
    selection is on screen.
    """
    start = 0
    stop = len(agents)
    if visible_rows is not None:
        start = scroll_offset(selection.index, visible_rows)
        stop = min(stop, start + max(0, visible_rows))
    return tuple(
        Line(format_agent_line(agents[i]), highlighted=(i == selection.index))
        for i in range(start, stop)
    )


def detail_lines(agents: Sequence[AgentRecord], selection: SelectionState) -> tuple[Line, ...]:
    """Labelled fields of the selected agent, or a single 'no selection' line."""
    index = selection.index
    if index is None or not 0 <= index < len(agents):
        return (Line(NO_SELECTION),)
    agent = agents[index]
    return tuple(Line(f"{label}: {agent.display(name)}") for label, name in DETAIL_FIELDS)


def compose_frame(agents: Sequence[AgentRecord], selection: SelectionState,
                  regions: DashboardRegions) -> list[Panel]:
    """Build the panels for one frame."""
    return [
        Panel("logo", LOGO_TITLE, regions.logo),
        Panel("menu", MENU_TITLE, regions.menu),
        Panel("agent_list", AGENT_LIST_TITLE, regions.agent_list,
              agent_list_lines(agents, selection, visible_rows=inner_rows(regions.agent_list))),
        Panel("detail", DETAIL_TITLE, regions.detail,
              detail_lines(agents, selection)),
        Panel("status", STATUS_TITLE, regions.status),
    ]
