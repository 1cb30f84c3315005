"""Layout engine: split a terminal area into panel rectangles.

A split takes an outer rectangle, an axis and an ordered list of constraints:

    Length(n)  - exactly n cells
    Min(n)     - at least n cells, plus an equal share of any space left over

When the area is too small, sizes are handed out in order and clamped to
what is left, so later regions shrink to zero. Sizes are never negative.
"""

from dataclasses import dataclass
from typing import Literal, NamedTuple, Sequence, Union

Direction = Literal["vertical", "horizontal"]

VERTICAL: Direction = "vertical"
HORIZONTAL: Direction = "horizontal"


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells. ``x``/``y`` are column/row of the top-left."""
    x: int
    y: int
    width: int
    height: int

    def inner(self, margin: int) -> "Rect":
        """Shrink by ``margin`` cells on every side, clamping at zero."""
        return Rect(
            x=self.x + margin,
            y=self.y + margin,
            width=max(0, self.width - 2 * margin),
            height=max(0, self.height - 2 * margin),
        )


@dataclass(frozen=True)
class Length:
    length: int


@dataclass(frozen=True)
class Min:
    min: int


Constraint = Union[Length, Min]


def _sizes(total: int, constraints: Sequence[Constraint]) -> list[int]:
    fixed = sum(c.length for c in constraints if isinstance(c, Length))
    minimum = sum(c.min for c in constraints if isinstance(c, Min))
    flex_count = sum(1 for c in constraints if isinstance(c, Min))

    spare = max(0, total - fixed - minimum)
    share, extra = divmod(spare, flex_count) if flex_count else (0, 0)

    wanted = []
    flex_seen = 0
    for c in constraints:
        if isinstance(c, Length):
            wanted.append(max(0, c.length))
        else:
            bonus = share + (1 if flex_seen < extra else 0)
            flex_seen += 1
            wanted.append(max(0, c.min) + bonus)

    sizes = []
    remaining = max(0, total)
    for size in wanted:
        size = min(size, remaining)
        sizes.append(size)
        remaining -= size
    return sizes


def split(area: Rect, direction: Direction, constraints: Sequence[Constraint],
          margin: int = 0) -> list[Rect]:
    """Partition ``area`` (minus ``margin``) along ``direction``.

    Returns one rectangle per constraint, in order, non-overlapping and
    contained in the inner area.
    """
    inner = area.inner(margin)
    total = inner.height if direction == VERTICAL else inner.width

    rects = []
    offset = 0
    for size in _sizes(total, constraints):
        if direction == VERTICAL:
            rects.append(Rect(inner.x, inner.y + offset, inner.width, size))
        else:
            rects.append(Rect(inner.x + offset, inner.y, size, inner.height))
        offset += size
    return rects


# ---------------------------------------------------------------------------
# Dashboard layout
# ---------------------------------------------------------------------------

BANDS = (Length(3), Min(10), Length(7))   # top / middle / bottom
TOP_COLUMNS = (Length(20), Min(10))       # logo / menu
MIDDLE_COLUMNS = (Length(30), Min(10))    # agent list / detail


class DashboardRegions(NamedTuple):
    logo: Rect
    menu: Rect
    agent_list: Rect
    detail: Rect
    status: Rect


def dashboard_layout(area: Rect, margin: int = 1) -> DashboardRegions:
    """Compute the five dashboard panels for a terminal of size ``area``."""
    top, middle, bottom = split(area, VERTICAL, BANDS, margin=margin)
    logo, menu = split(top, HORIZONTAL, TOP_COLUMNS)
    agent_list, detail = split(middle, HORIZONTAL, MIDDLE_COLUMNS)
    return DashboardRegions(logo=logo, menu=menu, agent_list=agent_list,
                            detail=detail, status=bottom)
