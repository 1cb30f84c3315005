"""Selection state for the agent list.

The cursor moves one row per key *press*. Terminals deliver a held key as a
stream of identical events, so a navigation key is ignored when it repeats
the last navigation key that was acted on. Any other key, or a poll with no
event at all, re-arms navigation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NavKey(Enum):
    UP = "up"
    DOWN = "down"
    QUIT = "quit"
    OTHER = "other"


NAVIGATION_KEYS = (NavKey.UP, NavKey.DOWN)


@dataclass
class SelectionState:
    """Highlighted row of the agent list.

    ``index`` is None exactly when there are no agents; otherwise it is
    always in ``range(count)``.
    """
    count: int = 0
    index: Optional[int] = None
    last_key: Optional[NavKey] = None

    def __post_init__(self):
        if self.count <= 0:
            self.count = 0
            self.index = None
        elif self.index is None:
            self.index = 0
        else:
            self.index = max(0, min(self.count - 1, self.index))

    def move_down(self) -> None:
        if self.index is not None and self.index + 1 < self.count:
            self.index += 1

    def move_up(self) -> None:
        if self.index is not None and self.index > 0:
            self.index -= 1

    def handle(self, key: Optional[NavKey]) -> bool:
        """Apply one poll result. ``None`` means the poll timed out.

        Returns False to quit.
        """
        if key is NavKey.QUIT:
            return False

        if key not in NAVIGATION_KEYS:
            self.last_key = None
            return True

        if key is self.last_key:
            return True

        self.last_key = key
        if key is NavKey.DOWN:
            self.move_down()
        else:
            self.move_up()
        return True
