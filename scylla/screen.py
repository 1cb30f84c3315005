"""curses terminal backend.

``CursesTerminal`` owns the terminal for the life of a session: ``acquire``
switches to raw mode on the alternate screen, ``release`` puts everything
back. Drawing goes through the ``safe_*`` helpers, which clip to the window
and swallow ``curses.error`` for a single draw call, so a tiny or resizing
terminal never takes the loop down.
"""

import curses
import logging
import os
from typing import Optional, Sequence

from .exceptions import TerminalError
from .layout import Rect
from .render import Panel
from .selection import NavKey

logger = logging.getLogger(__name__)

MIN_WIDTH = 40
MIN_HEIGHT = 12

KEY_ESCAPE = 27

UP_KEYS = (curses.KEY_UP, ord('k'))
DOWN_KEYS = (curses.KEY_DOWN, ord('j'))
QUIT_KEYS = (ord('q'), ord('Q'), KEY_ESCAPE)


def classify_key(code: int) -> NavKey:
    """Map a curses key code to a navigation key."""
    if code in UP_KEYS:
        return NavKey.UP
    if code in DOWN_KEYS:
        return NavKey.DOWN
    if code in QUIT_KEYS:
        return NavKey.QUIT
    return NavKey.OTHER


# ---------------------------------------------------------------------------
# Color pairs
# ---------------------------------------------------------------------------

class Colors:
    DEFAULT = 0
    TITLE = 1
    BORDER = 2
    HIGHLIGHT = 3


def init_colors():
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(Colors.TITLE, curses.COLOR_CYAN, -1)
    curses.init_pair(Colors.BORDER, curses.COLOR_BLUE, -1)
    curses.init_pair(Colors.HIGHLIGHT, curses.COLOR_WHITE, curses.COLOR_BLUE)


def color(pair: int) -> int:
    """Attribute for a color pair, or plain text when colors are unavailable."""
    try:
        return curses.color_pair(pair)
    except curses.error:
        return 0


# ---------------------------------------------------------------------------
# Safe drawing helpers
# ---------------------------------------------------------------------------

def safe_addstr(win, y: int, x: int, text: str, attr: int = 0, max_x: int = 0):
    """Write text to window, clipping to max_x if provided."""
    try:
        max_y_win, max_x_win = win.getmaxyx()
        if y < 0 or y >= max_y_win or x < 0 or x >= max_x_win:
            return
        limit = min(max_x if max_x > 0 else max_x_win, max_x_win) - x
        if limit <= 0:
            return
        win.addnstr(y, x, text, limit, attr)
    except curses.error:
        pass


def safe_addch(win, y: int, x: int, ch, attr: int = 0):
    try:
        win.addch(y, x, ch, attr)
    except curses.error:
        pass


def safe_hline(win, y: int, x: int, ch, width: int, attr: int = 0):
    if width <= 0:
        return
    try:
        if attr:
            win.attron(attr)
        win.hline(y, x, ch, width)
        if attr:
            win.attroff(attr)
    except curses.error:
        pass


def safe_vline(win, y: int, x: int, ch, height: int, attr: int = 0):
    if height <= 0:
        return
    try:
        if attr:
            win.attron(attr)
        win.vline(y, x, ch, height)
        if attr:
            win.attroff(attr)
    except curses.error:
        pass


def draw_box(win, rect: Rect, title: str = ""):
    """Draw a bordered box with ``title`` in the top edge."""
    if rect.width < 2 or rect.height < 2:
        return
    border = color(Colors.BORDER)
    left, top = rect.x, rect.y
    right, bottom = rect.x + rect.width - 1, rect.y + rect.height - 1

    safe_hline(win, top, left + 1, curses.ACS_HLINE, rect.width - 2, border)
    safe_hline(win, bottom, left + 1, curses.ACS_HLINE, rect.width - 2, border)
    safe_vline(win, top + 1, left, curses.ACS_VLINE, rect.height - 2, border)
    safe_vline(win, top + 1, right, curses.ACS_VLINE, rect.height - 2, border)
    safe_addch(win, top, left, curses.ACS_ULCORNER, border)
    safe_addch(win, top, right, curses.ACS_URCORNER, border)
    safe_addch(win, bottom, left, curses.ACS_LLCORNER, border)
    # Bottom-right corner of the screen raises after writing; safe_addch ignores it
    safe_addch(win, bottom, right, curses.ACS_LRCORNER, border)

    if title:
        safe_addstr(win, top, left + 1, title,
                    color(Colors.TITLE) | curses.A_BOLD, right)


def draw_panel(win, panel: Panel):
    rect = panel.rect
    draw_box(win, rect, panel.title)
    inner_width = rect.width - 2
    if inner_width <= 0:
        return
    for i, line in enumerate(panel.lines):
        row = rect.y + 1 + i
        if row >= rect.y + rect.height - 1:
            break
        if line.highlighted:
            text = line.text.ljust(inner_width)
            attr = color(Colors.HIGHLIGHT) | curses.A_REVERSE | curses.A_BOLD
        else:
            text = line.text
            attr = color(Colors.DEFAULT)
        safe_addstr(win, row, rect.x + 1, text, attr, rect.x + 1 + inner_width)


def paint(win, panels: Sequence[Panel]):
    """Redraw the whole window from a list of panels."""
    win.erase()
    for panel in panels:
        draw_panel(win, panel)
    win.refresh()


def paint_message(win, text: str):
    win.erase()
    safe_addstr(win, 0, 0, text)
    win.refresh()


# ---------------------------------------------------------------------------
# Terminal lifecycle
# ---------------------------------------------------------------------------

class CursesTerminal:
    """Raw-mode, alternate-screen terminal for the dashboard."""

    def __init__(self):
        self.stdscr = None

    def acquire(self):
        """Enter raw mode on the alternate screen.

        Raises:
            TerminalError: If curses can't take over the terminal. Whatever
                was set up is left for ``release`` to undo.
        """
        # Short delay so Esc quits without waiting a full second
        os.environ.setdefault("ESCDELAY", "25")
        try:
            self.stdscr = curses.initscr()
            curses.noecho()
            curses.cbreak()
            self.stdscr.keypad(True)
            init_colors()
        except curses.error as e:
            raise TerminalError(f"Failed to initialize terminal: {e}") from e
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal does not support hiding the cursor")
        logger.debug("Terminal acquired")
        return self.stdscr

    def release(self):
        """Restore the terminal. Every step is attempted even if one fails.

        Raises:
            TerminalError: If any restoration step failed.
        """
        if self.stdscr is None:
            return
        stdscr = self.stdscr
        self.stdscr = None

        errors = []
        for step in (lambda: stdscr.keypad(False), curses.nocbreak, curses.echo):
            try:
                step()
            except curses.error as e:
                errors.append(e)
        try:
            curses.curs_set(1)
        except curses.error:
            logger.debug("Terminal does not support showing the cursor")
        try:
            curses.endwin()
        except curses.error as e:
            errors.append(e)

        logger.debug("Terminal released")
        if errors:
            raise TerminalError(f"Failed to restore terminal: {errors[0]}")

    def size(self) -> Rect:
        """Current terminal size, re-read on every call."""
        max_y, max_x = self.stdscr.getmaxyx()
        return Rect(0, 0, max_x, max_y)

    def poll(self, timeout: float) -> Optional[NavKey]:
        """Wait up to ``timeout`` seconds for a key. Returns None on timeout."""
        self.stdscr.timeout(max(0, int(timeout * 1000)))
        code = self.stdscr.getch()
        if code == -1:
            return None
        return classify_key(code)

    def draw(self, panels: Sequence[Panel]):
        area = self.size()
        if area.width < MIN_WIDTH or area.height < MIN_HEIGHT:
            paint_message(self.stdscr,
                          f"Terminal too small! Need {MIN_WIDTH}x{MIN_HEIGHT} minimum.")
            return
        paint(self.stdscr, panels)
