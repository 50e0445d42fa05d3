"""Interactive, tabbed table of the fleet drawn with curses.

Up/Down move the row cursor, Left/Right switch tabs and q quits.
"""

import curses
import logging
from typing import Any
from typing import List
from typing import Optional

from capacity_coverage.fleet import FleetCoverage
from capacity_coverage.interface import CoverageError
from capacity_coverage.views import Projection
from capacity_coverage.views import ViewSelector

logger = logging.getLogger(__name__)

TABS_HEIGHT = 3
QUIT_KEYS = (ord("q"),)


class TerminalApp:
    """Tab and row-cursor state, independent of how it is drawn"""

    def __init__(self, fleet: FleetCoverage, selector: Optional[ViewSelector] = None):
        self.fleet = fleet
        self.selector = selector or ViewSelector()
        self.selected: Optional[int] = None

    def projection(self) -> Projection:
        return self.selector.project(self.fleet)

    def _row_count(self) -> int:
        try:
            return len(self.projection().rows)
        except CoverageError:
            return 0

    def next(self) -> None:
        count = self._row_count()
        if self.selected is None or count == 0 or self.selected >= count - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous(self) -> None:
        count = self._row_count()
        if self.selected is None or count == 0:
            self.selected = 0
        elif self.selected == 0:
            self.selected = count - 1
        else:
            self.selected -= 1

    def next_tab(self) -> None:
        self.selector.next()
        self._clamp()

    def previous_tab(self) -> None:
        self.selector.previous()
        self._clamp()

    def _clamp(self) -> None:
        if self.selected is None:
            return
        count = self._row_count()
        self.selected = min(self.selected, count - 1) if count else None

    def handle_key(self, key: int) -> bool:
        """Returns False once the app should exit"""
        if key in QUIT_KEYS:
            return False
        if key == curses.KEY_DOWN:
            self.next()
        elif key == curses.KEY_UP:
            self.previous()
        elif key == curses.KEY_LEFT:
            self.previous_tab()
        elif key == curses.KEY_RIGHT:
            self.next_tab()
        return True


def column_widths(widths: List[int], total: int) -> List[int]:
    return [max(1, total * percent // 100) for percent in widths]


def format_line(cells: List[str], widths: List[int]) -> str:
    return " ".join(cell[:width].ljust(width) for cell, width in zip(cells, widths))


def _addstr(screen: Any, y: int, x: int, text: str, attr: int = 0) -> None:
    height, width = screen.getmaxyx()
    if y >= height or x >= width:
        return
    # Writing into the bottom right cell raises, so leave it empty
    screen.addnstr(y, x, text, max(0, width - x - 1), attr)


def draw_tabs(screen: Any, app: TerminalApp) -> None:
    _, width = screen.getmaxyx()
    _addstr(screen, 0, 0, "Tabs".center(width - 1, "-"))
    x = 1
    for index, title in enumerate(app.selector.tab_titles):
        attr = curses.A_BOLD | curses.A_REVERSE if index == app.selector.index else 0
        _addstr(screen, 1, x, f" {title} ", attr)
        x += len(title) + 3
    _addstr(screen, 2, 0, "-" * (width - 1))


def draw_table(screen: Any, app: TerminalApp) -> None:
    height, width = screen.getmaxyx()
    try:
        projection = app.projection()
    except CoverageError as exp:
        _addstr(screen, TABS_HEIGHT, 0, app.selector.current.title, curses.A_BOLD)
        _addstr(screen, TABS_HEIGHT + 1, 0, f"Unable to compute view: {exp}")
        return

    widths = column_widths(list(projection.widths), width)
    _addstr(screen, TABS_HEIGHT, 0, projection.title, curses.A_BOLD)
    _addstr(
        screen,
        TABS_HEIGHT + 1,
        0,
        format_line(list(projection.header), widths),
        curses.A_UNDERLINE,
    )

    first_row = TABS_HEIGHT + 2
    visible = max(0, height - first_row)
    offset = 0
    if app.selected is not None and app.selected >= visible:
        offset = app.selected - visible + 1
    for line, index in enumerate(range(offset, len(projection.rows))):
        if line >= visible:
            break
        attr = curses.A_REVERSE if index == app.selected else 0
        _addstr(
            screen,
            first_row + line,
            0,
            format_line(list(projection.rows[index]), widths),
            attr,
        )


def draw(screen: Any, app: TerminalApp) -> None:
    screen.erase()
    draw_tabs(screen, app)
    draw_table(screen, app)
    screen.refresh()


def run_app(screen: Any, app: TerminalApp) -> bool:
    """Returns whether the cursor could be hidden"""
    cursor_hidden = True
    try:
        curses.curs_set(0)
    except curses.error:
        cursor_hidden = False
    screen.keypad(True)
    while True:
        draw(screen, app)
        if not app.handle_key(screen.getch()):
            return cursor_hidden


def run(app: TerminalApp) -> None:
    """Takes over the terminal until the user quits, restoring it after"""
    # Nothing may be logged while curses owns the screen
    if not curses.wrapper(run_app, app):
        logger.debug("Terminal cannot hide the cursor")
    logger.debug("Terminal restored after %s view", app.selector.mode)
