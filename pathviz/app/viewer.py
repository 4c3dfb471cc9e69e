# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinder Viewer — paint a grid, run Dijkstra, watch it explore.

- Mouse:
    click        -> paint with the current mode
    drag         -> keep painting walls
- Keyboard:
    [SPACE]/[ENTER] -> find path
    [C]             -> clear path (cancels a run in progress)
    [R]             -> reset grid (cancels a run in progress)
    [W]/[S]/[E]     -> draw mode wall / start / end
    [+]/[-]         -> animation speed
    [Q]/[ESC]       -> quit

Settings: see pathviz.config (PATHVIZ_* env vars or --flag=value).
"""

import logging
import sys
from typing import Dict, List, Optional, Tuple, Union

import pygame

from pathviz.app.pacing import make_pacer
from pathviz.config import Settings, load_settings
from pathviz.core.session import Session
from pathviz.core.types import (
    Cell, RenderEvent, RunSummary, GridError,
    EMPTY, WALL, START, END, CURRENT, VISITED, PATH,
)

log = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 320            # right band: stats + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 18
FONT_NAME = None  # default pygame font
SPEEDS = (1, 2, 4, 8, 16)

# Colors
WHITE        = (255, 255, 255)
BLACK        = (  0,   0,   0)
GRID_LINE    = ( 52,  58,  70)
EMPTY_FILL   = ( 30,  34,  42)
WALL_FILL    = (120, 128, 140)
START_FILL   = ( 46, 170,  90)
END_FILL     = (220,  50,  47)
CURRENT_FILL = (255, 210,   0)
VISITED_FILL = ( 70, 130, 180)
PATH_FILL    = (  0, 255, 200)

CARD_BG      = (24, 28, 36, 220)
CARD_HI      = (255, 255, 255, 18)
TEXT_LIGHT   = (230, 235, 240)
TEXT_DIM     = (150, 158, 170)
ACCENT_GOLD  = (255, 210, 0)

KIND_COLORS = {EMPTY: EMPTY_FILL, WALL: WALL_FILL, START: START_FILL, END: END_FILL}
OVERLAY_COLORS = {CURRENT: CURRENT_FILL, VISITED: VISITED_FILL, PATH: PATH_FILL}
LEGEND = (
    ("Start", START_FILL), ("End", END_FILL), ("Wall", WALL_FILL),
    ("Explored", VISITED_FILL), ("Shortest path", PATH_FILL),
)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False   # highlight state
        self.enabled = True

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover and self.enabled:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)

        hi = pygame.Surface((self.rect.width, 18), pygame.SRCALPHA)
        pygame.draw.rect(hi, (255, 255, 255, 20), hi.get_rect(), border_radius=10)
        base.blit(hi, (0, 0))
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        color = (235, 238, 242) if self.enabled else TEXT_DIM
        text = font.render(self.label, True, color)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        """True when the event was a click on this button."""
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.enabled:
                    self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: Session, settings: Settings):
        pygame.init()

        self.session = session
        self.settings = settings
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 26)

        self.cell_size = self._auto_cell_size()
        win_w = GRID_MARGIN * 2 + session.cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN * 2 + session.rows * self.cell_size, 600)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Shortest Path Finder")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        # what is on screen; trails the session by at most one pending event
        self.overlay: Dict[Cell, str] = {}
        self.summary: Optional[RunSummary] = None
        self._pending: Optional[Union[RenderEvent, RunSummary]] = None
        self._due = 0
        self._last = 0
        self.pacer = make_pacer(settings)

        self.speed_idx = 0
        self.state = "Idle"
        self.message = ""
        self._drawing = False
        self._last_painted: Optional[Cell] = None
        self.clock = pygame.time.Clock()
        self._refresh_active_states()

    # ---------- layout ----------
    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN * 2
        target_w = 1280 - PANEL_W - GRID_MARGIN * 2
        return max(8, min(CELL_SIZE_DEFAULT, target_h // self.session.rows,
                          target_w // self.session.cols))

    def _layout(self, win_w: int, win_h: int):
        """Integer cell_size that fits the window; grid on the left, panel on the right."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(4, min(avail_w // self.session.cols, avail_h // self.session.rows)))

        grid_w = self.session.cols * self.cell_size
        grid_h = self.session.rows * self.cell_size
        top_y = max(0, (win_h - grid_h - 2 * GRID_MARGIN) // 2)
        self.canvas_rect = pygame.Rect(0, top_y, grid_w + 2 * GRID_MARGIN, grid_h + 2 * GRID_MARGIN)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        row, col = (y - oy) // self.cell_size, (x - ox) // self.cell_size
        if row >= self.session.rows or col >= self.session.cols:
            return None
        return (row, col)

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._tick_run()
            self._draw()
            self.clock.tick(60)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key in (pygame.K_SPACE, pygame.K_RETURN):
                    self._find_path()
                elif e.key == pygame.K_c:
                    self._clear_path()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_w:
                    self._switch_mode(WALL)
                elif e.key == pygame.K_s:
                    self._switch_mode(START)
                elif e.key == pygame.K_e:
                    self._switch_mode(END)
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
                    self._bump_speed(-1)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                cell = self.cell_at(e.pos)
                if cell is not None:
                    self._drawing = True
                    self._paint(cell)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self._drawing = False
                self._last_painted = None
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                if self._drawing and self.session.mode == WALL:
                    cell = self.cell_at(e.pos)
                    if cell is not None and cell != self._last_painted:
                        self._paint(cell)

    # ---------- actions ----------
    def _paint(self, cell: Cell):
        self._last_painted = cell
        try:
            self.session.paint(*cell)
        except GridError as ex:
            self.message = str(ex)
            return
        self.message = ""

    def _switch_mode(self, mode: str):
        try:
            self.session.set_mode(mode)
        except GridError as ex:
            self.message = str(ex)
        self._refresh_active_states()

    def _find_path(self):
        if self.session.is_running:
            return
        try:
            self.session.start_run()
        except GridError as ex:
            self.message = str(ex)
            return
        self._reset_overlays()
        self.pacer = make_pacer(self.settings)
        self._last = self._due = pygame.time.get_ticks()
        self.state = "Running"
        self.message = ""
        self._refresh_active_states()

    def _clear_path(self):
        self.session.clear_run()
        self._reset_overlays()
        self.state = "Idle"
        self._refresh_active_states()

    def _reset(self):
        self.session.reset_grid()
        self._reset_overlays()
        self.state = "Idle"
        self.message = ""
        self._refresh_active_states()

    def _reset_overlays(self):
        self.overlay.clear()
        self.summary = None
        self._pending = None

    def _bump_speed(self, dv: int):
        self.speed_idx = int(max(0, min(len(SPEEDS) - 1, self.speed_idx + dv)))

    @property
    def speed(self) -> int:
        return SPEEDS[self.speed_idx]

    # ---------- event playback ----------
    def _tick_run(self, now: Optional[int] = None):
        """Apply every event whose scheduled time has come."""
        now = pygame.time.get_ticks() if now is None else now
        while True:
            if self._pending is None:
                if not self.session.is_running:
                    return
                item = self.session.next_event()
                if item is None:
                    return
                self._pending = item
                self._due = self._last + self.pacer(item) // self.speed
            if now < self._due:
                return
            self._apply(self._pending)
            self._pending = None
            self._last = self._due

    def _apply(self, item: Union[RenderEvent, RunSummary]):
        if isinstance(item, RunSummary):
            self.summary = item
            self.state = "Done" if item.found else "No path"
            self._refresh_active_states()
            return
        self.overlay[item.cell] = item.kind

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h - 1)
            c = (
                int(top[0] + (bot[0] - top[0]) * t),
                int(top[1] + (bot[1] - top[1]) * t),
                int(top[2] + (bot[2] - top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        grid = self.session.grid

        for row in range(grid.rows):
            for col in range(grid.cols):
                rect = pygame.Rect(ox + col * cs, oy + row * cs, cs, cs)
                kind = grid.cells[row][col]
                color = KIND_COLORS[kind]
                if kind == EMPTY:
                    color = OVERLAY_COLORS.get(self.overlay.get((row, col)), color)
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for the stats card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None, rect=None):
            btn = UIButton(label, rect or pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Find Path", self._find_path, togglable=True, store_as="btn_run"); y += h + gap
        add("Clear Path", self._clear_path); y += h + gap
        add("Reset Grid", self._reset);     y += h + gap

        third = (w - 2 * gap) // 3
        for i, (label, mode) in enumerate((("Wall", WALL), ("Start", START), ("End", END))):
            rect = pygame.Rect(x + i * (third + gap), y, third, h)
            add(label, lambda m=mode: self._switch_mode(m), togglable=True,
                store_as=f"btn_mode_{mode}", rect=rect)
        y += h + gap

        half = (w - gap) // 2
        add("Speed -", lambda: self._bump_speed(-1), rect=pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self._bump_speed(+1), rect=pygame.Rect(x + half + gap, y, half, h))

        self._refresh_active_states()

    def _refresh_active_states(self):
        running = getattr(self, "session", None) is not None and self.session.is_running
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(running)
            self.btn_run.enabled = not running
        for mode in (WALL, START, END):
            btn = getattr(self, f"btn_mode_{mode}", None)
            if btn is not None and hasattr(self, "session"):
                btn.set_active(self.session.mode == mode)
                btn.enabled = not running

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 230
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0, 0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Shortest Path Finder", big=True, color=ACCENT_GOLD)
        line(f"State: {self.state}")
        if self.summary is not None:
            length = self.summary.path_length if self.summary.found else "none"
            line(f"Path Length: {length}")
            line(f"Nodes Explored: {self.summary.visited_count}")
        else:
            line("Path Length: -")
            explored = sum(1 for v in self.overlay.values() if v != PATH)
            line(f"Nodes Explored: {explored}")
        line(f"Mode: {self.session.mode}   Speed: x{self.speed}")
        if self.message:
            line(self.message[:38], color=TEXT_DIM)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)

        # legend below the buttons
        ly = self._buttons[-1].rect.bottom + 20 if self._buttons else rb.y + 500
        for label, color in LEGEND:
            pygame.draw.rect(self.screen, color, pygame.Rect(x0, ly, 14, 14))
            surf = self.font_small.render(label, True, TEXT_LIGHT)
            self.screen.blit(surf, (x0 + 22, ly))
            ly += 20


# ---------- main ----------
def main(argv=None):
    try:
        settings = load_settings(argv)
    except ValueError as ex:
        print(f"Invalid settings: {ex}", file=sys.stderr)
        sys.exit(2)
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        session = Session(settings.rows, settings.cols)
    except ValueError as ex:
        print(f"Cannot build a {settings.rows}x{settings.cols} grid: {ex}", file=sys.stderr)
        sys.exit(2)
    log.info("starting viewer on a %dx%d grid", settings.rows, settings.cols)
    Viewer(session, settings).run()


if __name__ == "__main__":
    main()
