# game.py
import pygame
import sys

from constants import *
from ball import Ball
from maze import PRESET_MAZES
from runner import AlgorithmRunner
from scheduler import Scheduler
from session import MazeSession

from utils import draw_rounded_rect, draw_text, cell_size_for, cell_color

CELL_COLORS = {
    "wall": WALL_COLOR, "floor": FLOOR_COLOR, "start": START_COLOR, "end": END_COLOR,
    "path": PATH_OVERLAY_COLOR, "visited": VISITED_COLOR,
}


class Game:
    def __init__(self, session=None):
        try:
            pygame.init()
            pygame.font.init()
        except pygame.error as e:
            print(f"Pygame Init Error: {e}", file=sys.stderr); sys.exit(1)
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.running = True

        self.maze_area_rect = pygame.Rect(UI_PADDING, UI_PADDING, MAZE_AREA_WIDTH - 2 * UI_PADDING, MAZE_AREA_HEIGHT - 2 * UI_PADDING)
        self.info_area_rect = pygame.Rect(self.maze_area_rect.right + UI_PADDING, UI_PADDING, INFO_AREA_WIDTH - UI_PADDING, MAZE_AREA_HEIGHT - 2 * UI_PADDING)
        self.controls_area_rect = pygame.Rect(UI_PADDING, self.maze_area_rect.bottom + UI_PADDING, SCREEN_WIDTH - 2 * UI_PADDING, CONTROLS_AREA_HEIGHT - UI_PADDING)

        self.font_xl = pygame.font.SysFont(None, UI_FONT_SIZE_XLARGE)
        self.font_m = pygame.font.SysFont(None, UI_FONT_SIZE_NORMAL)
        self.font_s = pygame.font.SysFont(None, UI_FONT_SIZE_SMALL)
        self.font_xs = pygame.font.SysFont(None, UI_FONT_SIZE_XSMALL)

        self.session = session or MazeSession()
        self.scheduler = Scheduler()
        self.algorithm_runner = AlgorithmRunner(self.session, self.scheduler)
        self.ball = Ball(self.session)

        self.buttons = []
        self._init_control_ui_elements()
        self.completed_restart_rect = None

    # --- UI construction ---
    def _add_button(self, rect, label, action, is_active=lambda: False, menu_only=True):
        self.buttons.append({"rect": rect, "label": label, "action": action,
                             "is_active": is_active, "menu_only": menu_only})

    def _add_button_row(self, label, x, y, entries, width):
        self.section_labels.append((label, (x, y - self.font_xs.get_height() - 2)))
        for text, action, is_active in entries:
            rect = pygame.Rect(x, y, width, UI_BUTTON_HEIGHT)
            self._add_button(rect, text, action, is_active)
            x += width + UI_ELEMENT_PADDING
        return x + UI_SECTION_PADDING

    def _init_control_ui_elements(self):
        self.section_labels = []
        session = self.session
        row1_y = self.controls_area_rect.top + UI_PADDING + self.font_xs.get_height()
        row2_y = row1_y + UI_BUTTON_HEIGHT + UI_SECTION_PADDING + self.font_xs.get_height()
        x = self.controls_area_rect.left + UI_ELEMENT_PADDING

        algo_entries = [(ALGORITHM_SHORT_NAMES[a], (lambda a=a: session.set_algorithm(a)),
                         (lambda a=a: session.selected_algorithm == a)) for a in ALGORITHMS]
        x = self._add_button_row("Algorithm", x, row1_y, algo_entries, 62)

        mode_entries = [(m.capitalize(), (lambda m=m: session.set_visualization_mode(m)),
                         (lambda m=m: session.visualization_mode == m)) for m in VISUALIZATION_MODES]
        x = self._add_button_row("Visualization", x, row1_y, mode_entries, 80)

        start_rect = pygame.Rect(x, row1_y, 110, UI_BUTTON_HEIGHT)
        self._add_button(start_rect, "Start", self._start_run_action)
        restart_rect = pygame.Rect(start_rect.right + UI_ELEMENT_PADDING, row1_y, 110, UI_BUTTON_HEIGHT)
        self._add_button(restart_rect, "Restart", self._restart_action, menu_only=False)

        x = self.controls_area_rect.left + UI_ELEMENT_PADDING
        diff_entries = [(d.capitalize(), (lambda d=d: self._set_difficulty_action(d)),
                         (lambda d=d: session.difficulty == d)) for d in DIFFICULTY_SIZES]
        x = self._add_button_row("Difficulty", x, row2_y, diff_entries, 80)

        new_maze_rect = pygame.Rect(x, row2_y, 120, UI_BUTTON_HEIGHT)
        self.section_labels.append(("Maze", (x, row2_y - self.font_xs.get_height() - 2)))
        self._add_button(new_maze_rect, "New Maze", self._regenerate_maze_action)
        x = new_maze_rect.right + UI_SECTION_PADDING

        preset_entries = [(f"Preset {i + 1}", (lambda i=i: self._load_preset_action(i)), (lambda: False))
                          for i in range(len(PRESET_MAZES))]
        self._add_button_row("Presets", x, row2_y, preset_entries, 90)

    # --- Actions ---
    def _start_run_action(self):
        print(f"\n--- Starting Run ---"); print(f"Mode: {self.session.selected_algorithm} ({self.session.visualization_mode})")
        if not self.session.start_game():
            print("W: Select an algorithm before starting.", file=sys.stderr)

    def _restart_action(self):
        print(f"\n--- Restarting ---")
        self.session.restart()
        self.ball.reset()

    def _regenerate_maze_action(self):
        print(f"\n--- Regenerating Maze ---"); print(f"Difficulty: {self.session.difficulty}")
        self.session.generate_maze()
        self.ball.reset()

    def _set_difficulty_action(self, difficulty):
        self.session.set_difficulty(difficulty)
        self._regenerate_maze_action()

    def _load_preset_action(self, index):
        print(f"\n--- Loading Preset {index + 1} ---")
        self.session.load_preset_maze(index)
        self.ball.reset()

    def _handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    if self.session.phase == PHASE_MENU: self.running = False
                    else: self._restart_action()
                elif event.key in [pygame.K_RETURN, pygame.K_SPACE]:
                    if self.session.phase == PHASE_MENU: self._start_run_action()
                    elif self.session.phase == PHASE_COMPLETED: self._restart_action()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

    def _handle_click(self, mouse_pos):
        if self.session.phase == PHASE_COMPLETED and self.completed_restart_rect and self.completed_restart_rect.collidepoint(mouse_pos):
            self._restart_action(); return
        for button in self.buttons:
            if button["rect"].collidepoint(mouse_pos):
                if button["menu_only"] and self.session.phase != PHASE_MENU:
                    return
                button["action"]()
                return

    # --- Update ---
    def _main_update_loop(self, dt_ms):
        self.scheduler.update(dt_ms)
        self.ball.update(dt_ms)

    # --- Drawing ---
    def _draw_maze_area(self):
        draw_rounded_rect(self.screen, DMG_PRIMARY_BG, self.maze_area_rect)
        grid = self.session.grid
        cell_size = cell_size_for(self.maze_area_rect, grid.width, grid.height)
        offset_x = self.maze_area_rect.left + (self.maze_area_rect.width - grid.width * cell_size) // 2
        offset_y = self.maze_area_rect.top + (self.maze_area_rect.height - grid.height * cell_size) // 2
        for cell in grid:
            rect = pygame.Rect(offset_x + cell.x * cell_size, offset_y + cell.z * cell_size, cell_size, cell_size)
            pygame.draw.rect(self.screen, cell_color(cell, CELL_COLORS), rect)
        self.ball.draw(self.screen, cell_size, (offset_x, offset_y))

    def _draw_info_area(self):
        draw_rounded_rect(self.screen, DMG_PRIMARY_BG, self.info_area_rect, border_thickness=2, border_color=DMG_UI_BORDER)
        session = self.session
        x = self.info_area_rect.left + UI_PADDING
        y = self.info_area_rect.top + UI_PADDING
        y = draw_text(self.screen, session.phase.upper(), self.font_m, DMG_PRIMARY_GREEN, topleft=(x, y)).bottom + UI_ELEMENT_PADDING

        lines = [
            ("Algorithm:", ALGORITHM_NAMES.get(session.selected_algorithm, "None")),
            ("Difficulty:", f"{session.difficulty} ({session.width}x{session.height})"),
            ("Mode:", session.visualization_mode),
        ]
        if session.stats:
            lines += [
                ("Solve Time:", f"{session.stats['solve_time_ms']:.2f}ms"),
                ("Nodes Explored:", session.stats["nodes_explored"]),
                ("Path Length:", session.stats["path_length"]),
            ]
        if session.phase == PHASE_VISUALIZING:
            lines.append(("Visualizing:", f"{session.visualization_index} / {len(session.visited_cells)}"))
        elif session.phase == PHASE_MOVING:
            lines.append(("Progress:", f"{session.path_index} / {len(session.path)}"))
        for key, value in lines:
            draw_text(self.screen, key, self.font_s, DMG_LIGHT_TEXT, topleft=(x, y))
            y = draw_text(self.screen, value, self.font_s, DMG_ACCENT_GREEN, topleft=(x + 150, y)).bottom + UI_ELEMENT_PADDING // 2

        y += UI_SECTION_PADDING
        status_color = DMG_WARN_TEXT if session.solve_error else DMG_DIM_TEXT
        draw_text(self.screen, self.algorithm_runner.get_status_text(), self.font_xs, status_color, topleft=(x, y))

        legend_y = self.info_area_rect.bottom - UI_PADDING - UI_BUTTON_HEIGHT
        for label, color in [("Explored", VISITED_COLOR), ("Path", PATH_OVERLAY_COLOR)]:
            pygame.draw.rect(self.screen, color, pygame.Rect(x, legend_y + 6, 14, 14), border_radius=3)
            x = draw_text(self.screen, label, self.font_xs, DMG_LIGHT_TEXT, topleft=(x + 20, legend_y + 6)).right + UI_SECTION_PADDING

    def _draw_controls_area(self):
        draw_rounded_rect(self.screen, DMG_SECONDARY_BG, self.controls_area_rect)
        for text, pos in self.section_labels:
            draw_text(self.screen, text, self.font_xs, DMG_PRIMARY_GREEN, topleft=pos)
        mouse_pos = pygame.mouse.get_pos()
        in_menu = self.session.phase == PHASE_MENU
        for button in self.buttons:
            enabled = in_menu or not button["menu_only"]
            if not enabled:
                bg, fg = DMG_UI_BUTTON_DISABLED_BG, DMG_UI_BUTTON_DISABLED_TEXT
            elif button["is_active"]():
                bg, fg = DMG_UI_BUTTON_ACTIVE, DMG_DARK_BG
            elif button["rect"].collidepoint(mouse_pos):
                bg, fg = DMG_UI_BUTTON_HOVER, DMG_UI_BUTTON_TEXT
            else:
                bg, fg = DMG_UI_BUTTON, DMG_UI_BUTTON_TEXT
            draw_rounded_rect(self.screen, bg, button["rect"])
            draw_text(self.screen, button["label"], self.font_xs, fg, button["rect"].center)

    def _draw_completed_overlay(self):
        shade = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 150))
        self.screen.blit(shade, (0, 0))
        session = self.session
        center_x = SCREEN_WIDTH // 2
        solved = bool(session.path)
        title = "Maze Solved!" if solved else "No Path Found"
        y = draw_text(self.screen, title, self.font_xl, DMG_PRIMARY_GREEN if solved else DMG_WARN_TEXT, (center_x, SCREEN_HEIGHT // 3)).bottom + UI_SECTION_PADDING
        rows = [f"Algorithm: {ALGORITHM_NAMES.get(session.selected_algorithm, 'N/A')}"]
        if session.stats:
            rows += [f"Solve Time: {session.stats['solve_time_ms']:.2f}ms",
                     f"Nodes Explored: {session.stats['nodes_explored']}",
                     f"Path Length: {session.stats['path_length']}"]
        for row in rows:
            y = draw_text(self.screen, row, self.font_m, DMG_LIGHT_TEXT, (center_x, y + UI_PADDING)).bottom
        self.completed_restart_rect = pygame.Rect(0, 0, 260, UI_BUTTON_HEIGHT + 10)
        self.completed_restart_rect.center = (center_x, y + UI_SECTION_PADDING * 3)
        hovered = self.completed_restart_rect.collidepoint(pygame.mouse.get_pos())
        draw_rounded_rect(self.screen, DMG_UI_BUTTON_HOVER if hovered else DMG_UI_BUTTON, self.completed_restart_rect, border_thickness=2, border_color=DMG_UI_BORDER)
        draw_text(self.screen, "Try Another Algorithm", self.font_s, DMG_LIGHT_TEXT, self.completed_restart_rect.center)

    def _main_draw_call(self):
        self.screen.fill(DMG_DARK_BG)
        self._draw_maze_area()
        self._draw_info_area()
        self._draw_controls_area()
        if self.session.phase == PHASE_COMPLETED:
            self._draw_completed_overlay()
        pygame.display.flip()

    def run(self):
        while self.running:
            dt_ms = self.clock.tick(FPS)
            self._handle_input()
            self._main_update_loop(dt_ms)
            self._main_draw_call()
        self.algorithm_runner.shutdown()
        pygame.quit()
