import pygame

from constants import BALL_STEP_MS, BALL_COLOR, BALL_OUTLINE_COLOR, PHASE_MOVING


class Ball:
    """
    Drives the moving phase from the frame loop: one path cell per BALL_STEP_MS.

    When the session reports the path is exhausted the ball asks it to complete, so
    an empty path completes on the first step.
    """

    def __init__(self, session, step_ms: float = BALL_STEP_MS, game_speed_ref: list[float] | None = None):
        self.session = session
        self.step_ms = step_ms
        self.game_speed_ref = game_speed_ref or [1.0]
        self.move_timer = 0.0
        self.prev_pos = session.ball_position

    def reset(self):
        self.move_timer = 0.0
        self.prev_pos = self.session.ball_position

    def update(self, dt_ms: float):
        if self.session.phase != PHASE_MOVING:
            self.reset()
            return
        self.move_timer += dt_ms * self.game_speed_ref[0]
        while self.move_timer >= self.step_ms:
            self.move_timer -= self.step_ms
            self.prev_pos = self.session.ball_position
            if not self.session.move_ball():
                self.session.complete()
                self.move_timer = 0.0
                break

    def interpolated_position(self):
        if self.session.phase != PHASE_MOVING:
            return self.session.ball_position
        t = min(1.0, self.move_timer / self.step_ms) if self.step_ms > 0 else 1.0
        px, pz = self.prev_pos
        cx, cz = self.session.ball_position
        return (px + (cx - px) * t, pz + (cz - pz) * t)

    def draw(self, surface, cell_size, offset=(0, 0)):
        x, z = self.interpolated_position()
        center = (int(offset[0] + x * cell_size + cell_size / 2), int(offset[1] + z * cell_size + cell_size / 2))
        radius = max(2, int(cell_size * 0.35))
        pygame.draw.circle(surface, BALL_COLOR, center, radius)
        pygame.draw.circle(surface, BALL_OUTLINE_COLOR, center, radius, 2)
