from enum import Enum

import pygame

from lane_dodge.config import SWIPE_THRESHOLD


class Command(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    RESET = "reset"


def swipe_to_command(dx, threshold=SWIPE_THRESHOLD):
    """Map a horizontal gesture displacement to a lane move, or None if too short."""
    if dx > threshold:
        return Command.MOVE_RIGHT
    if dx < -threshold:
        return Command.MOVE_LEFT
    return None


KEY_COMMANDS = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_a: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_d: Command.MOVE_RIGHT,
}

RESET_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_r)


class GestureTracker:
    """Turns raw pygame events into game commands.

    A drag is measured from press to release (mouse or touch). Touch events
    carry normalized coordinates, so they are scaled by the playfield width.
    """

    def __init__(self, width, threshold=SWIPE_THRESHOLD):
        self.width = width
        self.threshold = threshold
        self._start_x = None

    def handle(self, event, game_over=False):
        if event.type == pygame.KEYDOWN:
            if game_over:
                return Command.RESET if event.key in RESET_KEYS else None
            return KEY_COMMANDS.get(event.key)

        # Touch screens also emit synthesized mouse events
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and getattr(event, "touch", False):
            return None

        if event.type == pygame.MOUSEBUTTONDOWN:
            return self._press(event.pos[0], game_over)
        if event.type == pygame.FINGERDOWN:
            return self._press(event.x * self.width, game_over)

        if event.type == pygame.MOUSEBUTTONUP:
            return self._release(event.pos[0], game_over)
        if event.type == pygame.FINGERUP:
            return self._release(event.x * self.width, game_over)
        return None

    def _press(self, x, game_over):
        # The restart touch is consumed whole; its release never moves the car
        if game_over:
            self._start_x = None
            return Command.RESET
        self._start_x = x
        return None

    def _release(self, x, game_over):
        start_x, self._start_x = self._start_x, None
        if start_x is None or game_over:
            return None
        return swipe_to_command(x - start_x, self.threshold)


def apply_command(engine, command):
    if command is Command.MOVE_LEFT:
        engine.move_left()
    elif command is Command.MOVE_RIGHT:
        engine.move_right()
    elif command is Command.RESET:
        engine.reset()
