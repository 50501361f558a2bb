import numpy as np
import pygame

COLOR_BG = (77, 77, 77)
COLOR_ROAD = (102, 102, 102)
COLOR_VEHICLE = (25, 118, 210)
COLOR_VEHICLE_BORDER = (255, 255, 255)
COLOR_OBSTACLE = (211, 47, 47)
COLOR_TEXT = (255, 255, 255)
COLOR_GAME_OVER = (255, 255, 0)

ROAD_FRACTION = 0.7


class Renderer:
    """Draws engine snapshots. Holds fonts only, never game state."""

    def __init__(self, config):
        self.config = config
        pygame.font.init()
        self.font_main = pygame.font.SysFont("monospace", 20, bold=True)
        self.font_large = pygame.font.SysFont("monospace", 32, bold=True)

    def new_surface(self):
        return pygame.Surface((self.config.width, self.config.height))

    def draw(self, surface, snapshot):
        surface.fill(COLOR_BG)
        if snapshot.game_over:
            self._render_game_over(surface)
        else:
            self._render_game(surface, snapshot)
        self._render_ui(surface, snapshot)

    def _render_game(self, surface, snapshot):
        road_width = int(self.config.width * ROAD_FRACTION)
        road = pygame.Rect((self.config.width - road_width) // 2, 0, road_width, self.config.height)
        pygame.draw.rect(surface, COLOR_ROAD, road)

        vehicle = _to_rect(snapshot.vehicle)
        pygame.draw.rect(surface, COLOR_VEHICLE, vehicle, border_radius=10)
        pygame.draw.rect(surface, COLOR_VEHICLE_BORDER, vehicle, 2, border_radius=10)

        for box in snapshot.obstacles:
            pygame.draw.rect(surface, COLOR_OBSTACLE, _to_rect(box), border_radius=6)

    def _render_ui(self, surface, snapshot):
        best_text = self.font_main.render(f"BEST: {snapshot.best_score}", True, COLOR_TEXT)
        surface.blit(best_text, best_text.get_rect(midtop=(self.config.width / 2, 20)))

        score_text = self.font_main.render(f"SCORE: {snapshot.score}", True, COLOR_TEXT)
        surface.blit(score_text, score_text.get_rect(midtop=(self.config.width / 2, 50)))

    def _render_game_over(self, surface):
        over_text = self.font_large.render("GAME OVER", True, COLOR_GAME_OVER)
        surface.blit(over_text, over_text.get_rect(midtop=(self.config.width / 2, 200)))

        hint_text = self.font_main.render("Tap to restart", True, COLOR_TEXT)
        surface.blit(hint_text, hint_text.get_rect(midtop=(self.config.width / 2, 250)))


def _to_rect(box):
    return pygame.Rect(int(box.x), int(box.y), int(box.width), int(box.height))


def to_array(surface):
    arr = pygame.surfarray.array3d(surface)
    return np.transpose(arr, (1, 0, 2)).astype(np.uint8)
