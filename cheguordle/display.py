from pathlib import Path
from typing import Optional, Tuple

import pygame

from .errors import ResourceUnavailable
from .game import Board, Classification
from .render import ASSETS_DIR, KEYBOARD_ROWS

# --- Layout ---
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
TILE_SIZE = 50
TILE_SPACING = 10
NORMAL_FONT_SIZE = 24
DEFAULT_FONT_PATH = ASSETS_DIR / "Lato-Regular.ttf"

KEY_SIZE = 36
KEY_SPACING = 4
KEYBOARD_LEFT = 360
KEYBOARD_TOP = 2 * (TILE_SIZE + TILE_SPACING) + TILE_SPACING

# --- Palette ---
BACKGROUND = (0, 0, 0)
NEUTRAL = (255, 255, 255)
TEXT_COLOR = (0, 0, 0)
STATUS_COLOR = (255, 255, 255)
UNUSED_KEY = (211, 214, 218)
TILE_COLORS = {
    Classification.EXACT: (0, 255, 0),
    Classification.PRESENT: (255, 255, 0),
    Classification.ABSENT: (128, 128, 128),
}


def load_font(path: Optional[Path] = None, size: int = NORMAL_FONT_SIZE) -> pygame.font.Font:
    """
    Loads the tile font, the packaged Lato unless another file is given.

    Raises:
        ResourceUnavailable: if the font file is missing or can't be parsed.
    """
    path = Path(path) if path is not None else DEFAULT_FONT_PATH
    if not path.is_file():
        raise ResourceUnavailable(f"Error: Font not found at '{path}'")
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.Font(str(path), size)
    except (OSError, pygame.error) as e:
        raise ResourceUnavailable(f"Error: Could not load font '{path}': {e}") from e


def tile_rect(row: int, col: int) -> pygame.Rect:
    x = col * TILE_SIZE + (col + 1) * TILE_SPACING
    y = row * TILE_SIZE + (row + 1) * TILE_SPACING
    return pygame.Rect(x, y, TILE_SIZE, TILE_SIZE)


def key_rect(row: int, col: int) -> pygame.Rect:
    # stagger the lower rows a little like a physical keyboard
    x = KEYBOARD_LEFT + row * (KEY_SIZE // 2) + col * (KEY_SIZE + KEY_SPACING)
    y = KEYBOARD_TOP + row * (KEY_SIZE + KEY_SPACING)
    return pygame.Rect(x, y, KEY_SIZE, KEY_SIZE)


def status_position(max_guesses: int = Board.MAX_GUESSES) -> Tuple[int, int]:
    return TILE_SPACING, max_guesses * (TILE_SIZE + TILE_SPACING) + 2 * TILE_SPACING


class PygameRenderer:
    """Draws a board onto a pygame surface. Never mutates the board."""

    def __init__(self, font: pygame.font.Font):
        self.font = font

    def draw(self, surface: pygame.Surface, board: Board, status: Optional[str] = None):
        surface.fill(BACKGROUND)
        self._draw_grid(surface, board)
        self._draw_keyboard(surface, board)
        if status:
            text = self.font.render(status, True, STATUS_COLOR)
            surface.blit(text, status_position(board.MAX_GUESSES))

    def _draw_grid(self, surface: pygame.Surface, board: Board):
        for r, row in enumerate(board.tiles()):
            for c, tile in enumerate(row):
                rect = tile_rect(r, c)
                color = TILE_COLORS[tile.classification] if tile.classification else NEUTRAL
                pygame.draw.rect(surface, color, rect)
                if tile.letter:
                    self._draw_centered(surface, tile.letter, rect)

    def _draw_keyboard(self, surface: pygame.Surface, board: Board):
        letter_states = board.letter_states()
        for r, keys in enumerate(KEYBOARD_ROWS):
            for c, key in enumerate(keys):
                rect = key_rect(r, c)
                state = letter_states.get(key)
                color = TILE_COLORS[state] if state else UNUSED_KEY
                pygame.draw.rect(surface, color, rect)
                self._draw_centered(surface, key, rect)

    def _draw_centered(self, surface: pygame.Surface, letter: str, rect: pygame.Rect):
        text = self.font.render(letter, True, TEXT_COLOR)
        surface.blit(text, text.get_rect(center=rect.center))
