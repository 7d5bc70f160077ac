import logging
import string
import sys
from typing import List, Optional

import pygame

from .dictionary import load_dictionary
from .display import SCREEN_HEIGHT, SCREEN_WIDTH, PygameRenderer, load_font
from .env import GameSession
from .errors import EmptyDictionary, ResourceUnavailable
from .input import KeyEvent
from .render import SCREENSHOTS_DIR, render_board_screenshot

logger = logging.getLogger(__name__)

FPS = 60
WINDOW_TITLE = "CheGuordle!"

LETTER_KEYS = {getattr(pygame, f"K_{c}"): c.upper() for c in string.ascii_lowercase}
COMMIT_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


def translate_event(event: pygame.event.Event) -> Optional[KeyEvent]:
    """Maps a pygame key press to a game event, or None for keys the game doesn't use."""
    if event.type != pygame.KEYDOWN:
        return None
    if event.key in COMMIT_KEYS:
        return KeyEvent.commit()
    if event.key == pygame.K_BACKSPACE:
        return KeyEvent.backspace()
    # semicolon is where Ñ lives on a spanish layout
    if event.key == pygame.K_SEMICOLON or getattr(event, "unicode", "") in ("ñ", "Ñ"):
        return KeyEvent.letter_key("Ñ")
    if event.key in LETTER_KEYS:
        return KeyEvent.letter_key(LETTER_KEYS[event.key])
    return None


def save_screenshot(session: GameSession) -> None:
    output_path = SCREENSHOTS_DIR / f"{session.match_id}.png"
    if render_board_screenshot(session.board, session.status, output_path=output_path):
        logger.info("Screenshot saved to %s", output_path)


def run(session: GameSession, renderer: PygameRenderer, screen: pygame.Surface, clock: pygame.time.Clock) -> None:
    """Runs the update/draw loop until the window is closed."""
    running = True
    while running:
        clock.tick(FPS)
        events: List[KeyEvent] = []
        restart_requested = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    restart_requested = True
                    continue
                if event.key == pygame.K_F12:
                    save_screenshot(session)
                    continue
                key_event = translate_event(event)
                if key_event is not None:
                    events.append(key_event)

        # keys from this frame belong to the match they were typed in
        session.update(events)
        if restart_requested:
            session.restart()
        renderer.draw(screen, session.board, session.status)
        pygame.display.flip()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    try:
        dictionary = load_dictionary()
        session = GameSession(dictionary)
        session.reset()
    except (ResourceUnavailable, EmptyDictionary) as e:
        logger.error("%s", e)
        sys.exit(1)

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        renderer = PygameRenderer(load_font())
    except (ResourceUnavailable, pygame.error) as e:
        logger.error("%s", e)
        pygame.quit()
        sys.exit(1)

    run(session, renderer, screen, pygame.time.Clock())
    pygame.quit()


if __name__ == "__main__":
    main()
