import os
import random
import tempfile
import unittest
from pathlib import Path
from unittest import mock

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from cheguordle import app
from cheguordle.dictionary import Dictionary
from cheguordle.display import (
    DEFAULT_FONT_PATH, NEUTRAL, SCREEN_HEIGHT, SCREEN_WIDTH, TILE_COLORS, PygameRenderer, load_font, tile_rect,
)
from cheguordle.env import GameSession
from cheguordle.errors import ResourceUnavailable
from cheguordle.game import Board, Classification, MatchState
from cheguordle.input import EventKind, KeyEvent


def type_word(board, word):
    for letter in word:
        board.append_letter(board.current, letter)


def keydown(key, unicode=""):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode)


class PygameTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        pygame.init()
        cls.font = load_font()

    @classmethod
    def tearDownClass(cls):
        pygame.quit()


class TestRenderer(PygameTestCase):
    def setUp(self):
        self.surface = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
        self.renderer = PygameRenderer(self.font)

    def tile_color(self, row, col):
        rect = tile_rect(row, col)
        # a corner pixel is never covered by the letter
        return tuple(self.surface.get_at((rect.x + 1, rect.y + 1)))[:3]

    def test_tile_layout(self):
        self.assertEqual(tile_rect(0, 0), pygame.Rect(10, 10, 50, 50))
        self.assertEqual(tile_rect(5, 4), pygame.Rect(250, 310, 50, 50))

    def test_committed_row_colors(self):
        board = Board("MESSI")
        type_word(board, "SALMO")
        board.commit_row()
        type_word(board, "ME")
        self.renderer.draw(self.surface, board)

        self.assertEqual(self.tile_color(0, 0), TILE_COLORS[Classification.PRESENT])
        self.assertEqual(self.tile_color(0, 1), TILE_COLORS[Classification.ABSENT])
        # active and future rows stay neutral
        self.assertEqual(self.tile_color(1, 0), NEUTRAL)
        self.assertEqual(self.tile_color(5, 4), NEUTRAL)

    def test_winning_row_is_green(self):
        board = Board("MESSI")
        type_word(board, "MESSI")
        board.mark_won()
        self.renderer.draw(self.surface, board, status="¡Ganaste!")
        for col in range(Board.WORD_LENGTH):
            self.assertEqual(self.tile_color(0, col), TILE_COLORS[Classification.EXACT])

    def test_draw_does_not_touch_the_board(self):
        board = Board("MESSI")
        type_word(board, "AB")
        before = board.snapshot()
        self.renderer.draw(self.surface, board, status="Perdiste... La palabra era: MESSI")
        self.assertEqual(board.snapshot(), before)

    def test_missing_font_file(self):
        with self.assertRaises(ResourceUnavailable):
            load_font(Path("/nonexistent/Lato-Regular.ttf"))

    def test_packaged_font(self):
        self.assertTrue(DEFAULT_FONT_PATH.is_file())
        font = load_font()
        self.assertIsInstance(font, pygame.font.Font)
        # Ñ and ¡ need real glyphs, not the missing-glyph box
        self.assertTrue(all(metric is not None for metric in font.metrics("Ñ¡")))


class TestKeyTranslation(unittest.TestCase):
    def test_letters(self):
        event = app.translate_event(keydown(pygame.K_a, "a"))
        self.assertIs(event.kind, EventKind.LETTER)
        self.assertEqual(event.letter, "A")
        self.assertEqual(app.translate_event(keydown(pygame.K_z, "z")).letter, "Z")

    def test_enye(self):
        self.assertEqual(app.translate_event(keydown(pygame.K_SEMICOLON, ";")).letter, "Ñ")
        # spanish layouts send the ñ keycode directly
        self.assertEqual(app.translate_event(keydown(241, "ñ")).letter, "Ñ")

    def test_control_keys(self):
        self.assertIs(app.translate_event(keydown(pygame.K_RETURN)).kind, EventKind.COMMIT)
        self.assertIs(app.translate_event(keydown(pygame.K_KP_ENTER)).kind, EventKind.COMMIT)
        self.assertIs(app.translate_event(keydown(pygame.K_BACKSPACE)).kind, EventKind.BACKSPACE)

    def test_unused_keys(self):
        self.assertIsNone(app.translate_event(keydown(pygame.K_1, "1")))
        self.assertIsNone(app.translate_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_a, unicode="a")))


class TestHostLoop(PygameTestCase):
    def test_one_letter_per_frame_until_quit(self):
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        session = GameSession(Dictionary(["messi"], rng=random.Random(1)))
        session.reset()

        pygame.event.clear()
        for key, char in ((pygame.K_m, "m"), (pygame.K_e, "e")):
            pygame.event.post(keydown(key, char))
        pygame.event.post(pygame.event.Event(pygame.QUIT))

        app.run(session, PygameRenderer(self.font), screen, pygame.time.Clock())
        # both keys arrived in the same frame, so only the first one counts
        self.assertEqual(session.board.row(0), "M")

    def test_keys_before_restart_stay_with_the_finished_match(self):
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        session = GameSession(Dictionary(["messi"], rng=random.Random(1)))
        session.reset()
        for letter in "MESSI":
            session.update([KeyEvent.letter_key(letter)])
        session.update([KeyEvent.commit()])
        self.assertIs(session.board.state, MatchState.WON)
        finished_id = session.match_id

        pygame.event.clear()
        pygame.event.post(keydown(pygame.K_a, "a"))
        pygame.event.post(keydown(pygame.K_SPACE, " "))
        pygame.event.post(pygame.event.Event(pygame.QUIT))

        app.run(session, PygameRenderer(self.font), screen, pygame.time.Clock())
        self.assertNotEqual(session.match_id, finished_id)
        self.assertIs(session.board.state, MatchState.PLAYING)
        self.assertEqual(session.board.row(0), "")

    def test_screenshot_without_a_browser_keeps_running(self):
        session = GameSession(Dictionary(["messi"], rng=random.Random(1)))
        session.reset()
        with tempfile.TemporaryDirectory() as tmp, \
                mock.patch("cheguordle.render.SCREENSHOTS_DIR", Path(tmp)), \
                mock.patch.object(app, "SCREENSHOTS_DIR", Path(tmp)), \
                mock.patch("html2image.Html2Image", side_effect=FileNotFoundError("no chrome")):
            with self.assertLogs("cheguordle.render", level="ERROR"):
                app.save_screenshot(session)
            self.assertFalse((Path(tmp) / f"{session.match_id}.png").exists())

    def test_fatal_startup_error_exits_nonzero(self):
        with mock.patch.object(app, "load_dictionary", side_effect=ResourceUnavailable("missing")):
            with self.assertRaises(SystemExit) as cm:
                app.main()
        self.assertEqual(cm.exception.code, 1)


if __name__ == '__main__':
    unittest.main()
