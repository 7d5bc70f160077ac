import logging
import uuid
from typing import Iterable, Optional

from .dictionary import Dictionary
from .game import Board, MatchState
from .input import InputProcessor, InputResult, KeyEvent
from .render import TextUI

logger = logging.getLogger(__name__)

WIN_MESSAGE = "¡Ganaste!"
LOSS_MESSAGE = "Perdiste... La palabra era: {target}"
INVALID_WORD_MESSAGE = "{word} no es una palabra válida."


class GameSession:
    """Owns the current match: its board, the input processor and the transient notice."""

    # how many frames an invalid-word notice stays on screen
    NOTICE_TICKS = 120

    def __init__(self, dictionary: Dictionary, target_word: Optional[str] = None):
        """
        Args:
            dictionary (Dictionary): Loaded word list, shared by every match.
            target_word (str): A specific word to use for every match instead of
                sampling one. Must be in the dictionary.
        """
        if target_word is not None and not dictionary.contains(target_word):
            raise ValueError(f"Target word '{target_word}' is not in the dictionary.")

        self.dictionary = dictionary
        self.target_word_arg = target_word.upper() if target_word else None
        self.ui = TextUI()

        self.board: Optional[Board] = None
        self.processor: Optional[InputProcessor] = None
        self.match_id: Optional[str] = None
        self.notice: Optional[str] = None
        self._notice_ticks = 0

    def reset(self) -> Board:
        """Starts a new match and returns its board."""
        target = self.target_word_arg or self.dictionary.sample()
        self.board = Board(target)
        self.processor = InputProcessor(self.board, self.dictionary)
        self.match_id = str(uuid.uuid4())
        self._clear_notice()

        logger.info("Match %s started", self.match_id)
        logger.debug("Target word for match %s: %s", self.match_id, self.board.target)
        return self.board

    def restart(self) -> bool:
        """Starts a new match, but only once the current one has finished."""
        if self.board is not None and not self.board.is_over:
            return False
        self.reset()
        return True

    def update(self, events: Iterable[KeyEvent]) -> InputResult:
        """Runs one tick: ages the notice, then applies this tick's key events."""
        if not self.board or not self.processor:
            raise RuntimeError("You must call reset() before calling update().")

        if self._notice_ticks > 0:
            self._notice_ticks -= 1
            if self._notice_ticks == 0:
                self.notice = None

        result = self.processor.process(events)

        if result is InputResult.INVALID_WORD:
            self._set_notice(INVALID_WORD_MESSAGE.format(word=self.board.active_row))
        elif result in (InputResult.WON, InputResult.LOST):
            self._clear_notice()
            self._log_match_end()
        return result

    @property
    def status(self) -> Optional[str]:
        """The message the renderer should show under the grid, if any."""
        if not self.board:
            return None
        if self.board.state is MatchState.WON:
            return WIN_MESSAGE
        if self.board.state is MatchState.LOST:
            return LOSS_MESSAGE.format(target=self.board.target)
        return self.notice

    def _set_notice(self, message: str):
        self.notice = message
        self._notice_ticks = self.NOTICE_TICKS

    def _clear_notice(self):
        self.notice = None
        self._notice_ticks = 0

    def _log_match_end(self):
        board = self.board
        if board.won:
            logger.info("Match %s won in %d/%d guesses", self.match_id, board.current + 1, board.MAX_GUESSES)
        else:
            logger.info("Match %s lost, the word was %s", self.match_id, board.target)
        logger.info("Final board:\n%s", self.ui.get_text_observation(board))
