import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, TYPE_CHECKING

from .game import ALPHABET, Board, MatchState

if TYPE_CHECKING:
    from .dictionary import Dictionary

logger = logging.getLogger(__name__)


class EventKind(Enum):
    LETTER = "letter"
    BACKSPACE = "backspace"
    COMMIT = "commit"


@dataclass(frozen=True)
class KeyEvent:
    kind: EventKind
    letter: Optional[str] = None

    @classmethod
    def letter_key(cls, letter: str) -> "KeyEvent":
        return cls(EventKind.LETTER, letter)

    @classmethod
    def backspace(cls) -> "KeyEvent":
        return cls(EventKind.BACKSPACE)

    @classmethod
    def commit(cls) -> "KeyEvent":
        return cls(EventKind.COMMIT)


class InputResult(Enum):
    IGNORED = "ignored"
    APPENDED = "appended"
    REMOVED = "removed"
    INVALID_WORD = "invalid_word"
    ADVANCED = "advanced"
    WON = "won"
    LOST = "lost"


# when keys are mashed in the same tick, the first kind found here wins
PRIORITY = (EventKind.COMMIT, EventKind.BACKSPACE, EventKind.LETTER)


def select_event(events: Iterable[KeyEvent]) -> Optional[KeyEvent]:
    """Picks the single event a tick acts on, or None if there is nothing to do."""
    events = list(events)
    for kind in PRIORITY:
        for event in events:
            if event.kind is kind:
                return event
    return None


class InputProcessor:
    """Turns key events into legal moves on the board. Illegal events are dropped silently."""

    def __init__(self, board: Board, dictionary: "Dictionary"):
        self.board = board
        self.dictionary = dictionary

    def process(self, events: Iterable[KeyEvent]) -> InputResult:
        """
        Applies at most one event from a tick, chosen by COMMIT > BACKSPACE > LETTER.

        Returns:
            InputResult: what happened to the board. Only INVALID_WORD asks the
            caller to tell the player something; IGNORED means nothing changed.
        """
        if self.board.state is not MatchState.PLAYING:
            return InputResult.IGNORED

        event = select_event(events)
        if event is None:
            return InputResult.IGNORED

        if event.kind is EventKind.COMMIT:
            return self._handle_commit()
        if event.kind is EventKind.BACKSPACE:
            return self._handle_backspace()
        return self._handle_letter(event.letter)

    def _handle_letter(self, letter: Optional[str]) -> InputResult:
        if not letter:
            return InputResult.IGNORED
        letter = letter.upper()
        if len(letter) != 1 or letter not in ALPHABET:
            return InputResult.IGNORED
        if self.board.append_letter(self.board.current, letter):
            return InputResult.APPENDED
        return InputResult.IGNORED

    def _handle_backspace(self) -> InputResult:
        if self.board.pop_letter(self.board.current) is None:
            return InputResult.IGNORED
        return InputResult.REMOVED

    def _handle_commit(self) -> InputResult:
        board = self.board
        guess = board.active_row
        # do nothing until the row is full
        if guess is None or len(guess) != board.WORD_LENGTH:
            return InputResult.IGNORED

        # validate first, then compare to the target, then win or advance
        if not self.dictionary.contains(guess):
            logger.info("Rejected guess '%s': not in word list", guess)
            return InputResult.INVALID_WORD

        if guess == board.target:
            board.mark_won()
            return InputResult.WON

        board.commit_row()
        if board.state is MatchState.LOST:
            return InputResult.LOST
        return InputResult.ADVANCED
