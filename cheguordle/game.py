from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import List, Dict, Tuple, Optional

WORD_LENGTH = 5
MAX_GUESSES = 6

# spanish alphabet: the 26 latin letters plus Ñ
ALPHABET = "ABCDEFGHIJKLMNÑOPQRSTUVWXYZ"


class Classification(Enum):
    EXACT = "exact"
    PRESENT = "present"
    ABSENT = "absent"


class MatchState(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Tile:
    """A single grid cell as a renderer should draw it."""

    letter: str = ""
    classification: Optional[Classification] = None


@dataclass(frozen=True)
class BoardSnapshot:
    target: str
    rows: Tuple[str, ...]
    current: int
    won: bool


def evaluate(guess: str, target: str) -> List[Classification]:
    """
    Returns the per-position classification of a guess against the target.

    Exact matches are marked first and consume their letter from the target, so a
    letter is never reported as present more times than the target still holds it.
    """
    # default all letters to absent
    states = [Classification.ABSENT] * len(target)

    # make a mapping from letters in the target word to their count
    letter_count = Counter(target)

    # check for exact matches across the guessed letters
    for i, letter in enumerate(guess):
        if letter == target[i]:
            states[i] = Classification.EXACT
            # consume it so it can't be claimed as present later
            letter_count[letter] -= 1

    # earlier positions get first claim on whatever is left
    for i, letter in enumerate(guess):
        if states[i] is Classification.ABSENT and letter_count[letter] > 0:
            states[i] = Classification.PRESENT
            letter_count[letter] -= 1
    return states


class Board:
    MAX_GUESSES = MAX_GUESSES
    WORD_LENGTH = WORD_LENGTH

    def __init__(self, target: str):
        target = target.upper()
        if len(target) != self.WORD_LENGTH:
            raise ValueError(f"Target word must be {self.WORD_LENGTH} letters long.")
        if any(letter not in ALPHABET for letter in target):
            raise ValueError(f"Target word '{target}' has letters outside the alphabet.")

        self._target = target
        self._rows: List[List[str]] = [[] for _ in range(self.MAX_GUESSES)]
        self._current = 0
        self._won = False

    @property
    def target(self) -> str:
        return self._target

    @property
    def rows(self) -> Tuple[str, ...]:
        return tuple("".join(row) for row in self._rows)

    def row(self, index: int) -> str:
        return "".join(self._rows[index])

    @property
    def current(self) -> int:
        return self._current

    @property
    def won(self) -> bool:
        return self._won

    @property
    def state(self) -> MatchState:
        if self._won:
            return MatchState.WON
        if self._current >= self.MAX_GUESSES:
            return MatchState.LOST
        return MatchState.PLAYING

    @property
    def is_over(self) -> bool:
        return self.state is not MatchState.PLAYING

    @property
    def active_row(self) -> Optional[str]:
        """Letters typed so far in the row being edited, None once the match is over."""
        if self.is_over:
            return None
        return self.row(self._current)

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(self._target, self.rows, self._current, self._won)

    # --- primitive mutators, each is a no-op returning False when it would break the board ---

    def _is_editable(self, row: int) -> bool:
        return self.state is MatchState.PLAYING and row == self._current

    def append_letter(self, row: int, letter: str) -> bool:
        if not self._is_editable(row):
            return False
        if len(self._rows[row]) >= self.WORD_LENGTH:
            return False
        if len(letter) != 1 or letter not in ALPHABET:
            return False
        self._rows[row].append(letter)
        return True

    def pop_letter(self, row: int) -> Optional[str]:
        if not self._is_editable(row) or not self._rows[row]:
            return None
        return self._rows[row].pop()

    def _active_row_full(self) -> bool:
        return len(self._rows[self._current]) == self.WORD_LENGTH

    def commit_row(self) -> bool:
        """
        Seals a full, non-winning active row and moves on to the next one.
        Checking the word against the dictionary is the caller's job.
        """
        if self.state is not MatchState.PLAYING or not self._active_row_full():
            return False
        if self.row(self._current) == self._target:
            return False
        self._current += 1
        return True

    def mark_won(self) -> bool:
        if self.state is not MatchState.PLAYING or not self._active_row_full():
            return False
        if self.row(self._current) != self._target:
            return False
        self._won = True
        return True

    # --- views used by the renderers ---

    def classifications(self, row: int) -> Optional[List[Classification]]:
        """Evaluation of a committed row, None for rows that aren't committed."""
        committed = row < self._current or (self._won and row == self._current)
        if not committed:
            return None
        return evaluate(self.row(row), self._target)

    def tiles(self) -> List[List[Tile]]:
        grid = []
        for r in range(self.MAX_GUESSES):
            letters = self._rows[r]
            states = self.classifications(r)
            cells = []
            for c in range(self.WORD_LENGTH):
                letter = letters[c] if c < len(letters) else ""
                cells.append(Tile(letter, states[c] if states else None))
            grid.append(cells)
        return grid

    def letter_states(self) -> Dict[str, Optional[Classification]]:
        """
        Returns a mapping from every alphabet letter to the strongest classification
        it has received so far (EXACT > PRESENT > ABSENT), or None if unused.
        """
        rank = {Classification.ABSENT: 0, Classification.PRESENT: 1, Classification.EXACT: 2}
        states: Dict[str, Optional[Classification]] = {letter: None for letter in ALPHABET}

        for r in range(self.MAX_GUESSES):
            feedback = self.classifications(r)
            if feedback is None:
                continue
            for letter, classification in zip(self.row(r), feedback):
                seen = states[letter]
                # promotion only: absent -> present -> exact
                if seen is None or rank[classification] > rank[seen]:
                    states[letter] = classification
        return states
