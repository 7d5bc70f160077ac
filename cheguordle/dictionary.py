import json
import logging
import random
import time
import unicodedata
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .errors import EmptyDictionary, ResourceUnavailable
from .game import ALPHABET, WORD_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY_PATH = Path(__file__).parent / 'data' / 'valid_guesses.json'

_LOWER_ALPHABET = frozenset(ALPHABET.lower())


def normalize_word(word: str) -> str:
    """Returns the stored form of a word: NFC-composed, trimmed, lowercase."""
    return unicodedata.normalize("NFC", word).strip().lower()


def fold_accents(word: str) -> str:
    """
    Strips diacritics the game alphabet has no key for ("árbol" -> "arbol"),
    keeping ñ since it is a letter of its own.
    """
    folded = []
    for char in unicodedata.normalize("NFC", word):
        if char in "ñÑ":
            folded.append(char)
            continue
        decomposed = unicodedata.normalize("NFD", char)
        folded.append("".join(c for c in decomposed if not unicodedata.combining(c)))
    return "".join(folded)


def is_admissible(word: str) -> bool:
    word = normalize_word(word)
    return len(word) == WORD_LENGTH and all(c in _LOWER_ALPHABET for c in word)


class Dictionary:
    """Immutable set of five-letter words used for both target selection and guess validation."""

    def __init__(self, words: Iterable[str], rng: Optional[random.Random] = None):
        normalized = {normalize_word(word) for word in words}
        admissible = {word for word in normalized if is_admissible(word)}
        skipped = len(normalized) - len(admissible)
        if skipped:
            logger.debug("Skipped %d dictionary entries that are not %d-letter words", skipped, WORD_LENGTH)

        self._words = frozenset(admissible)
        # sorted so a seeded rng always picks the same word
        self._ordered = tuple(sorted(self._words))
        # seeded once, never reseeded
        self._rng = rng if rng is not None else random.Random(time.time_ns())

    def contains(self, word: str) -> bool:
        return normalize_word(word) in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordered)

    def sample(self) -> str:
        """Returns a uniformly random word, uppercased."""
        if not self._ordered:
            raise EmptyDictionary("Cannot pick a target word from an empty dictionary.")
        return self._rng.choice(self._ordered).upper()


def load_dictionary(path: Optional[Path] = None, rng: Optional[random.Random] = None) -> Dictionary:
    """
    Loads the dictionary from a JSON file whose top-level object keys are the
    admissible words. The values are ignored.

    Raises:
        ResourceUnavailable: if the file is missing, unreadable or not a JSON object.
    """
    path = Path(path) if path is not None else DEFAULT_DICTIONARY_PATH
    if not path.is_file():
        raise ResourceUnavailable(f"Error: Word list not found at '{path}'")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ResourceUnavailable(f"Error: Could not read word list '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ResourceUnavailable(f"Error: Word list '{path}' must be a JSON object keyed by word.")

    dictionary = Dictionary(data.keys(), rng=rng)
    logger.info("Loaded %d words from %s", len(dictionary), path)
    return dictionary
