from .dictionary import Dictionary, load_dictionary
from .env import GameSession
from .errors import EmptyDictionary, ResourceUnavailable
from .game import Board, Classification, MatchState, evaluate
from .input import EventKind, InputProcessor, InputResult, KeyEvent
from .render import TextUI

__all__ = [
    "Board", "Classification", "Dictionary", "EmptyDictionary", "EventKind",
    "GameSession", "InputProcessor", "InputResult", "KeyEvent", "MatchState",
    "ResourceUnavailable", "TextUI", "evaluate", "load_dictionary",
]
