class ResourceUnavailable(OSError):
    """A startup resource (word list, font) is missing or unreadable."""


class EmptyDictionary(ValueError):
    """Raised when a target word is requested from a dictionary with no words."""
