"""Exceptions raised by the game engine and its store."""


class FlashQuestError(Exception):
    pass


class ConfigurationError(FlashQuestError):
    """Invalid quest or player parameters. Nothing has been applied."""


class InsufficientFlashcards(ConfigurationError):
    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Not enough flashcards available for quest. Need {required}, found {available}"
        )


class InvalidStateError(FlashQuestError):
    """Operation attempted against a player or quest in the wrong state."""


class DataUnavailable(FlashQuestError):
    """Persisted data exists but could not be read."""
