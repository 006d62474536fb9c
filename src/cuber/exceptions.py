"""cuber exceptions."""


class StorageFailure(Exception):
    """Raised when the backing store cannot complete an operation."""


class InvalidCommandError(ValueError):
    """Raised when an inbound port message cannot be decoded into a command."""

    def __init__(self, message: str, port: str = "") -> None:
        self.port = port
        super().__init__(message)
