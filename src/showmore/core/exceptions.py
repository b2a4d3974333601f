"""Exceptions with user-ready messages."""

from __future__ import annotations


class ShowMoreError(Exception):
    """Base exception for show-more failures.

    Carries a message that can be shown to the user as is.
    """

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class InvalidCommand(ShowMoreError):
    """Raised when a command name is not known to the controller."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unknown command: {command}", error_code="INVALID_COMMAND")


class MissingArgument(ShowMoreError):
    """Raised when a known command is run without an argument it needs."""

    def __init__(self, command: str, argument: str) -> None:
        self.command = command
        self.argument = argument
        super().__init__(f"Command {command} needs {argument}", error_code="MISSING_ARGUMENT")
