"""Exception types raised while building and generating a handler project."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class AliceNewError(RuntimeError):
    """Base class for every failure reported by the generator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NameValidationError(AliceNewError):
    """Raised when a handler or module name is rejected."""


class InvalidHandlerNameError(NameValidationError):
    def __init__(self, name: str, *, inferred: bool) -> None:
        message = (
            "Handler name must start with a lowercase ASCII letter, followed by "
            f"lowercase ASCII letters, numbers, or underscores, got: {name!r}"
        )
        if inferred:
            message += (
                ". The handler name is inferred from the path, if you'd like to "
                'explicitly name the handler then use the "--name NAME" option'
            )
        super().__init__(message)
        self.name = name
        self.inferred = inferred


class ReservedNameError(NameValidationError):
    def __init__(self, name: str, reserved: str) -> None:
        super().__init__(f"Handler name cannot be {reserved}, got: {name!r}")
        self.name = name


class InvalidModuleIdentifierError(NameValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(
            "Module name must be a valid Elixir alias (for example: MyHandler), "
            f"got: {name!r}"
        )
        self.name = name


class CollisionError(AliceNewError):
    """Raised when the requested handler clashes with something that exists."""


class ModuleAlreadyDefinedError(CollisionError):
    def __init__(self, module: str) -> None:
        super().__init__(f"Module name {module} is already taken, please choose another name")
        self.module = module


class UserAbortedError(CollisionError):
    def __init__(self, path: Path) -> None:
        super().__init__("Please select another directory for installation")
        self.path = path


class UsageError(AliceNewError):
    """Raised when the command line cannot be interpreted."""


class UnknownOptionError(UsageError):
    def __init__(self, flag: str, value: str | None = None) -> None:
        switch = flag if value is None else f"{flag}={value}"
        super().__init__(f"Invalid option: {switch}")
        self.flag = flag
        self.value = value


class NoPathGivenError(UsageError):
    def __init__(self) -> None:
        super().__init__("no path given")


class RuntimeVersionTooOldError(AliceNewError):
    def __init__(self, alice_version: str, required: str, detected: str) -> None:
        super().__init__(
            f"Alice v{alice_version} requires at least Elixir v{required}.\n "
            f"You have {detected}. Please update accordingly"
        )
        self.required = required
        self.detected = detected


class RuntimeVersionUnavailableError(AliceNewError):
    """Raised when the Elixir version cannot be determined."""


class TemplateNotFoundError(AliceNewError):
    """Raised when a named template is not shipped with the package."""


class GenerationError(AliceNewError):
    """Raised when writing the project fails part way through.

    ``written`` lists the files that were created before the failure. They are
    left in place.
    """

    def __init__(self, path: Path, reason: str, written: Sequence[Path] = ()) -> None:
        message = f"could not write {path}: {reason}"
        if written:
            created = ", ".join(str(item) for item in written)
            message += f" (already created: {created})"
        else:
            message += " (no files were created)"
        super().__init__(message)
        self.path = path
        self.written = list(written)


__all__ = [
    "AliceNewError",
    "CollisionError",
    "GenerationError",
    "InvalidHandlerNameError",
    "InvalidModuleIdentifierError",
    "ModuleAlreadyDefinedError",
    "NameValidationError",
    "NoPathGivenError",
    "ReservedNameError",
    "RuntimeVersionTooOldError",
    "RuntimeVersionUnavailableError",
    "TemplateNotFoundError",
    "UnknownOptionError",
    "UsageError",
    "UserAbortedError",
]
