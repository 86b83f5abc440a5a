"""Handler and module name rules."""

from __future__ import annotations

import re

from .errors import InvalidHandlerNameError, InvalidModuleIdentifierError, ReservedNameError

__all__ = [
    "HANDLER_NAMESPACE",
    "RESERVED_NAME",
    "camelize",
    "handler_module",
    "validate_handler_name",
    "validate_module_identifier",
]


RESERVED_NAME = "alice"
HANDLER_NAMESPACE = "Alice.Handlers"

_HANDLER_NAME = re.compile(r"[a-z][a-z0-9_]*")
_MODULE_IDENTIFIER = re.compile(r"[A-Z]\w*(\.[A-Z]\w*)*", re.ASCII)


def validate_handler_name(name: str, inferred: bool) -> None:
    """Reject handler names that cannot be used as an OTP application name.

    ``inferred`` tells whether ``name`` came from the target path rather than
    the ``--name`` option; the error message then points the user at the
    option.
    """

    # The reserved name wins over the pattern so "Alice" and " alice " are
    # reported as reserved rather than malformed.
    if name.strip().lower() == RESERVED_NAME:
        raise ReservedNameError(name, RESERVED_NAME)

    if _HANDLER_NAME.fullmatch(name) is None:
        raise InvalidHandlerNameError(name, inferred=inferred)


def validate_module_identifier(name: str) -> None:
    """Reject anything that is not a dotted alias such as ``Foo.Bar``."""

    if _MODULE_IDENTIFIER.fullmatch(name) is None:
        raise InvalidModuleIdentifierError(name)


def camelize(name: str) -> str:
    """Return the alias form of a snake_case ``name``.

    ``my_handler`` becomes ``MyHandler``. Runs of underscores and trailing
    underscores are dropped, so ``foo__bar`` becomes ``FooBar``.
    """

    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def handler_module(module_name: str) -> str:
    """Return the fully qualified module for a handler alias."""

    return f"{HANDLER_NAMESPACE}.{module_name}"
