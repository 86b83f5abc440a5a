"""Checks that a new handler does not clash with existing modules or directories."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, Iterator

from .errors import ModuleAlreadyDefinedError, UserAbortedError

__all__ = [
    "MixProjectNamespace",
    "NamespaceLookup",
    "StaticNamespace",
    "check_directory_available",
    "check_module_available",
]


LOGGER = logging.getLogger(__name__)

NamespaceLookup = Callable[[str], bool]
Confirm = Callable[[str], bool]

SOURCE_PATTERNS = ("lib/**/*.ex", "deps/*/lib/**/*.ex")
SHARED_NAMESPACES = frozenset({"Alice", "Alice.Handlers"})

_DEFMODULE = re.compile(r"^\s*defmodule\s+(?P<name>[A-Z]\w*(?:\.[A-Z]\w*)*)", re.MULTILINE | re.ASCII)


class StaticNamespace:
    """A fixed set of module identifiers that count as already defined."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = frozenset(names)

    def __call__(self, identifier: str) -> bool:
        return identifier in self._names

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._names

    def __repr__(self) -> str:
        return f"StaticNamespace({sorted(self._names)!r})"


class MixProjectNamespace:
    """Modules defined by the Mix project in ``root`` and its fetched dependencies.

    ``defmodule`` names are collected from ``lib/**/*.ex`` and
    ``deps/*/lib/**/*.ex`` the first time the lookup is queried. Names are
    taken as written, so a module nested inside another ``defmodule`` block
    is recorded by its short alias. ``Alice`` and ``Alice.Handlers`` are the
    namespaces every handler lives in and never count as taken.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self._names: frozenset[str] | None = None

    @property
    def names(self) -> frozenset[str]:
        if self._names is None:
            self._names = frozenset(self._scan())
            LOGGER.debug("found %d modules under %s", len(self._names), self.root)
        return self._names

    def _scan(self) -> Iterator[str]:
        for pattern in SOURCE_PATTERNS:
            for source in sorted(self.root.glob(pattern)):
                text = source.read_text(encoding="utf-8", errors="replace")
                for match in _DEFMODULE.finditer(text):
                    name = match.group("name")
                    if name not in SHARED_NAMESPACES:
                        yield name

    def __call__(self, identifier: str) -> bool:
        return identifier in self.names

    def __repr__(self) -> str:
        return f"MixProjectNamespace({str(self.root)!r})"


def check_module_available(identifier: str, namespace: NamespaceLookup) -> None:
    """Raise :class:`ModuleAlreadyDefinedError` if any prefix of ``identifier`` exists.

    ``Alice.Handlers.Foo`` is checked as ``Alice``, ``Alice.Handlers`` and then
    ``Alice.Handlers.Foo``; the first defined prefix is reported.
    """

    prefix: list[str] = []
    for segment in identifier.split("."):
        prefix.append(segment)
        candidate = ".".join(prefix)
        if namespace(candidate):
            raise ModuleAlreadyDefinedError(candidate)
    LOGGER.debug("module %s is available", identifier)


def check_directory_available(path: str | Path, confirm: Confirm) -> None:
    """Ask before reusing ``path`` when it is an existing directory."""

    path = Path(path)
    if not path.is_dir():
        return

    message = f"The directory {str(path)!r} already exists. Are you sure you want to continue?"
    if not confirm(message):
        raise UserAbortedError(path)
    LOGGER.debug("reusing existing directory %s", path)
