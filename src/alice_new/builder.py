"""Turn command line arguments into a validated :class:`GenerationRequest`."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from .collisions import (
    MixProjectNamespace,
    NamespaceLookup,
    check_directory_available,
    check_module_available,
)
from .config import (
    ALICE_VERSION,
    APP_PREFIX,
    MIN_RUNTIME_VERSION,
    GenerationRequest,
    RuntimeVersion,
    detect_runtime_version,
)
from .errors import (
    GenerationError,
    NoPathGivenError,
    RuntimeVersionTooOldError,
    UnknownOptionError,
    UsageError,
)
from .naming import camelize, handler_module, validate_handler_name, validate_module_identifier

__all__ = ["CURRENT_DIRECTORY", "RequestBuilder", "build_option_parser"]


LOGGER = logging.getLogger(__name__)

CURRENT_DIRECTORY = "."


def build_option_parser() -> argparse.ArgumentParser:
    """Return the tokenizer for ``PATH [--name NAME] [--module MODULE]``.

    The CLI reuses these definitions for its help text.
    """

    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False, exit_on_error=False)
    parser.add_argument(
        "path",
        nargs="?",
        help="Where to create the handler; the directory is named alice_<basename>, "
        "use '.' for the current directory",
    )
    parser.add_argument("--name", help="Handler name, inferred from PATH by default")
    parser.add_argument(
        "--module",
        help="Module alias nested under Alice.Handlers, derived from the name by default",
    )
    return parser


def _first_unknown_option(extras: Sequence[str]) -> UnknownOptionError | None:
    for token in extras:
        if token.startswith("-") and token != "-":
            flag, separator, value = token.partition("=")
            return UnknownOptionError(flag, value if separator else None)
    return None


def _prompt(message: str) -> bool:
    try:
        answer = input(f"{message} [Yn] ")
    except EOFError:
        # Closed stdin counts as "no".
        return False
    return answer.strip().lower() in {"", "y", "yes"}


@dataclass(slots=True)
class RequestBuilder:
    """Resolve defaults, validate names and prepare the target directory.

    Attributes
    ----------
    namespace:
        Lookup deciding whether a module identifier is already defined.
        Defaults to the modules of the Mix project in ``cwd``.
    confirm:
        Asked once when the target directory already exists; a ``False``
        answer aborts.
    cwd:
        Directory relative paths are resolved against. Defaults to the
        process working directory.
    runtime_version:
        Elixir version of the host. Detected on first use when omitted.
    """

    namespace: NamespaceLookup | None = None
    confirm: Callable[[str], bool] = _prompt
    cwd: Path = field(default_factory=Path.cwd)
    runtime_version: RuntimeVersion | str | None = None

    def parse(self, argv: Sequence[str]) -> GenerationRequest:
        """Build a request from ``argv``, failing on the first invalid field."""

        parser = build_option_parser()
        try:
            options, extras = parser.parse_known_intermixed_args(list(argv))
        except argparse.ArgumentError as exc:
            raise UsageError(str(exc)) from exc

        unknown = _first_unknown_option(extras)
        if unknown is not None:
            raise unknown

        if options.path is None:
            raise NoPathGivenError()
        if not options.path.strip():
            raise UsageError("path must not be empty")

        version = self._check_runtime_version()

        cwd = Path(self.cwd).expanduser().resolve()
        in_place = Path(options.path) == Path(CURRENT_DIRECTORY)
        expanded = (cwd / Path(options.path).expanduser()).resolve()
        basename = expanded.name
        target_path = expanded if in_place else expanded.parent / f"{APP_PREFIX}{basename}"

        explicitly_named = options.name is not None
        handler_name = options.name if explicitly_named else basename
        validate_handler_name(handler_name, not explicitly_named)

        module_name = options.module if options.module is not None else camelize(handler_name)
        validate_module_identifier(module_name)

        module = handler_module(module_name)
        namespace = self.namespace if self.namespace is not None else MixProjectNamespace(cwd)
        check_module_available(module, namespace)

        if not in_place:
            check_directory_available(target_path, self.confirm)
            try:
                target_path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise GenerationError(target_path, exc.strerror or str(exc)) from exc

        request = GenerationRequest(
            target_path=target_path,
            in_place=in_place,
            handler_name=handler_name,
            explicitly_named=explicitly_named,
            module_name=module_name,
            handler_module=module,
            app_name=f"{APP_PREFIX}{handler_name}",
            alice_version=ALICE_VERSION,
            elixir_version=version.short(),
        )
        LOGGER.debug("resolved request %r", request)
        return request

    def _check_runtime_version(self) -> RuntimeVersion:
        version = self.runtime_version
        if version is None:
            version = detect_runtime_version()
        elif isinstance(version, str):
            version = RuntimeVersion.parse(version)

        if not version.satisfies(MIN_RUNTIME_VERSION):
            required = ".".join(str(part) for part in MIN_RUNTIME_VERSION)
            raise RuntimeVersionTooOldError(ALICE_VERSION, required, str(version))
        return version
