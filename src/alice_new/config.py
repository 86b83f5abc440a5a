"""Settings and data models shared by the request builder, generator and CLI."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import NameValidationError, RuntimeVersionUnavailableError
from .naming import handler_module, validate_handler_name, validate_module_identifier

__all__ = [
    "ALICE_VERSION",
    "APP_PREFIX",
    "MIN_RUNTIME_VERSION",
    "GenerationRequest",
    "RuntimeVersion",
    "TemplateId",
    "TemplateSpec",
    "detect_runtime_version",
    "log_level",
]


ALICE_VERSION = "0.4.3"
APP_PREFIX = "alice_"
MIN_RUNTIME_VERSION = (1, 7)

RUNTIME_VERSION_ENV = "ALICE_ELIXIR_VERSION"
LOG_LEVEL_ENV = "ALICE_NEW_LOG_LEVEL"

_SEMVER = re.compile(
    r"(?P<major>\d+)\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?"
)
_ELIXIR_BANNER = re.compile(r"^Elixir\s+(\S+)", re.MULTILINE)


@dataclass(slots=True, frozen=True)
class RuntimeVersion:
    """Version of the Elixir runtime the generated handler targets."""

    major: int
    minor: int
    patch: int = 0
    pre: str | None = None

    @classmethod
    def parse(cls, text: str) -> "RuntimeVersion":
        """Parse a semantic version such as ``1.10.0-rc.0``."""

        match = _SEMVER.fullmatch(text.strip())
        if match is None:
            raise RuntimeVersionUnavailableError(f"unrecognised Elixir version {text!r}")
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"]),
            patch=int(match["patch"] or 0),
            pre=match["pre"],
        )

    def short(self) -> str:
        """Return ``major.minor`` plus the first pre-release segment, if any."""

        text = f"{self.major}.{self.minor}"
        if self.pre:
            text += f"-{self.pre.split('.')[0]}"
        return text

    def satisfies(self, minimum: tuple[int, int] = MIN_RUNTIME_VERSION) -> bool:
        # Pre-releases sort before the release they precede.
        key = (self.major, self.minor, self.patch, self.pre is None)
        return key >= (minimum[0], minimum[1], 0, True)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        return f"{text}-{self.pre}" if self.pre else text


def detect_runtime_version(environ: Mapping[str, str] | None = None) -> RuntimeVersion:
    """Return the Elixir version from ``ALICE_ELIXIR_VERSION`` or ``elixir --version``."""

    environ = os.environ if environ is None else environ
    override = environ.get(RUNTIME_VERSION_ENV, "").strip()
    if override:
        return RuntimeVersion.parse(override)

    try:
        completed = subprocess.run(
            ["elixir", "--version"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise RuntimeVersionUnavailableError(
            f"could not determine the Elixir version ({exc}). Install Elixir or set "
            f"{RUNTIME_VERSION_ENV}"
        ) from exc

    match = _ELIXIR_BANNER.search(completed.stdout)
    if match is None:
        raise RuntimeVersionUnavailableError(
            f"could not find the Elixir version in {completed.stdout!r}"
        )
    return RuntimeVersion.parse(match.group(1))


def log_level(environ: Mapping[str, str] | None = None) -> int:
    """Return the logging level named by ``ALICE_NEW_LOG_LEVEL`` (default ``WARNING``)."""

    environ = os.environ if environ is None else environ
    name = environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


class TemplateId(str, Enum):
    """Files every generated handler project contains."""

    FORMATTER = "formatter"
    GITIGNORE = "gitignore"
    README = "readme"
    BUILD_MANIFEST = "build_manifest"
    CONFIG = "config"
    HANDLER_SOURCE = "handler_source"
    HANDLER_TEST = "handler_test"


class TemplateSpec(BaseModel):
    """Where a template lives in the package and where its output goes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: TemplateId = Field(..., description="Identifier of the template.")
    source: str = Field(..., description="Path of the template below the templates directory.")
    output: str = Field(..., description="Output path relative to the project; may contain placeholders.")


class GenerationRequest(BaseModel):
    """A validated request to generate one handler project.

    Attributes
    ----------
    target_path:
        Absolute directory the files are written to.
    in_place:
        ``True`` when the user asked for the current directory (``.``); no
        ``alice_``-prefixed directory is created in that case.
    handler_name:
        The snake_case handler name, used for file names.
    explicitly_named:
        Whether ``handler_name`` came from ``--name`` rather than the path.
    module_name:
        The alias given with ``--module`` or derived from the handler name.
    handler_module:
        ``module_name`` nested under ``Alice.Handlers``.
    app_name:
        The OTP application name, ``alice_`` followed by the handler name.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_path: Path
    in_place: bool = False
    handler_name: str
    explicitly_named: bool = False
    module_name: str
    handler_module: str
    app_name: str
    alice_version: str = ALICE_VERSION
    elixir_version: str

    @model_validator(mode="after")
    def _check_names(self) -> "GenerationRequest":
        # handler_name ends up in file paths.
        try:
            validate_handler_name(self.handler_name, not self.explicitly_named)
            validate_module_identifier(self.module_name)
        except NameValidationError as exc:
            raise ValueError(str(exc)) from exc

        expected_module = handler_module(self.module_name)
        if self.handler_module != expected_module:
            raise ValueError(f"handler_module must be {expected_module!r}, got {self.handler_module!r}")

        expected = f"{APP_PREFIX}{self.handler_name}"
        if self.app_name != expected:
            raise ValueError(f"app_name must be {expected!r}, got {self.app_name!r}")
        return self

    def context(self) -> Mapping[str, str]:
        """Return the variables exposed to the templates."""

        return {
            "app_name": self.app_name,
            "handler_name": self.handler_name,
            "handler_module": self.handler_module,
            "module_name": self.module_name,
            "alice_version": self.alice_version,
            "elixir_version": self.elixir_version,
        }
