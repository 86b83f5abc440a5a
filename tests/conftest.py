from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from alice_new.builder import RequestBuilder  # noqa: E402
from alice_new.collisions import StaticNamespace  # noqa: E402


class ScriptedConfirm:
    """Answer confirmation prompts with a fixed reply and remember the questions."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.messages: list[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer


@pytest.fixture()
def make_builder(tmp_path: Path) -> Callable[..., RequestBuilder]:
    """Build a :class:`RequestBuilder` isolated from the real host."""

    def factory(
        *,
        defined: tuple[str, ...] = (),
        answer: bool = True,
        runtime_version: str = "1.10.4",
        cwd: Path | None = None,
    ) -> RequestBuilder:
        return RequestBuilder(
            namespace=StaticNamespace(defined),
            confirm=ScriptedConfirm(answer),
            cwd=cwd or tmp_path,
            runtime_version=runtime_version,
        )

    return factory
