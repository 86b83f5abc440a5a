from __future__ import annotations

from pathlib import Path

import pytest

from alice_new.config import GenerationRequest
from alice_new.errors import GenerationError
from alice_new.generator import ProjectGenerator
from alice_new.template import TemplateRenderer

EXPECTED_FILES = [
    ".formatter.exs",
    ".gitignore",
    "README.md",
    "mix.exs",
    "config/config.exs",
    "lib/alice/handlers/my_handler.ex",
    "test/alice/handlers/my_handler_test.exs",
]


@pytest.fixture()
def generator() -> ProjectGenerator:
    return ProjectGenerator(TemplateRenderer())


def _request(target: Path, *, in_place: bool = False) -> GenerationRequest:
    return GenerationRequest(
        target_path=target,
        in_place=in_place,
        handler_name="my_handler",
        module_name="MyHandler",
        handler_module="Alice.Handlers.MyHandler",
        app_name="alice_my_handler",
        elixir_version="1.10",
    )


def _tree(root: Path) -> list[str]:
    return sorted(path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file())


def test_generator_writes_expected_structure(tmp_path: Path, generator: ProjectGenerator):
    target = tmp_path / "alice_my_handler"
    target.mkdir()

    written = generator.generate(_request(target))

    assert [path.relative_to(target).as_posix() for path in written] == EXPECTED_FILES
    assert _tree(target) == sorted(EXPECTED_FILES)
    handler = (target / "lib/alice/handlers/my_handler.ex").read_text(encoding="utf-8")
    assert "defmodule Alice.Handlers.MyHandler do" in handler


def test_generator_creates_missing_target(tmp_path: Path, generator: ProjectGenerator):
    target = tmp_path / "nested" / "alice_my_handler"
    generator.generate(_request(target))
    assert (target / "mix.exs").is_file()


def test_generator_in_place_keeps_existing_files(tmp_path: Path, generator: ProjectGenerator):
    (tmp_path / "notes.txt").write_text("keep me", encoding="utf-8")

    generator.generate(_request(tmp_path, in_place=True))

    assert (tmp_path / "notes.txt").read_text(encoding="utf-8") == "keep me"
    assert (tmp_path / "config" / "config.exs").is_file()
    assert (tmp_path / "test" / "alice" / "handlers" / "my_handler_test.exs").is_file()


def test_generator_overwrites_previous_output(tmp_path: Path, generator: ProjectGenerator):
    (tmp_path / "README.md").write_text("stale", encoding="utf-8")
    generator.generate(_request(tmp_path, in_place=True))
    assert (tmp_path / "README.md").read_text(encoding="utf-8").startswith("# Alice.Handlers.MyHandler")


def test_generator_reports_partial_output_on_failure(tmp_path: Path, generator: ProjectGenerator):
    # A file where the config directory should go makes the fifth write fail.
    (tmp_path / "config").write_text("not a directory", encoding="utf-8")

    with pytest.raises(GenerationError) as excinfo:
        generator.generate(_request(tmp_path, in_place=True))

    error = excinfo.value
    assert [path.relative_to(tmp_path).as_posix() for path in error.written] == EXPECTED_FILES[:4]
    assert error.path == tmp_path / "config" / "config.exs"
    assert "already created" in str(error)
    assert not (tmp_path / "lib").exists()
