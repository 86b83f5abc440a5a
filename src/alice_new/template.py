"""Template set and the ``{{ placeholder }}`` renderer used to fill it."""

from __future__ import annotations

import re
from importlib import resources
from typing import Any, Mapping

from .config import TemplateId, TemplateSpec
from .errors import AliceNewError, TemplateNotFoundError

__all__ = [
    "TEMPLATES",
    "TemplateRenderer",
    "TemplateRenderingError",
    "template_spec",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<key>\w+)\s*}}")

TEMPLATE_PACKAGE = "alice_new"
TEMPLATE_DIRECTORY = "templates"

TEMPLATES: tuple[TemplateSpec, ...] = (
    TemplateSpec(id=TemplateId.FORMATTER, source="formatter.exs", output=".formatter.exs"),
    TemplateSpec(id=TemplateId.GITIGNORE, source="gitignore", output=".gitignore"),
    TemplateSpec(id=TemplateId.README, source="new_handler/README.md", output="README.md"),
    TemplateSpec(id=TemplateId.BUILD_MANIFEST, source="new_handler/mix.exs", output="mix.exs"),
    TemplateSpec(
        id=TemplateId.CONFIG,
        source="new_handler/config/config.exs",
        output="config/config.exs",
    ),
    TemplateSpec(
        id=TemplateId.HANDLER_SOURCE,
        source="new_handler/lib/alice/handlers/handler.ex",
        output="lib/alice/handlers/{{ handler_name }}.ex",
    ),
    TemplateSpec(
        id=TemplateId.HANDLER_TEST,
        source="new_handler/test/alice/handlers/handler_test.exs",
        output="test/alice/handlers/{{ handler_name }}_test.exs",
    ),
)


class TemplateRenderingError(AliceNewError):
    """Raised when the renderer cannot evaluate a placeholder."""


def template_spec(template_id: TemplateId | str) -> TemplateSpec:
    """Return the :class:`TemplateSpec` registered for ``template_id``."""

    try:
        wanted = TemplateId(template_id)
    except ValueError as exc:
        raise TemplateNotFoundError(f"unknown template {template_id!r}") from exc

    for spec in TEMPLATES:
        if spec.id is wanted:
            return spec
    raise TemplateNotFoundError(f"no template registered for {wanted.value!r}")


class TemplateRenderer:
    """Render templates with ``{{ placeholder }}`` expressions."""

    def render_string(self, template: str, context: Mapping[str, Any]) -> str:
        """Render ``template`` using ``context``.

        Every placeholder must name a key of ``context``; otherwise
        :class:`TemplateRenderingError` is raised rather than leaking
        ``{{ ... }}`` into a generated file.
        """

        def substitute(match: re.Match[str]) -> str:
            key = match.group("key")
            try:
                return str(context[key])
            except KeyError:
                raise TemplateRenderingError(f"missing value for '{key}'") from None

        return _PLACEHOLDER_PATTERN.sub(substitute, template)

    def load(self, template_id: TemplateId | str) -> str:
        """Return the raw text of a packaged template."""

        spec = template_spec(template_id)
        source = resources.files(TEMPLATE_PACKAGE).joinpath(TEMPLATE_DIRECTORY, *spec.source.split("/"))
        try:
            return source.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise TemplateNotFoundError(
                f"template {spec.id.value!r} is missing from the package ({spec.source})"
            ) from exc

    def render(self, template_id: TemplateId | str, variables: Mapping[str, Any]) -> str:
        """Render the packaged template ``template_id`` with ``variables``."""

        return self.render_string(self.load(template_id), variables)

    def output_path(self, template_id: TemplateId | str, variables: Mapping[str, Any]) -> str:
        """Return the project relative output path for ``template_id``."""

        return self.render_string(template_spec(template_id).output, variables)
