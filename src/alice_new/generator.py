"""Write a handler project from a :class:`GenerationRequest`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import GenerationRequest
from .errors import GenerationError
from .template import TEMPLATES, TemplateRenderer

__all__ = ["ProjectGenerator"]


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ProjectGenerator:
    """Render every packaged template into the request's target directory."""

    renderer: TemplateRenderer

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def generate(self, request: GenerationRequest) -> list[Path]:
        """Write the project files and return their paths in creation order.

        The target directory itself is expected to exist (the request builder
        creates it); subdirectories such as ``config`` and ``lib/alice/handlers``
        are created here. If a write fails, :class:`GenerationError` is raised
        with the files written so far; those files are left on disk.
        """

        context = request.context()
        LOGGER.debug("generating %s into %s with %s", request.app_name, request.target_path, dict(context))

        written: list[Path] = []
        for spec in TEMPLATES:
            destination = request.target_path / self.renderer.output_path(spec.id, context)
            rendered = self.renderer.render(spec.id, context)
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                destination.write_text(rendered, encoding="utf-8")
            except OSError as exc:
                raise GenerationError(destination, exc.strerror or str(exc), written) from exc
            LOGGER.debug("wrote %s", destination)
            written.append(destination)

        return written
