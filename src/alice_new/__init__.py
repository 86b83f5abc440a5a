"""Generate new Alice chat-bot handler projects.

The package validates the requested handler and module names, checks they do
not clash with modules or directories that already exist, and renders a small
Mix project (build manifest, config, handler and test stubs) from packaged
templates. It can be used programmatically or via the command line interface.
"""

from __future__ import annotations

from .builder import RequestBuilder
from .collisions import StaticNamespace, check_directory_available, check_module_available
from .config import ALICE_VERSION, GenerationRequest, TemplateId, TemplateSpec
from .generator import ProjectGenerator
from .naming import camelize, validate_handler_name, validate_module_identifier
from .template import TEMPLATES, TemplateRenderer, TemplateRenderingError

__all__ = [
    "GenerationRequest",
    "ProjectGenerator",
    "RequestBuilder",
    "StaticNamespace",
    "TEMPLATES",
    "TemplateId",
    "TemplateRenderer",
    "TemplateRenderingError",
    "TemplateSpec",
    "camelize",
    "check_directory_available",
    "check_module_available",
    "validate_handler_name",
    "validate_module_identifier",
]

__version__ = ALICE_VERSION
