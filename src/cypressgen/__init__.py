"""
cypressgen.

Generates Cypress page-object classes and matching test suites from rendered
web pages: interactive elements are classified, given stable locators and
collision-free identifiers, and emitted with workflow methods and scaffolded
tests.
"""

__version__ = "1.0.0"
__author__ = "Olib AI"

from cypressgen.config import AppConfig, GeneratorConfig, Language, RenderConfig, RenderMode
from cypressgen.document import Document, parse
from cypressgen.exceptions import (
    ConfigError,
    CypressGenError,
    MalformedUrlError,
    NavigationError,
    WorkspaceNotFoundError,
)
from cypressgen.generator import Generator, generate
from cypressgen.models import (
    ElementCategory,
    ElementRecord,
    FormRecord,
    GenerationResult,
    Locator,
    LocatorStrategy,
    WorkflowInference,
)
from cypressgen.renderer import PageRenderer, render
from cypressgen.workspace import CypressWorkspace

__all__ = [
    "AppConfig",
    "ConfigError",
    "CypressGenError",
    "CypressWorkspace",
    "Document",
    "ElementCategory",
    "ElementRecord",
    "FormRecord",
    "GenerationResult",
    "Generator",
    "GeneratorConfig",
    "Language",
    "Locator",
    "LocatorStrategy",
    "MalformedUrlError",
    "NavigationError",
    "PageRenderer",
    "RenderConfig",
    "RenderMode",
    "WorkflowInference",
    "WorkspaceNotFoundError",
    "__version__",
    "generate",
    "parse",
    "render",
]
