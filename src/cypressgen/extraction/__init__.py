"""
Element extraction: locators, identifiers, classification and structure.

Provides:
- Locator strategy resolution with a fixed priority
- Collision-free identifier synthesis
- Element classification into five interactive categories
- Form, intent and workflow-role inference
- Feature name inference
"""

from cypressgen.extraction.classifier import (
    ClassificationState,
    ElementClassifier,
    classify,
)
from cypressgen.extraction.identifiers import (
    IdentifierRegistry,
    capitalize,
    synthesize,
    to_camel_case,
)
from cypressgen.extraction.locators import LocatorStrategyResolver
from cypressgen.extraction.naming import (
    host_of,
    infer_feature_name,
    parse_source_url,
    resolve_feature_name,
    sanitize_feature_name,
    to_class_name,
)
from cypressgen.extraction.structure import StructuralAnalyzer, analyze

__all__ = [
    # Classifier
    "ClassificationState",
    "ElementClassifier",
    "classify",
    # Identifiers
    "IdentifierRegistry",
    "capitalize",
    "synthesize",
    "to_camel_case",
    # Locators
    "LocatorStrategyResolver",
    # Naming
    "host_of",
    "infer_feature_name",
    "parse_source_url",
    "resolve_feature_name",
    "sanitize_feature_name",
    "to_class_name",
    # Structure
    "StructuralAnalyzer",
    "analyze",
]
