"""
Code synthesis: page-object and test-suite IR plus the Cypress back end.

Provides:
- Structured IR for page objects and test suites
- Page-object synthesis with workflow and utility methods
- Test-suite synthesis aligned with the page object's method names
- JavaScript/TypeScript rendering
"""

from cypressgen.synthesis.cypress import CypressRenderer, js_string, locator_chain
from cypressgen.synthesis.ir import (
    PageObject,
    TestSuite,
    Verb,
    getter_name,
    method_name,
)
from cypressgen.synthesis.page_object import ClassSynthesizer
from cypressgen.synthesis.test_suite import TestSynthesizer

__all__ = [
    # IR
    "PageObject",
    "TestSuite",
    "Verb",
    "getter_name",
    "method_name",
    # Synthesizers
    "ClassSynthesizer",
    "TestSynthesizer",
    # Back end
    "CypressRenderer",
    "js_string",
    "locator_chain",
]
