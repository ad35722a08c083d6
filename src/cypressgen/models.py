"""
Data model shared by the extraction and synthesis stages.

ElementRecords are produced once per generation run by the classifier and
consumed unchanged by both synthesizers, which is what keeps identifiers in
the generated tests aligned with identifiers in the generated class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ElementCategory(StrEnum):
    """The five interactive element categories, in class emission order."""

    BUTTON = "button"
    INPUT = "input"
    LINK = "link"
    SELECT = "select"
    TEXTAREA = "textarea"

    @property
    def tag(self) -> str:
        """HTML tag name for the category."""
        return "a" if self is ElementCategory.LINK else self.value

    @property
    def rank(self) -> int:
        """Position of the category in emission order."""
        return list(ElementCategory).index(self)

    @classmethod
    def from_tag(cls, tag: str) -> ElementCategory | None:
        """Map an HTML tag name to its category."""
        tag = tag.lower()
        if tag == "a":
            return cls.LINK
        try:
            return cls(tag)
        except ValueError:
            return None


class InteractionKind(StrEnum):
    """How generated code interacts with an element."""

    CLICK = "click"  # Buttons, links, button-like inputs
    TEXT = "text"  # Free-text inputs and textareas
    TOGGLE = "toggle"  # Checkboxes and radios
    CHOICE = "choice"  # Selects


# Input types that behave like buttons rather than fields
CLICKABLE_INPUT_TYPES: frozenset[str] = frozenset({"submit", "button", "reset", "image"})
TOGGLE_INPUT_TYPES: frozenset[str] = frozenset({"checkbox", "radio"})


class LocatorStrategy(StrEnum):
    """Strategies in locator priority order."""

    DATA_CY = "data-cy"
    DATA_TEST = "data-test"
    DATA_TESTID = "data-testid"
    ID = "id"
    NAME = "name"
    PLACEHOLDER = "placeholder"
    TEXT = "text"
    HREF = "href"
    CLASS = "class"
    POSITION = "position"


@dataclass(frozen=True)
class Locator:
    """How to find one element at test-execution time."""

    strategy: LocatorStrategy
    selector: str
    text: str | None = None  # Visible text for TEXT strategy
    index: int | None = None  # 0-based index for POSITION strategy

    @property
    def expression(self) -> str:
        """Single jQuery-style selector string, as accepted by cy.get()."""
        if self.strategy == LocatorStrategy.TEXT:
            escaped = (self.text or "").replace("\\", "\\\\").replace('"', '\\"')
            return f'{self.selector}:contains("{escaped}")'
        if self.strategy == LocatorStrategy.POSITION:
            return f"{self.selector}:eq({self.index or 0})"
        return self.selector


@dataclass(frozen=True)
class ElementRecord:
    """One classified interactive element."""

    category: ElementCategory
    subtype: str
    raw_label: str
    identifier: str
    locator: Locator
    document_order: int
    sibling_index: int
    name: str | None = None  # The element's name attribute
    hints: str = ""  # Lower-cased id/name/placeholder/aria-label/text
    options: tuple[str, ...] = ()  # Option values, selects only

    @property
    def locator_expression(self) -> str:
        return self.locator.expression

    @property
    def interaction(self) -> InteractionKind:
        """Interaction kind derived from category and subtype."""
        if self.category in (ElementCategory.BUTTON, ElementCategory.LINK):
            return InteractionKind.CLICK
        if self.category == ElementCategory.SELECT:
            return InteractionKind.CHOICE
        if self.category == ElementCategory.INPUT:
            if self.subtype in TOGGLE_INPUT_TYPES:
                return InteractionKind.TOGGLE
            if self.subtype in CLICKABLE_INPUT_TYPES:
                return InteractionKind.CLICK
        return InteractionKind.TEXT


def emission_order(elements: tuple[ElementRecord, ...] | list[ElementRecord]) -> list[ElementRecord]:
    """Order records by category, then by document order."""
    return sorted(elements, key=lambda e: (e.category.rank, e.document_order))


class FormIntent(StrEnum):
    """Inferred purpose of a form."""

    LOGIN = "login"
    SEARCH = "search"
    REGISTRATION = "registration"
    GENERIC = "generic"


# Rendering precedence when a form satisfies several heuristics
INTENT_PRECEDENCE: tuple[FormIntent, ...] = (
    FormIntent.LOGIN,
    FormIntent.SEARCH,
    FormIntent.REGISTRATION,
)


@dataclass(frozen=True)
class FormRecord:
    """A form, its correlated fields and its submit control."""

    fields: tuple[ElementRecord, ...]
    submit_control: ElementRecord | None = None
    intents: frozenset[FormIntent] = frozenset()
    name: str | None = None

    @property
    def intent(self) -> FormIntent:
        """Highest-precedence intent, GENERIC when none matched."""
        for intent in INTENT_PRECEDENCE:
            if intent in self.intents:
                return intent
        return FormIntent.GENERIC

    @property
    def is_testable(self) -> bool:
        """Forms need both fields and a submit control to get form tests."""
        return bool(self.fields) and self.submit_control is not None


@dataclass(frozen=True)
class WorkflowInference:
    """Workflow flags and the elements resolved for each workflow role."""

    has_login: bool = False
    has_search: bool = False
    has_registration: bool = False
    has_submit: bool = False
    # Login roles
    username_field: ElementRecord | None = None
    password_field: ElementRecord | None = None
    login_submit: ElementRecord | None = None
    # Search roles
    search_field: ElementRecord | None = None
    search_submit: ElementRecord | None = None
    # Registration roles
    registration_user_field: ElementRecord | None = None
    registration_email_field: ElementRecord | None = None
    registration_password_field: ElementRecord | None = None
    registration_submit: ElementRecord | None = None
    # Utility roles
    submit_control: ElementRecord | None = None
    home_link: ElementRecord | None = None


@dataclass
class GenerationResult:
    """Output bundle of one generation run."""

    class_name: str
    feature_name: str
    class_source: str
    test_source: str
    elements: tuple[ElementRecord, ...]
    forms: tuple[FormRecord, ...] = ()
    workflow: WorkflowInference = field(default_factory=WorkflowInference)
    source_url: str = ""
    language: str = "js"

    @property
    def page_file_name(self) -> str:
        return f"{self.feature_name}.{self.language}"

    @property
    def test_file_name(self) -> str:
        return f"{self.feature_name}.cy.{self.language}"

    @property
    def identifiers(self) -> list[str]:
        return [e.identifier for e in self.elements]
