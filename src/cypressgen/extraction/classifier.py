"""
Element classification.

Walks a parsed document in document order and produces one ElementRecord per
interactive element. The pass is a fold: each step consumes the previous
state (records so far, identifier registry, per-category counters) and
returns a new one, so a run never leaks naming state into the next.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce

import structlog

from cypressgen.document import Document, Node
from cypressgen.extraction.identifiers import IdentifierRegistry
from cypressgen.extraction.locators import LocatorStrategyResolver
from cypressgen.models import ElementCategory, ElementRecord

logger = structlog.get_logger(__name__)

INTERACTIVE_SELECTOR = "button, input, a, select, textarea"

# Attributes folded into an element's lower-cased hint string
HINT_ATTRIBUTES: tuple[str, ...] = ("id", "name", "placeholder", "aria-label", "title", "value")


@dataclass(frozen=True)
class ClassificationState:
    """Accumulator threaded through the classification fold."""

    records: tuple[ElementRecord, ...] = ()
    registry: IdentifierRegistry = field(default_factory=IdentifierRegistry)
    counters: dict[ElementCategory, int] = field(default_factory=dict)

    def next_index(self, category: ElementCategory) -> int:
        return self.counters.get(category, 0)


class ElementClassifier:
    """
    Classifies buttons, inputs, links, selects and textareas.

    Classification is structural: hidden and disabled elements are included,
    and an element with no usable attribute still gets a positional locator.
    """

    def __init__(self, resolver: LocatorStrategyResolver | None = None) -> None:
        self._resolver = resolver or LocatorStrategyResolver()
        self._log = logger.bind(component="element_classifier")

    def classify(self, document: Document) -> tuple[ElementRecord, ...]:
        """Classify every interactive element of the document, in document order."""
        return self.fold(document).records

    def fold(self, document: Document) -> ClassificationState:
        """Run the classification fold and return the final state."""
        nodes = [
            node for node in document.find(INTERACTIVE_SELECTOR)
            if ElementCategory.from_tag(node.name) is not None
        ]
        state = reduce(self._step, enumerate(nodes), ClassificationState())
        self._log.debug(
            "Classified elements",
            total=len(state.records),
            per_category={c.value: n for c, n in state.counters.items()},
        )
        return state

    def _step(self, state: ClassificationState, item: tuple[int, Node]) -> ClassificationState:
        document_order, node = item
        category = ElementCategory.from_tag(node.name)
        assert category is not None
        subtype = self.subtype_of(node, category)
        sibling_index = state.next_index(category)

        locator, raw_label = self._resolver.resolve(node, category, sibling_index, subtype)
        identifier, registry = state.registry.claim(raw_label)

        record = ElementRecord(
            category=category,
            subtype=subtype,
            raw_label=raw_label,
            identifier=identifier,
            locator=locator,
            document_order=document_order,
            sibling_index=sibling_index,
            name=node.attr("name"),
            hints=self._hints(node, category),
            options=self._options(node) if category == ElementCategory.SELECT else (),
        )
        return ClassificationState(
            records=state.records + (record,),
            registry=registry,
            counters={**state.counters, category: sibling_index + 1},
        )

    @staticmethod
    def subtype_of(node: Node, category: ElementCategory) -> str:
        """Input type (default "text") for inputs, the category name otherwise."""
        if category == ElementCategory.INPUT:
            return (node.attr("type") or "text").lower()
        return category.value

    @staticmethod
    def _hints(node: Node, category: ElementCategory) -> str:
        parts = [node.attr(name) or "" for name in HINT_ATTRIBUTES]
        if category in (ElementCategory.BUTTON, ElementCategory.LINK):
            parts.append(node.text)
            parts.append(node.attr("href") or "")
            parts.append(node.attr("class") or "")
        return " ".join(p for p in parts if p).lower()

    @staticmethod
    def _options(node: Node) -> tuple[str, ...]:
        values: list[str] = []
        for option in node.find("option"):
            # An explicit empty value marks a placeholder such as "Choose..."
            if option.has_attr("value"):
                value = option.attr("value")
            else:
                value = option.text
            if value:
                values.append(value)
        return tuple(values)


def classify(document: Document) -> tuple[ElementRecord, ...]:
    """Classify a document with a fresh classifier."""
    return ElementClassifier().classify(document)
