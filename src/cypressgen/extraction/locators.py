"""
Locator strategy resolution.

Picks the single best locator for an element by a fixed priority:
test-oriented data attributes first, then id, then category-specific
attributes and visible text, and finally a positional selector that is always
available.
"""

from __future__ import annotations

import re

from cypressgen.document import Node
from cypressgen.models import ElementCategory, Locator, LocatorStrategy

# Plain CSS identifiers can be used directly in #id / .class selectors
_CSS_IDENT = re.compile(r"^-?[A-Za-z_][A-Za-z0-9_-]*$")

# Labels derived from free text are cut to keep identifiers readable
MAX_LABEL_TEXT = 50


def escape_attr(value: str) -> str:
    """Escape a value for use inside a double-quoted CSS attribute selector."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def attribute_selector(attr: str, value: str, tag: str = "") -> str:
    return f'{tag}[{attr}="{escape_attr(value)}"]'


class LocatorStrategyResolver:
    """
    Resolves one element to a (Locator, raw label) pair.

    Priority order is independent of category:
    1. data-cy, data-test, data-testid
    2. id
    3. name (inputs, selects, textareas)
    4. placeholder (inputs, textareas)
    5. visible text (buttons, links)
    6. href (links)
    7. first class token (buttons)
    8. tag + per-category position
    """

    DATA_ATTRIBUTES: tuple[LocatorStrategy, ...] = (
        LocatorStrategy.DATA_CY,
        LocatorStrategy.DATA_TEST,
        LocatorStrategy.DATA_TESTID,
    )

    NAMED_CATEGORIES = frozenset({ElementCategory.INPUT, ElementCategory.SELECT, ElementCategory.TEXTAREA})
    PLACEHOLDER_CATEGORIES = frozenset({ElementCategory.INPUT, ElementCategory.TEXTAREA})
    TEXT_CATEGORIES = frozenset({ElementCategory.BUTTON, ElementCategory.LINK})

    def resolve(
        self,
        element: Node,
        category: ElementCategory,
        sibling_index: int,
        subtype: str | None = None,
    ) -> tuple[Locator, str]:
        tag = category.tag
        prefix = category.value

        for strategy in self.DATA_ATTRIBUTES:
            value = element.attr(strategy.value)
            if value:
                return (
                    Locator(strategy, attribute_selector(strategy.value, value)),
                    f"{prefix} {value}",
                )

        element_id = element.attr("id")
        if element_id:
            selector = f"#{element_id}" if _CSS_IDENT.match(element_id) else attribute_selector("id", element_id)
            return Locator(LocatorStrategy.ID, selector), f"{prefix} {element_id}"

        if category in self.NAMED_CATEGORIES:
            name = element.attr("name")
            if name:
                return (
                    Locator(LocatorStrategy.NAME, attribute_selector("name", name, tag)),
                    f"{prefix} {name}",
                )

        if category in self.PLACEHOLDER_CATEGORIES:
            placeholder = element.attr("placeholder")
            if placeholder:
                return (
                    Locator(LocatorStrategy.PLACEHOLDER, attribute_selector("placeholder", placeholder, tag)),
                    f"{prefix} {placeholder[:MAX_LABEL_TEXT]}",
                )

        if category in self.TEXT_CATEGORIES:
            text = element.text
            if text:
                return (
                    Locator(LocatorStrategy.TEXT, tag, text=text),
                    f"{prefix} {text[:MAX_LABEL_TEXT]}",
                )

        if category == ElementCategory.LINK:
            href = element.attr("href")
            if href:
                return (
                    Locator(LocatorStrategy.HREF, attribute_selector("href", href, tag)),
                    f"{prefix} {href[:MAX_LABEL_TEXT]}",
                )

        if category == ElementCategory.BUTTON:
            class_attr = element.attr("class")
            if class_attr:
                first_class = class_attr.split()[0]
                selector = (
                    f"{tag}.{first_class}"
                    if _CSS_IDENT.match(first_class)
                    else f'{tag}[class~="{escape_attr(first_class)}"]'
                )
                return Locator(LocatorStrategy.CLASS, selector), f"{prefix} {first_class}"

        position = sibling_index + 1
        if category == ElementCategory.INPUT:
            label = f"{prefix} {subtype or 'text'} {position}"
        else:
            label = f"{prefix} {position}"
        return Locator(LocatorStrategy.POSITION, tag, index=sibling_index), label
