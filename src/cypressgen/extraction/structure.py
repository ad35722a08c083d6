"""
Structural analysis: forms, form intents and workflow roles.

Correlates each form's descendant fields with the classifier's records and
infers which workflows (login, search, registration) the page supports,
resolving the element that best fills each workflow role.
"""

from __future__ import annotations

import structlog

from cypressgen.document import Document, Node
from cypressgen.extraction import heuristics as h
from cypressgen.extraction.classifier import INTERACTIVE_SELECTOR
from cypressgen.models import (
    ElementCategory,
    ElementRecord,
    FormIntent,
    FormRecord,
    InteractionKind,
    WorkflowInference,
)

logger = structlog.get_logger(__name__)

FIELD_SELECTOR = "input, select, textarea"
SUBMIT_CANDIDATE_SELECTOR = "button, input"
EXPLICIT_SUBMIT_SELECTOR = 'button[type="submit" i], input[type="submit" i], input[type="image" i]'


def is_submit_node(node: Node) -> bool:
    """Buttons default to type=submit; inputs must say submit or image."""
    input_type = (node.attr("type") or "").lower()
    if node.name == "button":
        return input_type in ("", "submit")
    if node.name == "input":
        return input_type in ("submit", "image")
    return False


class StructuralAnalyzer:
    """
    Infers forms and workflows from the document and its ElementRecords.

    Form fields are correlated with records by (category, per-category
    document position), the same key the classifier assigns, so the analyzer
    always agrees with classification without re-classifying anything.
    """

    def __init__(self) -> None:
        self._log = logger.bind(component="structural_analyzer")

    def analyze(
        self,
        document: Document,
        elements: tuple[ElementRecord, ...],
    ) -> tuple[tuple[FormRecord, ...], WorkflowInference]:
        index = self.correlate(document, elements)
        forms = tuple(self._analyze_form(node, index) for node in document.find("form"))
        workflow = self._infer_workflow(document, elements, forms, index)

        self._log.debug(
            "Analyzed structure",
            forms=len(forms),
            intents=[f.intent.value for f in forms],
            has_login=workflow.has_login,
            has_search=workflow.has_search,
            has_registration=workflow.has_registration,
            has_submit=workflow.has_submit,
        )
        return forms, workflow

    @staticmethod
    def correlate(
        document: Document,
        elements: tuple[ElementRecord, ...],
    ) -> dict[Node, ElementRecord]:
        """Map each interactive node to the record the classifier produced for it."""
        by_key = {(e.category, e.sibling_index): e for e in elements}
        counters: dict[ElementCategory, int] = {}
        index: dict[Node, ElementRecord] = {}

        for node in document.find(INTERACTIVE_SELECTOR):
            category = ElementCategory.from_tag(node.name)
            if category is None:
                continue
            position = counters.get(category, 0)
            counters[category] = position + 1
            record = by_key.get((category, position))
            if record is not None:
                index[node] = record
        return index

    def _analyze_form(self, form: Node, index: dict[Node, ElementRecord]) -> FormRecord:
        fields: list[ElementRecord] = []
        has_search_input = False
        for node in form.find(FIELD_SELECTOR):
            record = index.get(node)
            if record is None or record.interaction == InteractionKind.CLICK:
                continue
            fields.append(record)
            if node.name == "input" and h.is_search_input(node.attr("type"), node.attr("placeholder")):
                has_search_input = True

        submit_control = None
        for node in form.find(SUBMIT_CANDIDATE_SELECTOR):
            if is_submit_node(node) and node in index:
                submit_control = index[node]
                break

        intents: set[FormIntent] = set()
        if any(h.is_password_field(f) for f in fields):
            intents.add(FormIntent.LOGIN)
        if has_search_input:
            intents.add(FormIntent.SEARCH)
        if h.is_registration_text(form.text):
            intents.add(FormIntent.REGISTRATION)

        return FormRecord(
            fields=tuple(fields),
            submit_control=submit_control,
            intents=frozenset(intents),
            name=form.attr("name") or form.attr("id"),
        )

    def _infer_workflow(
        self,
        document: Document,
        elements: tuple[ElementRecord, ...],
        forms: tuple[FormRecord, ...],
        index: dict[Node, ElementRecord],
    ) -> WorkflowInference:
        roles: dict[str, ElementRecord | None] = {}

        login_form = next((f for f in forms if FormIntent.LOGIN in f.intents), None)
        if login_form is not None:
            password = h.first_match(login_form.fields, h.is_password_field)
            others = [f for f in login_form.fields if f is not password]
            roles["password_field"] = password
            roles["username_field"] = h.first_match(
                others,
                h.is_username_candidate,
                lambda r: r.category == ElementCategory.INPUT and h.is_text_field(r),
            )
            roles["login_submit"] = login_form.submit_control or h.first_match(
                elements,
                lambda r: h.is_clickable(r) and h.contains_any(r.hints, h.LOGIN_INDICATORS),
            )

        has_search = any(
            h.is_search_input(node.attr("type"), node.attr("placeholder"))
            for node in document.find("input")
        )
        if has_search:
            search_field = h.first_match(
                elements,
                lambda r: r.subtype == "search" and h.is_text_field(r),
                h.is_search_field,
            )
            roles["search_field"] = search_field
            owning_form = next(
                (f for f in forms if search_field is not None and search_field in f.fields),
                None,
            )
            roles["search_submit"] = (
                owning_form.submit_control if owning_form and owning_form.submit_control else h.first_match(
                    elements,
                    lambda r: h.is_clickable(r) and h.contains_any(r.hints, h.SEARCH_INDICATORS),
                )
            )

        registration_form = next((f for f in forms if FormIntent.REGISTRATION in f.intents), None)
        if registration_form is not None:
            fields = registration_form.fields
            roles["registration_user_field"] = h.first_match(fields, h.is_user_field)
            roles["registration_email_field"] = h.first_match(fields, h.is_email_field)
            roles["registration_password_field"] = h.first_match(fields, h.is_password_field)
            roles["registration_submit"] = registration_form.submit_control or h.first_match(
                elements,
                lambda r: h.is_clickable(r) and h.contains_any(r.hints, h.REGISTRATION_SUBMIT_INDICATORS),
            )

        submit_control = next((f.submit_control for f in forms if f.submit_control), None)
        if submit_control is None:
            submit_control = next(
                (index[n] for n in document.find(EXPLICIT_SUBMIT_SELECTOR) if n in index),
                None,
            )
        roles["submit_control"] = submit_control

        roles["home_link"] = next(
            (
                index[node]
                for node in document.find("a")
                if node in index and h.is_home_link(index[node], node.attr("href"))
            ),
            None,
        )

        return WorkflowInference(
            has_login=login_form is not None,
            has_search=has_search,
            has_registration=registration_form is not None,
            has_submit=submit_control is not None,
            **roles,
        )


def analyze(
    document: Document,
    elements: tuple[ElementRecord, ...],
) -> tuple[tuple[FormRecord, ...], WorkflowInference]:
    """Analyze a document with a fresh analyzer."""
    return StructuralAnalyzer().analyze(document, elements)
