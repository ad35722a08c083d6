"""
Cypress source back end.

Renders PageObject and TestSuite IR as Cypress JavaScript or TypeScript.
This is the only module that knows the textual shape of the output.
"""

from __future__ import annotations

from collections.abc import Iterable

from cypressgen.config import Language
from cypressgen.models import Locator, LocatorStrategy
from cypressgen.synthesis.ir import (
    Argument,
    Call,
    ElementMethod,
    Expect,
    ExpectElement,
    ExpectKind,
    Note,
    PageObject,
    Repeat,
    Statement,
    TestCase,
    TestGroup,
    TestSuite,
    Verb,
    WorkflowMethod,
    WorkflowStep,
)

INDENT = "  "

# Cypress chain per verb, applied to the element
VERB_CHAINS: dict[Verb, str] = {
    Verb.CLICK: "click()",
    Verb.TYPE: "type(text)",
    Verb.CLEAR: "clear()",
    Verb.CHECK: "check()",
    Verb.UNCHECK: "uncheck()",
    Verb.SELECT: "select(value)",
    Verb.GET_TEXT: "invoke('text')",
    Verb.GET_VALUE: "invoke('val')",
    Verb.IS_CHECKED: "invoke('prop', 'checked')",
}


def js_string(value: str) -> str:
    """Single-quoted JavaScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )
    return f"'{escaped}'"


def js_argument(value: Argument) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Repeat):
        return f"{js_string(value.char)}.repeat({value.count})"
    return js_string(value)


def locator_chain(locator: Locator) -> str:
    """The Cypress command that yields the located element."""
    if locator.strategy == LocatorStrategy.TEXT:
        return f"cy.contains({js_string(locator.selector)}, {js_string(locator.text or '')})"
    if locator.strategy == LocatorStrategy.POSITION:
        return f"cy.get({js_string(locator.selector)}).eq({locator.index or 0})"
    return f"cy.get({js_string(locator.selector)})"


def indent(lines: Iterable[str], depth: int = 1) -> list[str]:
    prefix = INDENT * depth
    return [f"{prefix}{line}" if line else "" for line in lines]


class CypressRenderer:
    """Renders IR to Cypress sources in one language."""

    def __init__(self, language: Language | str = Language.JS) -> None:
        self.language = Language(language)

    @property
    def typed(self) -> bool:
        return self.language == Language.TS

    @property
    def _elements(self) -> str:
        # TS output uses a TypeScript private member rather than an ES private field
        return "this.elements" if self.typed else "this.#elements"

    def _parameter(self, name: str) -> str:
        return f"{name}: string" if self.typed else name

    # ── Page object ───────────────────────────────────────────────────────────

    def render_page_object(self, page: PageObject) -> str:
        sections: list[list[str]] = []

        field = "private readonly elements" if self.typed else "#elements"
        if page.locators:
            entries = [
                f"{INDENT}{entry.identifier}: () => {locator_chain(entry.locator)},"
                for entry in page.locators
            ]
            sections.append(["// Private elements", f"{field} = {{", *entries, "}"])
        else:
            sections.append(["// Private elements", f"{field} = {{}}"])

        if page.getters:
            sections.append(["// Public getters", *(
                f"get {g.name}() {{ return {self._elements}.{g.identifier}() }}"
                for g in page.getters
            )])

        if page.accessors:
            sections.append(["// Value/State getters", *(
                self._element_method(m) for m in page.accessors
            )])

        if page.interactions:
            sections.append(["// Interaction methods", *(
                self._element_method(m) for m in page.interactions
            )])

        for workflow in page.workflows:
            sections.append(self._workflow_method(workflow))

        if page.wait:
            sections.append([
                "// Wait for page load",
                f"{page.wait.name}() {{",
                f"{INDENT}cy.wait({page.wait.wait_ms})",
                f"{INDENT}return this",
                "}",
            ])

        if page.verify:
            sections.append([
                "// Verify page loaded",
                f"{page.verify.name}() {{",
                f"{INDENT}cy.url().should('include', {js_string(page.verify.host)})",
                f"{INDENT}return this",
                "}",
            ])

        body: list[str] = []
        for i, section in enumerate(sections):
            if i:
                body.append("")
            body.extend(indent(section))

        return "\n".join([f"export class {page.class_name} {{", *body, "}", ""])

    def _element_method(self, method: ElementMethod) -> str:
        parameter = method.parameter
        signature = self._parameter(parameter) if parameter else ""
        chain = VERB_CHAINS[method.verb]
        return (
            f"{method.name}({signature}) "
            f"{{ return {self._elements}.{method.identifier}().{chain} }}"
        )

    def _workflow_method(self, method: WorkflowMethod) -> list[str]:
        signature = ", ".join(self._parameter(p) for p in method.parameters)
        lines = [f"// {method.description}", f"{method.name}({signature}) {{"]

        resolved = [s for s in method.steps if s.resolved]
        for step in method.steps:
            lines.append(INDENT + self._workflow_step(step))
        if not resolved and method.fallback_url is not None:
            lines.append(f"{INDENT}cy.visit({js_string(method.fallback_url)})")

        lines.extend([f"{INDENT}return this", "}"])
        return lines

    @staticmethod
    def _workflow_step(step: WorkflowStep) -> str:
        if not step.resolved:
            return f"// No {step.role} found on the page"
        if step.argument is None:
            return f"this.{step.call}()"
        # cy.type() rejects empty strings
        return f"if ({step.argument}) this.{step.call}({step.argument})"

    # ── Test suite ────────────────────────────────────────────────────────────

    def render_test_suite(self, suite: TestSuite) -> str:
        declaration = f"let page: {suite.class_name}" if self.typed else "let page"
        body = [
            declaration,
            "",
            "beforeEach(() => {",
            f"{INDENT}cy.visit({js_string(suite.url)})",
            f"{INDENT}page = new {suite.class_name}()",
            "})",
        ]
        for case in suite.setup_cases:
            body.append("")
            body.extend(self._case(case))
        for group in suite.groups:
            body.append("")
            body.extend(self._group(group))

        return "\n".join([
            f"import {{ {suite.class_name} }} from {js_string(suite.import_path)}",
            "",
            f"describe({js_string(suite.title)}, () => {{",
            *indent(body),
            "})",
            "",
        ])

    def _group(self, group: TestGroup) -> list[str]:
        body: list[str] = []
        for case in group.cases:
            if body:
                body.append("")
            body.extend(self._case(case))
        for nested in group.groups:
            if body:
                body.append("")
            body.extend(self._group(nested))
        return [f"describe({js_string(group.title)}, () => {{", *indent(body), "})"]

    def _case(self, case: TestCase) -> list[str]:
        return [
            f"it({js_string(case.title)}, () => {{",
            *indent(self._statement(s) for s in case.statements),
            "})",
        ]

    @staticmethod
    def _statement(statement: Statement) -> str:
        if isinstance(statement, Note):
            return f"// {statement.text}"
        if isinstance(statement, Call):
            arguments = ", ".join(js_argument(a) for a in statement.arguments)
            return f"page.{statement.method}({arguments})"
        if isinstance(statement, ExpectElement):
            return f"page.{statement.getter}.should('exist')"
        if isinstance(statement, Expect):
            subject = f"page.{statement.method}()"
            if statement.kind == ExpectKind.IS_STRING:
                return f"{subject}.should('be.a', 'string')"
            if statement.kind == ExpectKind.EXISTS:
                return f"{subject}.should('exist')"
            return f"{subject}.should('eq', {js_argument(statement.expected if statement.expected is not None else '')})"
        raise TypeError(f"Unknown statement: {statement!r}")

    # ── Index barrel ──────────────────────────────────────────────────────────

    def render_index(self, exports: Iterable[tuple[str, str]]) -> str:
        """``export { Class } from './module'`` per (class name, module stem)."""
        lines = ["// Auto-generated index file for page objects"]
        lines += [
            f"export {{ {class_name} }} from {js_string('./' + module)}"
            for class_name, module in exports
        ]
        return "\n".join(lines) + "\n"
