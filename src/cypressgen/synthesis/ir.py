"""
Intermediate representation for generated page objects and test suites.

Synthesizers decide *what* to emit by building these nodes; a back end
decides *how* it reads in a target language. Method names are derived in one
place (``method_name``) so page objects and tests can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from cypressgen.extraction.identifiers import capitalize
from cypressgen.models import InteractionKind, Locator


class Verb(StrEnum):
    """Per-element method verbs."""

    CLICK = "click"
    TYPE = "type"
    CLEAR = "clear"
    CHECK = "check"
    UNCHECK = "uncheck"
    SELECT = "select"
    GET_TEXT = "getText"
    GET_VALUE = "getValue"
    IS_CHECKED = "isChecked"


# Interaction methods emitted for each interaction kind
INTERACTION_VERBS: dict[InteractionKind, tuple[Verb, ...]] = {
    InteractionKind.CLICK: (Verb.CLICK,),
    InteractionKind.TEXT: (Verb.TYPE, Verb.CLEAR),
    InteractionKind.TOGGLE: (Verb.CHECK, Verb.UNCHECK),
    InteractionKind.CHOICE: (Verb.SELECT,),
}

# Value/state accessors emitted for each interaction kind
ACCESSOR_VERBS: dict[InteractionKind, tuple[Verb, ...]] = {
    InteractionKind.CLICK: (Verb.GET_TEXT,),
    InteractionKind.TEXT: (Verb.GET_VALUE,),
    InteractionKind.TOGGLE: (Verb.IS_CHECKED,),
    InteractionKind.CHOICE: (Verb.GET_VALUE,),
}

VERB_PARAMETERS: dict[Verb, str] = {
    Verb.TYPE: "text",
    Verb.SELECT: "value",
}


def method_name(verb: Verb, identifier: str) -> str:
    """``<verb><CapitalizedIdentifier>``, shared by both synthesizers."""
    return f"{verb.value}{capitalize(identifier)}"


def getter_name(identifier: str) -> str:
    return capitalize(identifier)


# ── Page object ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LocatorEntry:
    identifier: str
    locator: Locator


@dataclass(frozen=True)
class Getter:
    identifier: str

    @property
    def name(self) -> str:
        return getter_name(self.identifier)


@dataclass(frozen=True)
class ElementMethod:
    """An interaction method or accessor bound to one element."""

    verb: Verb
    identifier: str

    @property
    def name(self) -> str:
        return method_name(self.verb, self.identifier)

    @property
    def parameter(self) -> str | None:
        return VERB_PARAMETERS.get(self.verb)


@dataclass(frozen=True)
class WorkflowStep:
    """
    One step of a workflow method.

    ``identifier`` is None when the role could not be resolved; back ends
    render such steps as a note so the method no-ops on that role.
    """

    role: str
    verb: Verb
    identifier: str | None
    argument: str | None = None

    @property
    def resolved(self) -> bool:
        return self.identifier is not None

    @property
    def call(self) -> str | None:
        if self.identifier is None:
            return None
        return method_name(self.verb, self.identifier)


@dataclass(frozen=True)
class WorkflowMethod:
    name: str
    description: str
    parameters: tuple[str, ...] = ()
    steps: tuple[WorkflowStep, ...] = ()
    # Used when no step resolves at all, e.g. navigateToHome without a home link
    fallback_url: str | None = None


@dataclass(frozen=True)
class WaitMethod:
    name: str
    wait_ms: int


@dataclass(frozen=True)
class VerifyLoadedMethod:
    name: str
    host: str


@dataclass(frozen=True)
class PageObject:
    class_name: str
    locators: tuple[LocatorEntry, ...] = ()
    getters: tuple[Getter, ...] = ()
    accessors: tuple[ElementMethod, ...] = ()
    interactions: tuple[ElementMethod, ...] = ()
    workflows: tuple[WorkflowMethod, ...] = ()
    wait: WaitMethod | None = None
    verify: VerifyLoadedMethod | None = None

    def method_names(self) -> list[str]:
        """All method names in emission order."""
        names = [m.name for m in self.accessors]
        names += [m.name for m in self.interactions]
        names += [w.name for w in self.workflows]
        if self.wait:
            names.append(self.wait.name)
        if self.verify:
            names.append(self.verify.name)
        return names


# ── Test suite ────────────────────────────────────────────────────────────────

class ExpectKind(StrEnum):
    EQUALS = "equals"
    IS_STRING = "is_string"
    EXISTS = "exists"


@dataclass(frozen=True)
class Repeat:
    """A string argument built by repeating one character."""

    char: str
    count: int


Argument = str | bool | Repeat


@dataclass(frozen=True)
class Call:
    """``page.<method>(<arguments>)``"""

    method: str
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True)
class Expect:
    """Assertion on the value yielded by an accessor method."""

    method: str
    kind: ExpectKind
    expected: Argument | None = None


@dataclass(frozen=True)
class ExpectElement:
    """Assertion on the element yielded by a getter."""

    getter: str
    kind: ExpectKind = ExpectKind.EXISTS


@dataclass(frozen=True)
class Note:
    """A comment, typically a placeholder for a live-page assertion."""

    text: str


Statement = Call | Expect | ExpectElement | Note


@dataclass(frozen=True)
class TestCase:
    __test__ = False

    title: str
    statements: tuple[Statement, ...] = ()

    def calls(self) -> list[str]:
        names = []
        for s in self.statements:
            if isinstance(s, (Call, Expect)):
                names.append(s.method)
        return names


@dataclass(frozen=True)
class TestGroup:
    __test__ = False

    title: str
    cases: tuple[TestCase, ...] = ()
    groups: tuple[TestGroup, ...] = ()

    def walk_cases(self) -> list[TestCase]:
        cases = list(self.cases)
        for group in self.groups:
            cases.extend(group.walk_cases())
        return cases


@dataclass(frozen=True)
class TestSuite:
    __test__ = False

    class_name: str
    import_path: str
    url: str
    setup_cases: tuple[TestCase, ...] = ()
    groups: tuple[TestGroup, ...] = field(default_factory=tuple)

    @property
    def title(self) -> str:
        return f"{self.class_name} Tests"

    def walk_cases(self) -> list[TestCase]:
        cases = list(self.setup_cases)
        for group in self.groups:
            cases.extend(group.walk_cases())
        return cases

    def group(self, title: str) -> TestGroup | None:
        return next((g for g in self.groups if g.title == title), None)
