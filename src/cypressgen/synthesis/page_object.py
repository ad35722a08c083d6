"""
Page-object synthesis.

Builds the PageObject IR for an ordered ElementRecord sequence: a locator
map, getters, value/state accessors and interaction methods per element,
followed by workflow and utility methods.
"""

from __future__ import annotations

import structlog

from cypressgen.config import GeneratorConfig
from cypressgen.extraction.naming import host_of
from cypressgen.models import ElementRecord, WorkflowInference, emission_order
from cypressgen.synthesis.ir import (
    ACCESSOR_VERBS,
    INTERACTION_VERBS,
    ElementMethod,
    Getter,
    LocatorEntry,
    PageObject,
    Verb,
    VerifyLoadedMethod,
    WaitMethod,
    WorkflowMethod,
    WorkflowStep,
)

logger = structlog.get_logger(__name__)

# Workflow method names; the test synthesizer calls them by these names
LOGIN_METHOD = "login"
SEARCH_METHOD = "search"
REGISTER_METHOD = "register"
NAVIGATE_HOME_METHOD = "navigateToHome"
SUBMIT_FORM_METHOD = "submitForm"
WAIT_METHOD = "waitForPageLoad"
VERIFY_METHOD = "verifyPageLoaded"


def workflow_step(
    role: str,
    verb: Verb,
    record: ElementRecord | None,
    argument: str | None = None,
) -> WorkflowStep:
    """Bind a role to a record, leaving it unresolved if the record lacks the verb."""
    if record is None or verb not in INTERACTION_VERBS[record.interaction]:
        return WorkflowStep(role=role, verb=verb, identifier=None, argument=argument)
    return WorkflowStep(role=role, verb=verb, identifier=record.identifier, argument=argument)


class ClassSynthesizer:
    """Synthesizes the page-object IR."""

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self._config = config or GeneratorConfig()
        self._log = logger.bind(component="class_synthesizer")

    def synthesize(
        self,
        class_name: str,
        elements: tuple[ElementRecord, ...],
        workflow: WorkflowInference,
        url: str,
    ) -> PageObject:
        ordered = emission_order(elements)

        page_object = PageObject(
            class_name=class_name,
            locators=tuple(LocatorEntry(e.identifier, e.locator) for e in ordered),
            getters=tuple(Getter(e.identifier) for e in ordered),
            accessors=tuple(
                ElementMethod(verb, e.identifier)
                for e in ordered
                for verb in ACCESSOR_VERBS[e.interaction]
            ),
            interactions=tuple(
                ElementMethod(verb, e.identifier)
                for e in ordered
                for verb in INTERACTION_VERBS[e.interaction]
            ),
            workflows=self.workflow_methods(workflow),
            wait=WaitMethod(WAIT_METHOD, self._config.page_wait_ms),
            verify=VerifyLoadedMethod(VERIFY_METHOD, host_of(url)),
        )

        self._log.debug(
            "Synthesized page object",
            class_name=class_name,
            locators=len(page_object.locators),
            methods=len(page_object.method_names()),
        )
        return page_object

    def workflow_methods(self, workflow: WorkflowInference) -> tuple[WorkflowMethod, ...]:
        """Workflow methods in fixed order: login, search, registration, then utilities."""
        methods: list[WorkflowMethod] = []

        if workflow.has_login:
            methods.append(WorkflowMethod(
                name=LOGIN_METHOD,
                description="Login workflow",
                parameters=("username", "password"),
                steps=(
                    workflow_step("username field", Verb.TYPE, workflow.username_field, "username"),
                    workflow_step("password field", Verb.TYPE, workflow.password_field, "password"),
                    workflow_step("login button", Verb.CLICK, workflow.login_submit),
                ),
            ))

        if workflow.has_search:
            methods.append(WorkflowMethod(
                name=SEARCH_METHOD,
                description="Search workflow",
                parameters=("query",),
                steps=(
                    workflow_step("search field", Verb.TYPE, workflow.search_field, "query"),
                    workflow_step("search button", Verb.CLICK, workflow.search_submit),
                ),
            ))

        if workflow.has_registration:
            methods.append(WorkflowMethod(
                name=REGISTER_METHOD,
                description="Registration workflow",
                parameters=("user", "email", "password"),
                steps=(
                    workflow_step("user field", Verb.TYPE, workflow.registration_user_field, "user"),
                    workflow_step("email field", Verb.TYPE, workflow.registration_email_field, "email"),
                    workflow_step("password field", Verb.TYPE, workflow.registration_password_field, "password"),
                    workflow_step("register button", Verb.CLICK, workflow.registration_submit),
                ),
            ))

        methods.append(WorkflowMethod(
            name=NAVIGATE_HOME_METHOD,
            description="Navigation workflow",
            steps=(workflow_step("home link", Verb.CLICK, workflow.home_link),)
            if workflow.home_link else (),
            fallback_url="/",
        ))

        if workflow.submit_control is not None:
            methods.append(WorkflowMethod(
                name=SUBMIT_FORM_METHOD,
                description="Form submission workflow",
                steps=(workflow_step("submit button", Verb.CLICK, workflow.submit_control),),
            ))

        return tuple(methods)
