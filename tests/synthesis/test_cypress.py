"""
Tests for the Cypress source back end.
"""

from __future__ import annotations

import pytest

from cypressgen.config import Language
from cypressgen.models import Locator, LocatorStrategy
from cypressgen.synthesis.cypress import CypressRenderer, js_argument, js_string, locator_chain
from cypressgen.synthesis.ir import (
    Call,
    ElementMethod,
    Expect,
    ExpectElement,
    ExpectKind,
    Getter,
    LocatorEntry,
    Note,
    PageObject,
    Repeat,
    TestCase,
    TestGroup,
    TestSuite,
    Verb,
    VerifyLoadedMethod,
    WaitMethod,
    WorkflowMethod,
    WorkflowStep,
)


@pytest.fixture
def page() -> PageObject:
    return PageObject(
        class_name="LoginPage",
        locators=(
            LocatorEntry("buttonLogIn", Locator(LocatorStrategy.TEXT, "button", text="Log in")),
            LocatorEntry("inputUser", Locator(LocatorStrategy.DATA_TESTID, '[data-testid="user"]')),
        ),
        getters=(Getter("buttonLogIn"), Getter("inputUser")),
        accessors=(
            ElementMethod(Verb.GET_TEXT, "buttonLogIn"),
            ElementMethod(Verb.GET_VALUE, "inputUser"),
        ),
        interactions=(
            ElementMethod(Verb.CLICK, "buttonLogIn"),
            ElementMethod(Verb.TYPE, "inputUser"),
            ElementMethod(Verb.CLEAR, "inputUser"),
        ),
        workflows=(
            WorkflowMethod(
                name="login",
                description="Login workflow",
                parameters=("username", "password"),
                steps=(
                    WorkflowStep("username field", Verb.TYPE, "inputUser", "username"),
                    WorkflowStep("password field", Verb.TYPE, None, "password"),
                    WorkflowStep("login button", Verb.CLICK, "buttonLogIn"),
                ),
            ),
            WorkflowMethod(name="navigateToHome", description="Navigation workflow", fallback_url="/"),
        ),
        wait=WaitMethod("waitForPageLoad", 1000),
        verify=VerifyLoadedMethod("verifyPageLoaded", "example.com"),
    )


@pytest.fixture
def suite() -> TestSuite:
    return TestSuite(
        class_name="LoginPage",
        import_path="../../pages/login",
        url="https://example.com/login",
        setup_cases=(TestCase("should load the page", (Call("verifyPageLoaded"),)),),
        groups=(
            TestGroup("Element Interactions", (
                TestCase("should type in inputUser", (
                    Call("typeInputUser", ("testuser",)),
                    Expect("getValueInputUser", ExpectKind.EQUALS, "testuser"),
                )),
                TestCase("should get text of buttonLogIn", (
                    Expect("getTextButtonLogIn", ExpectKind.IS_STRING),
                )),
            )),
            TestGroup("Form Submission", groups=(
                TestGroup("Form 1 (login)", (
                    TestCase("should handle long input for inputUser", (
                        Call("typeInputUser", (Repeat("a", 1000),)),
                        Note("Add assertions for edge case"),
                    )),
                )),
            )),
        ),
    )


class TestJsHelpers:
    """Test literal and locator rendering."""

    def test_js_string_escapes(self) -> None:
        assert js_string("it's") == "'it\\'s'"
        assert js_string("a\\b") == "'a\\\\b'"
        assert js_string("line\nbreak") == "'line\\nbreak'"

    def test_js_argument(self) -> None:
        assert js_argument(True) == "true"
        assert js_argument(False) == "false"
        assert js_argument(Repeat("a", 5)) == "'a'.repeat(5)"
        assert js_argument("x") == "'x'"

    def test_locator_chains(self) -> None:
        assert locator_chain(Locator(LocatorStrategy.ID, "#email")) == "cy.get('#email')"
        assert (
            locator_chain(Locator(LocatorStrategy.TEXT, "a", text="Don't go"))
            == "cy.contains('a', 'Don\\'t go')"
        )
        assert locator_chain(Locator(LocatorStrategy.POSITION, "button", index=1)) == "cy.get('button').eq(1)"
        assert (
            locator_chain(Locator(LocatorStrategy.NAME, 'input[name="q"]'))
            == "cy.get('input[name=\"q\"]')"
        )


class TestRenderPageObject:
    """Test page-object rendering."""

    def test_javascript_class(self, page: PageObject) -> None:
        source = CypressRenderer(Language.JS).render_page_object(page)

        assert source.startswith("export class LoginPage {\n")
        assert "  #elements = {\n" in source
        assert "    buttonLogIn: () => cy.contains('button', 'Log in'),\n" in source
        assert "    inputUser: () => cy.get('[data-testid=\"user\"]'),\n" in source
        assert "  get ButtonLogIn() { return this.#elements.buttonLogIn() }" in source
        assert "  getTextButtonLogIn() { return this.#elements.buttonLogIn().invoke('text') }" in source
        assert "  getValueInputUser() { return this.#elements.inputUser().invoke('val') }" in source
        assert "  typeInputUser(text) { return this.#elements.inputUser().type(text) }" in source
        assert "  clearInputUser() { return this.#elements.inputUser().clear() }" in source
        assert source.endswith("}\n")

    def test_workflow_method(self, page: PageObject) -> None:
        source = CypressRenderer().render_page_object(page)

        assert (
            "  // Login workflow\n"
            "  login(username, password) {\n"
            "    if (username) this.typeInputUser(username)\n"
            "    // No password field found on the page\n"
            "    this.clickButtonLogIn()\n"
            "    return this\n"
            "  }\n"
        ) in source

    def test_fallback_navigation(self, page: PageObject) -> None:
        source = CypressRenderer().render_page_object(page)

        assert "  navigateToHome() {\n    cy.visit('/')\n    return this\n  }" in source

    def test_utilities(self, page: PageObject) -> None:
        source = CypressRenderer().render_page_object(page)

        assert "  waitForPageLoad() {\n    cy.wait(1000)\n    return this\n  }" in source
        assert "    cy.url().should('include', 'example.com')\n" in source

    def test_typescript_class(self, page: PageObject) -> None:
        source = CypressRenderer("ts").render_page_object(page)

        assert "  private readonly elements = {\n" in source
        assert "  typeInputUser(text: string) { return this.elements.inputUser().type(text) }" in source
        assert "  login(username: string, password: string) {\n" in source
        assert "#elements" not in source

    def test_checked_state(self) -> None:
        page = PageObject(
            class_name="P",
            accessors=(ElementMethod(Verb.IS_CHECKED, "inputTerms"),),
            interactions=(ElementMethod(Verb.SELECT, "selectCountry"),),
        )
        source = CypressRenderer().render_page_object(page)

        assert "isCheckedInputTerms() { return this.#elements.inputTerms().invoke('prop', 'checked') }" in source
        assert "selectSelectCountry(value) { return this.#elements.selectCountry().select(value) }" in source

    def test_empty_page(self) -> None:
        source = CypressRenderer().render_page_object(PageObject(class_name="EmptyPage"))

        assert source == "export class EmptyPage {\n  // Private elements\n  #elements = {}\n}\n"


class TestRenderTestSuite:
    """Test test-suite rendering."""

    def test_javascript_suite(self, suite: TestSuite) -> None:
        source = CypressRenderer().render_test_suite(suite)

        assert source.startswith("import { LoginPage } from '../../pages/login'\n\n")
        assert "describe('LoginPage Tests', () => {\n  let page\n" in source
        assert "    cy.visit('https://example.com/login')\n    page = new LoginPage()\n" in source
        assert "  it('should load the page', () => {\n    page.verifyPageLoaded()\n  })" in source
        assert source.endswith("})\n")

    def test_statements(self, suite: TestSuite) -> None:
        source = CypressRenderer().render_test_suite(suite)

        assert "      page.typeInputUser('testuser')\n" in source
        assert "      page.getValueInputUser().should('eq', 'testuser')\n" in source
        assert "      page.getTextButtonLogIn().should('be.a', 'string')\n" in source

    def test_nested_groups(self, suite: TestSuite) -> None:
        source = CypressRenderer().render_test_suite(suite)

        assert "  describe('Form Submission', () => {\n    describe('Form 1 (login)', () => {\n" in source
        assert "        page.typeInputUser('a'.repeat(1000))\n" in source
        assert "        // Add assertions for edge case\n" in source

    def test_typescript_suite(self, suite: TestSuite) -> None:
        source = CypressRenderer(Language.TS).render_test_suite(suite)

        assert "  let page: LoginPage\n" in source

    def test_element_and_boolean_expectations(self) -> None:
        suite = TestSuite(
            class_name="P",
            import_path="../../pages/p",
            url="https://x.com",
            setup_cases=(TestCase("checks", (
                ExpectElement("SelectTheme"),
                Expect("isCheckedInputTerms", ExpectKind.EQUALS, True),
            )),),
        )
        source = CypressRenderer().render_test_suite(suite)

        assert "    page.SelectTheme.should('exist')\n" in source
        assert "    page.isCheckedInputTerms().should('eq', true)\n" in source

    def test_titles_are_escaped(self) -> None:
        suite = TestSuite(
            class_name="P",
            import_path="../../pages/p",
            url="https://x.com/?q='",
            setup_cases=(TestCase("handles 'quotes'", (Note("n"),)),),
        )
        source = CypressRenderer().render_test_suite(suite)

        assert "it('handles \\'quotes\\'', () => {" in source
        assert "cy.visit('https://x.com/?q=\\'')" in source


class TestRenderIndex:
    """Test the pages barrel."""

    def test_exports(self) -> None:
        source = CypressRenderer().render_index([("LoginPage", "login"), ("SearchPage", "search")])

        assert source == (
            "// Auto-generated index file for page objects\n"
            "export { LoginPage } from './login'\n"
            "export { SearchPage } from './search'\n"
        )

    def test_empty(self) -> None:
        assert CypressRenderer().render_index([]) == "// Auto-generated index file for page objects\n"
