"""
End-to-end tests for the generation pipeline.

These tests run HTML through parse, classification, analysis, synthesis and
rendering, and check the properties the generated sources must hold.
"""

from __future__ import annotations

import re

import pytest

from cypressgen.config import GeneratorConfig, Language
from cypressgen.document import Document
from cypressgen.exceptions import MalformedUrlError
from cypressgen.generator import Generator, generate

URL = "https://example.com/login"

LOCATOR_ENTRY = re.compile(r"^    (\w+): \(\) => cy\.", re.MULTILINE)
PAGE_CALL = re.compile(r"page\.(\w+)\(")
CLASS_METHOD = re.compile(r"^  (?:get )?(\w+)\(", re.MULTILINE)


def declared_methods(class_source: str) -> set[str]:
    return set(CLASS_METHOD.findall(class_source))


class TestLoginRoundTrip:
    """A login page produces a login-capable page object and tests."""

    def test_result(self, login_html: str) -> None:
        result = generate(login_html, URL)

        assert result.feature_name == "login"
        assert result.class_name == "LoginPage"
        assert result.identifiers == ["linkHome", "inputUser", "inputPassword", "buttonLogIn"]
        assert result.workflow.has_login
        assert result.page_file_name == "login.js"
        assert result.test_file_name == "login.cy.js"
        assert result.source_url == URL

    def test_class_source(self, login_html: str) -> None:
        source = generate(login_html, URL).class_source

        assert "export class LoginPage {" in source
        assert "inputUser: () => cy.get('[data-testid=\"user\"]')," in source
        assert "inputPassword: () => cy.get('#password')," in source
        assert "buttonLogIn: () => cy.contains('button', 'Log in')," in source
        assert "  login(username, password) {" in source
        assert "    if (username) this.typeInputUser(username)" in source
        assert "    if (password) this.typeInputPassword(password)" in source
        assert "    this.clickButtonLogIn()" in source
        assert "    cy.url().should('include', 'example.com')" in source

    def test_test_source(self, login_html: str) -> None:
        source = generate(login_html, URL).test_source

        assert source.startswith("import { LoginPage } from '../../pages/login'")
        assert "describe('Login Workflow', () => {" in source
        assert "page.login('validuser', 'validpassword')" in source
        assert "page.login('invaliduser', 'wrongpassword')" in source
        assert "cy.visit('https://example.com/login')" in source


class TestInvariants:
    """Properties that hold for any page."""

    @pytest.mark.parametrize(
        "fixture",
        ["login_html", "search_html", "registration_html", "mixed_html", "empty_html"],
    )
    def test_test_calls_exist_on_class(self, fixture: str, request: pytest.FixtureRequest) -> None:
        """Every page method a test calls is declared by the class."""
        result = generate(request.getfixturevalue(fixture), URL)

        called = set(PAGE_CALL.findall(result.test_source))
        assert called <= declared_methods(result.class_source)

    @pytest.mark.parametrize(
        "fixture",
        ["login_html", "search_html", "registration_html", "mixed_html"],
    )
    def test_locator_map_matches_identifiers(self, fixture: str, request: pytest.FixtureRequest) -> None:
        result = generate(request.getfixturevalue(fixture), URL)

        assert sorted(LOCATOR_ENTRY.findall(result.class_source)) == sorted(result.identifiers)

    def test_identifiers_unique(self) -> None:
        html = "".join('<button class="btn">OK</button><input name="q">' for _ in range(25))
        result = generate(html, URL)

        assert len(set(result.identifiers)) == 50

    def test_data_testid_beats_id(self) -> None:
        result = generate('<input data-testid="email" id="user-email">', URL)

        assert "cy.get('[data-testid=\"email\"]')" in result.class_source
        assert "#user-email" not in result.class_source

    def test_deterministic(self, registration_html: str) -> None:
        first = generate(registration_html, URL)
        second = generate(registration_html, URL)

        assert first.class_source == second.class_source
        assert first.test_source == second.test_source


class TestEdgeCases:
    """Degenerate inputs."""

    def test_zero_elements(self, empty_html: str) -> None:
        result = generate(empty_html, "https://example.com/static")

        assert result.elements == ()
        assert "#elements = {}" in result.class_source
        assert "navigateToHome() {" in result.class_source
        assert "verifyPageLoaded() {" in result.class_source
        assert "get " not in result.class_source

    def test_two_bare_buttons(self) -> None:
        result = generate("<button></button><button></button>", URL)
        first, second = result.elements

        assert (first.locator.index, second.locator.index) == (0, 1)
        assert first.identifier != second.identifier
        assert "cy.get('button').eq(0)" in result.class_source
        assert "cy.get('button').eq(1)" in result.class_source

    def test_empty_html_string(self) -> None:
        result = generate("", URL)

        assert result.elements == ()
        assert result.feature_name == "login"

    @pytest.mark.parametrize("url", ["", "not a url", "/login", "ftp://"])
    def test_malformed_url(self, url: str, login_html: str) -> None:
        with pytest.raises(MalformedUrlError):
            generate(login_html, url)


class TestOptions:
    """Caller options and configuration."""

    def test_page_object_name_override(self, login_html: str) -> None:
        result = generate(login_html, URL, page_object_name="Sign In")

        assert result.feature_name == "sign_in"
        assert result.class_name == "Sign_inPage"
        assert "from '../../pages/sign_in'" in result.test_source

    def test_instructions_do_not_change_output(self, login_html: str) -> None:
        plain = generate(login_html, URL)
        instructed = generate(login_html, URL, instructions="Focus on the error messages")

        assert plain.class_source == instructed.class_source
        assert plain.test_source == instructed.test_source

    def test_typescript(self, login_html: str) -> None:
        result = generate(login_html, URL, config=GeneratorConfig(language=Language.TS))

        assert result.page_file_name == "login.ts"
        assert result.test_file_name == "login.cy.ts"
        assert "login(username: string, password: string)" in result.class_source
        assert "let page: LoginPage" in result.test_source

    def test_class_suffix(self, login_html: str) -> None:
        result = generate(login_html, URL, config=GeneratorConfig(class_suffix="Screen"))

        assert result.class_name == "LoginScreen"

    def test_accepts_parsed_document(self, login_html: str) -> None:
        result = Generator().generate(Document.parse(login_html), URL)

        assert result.class_name == "LoginPage"

    def test_generator_reuse(self, login_html: str) -> None:
        """Identifier state does not carry over between runs."""
        generator = Generator()
        generator.generate(login_html, URL)
        result = generator.generate(login_html, URL)

        assert "inputUser" in result.identifiers
        assert "inputUser2" not in result.identifiers
