"""
Tests for Cypress workspace detection and file writing.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cypressgen.config import GeneratorConfig, Language
from cypressgen.exceptions import WorkspaceNotFoundError
from cypressgen.generator import generate
from cypressgen.models import GenerationResult
from cypressgen.workspace import CypressWorkspace, has_cypress_dependency

URL = "https://example.com/login"


@pytest.fixture
def result(login_html: str) -> GenerationResult:
    return generate(login_html, URL)


class TestDetect:
    """Test walking up to the project root."""

    def test_config_file(self, cypress_project: Path) -> None:
        workspace = CypressWorkspace.detect(cypress_project)

        assert workspace.root == cypress_project.resolve()

    def test_from_nested_directory(self, cypress_project: Path) -> None:
        nested = cypress_project / "src" / "components"
        nested.mkdir(parents=True)

        assert CypressWorkspace.detect(nested).root == cypress_project.resolve()

    def test_typescript_config(self, temp_dir: Path) -> None:
        (temp_dir / "cypress.config.ts").write_text("export default {}\n")

        assert CypressWorkspace.detect(temp_dir).root == temp_dir.resolve()

    def test_package_json_dependency(self, temp_dir: Path) -> None:
        (temp_dir / "package.json").write_text(
            json.dumps({"dependencies": {"@cypress/react": "^8.0.0"}})
        )

        assert CypressWorkspace.detect(temp_dir).root == temp_dir.resolve()

    def test_not_found(self, temp_dir: Path) -> None:
        (temp_dir / "package.json").write_text(json.dumps({"devDependencies": {"jest": "^29"}}))

        with pytest.raises(WorkspaceNotFoundError):
            CypressWorkspace.detect(temp_dir)

    def test_has_cypress_dependency_tolerates_bad_json(self, temp_dir: Path) -> None:
        package_json = temp_dir / "package.json"
        package_json.write_text("{not json")

        assert not has_cypress_dependency(package_json)


class TestWrite:
    """Test writing generated files."""

    def test_ensure_structure(self, cypress_project: Path) -> None:
        CypressWorkspace(cypress_project).ensure_structure()

        for directory in ("pages", "e2e/tests", "support", "fixtures"):
            assert (cypress_project / "cypress" / directory).is_dir()

    def test_write_page_object(self, cypress_project: Path, result: GenerationResult) -> None:
        workspace = CypressWorkspace(cypress_project)
        path = workspace.write_page_object(result)

        assert path == workspace.pages_dir / "login.js"
        assert path.read_text() == result.class_source

    def test_write_test_file(self, cypress_project: Path, result: GenerationResult) -> None:
        workspace = CypressWorkspace(cypress_project)
        path = workspace.write_test_file(result)

        assert path == cypress_project.resolve() / "cypress" / "e2e" / "tests" / "login.cy.js"
        assert path.read_text() == result.test_source

    def test_existing_files_backed_up(self, cypress_project: Path, result: GenerationResult) -> None:
        workspace = CypressWorkspace(cypress_project)
        workspace.ensure_structure()
        (workspace.pages_dir / "login.js").write_text("// hand edited\n")
        (workspace.tests_dir / "login.cy.js").write_text("// hand edited test\n")

        workspace.write_page_object(result)
        workspace.write_test_file(result)

        (page_backup,) = workspace.pages_dir.glob("login.backup.*.js")
        (test_backup,) = workspace.tests_dir.glob("login.backup.*.cy.js")
        assert page_backup.read_text() == "// hand edited\n"
        assert test_backup.read_text() == "// hand edited test\n"
        assert (workspace.pages_dir / "login.js").read_text() == result.class_source

    def test_no_backup_for_new_files(self, cypress_project: Path, result: GenerationResult) -> None:
        workspace = CypressWorkspace(cypress_project)
        workspace.write_page_object(result)

        assert list(workspace.pages_dir.glob("*.backup.*")) == []


class TestIndexFile:
    """Test the pages barrel."""

    def test_exports_each_page_class(
        self, cypress_project: Path, login_html: str, search_html: str
    ) -> None:
        workspace = CypressWorkspace(cypress_project)
        workspace.write_page_object(generate(login_html, URL))
        workspace.write_page_object(generate(search_html, "https://example.com/"))

        path = workspace.write_index_file()

        assert path.name == "index.js"
        assert path.read_text() == (
            "// Auto-generated index file for page objects\n"
            "export { CatalogPage } from './catalog'\n"
            "export { LoginPage } from './login'\n"
        )

    def test_backups_and_other_languages_excluded(
        self, cypress_project: Path, login_html: str
    ) -> None:
        workspace = CypressWorkspace(cypress_project)
        result = generate(login_html, URL)
        workspace.write_page_object(result)
        workspace.write_page_object(result)
        (workspace.pages_dir / "legacy.ts").write_text("export class LegacyPage {}\n")

        source = workspace.write_index_file(Language.JS).read_text()

        assert source.count("export {") == 1
        assert "backup" not in source
        assert "LegacyPage" not in source

    def test_typescript_index(self, cypress_project: Path, login_html: str) -> None:
        workspace = CypressWorkspace(cypress_project)
        result = generate(login_html, URL, config=GeneratorConfig(language=Language.TS))
        workspace.write_page_object(result)

        path = workspace.write_index_file("ts")

        assert path.name == "index.ts"
        assert "export { LoginPage } from './login'" in path.read_text()

    def test_page_named_index_survives_barrel(self, cypress_project: Path) -> None:
        workspace = CypressWorkspace(cypress_project)
        result = generate("<h1>Index</h1><button id='go'>Go</button>", "https://example.com/")
        page_path = workspace.write_page_object(result)

        index_path = workspace.write_index_file()

        assert page_path.name == "index_page.js"
        assert page_path != index_path
        assert page_path.read_text().startswith("export class Index_pagePage {")
        assert "export { Index_pagePage } from './index_page'" in index_path.read_text()

    def test_empty_pages_dir(self, cypress_project: Path) -> None:
        path = CypressWorkspace(cypress_project).write_index_file()

        assert path.read_text() == "// Auto-generated index file for page objects\n"
