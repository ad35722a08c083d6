"""
Cypress workspace handling.

Locates the Cypress project a page object belongs to, lays out its
directories and writes generated sources, keeping a timestamped backup of any
file it replaces.

Layout:
    cypress/pages/<feature>.<ext>          page objects
    cypress/pages/index.<ext>              barrel re-exporting every page object
    cypress/e2e/tests/<feature>.cy.<ext>   test suites
"""

from __future__ import annotations

import json
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path

import structlog

from cypressgen.config import Language
from cypressgen.exceptions import WorkspaceNotFoundError
from cypressgen.models import GenerationResult
from cypressgen.synthesis.cypress import CypressRenderer

logger = structlog.get_logger(__name__)

CONFIG_FILES: tuple[str, ...] = (
    "cypress.config.js",
    "cypress.config.ts",
    "cypress.config.mjs",
    "cypress.config.cjs",
)
CYPRESS_PACKAGES: frozenset[str] = frozenset({"cypress", "@cypress/react"})
DEPENDENCY_SECTIONS: tuple[str, ...] = ("dependencies", "devDependencies")

PAGES_DIR = Path("cypress", "pages")
TESTS_DIR = Path("cypress", "e2e", "tests")
DIRECTORIES: tuple[Path, ...] = (
    Path("cypress"),
    PAGES_DIR,
    Path("cypress", "e2e"),
    TESTS_DIR,
    Path("cypress", "support"),
    Path("cypress", "fixtures"),
)

INDEX_STEM = "index"
BACKUP_MARKER = ".backup."
EXPORTED_CLASS = re.compile(r"^export\s+class\s+([A-Za-z_$][\w$]*)", re.MULTILINE)


def backup_timestamp() -> str:
    """UTC timestamp safe for file names, e.g. 2024-05-01T12-30-00-123456Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")


def has_cypress_dependency(package_json: Path) -> bool:
    """Whether a package.json lists Cypress as a (dev) dependency."""
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug("Skipping unreadable package.json", path=str(package_json), error=str(e))
        return False
    if not isinstance(data, dict):
        return False
    for section in DEPENDENCY_SECTIONS:
        dependencies = data.get(section)
        if isinstance(dependencies, dict) and CYPRESS_PACKAGES & dependencies.keys():
            return True
    return False


def is_cypress_root(path: Path) -> bool:
    if any((path / name).is_file() for name in CONFIG_FILES):
        return True
    package_json = path / "package.json"
    return package_json.is_file() and has_cypress_dependency(package_json)


class CypressWorkspace:
    """A Cypress project on disk."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()
        self._log = logger.bind(component="workspace", root=str(self.root))

    @classmethod
    def detect(cls, start_path: str | Path | None = None) -> CypressWorkspace:
        """
        Walk up from ``start_path`` (default: the current directory) to the
        first directory holding a Cypress config file or a package.json with
        a Cypress dependency.

        Raises:
            WorkspaceNotFoundError: If no such directory exists
        """
        start = Path(start_path or Path.cwd()).resolve()
        for candidate in (start, *start.parents):
            if is_cypress_root(candidate):
                logger.info("Cypress workspace detected", root=str(candidate))
                return cls(candidate)
        raise WorkspaceNotFoundError(
            f"No Cypress project found at or above {start}. Expected a "
            "cypress.config.js/ts file or a package.json with Cypress as a dependency."
        )

    @property
    def pages_dir(self) -> Path:
        return self.root / PAGES_DIR

    @property
    def tests_dir(self) -> Path:
        return self.root / TESTS_DIR

    def ensure_structure(self) -> None:
        """Create the cypress/ directory layout if any part is missing."""
        for directory in DIRECTORIES:
            (self.root / directory).mkdir(parents=True, exist_ok=True)

    def write_page_object(self, result: GenerationResult) -> Path:
        path = self.pages_dir / result.page_file_name
        backup = self.pages_dir / f"{result.feature_name}{BACKUP_MARKER}{backup_timestamp()}.{result.language}"
        return self._write(path, result.class_source, backup)

    def write_test_file(self, result: GenerationResult) -> Path:
        path = self.tests_dir / result.test_file_name
        backup = self.tests_dir / f"{result.feature_name}{BACKUP_MARKER}{backup_timestamp()}.cy.{result.language}"
        return self._write(path, result.test_source, backup)

    def write_index_file(self, language: Language | str = Language.JS) -> Path:
        """
        Rewrite the pages barrel from the page files currently on disk.

        Each page file contributes the classes it exports; backups and the
        index itself are skipped.
        """
        language = Language(language)
        exports: list[tuple[str, str]] = []
        for page_file in sorted(self.pages_dir.glob(f"*.{language.value}")):
            if page_file.stem == INDEX_STEM or BACKUP_MARKER in page_file.name:
                continue
            source = page_file.read_text(encoding="utf-8")
            exports.extend((name, page_file.stem) for name in EXPORTED_CLASS.findall(source))

        path = self.pages_dir / f"{INDEX_STEM}.{language.value}"
        self.pages_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(CypressRenderer(language).render_index(exports), encoding="utf-8")
        self._log.info("Index file written", path=str(path), exports=len(exports))
        return path

    def _write(self, path: Path, content: str, backup: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.exists():
            shutil.copy2(path, backup)
            self._log.info("Existing file backed up", path=str(path), backup=str(backup))
        path.write_text(content, encoding="utf-8")
        self._log.info("File written", path=str(path))
        return path
