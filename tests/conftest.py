"""Pytest fixtures for cypressgen tests."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Generator

import pytest
import structlog

from cypressgen.document import Document
from cypressgen.extraction.classifier import classify
from cypressgen.models import ElementRecord


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo CLI logging configuration so later tests don't write to a closed stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test artifacts."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def cypress_project(temp_dir: Path) -> Path:
    """A minimal Cypress project root with a JS config file."""
    (temp_dir / "cypress.config.js").write_text(
        "const { defineConfig } = require('cypress')\nmodule.exports = defineConfig({})\n"
    )
    (temp_dir / "package.json").write_text(
        json.dumps({"name": "web", "devDependencies": {"cypress": "^13.0.0"}})
    )
    return temp_dir


@pytest.fixture
def login_html() -> str:
    """Login page with a test-id'd username field, password field and submit."""
    return """
<html>
  <head><title>Login</title></head>
  <body>
    <a href="/">Home</a>
    <form>
      <input data-testid="user" type="text" name="username">
      <input type="password" id="password" name="password">
      <button type="submit">Log in</button>
    </form>
  </body>
</html>
"""


@pytest.fixture
def search_html() -> str:
    """Header search box outside of any login form."""
    return """
<html>
  <head><title>Catalog</title></head>
  <body>
    <form action="/search" role="search">
      <input type="search" name="q" placeholder="Search products">
      <button id="search-btn">Go</button>
    </form>
  </body>
</html>
"""


@pytest.fixture
def registration_html() -> str:
    """Sign-up form with user, email and password fields."""
    return """
<html>
  <head><title>Join us</title></head>
  <body>
    <form name="signup">
      <h2>Create account</h2>
      <input id="username" name="username" placeholder="Username">
      <input type="email" id="email" name="email">
      <input type="password" id="new-password" name="password">
      <input type="checkbox" id="terms" name="terms">
      <select name="country">
        <option value="us">United States</option>
        <option value="ca">Canada</option>
      </select>
      <button type="submit" class="btn btn-primary">Register</button>
    </form>
  </body>
</html>
"""


@pytest.fixture
def mixed_html() -> str:
    """Page with every category and no forms."""
    return """
<html>
  <head><title>Settings</title></head>
  <body>
    <button data-cy="save">Save</button>
    <button></button>
    <input type="checkbox" name="notify">
    <a href="/docs">Docs</a>
    <select id="theme"></select>
    <textarea name="bio"></textarea>
  </body>
</html>
"""


@pytest.fixture
def empty_html() -> str:
    """Document with no interactive elements."""
    return "<html><head><title>Static</title></head><body><p>Nothing to click.</p></body></html>"


@pytest.fixture
def login_elements(login_html: str) -> tuple[ElementRecord, ...]:
    """Classified records of the login page."""
    return classify(Document.parse(login_html))
