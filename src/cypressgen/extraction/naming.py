"""
Feature and class naming.

Infers the short feature name that titles the generated class and files,
and validates the source URL whose host the generated page object checks.
"""

from __future__ import annotations

import re
from urllib.parse import SplitResult, urlsplit

from cypressgen.document import Document
from cypressgen.exceptions import MalformedUrlError
from cypressgen.extraction.heuristics import FEATURE_KEYWORDS

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

DEFAULT_FEATURE_NAME = "page"
DEFAULT_CLASS_SUFFIX = "Page"

# Stems taken by generated support files, e.g. the cypress/pages/index barrel
RESERVED_FEATURE_NAMES: frozenset[str] = frozenset({"index"})


def parse_source_url(url: str) -> SplitResult:
    """
    Parse an absolute URL.

    Raises:
        MalformedUrlError: If the URL cannot be parsed or has no scheme/host
    """
    if not url or not url.strip():
        raise MalformedUrlError(url, "URL is empty")
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError as e:
        raise MalformedUrlError(url, str(e)) from e
    if not parts.scheme:
        raise MalformedUrlError(url, "URL has no scheme")
    if not hostname:
        raise MalformedUrlError(url, "URL has no host")
    return parts


def host_of(url: str) -> str:
    """Hostname of an absolute URL."""
    return parse_source_url(url).hostname or ""


def sanitize_feature_name(name: str) -> str:
    """Lower-snake-case a name; returns "" when nothing usable remains."""
    return _NON_ALNUM.sub("_", name.lower()).strip("_")


def _finalize(name: str) -> str:
    # Class names cannot start with a digit
    if name[0].isdigit():
        return f"{DEFAULT_FEATURE_NAME}_{name}"
    if name in RESERVED_FEATURE_NAMES:
        return f"{name}_{DEFAULT_FEATURE_NAME}"
    return name


def infer_feature_name(document: Document, url: str) -> str:
    """
    Infer a feature name from the document and URL.

    Sources in priority order: form name/id, form legend, first h1, first h2,
    document title, a keyword found in the URL path then hostname, the first
    path segment, and finally "page".
    """
    parts = parse_source_url(url)

    form = document.find_first("form")
    legend = document.find_first("form legend")
    h1 = document.find_first("h1")
    h2 = document.find_first("h2")
    candidates = [
        form.attr("name") if form else None,
        form.attr("id") if form else None,
        legend.text if legend else None,
        h1.text if h1 else None,
        h2.text if h2 else None,
        document.title,
    ]
    for candidate in candidates:
        name = sanitize_feature_name(candidate or "")
        if name:
            return _finalize(name)

    path_parts = [p for p in parts.path.split("/") if p]
    for part in path_parts:
        for keyword in FEATURE_KEYWORDS:
            if keyword in part.lower():
                return keyword
    hostname = (parts.hostname or "").lower()
    for keyword in FEATURE_KEYWORDS:
        if keyword in hostname:
            return keyword

    if path_parts:
        name = sanitize_feature_name(path_parts[0])
        if name:
            return _finalize(name)
    return DEFAULT_FEATURE_NAME


def resolve_feature_name(document: Document, url: str, override: str | None = None) -> str:
    """Use the caller's override when it sanitizes to something, else infer."""
    if override:
        name = sanitize_feature_name(override)
        if name:
            return _finalize(name)
    return infer_feature_name(document, url)


def to_class_name(feature_name: str, suffix: str = DEFAULT_CLASS_SUFFIX) -> str:
    """Capitalize the feature name and append the class suffix."""
    return feature_name[:1].upper() + feature_name[1:] + suffix
