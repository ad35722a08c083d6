"""
Keyword heuristics used to infer intent from markup.

All vocabularies the engine matches against live here so they can be
reviewed and tested in one place. Matching is substring based and
case-insensitive; callers pass lower-cased hint strings.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from cypressgen.models import ElementCategory, ElementRecord, InteractionKind

LOGIN_INDICATORS: frozenset[str] = frozenset({
    "login",
    "log in",
    "log-in",
    "log_in",
    "signin",
    "sign in",
    "sign-in",
    "sign_in",
    "authenticate",
})

USERNAME_INDICATORS: frozenset[str] = frozenset({
    "username",
    "user",
    "email",
    "login",
    "userid",
    "user_id",
    "user-id",
    "account",
})

PASSWORD_INDICATORS: frozenset[str] = frozenset({
    "password",
    "passwd",
    "pass",
    "pwd",
})

# Phrases in a form's visible text that mark it as a registration form
REGISTRATION_PHRASES: tuple[str, ...] = ("register", "signup", "create account", "sign up")

REGISTRATION_SUBMIT_INDICATORS: frozenset[str] = frozenset({
    "register",
    "signup",
    "sign up",
    "sign-up",
    "create account",
    "join",
})

SEARCH_INDICATORS: frozenset[str] = frozenset({"search", "query"})

# Field names that mark a search box even without "search" in them
SEARCH_FIELD_NAMES: frozenset[str] = frozenset({"q", "s", "query", "search"})

HOME_INDICATORS: frozenset[str] = frozenset({"home", "logo"})

USER_FIELD_INDICATORS: frozenset[str] = frozenset({"username", "user", "name", "login"})

EMAIL_INDICATORS: frozenset[str] = frozenset({"email", "e-mail", "mail"})

# Keywords scanned against URL path segments, then the hostname, when
# inferring a feature name. Order matters: first match wins.
FEATURE_KEYWORDS: tuple[str, ...] = (
    "login",
    "register",
    "signup",
    "signin",
    "user",
    "profile",
    "dashboard",
    "settings",
    "admin",
    "account",
    "reset",
    "forgot",
    "password",
    "contact",
    "about",
    "home",
)


def contains_any(text: str, vocabulary: Iterable[str]) -> bool:
    """Check whether any vocabulary entry occurs in text."""
    text = text.lower()
    return any(word in text for word in vocabulary)


def is_password_field(record: ElementRecord) -> bool:
    """Password-typed inputs, or free-text inputs named like a password."""
    if record.category != ElementCategory.INPUT:
        return False
    if record.subtype == "password":
        return True
    return (
        record.interaction == InteractionKind.TEXT
        and record.name is not None
        and "password" in record.name.lower()
    )


def is_registration_text(text: str) -> bool:
    """Check visible form text for registration phrases."""
    return contains_any(text, REGISTRATION_PHRASES)


def is_search_input(input_type: str | None, placeholder: str | None) -> bool:
    """Document-level search detection on raw input attributes."""
    if (input_type or "").lower() == "search":
        return True
    return "search" in (placeholder or "").lower()


def is_search_field(record: ElementRecord) -> bool:
    """Search detection on a classified free-text input."""
    if record.category != ElementCategory.INPUT or record.interaction != InteractionKind.TEXT:
        return False
    if record.subtype == "search":
        return True
    if record.name and record.name.lower() in SEARCH_FIELD_NAMES:
        return True
    return contains_any(record.hints, SEARCH_INDICATORS)


def is_text_field(record: ElementRecord) -> bool:
    return record.interaction == InteractionKind.TEXT


def is_username_candidate(record: ElementRecord) -> bool:
    """Free-text, non-password input whose hints look like a username."""
    if record.category != ElementCategory.INPUT or not is_text_field(record):
        return False
    if is_password_field(record):
        return False
    return record.subtype == "email" or contains_any(record.hints, USERNAME_INDICATORS)


def is_email_field(record: ElementRecord) -> bool:
    if record.category != ElementCategory.INPUT or not is_text_field(record):
        return False
    return record.subtype == "email" or contains_any(record.hints, EMAIL_INDICATORS)


def is_user_field(record: ElementRecord) -> bool:
    """Registration user/name field; email fields are handled separately."""
    if record.category != ElementCategory.INPUT or not is_text_field(record):
        return False
    if is_password_field(record) or is_email_field(record):
        return False
    return contains_any(record.hints, USER_FIELD_INDICATORS)


def is_clickable(record: ElementRecord) -> bool:
    return record.interaction == InteractionKind.CLICK and record.category != ElementCategory.LINK


def is_home_link(record: ElementRecord, href: str | None = None) -> bool:
    if record.category != ElementCategory.LINK:
        return False
    if href == "/":
        return True
    return contains_any(record.hints, HOME_INDICATORS)


def first_match(
    records: Iterable[ElementRecord],
    *predicates: Callable[[ElementRecord], bool],
) -> ElementRecord | None:
    """Return the first record satisfying the earliest predicate that matches any."""
    records = list(records)
    for predicate in predicates:
        for record in records:
            if predicate(record):
                return record
    return None


def sample_value(record: ElementRecord) -> str:
    """
    Generate realistic sample input for a field based on type and context.

    Uses the element's subtype first, then its name/id/placeholder hints.
    """
    context = record.hints
    subtype = record.subtype

    if record.category == ElementCategory.TEXTAREA:
        if contains_any(context, ("message", "content", "body", "description")):
            return "This is a test message with some content for testing purposes."
        if contains_any(context, ("comment", "note")):
            return "Test comment or note."
        if contains_any(context, ("bio", "about")):
            return "This is a test biography or about section."
        return "Test textarea content"

    if is_password_field(record):
        return "TestPassword123!"
    if subtype == "email":
        return "test@example.com"
    if subtype == "number" or subtype == "range":
        if contains_any(context, ("age", "years")):
            return "25"
        if contains_any(context, ("quantity", "qty", "count")):
            return "1"
        if contains_any(context, ("price", "amount", "cost")):
            return "99.99"
        return "42"
    if subtype == "tel":
        return "555-123-4567"
    if subtype == "url":
        return "https://example.com"
    if subtype == "date":
        return "2024-01-15"
    if subtype == "time":
        return "10:30"
    if subtype == "datetime-local":
        return "2024-01-15T10:30"
    if subtype == "month":
        return "2024-01"
    if subtype == "week":
        return "2024-W03"
    if subtype == "color":
        return "#10b981"
    if subtype == "search" or is_search_field(record):
        return "test search"
    if contains_any(context, EMAIL_INDICATORS):
        return "test@example.com"

    # Name fields
    if contains_any(context, ("first", "given", "fname")):
        return "John"
    if contains_any(context, ("last", "surname", "family", "lname")):
        return "Doe"
    if contains_any(context, ("username", "user")):
        return "testuser"
    if contains_any(context, ("full name", "fullname", "name")):
        return "John Doe"

    # Address fields
    if contains_any(context, ("address", "street")):
        return "123 Main Street"
    if contains_any(context, ("city",)):
        return "New York"
    if contains_any(context, ("zip", "postal", "postcode")):
        return "10001"
    if contains_any(context, ("country",)):
        return "United States"
    if contains_any(context, ("company", "organization")):
        return "Test Company Inc."
    if contains_any(context, ("title", "subject")):
        return "Test Title"

    return "test input"
