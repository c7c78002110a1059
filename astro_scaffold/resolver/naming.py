"""Case conversion and file-name normalisation for generated artifacts.

Every converter shares one word splitter that understands three kinds of
boundary:

* explicit separators (``-``, ``_`` and whitespace),
* camel boundaries (a lowercase letter or digit followed by an uppercase
  letter, ``myComponent`` -> ``my``, ``Component``),
* acronym boundaries (an uppercase run followed by a capitalised word,
  ``XMLHttp`` -> ``XML``, ``Http``).

All functions are pure and idempotent, and map ``""`` to ``""``.
"""

from __future__ import annotations

import re

from .models import ArtifactIdentity

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_SEPARATORS = re.compile(r"[-_\s]+")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

_ILLEGAL_FILE_CHARS = re.compile(r"[<>:\"/\\|?*!@#$%^&()+={}\[\],`~]")
_WHITESPACE = re.compile(r"\s+")
_REPEATED_DASHES = re.compile(r"-{2,}")

_DYNAMIC_SEGMENT = re.compile(r"\[[^\[\]]+\]")
_ROUTE_PUNCTUATION = re.compile(r"[\[\].]+")
_NON_IDENTIFIER = re.compile(r"[^\w\s-]+")


# ---------------------------------------------------------------------------
# Word splitting
# ---------------------------------------------------------------------------


def split_words(value: str) -> list[str]:
    """Split *value* into words on separators, camel and acronym boundaries.

    Examples::

        split_words("my-component")    -> ["my", "component"]
        split_words("XMLHttpRequest")  -> ["XML", "Http", "Request"]
        split_words("Component123Test") -> ["Component123", "Test"]
    """
    if not value:
        return []
    marked = _ACRONYM_BOUNDARY.sub(r"\1 \2", value)
    marked = _CAMEL_BOUNDARY.sub(r"\1 \2", marked)
    return [word for word in _SEPARATORS.split(marked) if word]


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------


def to_pascal_case(value: str) -> str:
    """Convert to ``PascalCase``, keeping the inner casing of each word.

    Examples::

        to_pascal_case("my-component")   -> "MyComponent"
        to_pascal_case("XMLHttpRequest") -> "XMLHttpRequest"
        to_pascal_case("user_card list") -> "UserCardList"
    """
    return "".join(word[0].upper() + word[1:] for word in split_words(value))


def to_camel_case(value: str) -> str:
    """Convert to ``camelCase`` by lower-casing the first letter of the Pascal form."""
    pascal = to_pascal_case(value)
    if not pascal:
        return ""
    return pascal[0].lower() + pascal[1:]


def to_kebab_case(value: str) -> str:
    """Convert to ``kebab-case``.

    Examples::

        to_kebab_case("MyComponent")      -> "my-component"
        to_kebab_case("XMLHttpRequest")   -> "xml-http-request"
        to_kebab_case("-my--component-")  -> "my-component"
    """
    return "-".join(word.lower() for word in split_words(value))


def to_snake_case(value: str) -> str:
    """Convert to ``snake_case``."""
    return "_".join(word.lower() for word in split_words(value))


def to_spaced_words(value: str) -> str:
    """Return a human-readable label, e.g. ``"UserCard"`` -> ``"User Card"``."""
    return " ".join(word[0].upper() + word[1:] for word in split_words(value))


def to_title_case(value: str) -> str:
    """Return Title Case words, e.g. ``"my-blog_post"`` -> ``"My Blog Post"``."""
    return " ".join(word[0].upper() + word[1:].lower() for word in split_words(value))


# ---------------------------------------------------------------------------
# File names
# ---------------------------------------------------------------------------


def normalize_file_name(value: str) -> str:
    """Make *value* safe to use as a file name.

    Characters that are illegal or awkward in file names are removed,
    whitespace becomes ``-``, repeated dashes collapse and leading/trailing
    dashes are trimmed.  Dots and underscores are kept because multi-part
    names such as ``post.draft`` or ``my_file`` are meaningful.
    """
    result = _ILLEGAL_FILE_CHARS.sub("", value.strip())
    result = _WHITESPACE.sub("-", result)
    result = _REPEATED_DASHES.sub("-", result)
    return result.strip("-")


def is_dynamic_segment(segment: str) -> bool:
    """Return ``True`` for route parameter segments such as ``[slug]`` or ``[...path]``."""
    return bool(_DYNAMIC_SEGMENT.search(segment))


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


def build_identity(raw_name: str) -> ArtifactIdentity:
    """Derive the class, file and tag names for a single (leaf) artifact name.

    Characters that are illegal in file names are dropped from all three
    names, and any other punctuation (such as dots) separates words in the
    class and tag names.  Dynamic route segments keep their literal file
    name; their class and tag names come from the parameter inside the
    brackets.
    """
    raw = raw_name.strip()
    if is_dynamic_segment(raw):
        words = _ROUTE_PUNCTUATION.sub(" ", raw)
        return ArtifactIdentity(
            raw_name=raw,
            class_name=to_pascal_case(words),
            file_base_name=raw,
            tag_name=to_kebab_case(words),
        )
    cleaned = _ILLEGAL_FILE_CHARS.sub("", raw)
    words = _NON_IDENTIFIER.sub(" ", cleaned)
    return ArtifactIdentity(
        raw_name=raw,
        class_name=to_pascal_case(words),
        file_base_name=normalize_file_name(to_kebab_case(cleaned)),
        tag_name=to_kebab_case(words),
    )
