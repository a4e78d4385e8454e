"""
Shared validation functions for note schemas and draft state.

Client-side checks only. The server remains the authority on what it accepts.
"""


def is_blank(value: str | None) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def check_title_not_empty(title: str | None) -> str:
    """
    Validate a note title.

    Raises:
        ValueError: If the title is empty or whitespace-only.
    """
    if is_blank(title):
        raise ValueError("Title is required")
    return title


def normalize_tag(text: str) -> str | None:
    """Trim a tag. Returns None for empty or whitespace-only input."""
    trimmed = text.strip()
    return trimmed or None


def dedupe_tags(tags: list[str]) -> list[str]:
    """
    Trim tags, drop blanks and exact duplicates, preserving first occurrence order.

    Comparison is case-sensitive: 'Work' and 'work' are different tags.
    """
    result: list[str] = []
    seen: set[str] = set()
    for tag in tags:
        normalized = normalize_tag(tag)
        if normalized is None or normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)
    return result
