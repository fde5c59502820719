"""ISBN normalization and checksum utilities."""

from __future__ import annotations


def normalize_isbn(value: str) -> str:
    """Remove hyphens and spaces and uppercase a trailing ``x``."""
    return value.strip().replace("-", "").replace(" ", "").upper()


def is_valid_isbn10(value: str) -> bool:
    """Check length, digits and the mod-11 checksum (``X`` = 10 in last place)."""
    if len(value) != 10 or not value[:9].isdigit():
        return False
    last = value[9]
    if not (last.isdigit() or last == "X"):
        return False

    digits = [int(c) for c in value[:9]] + [10 if last == "X" else int(last)]
    total = sum((10 - i) * d for i, d in enumerate(digits))
    return total % 11 == 0


def is_valid_isbn13(value: str) -> bool:
    """Check length, digits and the alternating 1/3 weighted mod-10 checksum."""
    if len(value) != 13 or not value.isdigit():
        return False

    total = sum((3 if i % 2 else 1) * int(c) for i, c in enumerate(value))
    return total % 10 == 0
