"""Shared test fixtures and builders."""

from tests.shared.fixtures.factories import (
    ACCESS_SECRET,
    REFRESH_SECRET,
    TEST_EMAIL,
    TEST_PASSWORD,
    TEST_USER_ID,
    make_author,
    make_book,
    make_codec,
    make_publisher,
    make_user,
)

__all__ = [
    "ACCESS_SECRET",
    "REFRESH_SECRET",
    "TEST_EMAIL",
    "TEST_PASSWORD",
    "TEST_USER_ID",
    "make_author",
    "make_book",
    "make_codec",
    "make_publisher",
    "make_user",
]
