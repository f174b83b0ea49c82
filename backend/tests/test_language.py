"""Tests for Accept-Language negotiation."""
from __future__ import annotations

import pytest

from backend.app.middleware.language import negotiate_language


@pytest.mark.parametrize(
    "header, expected",
    [
        ("", "en"),
        ("sw", "sw"),
        ("sw-KE,sw;q=0.9,en;q=0.8", "sw"),
        ("en;q=0.4, sw;q=0.7", "sw"),
        ("fr-FR, de;q=0.9", "en"),
        ("sw;q=0, en", "en"),
        ("en, sw", "en"),
        ("sw;q=abc", "en"),
    ],
)
def test_negotiate_language(header: str, expected: str) -> None:
    assert negotiate_language(header) == expected
