import pytest

from app.utils.slugs import derive_slug


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Disaster Preparedness Plan", "disaster-preparedness-plan"),
        ("  Typhoon   Odette: Lessons!! ", "typhoon-odette-lessons"),
        ("Evacuation -- Centers", "evacuation-centers"),
        ("---", ""),
    ],
)
def test_derive_slug(title, expected):
    assert derive_slug(title) == expected


def test_derive_slug_hello_world():
    assert derive_slug("Hello, World!") == "hello-world"


@pytest.mark.parametrize(
    "title",
    [
        "Hello, World!",
        "Évacuation Center: Barangay Ñ",
        "tabs\tand\nnewlines",
        "  --Leading and trailing--  ",
        "100% Ready?! (2024)",
        "",
    ],
)
def test_derive_slug_is_idempotent(title):
    once = derive_slug(title)
    assert derive_slug(once) == once
