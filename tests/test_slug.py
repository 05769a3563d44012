"""Tests for transcollect.common.slug."""

import pytest

from transcollect.common.slug import DEFAULT_SLUG, slugify


@pytest.mark.parametrize(
    "text, expected",
    [
        ("app", "app"),
        ("resources/views", "resources-views"),
        ("App/Http/Controllers", "app-http-controllers"),
        ("tests\\translations", "tests-translations"),
        ("a  //  b", "a-b"),
        ("/leading/and/trailing/", "leading-and-trailing"),
        ("Vues/Écran", "vues-ecran"),
        ("v2.1_beta", "v2-1-beta"),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


@pytest.mark.parametrize("text", ["", "///", "日本語"])
def test_nothing_usable_gives_default(text):
    assert slugify(text) == DEFAULT_SLUG


def test_custom_separator():
    assert slugify("resources/views", separator="_") == "resources_views"
