import pytest

from storefront.services.catalog import (
    average_rating,
    normalize_highlights,
    parse_specification,
    parse_specifications,
)


def test_average_rating():
    assert average_rating([]) == 0
    assert average_rating([5, 4, 3]) == pytest.approx(4.0)
    assert average_rating(r for r in (1.5, 2.5)) == pytest.approx(2.0)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"title": "Display", "description": "6.1 inch"}', {"title": "Display", "description": "6.1 inch"}),
        ({"title": "Weight", "description": "200g"}, {"title": "Weight", "description": "200g"}),
        ("Water resistant", {"title": "Specification", "description": "Water resistant"}),
        ("42", {"title": "Specification", "description": "42"}),
    ],
)
def test_parse_specification(raw, expected):
    assert parse_specification(raw) == expected


def test_parse_specifications_accepts_none():
    assert parse_specifications(None) == []


def test_highlights_default():
    assert normalize_highlights(None) == ["High quality product"]
    assert normalize_highlights(["", ""]) == ["High quality product"]
    assert normalize_highlights(["Fast"]) == ["Fast"]
