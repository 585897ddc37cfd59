"""
Tests for store slugs.
"""

import pytest

from plazoo_core.catalog.slugs import clean_slug, slugify


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Padaria São João", "padaria-sao-joao"),
        ("  Açaí & Cia!! ", "acai-cia"),
        ("Loja 123", "loja-123"),
        ("---", ""),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_clean_slug():
    assert clean_slug("Minha-Loja!") == "minha-loja"
    assert clean_slug("café") == "caf"
