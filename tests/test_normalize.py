"""
Tests for normalize.py - string standardization and address splitting.
"""

import pytest

from dpelink.normalize import (
    extract_city,
    extract_street,
    normalize_text,
    split_address,
    standardize_string,
)


class TestStandardizeString:
    """Test canonicalization of free text."""

    def test_accents_and_hyphens(self):
        """Accented, hyphenated names compare equal to their plain form."""
        assert standardize_string("Évian-les-Bains") == standardize_string("evian les bains")
        assert standardize_string("Évian-les-Bains") == "evian les bains"

    def test_apostrophes_and_underscores_become_spaces(self):
        assert standardize_string("Rue de l'Église") == "rue de l eglise"
        assert standardize_string("saint_pierre") == "saint pierre"

    def test_punctuation_removed(self):
        assert standardize_string("12, Av. Foch (Bât. B)!") == "12 av foch bat b"

    def test_whitespace_collapsed(self):
        assert standardize_string("  rue   de \t la  paix  ") == "rue de la paix"

    def test_cedilla(self):
        assert standardize_string("Besançon") == "besancon"

    @pytest.mark.parametrize("value", [None, "", "   ", "!!!"])
    def test_empty_inputs(self, value):
        assert standardize_string(value) == ""

    @pytest.mark.parametrize("value", [
        "Évian-les-Bains",
        "9 Rue de la Paix",
        "L'Haÿ-les-Roses",
        "  SAINT___Étienne  ",
    ])
    def test_idempotent(self, value):
        once = standardize_string(value)
        assert standardize_string(once) == once

    def test_normalize_text(self):
        assert normalize_text("  Rue  De LA Paix ") == "rue de la paix"


class TestAddressTokens:
    """Test street/city extraction around the zip code."""

    def test_street_and_city(self):
        address = "9 Rue de la Paix 75001 Paris"
        assert extract_street(address, "75001") == "9 Rue de la Paix"
        assert extract_city(address, "75001") == "Paris"

    def test_zip_not_found(self):
        assert split_address("9 Rue de la Paix Paris", "75001") == (None, None)

    def test_missing_inputs(self):
        assert split_address(None, "75001") == (None, None)
        assert split_address("9 Rue de la Paix 75001 Paris", "") == (None, None)

    def test_empty_segments_are_none(self):
        """No text before/after the zip code means no signal, not ''."""
        assert extract_street("75001 Paris", "75001") is None
        assert extract_city("9 Rue de la Paix 75001", "75001") is None
        assert extract_city("9 Rue de la Paix 75001   ", "75001") is None

    def test_first_occurrence_is_the_anchor(self):
        street, city = split_address("75001 Rue 75001 Paris", "75001")
        assert street is None
        assert city == "Rue 75001 Paris"

    def test_segments_are_trimmed_not_standardized(self):
        street, city = split_address("  12 Av. Foch   69006  Lyon ", "69006")
        assert street == "12 Av. Foch"
        assert city == "Lyon"
