"""Tests for pricecompare/extraction/brand_matcher.py"""

import pytest

from pricecompare.extraction.brand_matcher import BrandMatcher


@pytest.fixture
def matcher(sample_known_brands):
    """Create a BrandMatcher with test brands (no config I/O)."""
    return BrandMatcher(brands=sample_known_brands)


class TestMatch:
    def test_structured_brand_priority(self, matcher):
        result = matcher.match(
            name="Milbona Mlijeko 1 l",
            structured_brand="StructuredBrand",
            dom_brand="DomBrand",
        )
        assert result == ("StructuredBrand", "structured")

    def test_dom_brand_second_priority(self, matcher):
        result = matcher.match(
            name="Milbona Mlijeko 1 l",
            structured_brand="  ",
            dom_brand="DomBrand",
        )
        assert result == ("DomBrand", "dom")

    def test_vocabulary_fallback(self, matcher):
        result = matcher.match(name="Frische Milch MILBONA 1 l")
        assert result == ("Milbona", "vocabulary")

    def test_no_match(self, matcher):
        assert matcher.match(name="Unbranded Water") == ("", "")


class TestMatchFromName:
    def test_first_vocabulary_entry_wins(self, matcher):
        # "Bio" is listed after "Milbona"
        assert matcher.match_from_name("Milbona Bio Mlijeko") == "Milbona"

    def test_substring_anywhere(self, matcher):
        assert matcher.match_from_name("Juha od rajčice Chef Select") == "Chef Select"

    def test_empty_name(self, matcher):
        assert matcher.match_from_name("") == ""


class TestWholeWordMatching:
    def test_brand_inside_a_word_is_ignored(self, matcher):
        assert matcher.match_from_name("Biorazgradive vrećice") == ""
        assert matcher.match_from_name("Pilosophy shampoo") == ""

    def test_brand_next_to_punctuation(self, matcher):
        assert matcher.match_from_name("Mlijeko (Milbona), 1 l") == "Milbona"
        assert matcher.match_from_name("Fin Carré: čokolada") == "Fin Carré"

    def test_configured_vocabulary(self):
        matcher = BrandMatcher()
        assert matcher.match_from_name("Tower kuhinjska vaga") == "Tower"
        assert matcher.match_from_name("Powertower stalak") == ""
        assert matcher.match_from_name("Bio jogurt 150 g") == ""
