"""Tests for pricecompare/normalization/match_key.py"""

import hashlib

from pricecompare.models import BaseUnit, MatchTier, UnitBase
from pricecompare.normalization.match_key import build_match_key, fallback_key, format_size

ONE_LITER = UnitBase(1.0, BaseUnit.L)


class TestFormatSize:
    def test_compact(self):
        assert format_size(1.0) == "1"
        assert format_size(0.5) == "0.5"
        assert format_size(0.33) == "0.33"
        assert format_size(2.5) == "2.5"


class TestCascade:
    def test_semantic(self, classifier):
        key = build_match_key("Milbona Mlijeko 3,5%", "Milbona", None, ONE_LITER, classifier)
        assert key.key == "type-milbona-milk-1l"
        assert key.tier is MatchTier.SEMANTIC

    def test_semantic_uses_quantized_size(self, classifier):
        key = build_match_key("Milbona Mlijeko", "Milbona", None, UnitBase(0.48, BaseUnit.L), classifier)
        assert key.key == "type-milbona-milk-0.5l"

    def test_semantic_without_size(self, classifier):
        key = build_match_key("Milbona Mlijeko", "Milbona", None, UnitBase(), classifier)
        assert key.key == "type-milbona-milk"
        assert key.tier is MatchTier.SEMANTIC_NO_SIZE

    def test_semantic_outranks_gtin(self, classifier):
        key = build_match_key("Milbona Mlijeko", "Milbona", "4056489001234", ONE_LITER, classifier)
        assert key.tier is MatchTier.SEMANTIC

    def test_identifier_when_type_unknown(self, classifier):
        key = build_match_key("Milbona Batteries", "Milbona", "4056489001234", ONE_LITER, classifier)
        assert key.key == "gtin-4056489001234"
        assert key.tier is MatchTier.IDENTIFIER

    def test_identifier_when_brand_missing(self, classifier):
        key = build_match_key("Mlijeko", None, "4056489001234", ONE_LITER, classifier)
        assert key.tier is MatchTier.IDENTIFIER

    def test_brand_size_category(self, classifier):
        key = build_match_key("Solevita Orangensaft", "Solevita", None, ONE_LITER, classifier)
        assert key.key == "brand-solevita-1l-beverages"
        assert key.tier is MatchTier.BRAND_SIZE_CATEGORY

    def test_brand_category(self, classifier):
        key = build_match_key("Solevita Orangensaft", "Solevita", None, UnitBase(), classifier)
        assert key.key == "brand-solevita-beverages"
        assert key.tier is MatchTier.BRAND_CATEGORY

    def test_brand_with_other_category(self, classifier):
        key = build_match_key("Parkside Drill", "Parkside", None, UnitBase(), classifier)
        assert key.key == "brand-parkside-other"
        assert key.tier is MatchTier.BRAND_CATEGORY

    def test_fallback_hash_of_trimmed_name(self, classifier):
        key = build_match_key("  Mystery Snack  ", None, None, UnitBase(), classifier)
        assert key.key == hashlib.sha1(b"Mystery Snack").hexdigest()
        assert key.tier is MatchTier.FALLBACK

    def test_brand_spelling_variants_share_key(self, classifier):
        a = build_match_key("Chef Select Mlijeko", "Chef Select™", None, ONE_LITER, classifier)
        b = build_match_key("Chef Select Milch", "chef select", None, ONE_LITER, classifier)
        assert a.key == b.key == "type-chefselect-milk-1l"


class TestFallbackKey:
    def test_stable(self):
        assert fallback_key("Snack") == fallback_key(" Snack ")

    def test_missing_name(self):
        assert fallback_key(None) == hashlib.sha1(b"").hexdigest()
