"""Tests for pricecompare/common/config_loader.py"""

import pytest

from pricecompare.common.config_loader import (
    get_brands_lowercase_map,
    load_categories,
    load_config,
    load_countries,
    load_known_brands,
    load_product_types,
    load_selectors,
)


class TestGetBrandsLowercaseMap:
    def test_builds_mapping(self, sample_known_brands):
        result = get_brands_lowercase_map(sample_known_brands)
        assert result["milbona"] == "Milbona"
        assert result["chef select"] == "Chef Select"

    def test_preserves_canonical_case(self, sample_known_brands):
        result = get_brands_lowercase_map(sample_known_brands)
        assert result["fin carré"] == "Fin Carré"

    def test_preserves_order(self, sample_known_brands):
        result = get_brands_lowercase_map(sample_known_brands)
        assert list(result.values()) == sample_known_brands

    def test_empty_brands(self):
        assert get_brands_lowercase_map([]) == {}


class TestLoadConfig:
    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent_file_xyz.yaml")


class TestLoadCountries:
    def test_four_storefronts(self):
        countries = load_countries()
        assert set(countries) == {"hr", "si", "at", "de"}

    def test_each_country_has_sitemap_and_fallback(self):
        for code, config in load_countries().items():
            assert config["host"].startswith("https://www.lidl."), code
            assert config["sitemap"].endswith(".xml.gz"), code
            assert len(config["fallback_paths"]) >= 1, code


class TestLoadProductTypes:
    def test_family_order(self):
        types = [family["type"] for family in load_product_types()]
        assert types == [
            "milk", "cheese", "yogurt", "butter", "water", "cola",
            "bread", "dessert", "juice", "beer", "candy",
        ]

    def test_every_family_has_four_languages(self):
        for family in load_product_types():
            assert len(family["keywords"]) >= 4, family["type"]


class TestLoadCategories:
    def test_category_names(self):
        names = [entry["category"] for entry in load_categories()]
        assert names == ["dairy", "bakery", "meat", "produce", "beverages", "sweets"]


class TestLoadKnownBrands:
    def test_returns_list_with_house_brands(self):
        brands = load_known_brands()
        assert isinstance(brands, list)
        assert "Milbona" in brands


class TestLoadSelectors:
    def test_has_all_field_lists(self):
        selectors = load_selectors()
        for key in ("name", "brand", "gtin", "price", "unit"):
            assert selectors[key], key
        assert "Lidl Plus" in selectors["loyalty"]["text"]
        assert "pfand" in selectors["deposit"]["keywords"]
