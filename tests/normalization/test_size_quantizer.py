"""Tests for pricecompare/normalization/size_quantizer.py"""

import pytest

from pricecompare.models import BaseUnit
from pricecompare.normalization.size_quantizer import STANDARD_SIZES, quantize_size


class TestQuantizeSize:
    def test_snaps_small_packaging_difference(self):
        assert quantize_size(0.48, BaseUnit.L) == 0.5

    def test_exact_standard_size(self):
        assert quantize_size(1.0, BaseUnit.L) == 1.0

    def test_far_from_any_standard_passes_through(self):
        # 0.40 kg: nearest 0.5 is 25% away, outside the 15% window
        assert quantize_size(0.40, BaseUnit.KG) == 0.40

    def test_kilogram_table(self):
        assert quantize_size(0.24, BaseUnit.KG) == 0.25
        assert quantize_size(2.4, BaseUnit.KG) == 2.5

    def test_liter_table_differs_from_kilogram_table(self):
        # 0.1 is standard for kg only
        assert quantize_size(0.1, BaseUnit.KG) == 0.1
        assert quantize_size(0.1, BaseUnit.L) == 0.1
        assert 0.1 not in STANDARD_SIZES[BaseUnit.L]

    def test_just_outside_window_passes_through(self):
        assert quantize_size(0.8, BaseUnit.L) == 0.8

    @pytest.mark.parametrize("quantity, unit", [(None, BaseUnit.L), (1.0, BaseUnit.NONE), (0, BaseUnit.KG)])
    def test_unresolved(self, quantity, unit):
        assert quantize_size(quantity, unit) is None
