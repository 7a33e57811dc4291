"""
Normalization of raw listings into match-keyed records.

Modules:
    unit_normalizer - Parse free-text package sizes into canonical units
    classifier      - Standard brand, product type and category tags
    size_quantizer  - Snap sizes to standard package sizes within tolerance
    match_key       - Tiered match key cascade
    normalizer      - RawListing -> NormalizedRecord
"""

from .classifier import ProductClassifier, get_classifier, standard_brand
from .match_key import MatchKey, build_match_key, format_size
from .normalizer import normalize_listing, normalize_listings
from .size_quantizer import STANDARD_SIZES, quantize_size
from .unit_normalizer import compute_unit_price, parse_unit_text

__all__ = [
    'ProductClassifier',
    'get_classifier',
    'standard_brand',
    'MatchKey',
    'build_match_key',
    'format_size',
    'normalize_listing',
    'normalize_listings',
    'STANDARD_SIZES',
    'quantize_size',
    'compute_unit_price',
    'parse_unit_text',
]
