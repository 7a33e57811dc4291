"""
Listing extraction modules.

Modules:
    page_extractor - ListingExtractor: multi-tier field extraction per page
    retrying_fetcher - RetryingFetcher: bounded retries per URL
    batch_acquirer - BatchAcquirer: sequential acquisition for one country
    brand_matcher - Match listing names to known brand names
    validator - GTIN and price plausibility checks, ListingValidator
    parsers - Structured data, DOM and page text parsers
"""

from .batch_acquirer import BatchAcquirer, BatchResult
from .brand_matcher import BrandMatcher
from .page_extractor import ListingExtractor
from .parsers import HTMLContentParser, PageTextParser, StructuredDataParser
from .retrying_fetcher import FetchResult, RetryingFetcher
from .validator import ListingValidator, is_plausible_price, normalize_gtin

__all__ = [
    # Page extraction
    'ListingExtractor',
    # Retries and batches
    'RetryingFetcher',
    'FetchResult',
    'BatchAcquirer',
    'BatchResult',
    # Brand matching
    'BrandMatcher',
    # Validation
    'ListingValidator',
    'is_plausible_price',
    'normalize_gtin',
    # Parsers
    'StructuredDataParser',
    'HTMLContentParser',
    'PageTextParser',
]
