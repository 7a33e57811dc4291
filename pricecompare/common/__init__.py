# Common utilities
from .config_loader import (
    load_categories,
    load_config,
    load_countries,
    load_known_brands,
    load_product_types,
    load_selectors,
)
from .errors import (
    BatchError,
    DiscoveryError,
    ExtractionError,
    MissingPriceError,
    PriceCompareError,
)
from .log_config import setup_logging
from .text_utils import clean_text, parse_decimal
