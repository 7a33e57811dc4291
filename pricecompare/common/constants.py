"""
Shared constants for the project.

Tuning values for acquisition and normalization with a single source of truth.
"""

from decimal import Decimal

# All storefronts display prices in EUR
CURRENCY = "EUR"

# Page navigation
NAVIGATION_TIMEOUT_SECONDS = 10.0
CATEGORY_TIMEOUT_SECONDS = 15.0
SETTLE_DELAY_SECONDS = 1.5
CATEGORY_SETTLE_DELAY_SECONDS = 2.0

# Retries: 1 initial attempt + MAX_RETRIES
MAX_RETRIES = 2
RETRY_DELAY_SECONDS = 1.0

# Rate limiting between product pages / category pages
REQUEST_DELAY_SECONDS = 0.2
CATEGORY_DELAY_SECONDS = 1.0

# Sitemap HTTP fetch
SITEMAP_TIMEOUT_SECONDS = 30

# Plausible shelf price range (EUR), inclusive
PRICE_MIN = Decimal("0.10")
PRICE_MAX = Decimal("999.99")

# A deposit quoted in cents is divided by 100 when it is at least this large
DEPOSIT_CENT_THRESHOLD = Decimal("5")

# Size quantization tolerance, relative to the raw quantity
SIZE_TOLERANCE = 0.15

# Barcode lengths valid for EAN-8, UPC-A, EAN-13, ITF-14
VALID_GTIN_LENGTHS = frozenset({8, 12, 13, 14})

# Number of underlying errors quoted in a BatchError
BATCH_ERROR_SAMPLE = 3

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Default SQLite database location, relative to the working directory
DEFAULT_DB_PATH = "data/prices.db"
