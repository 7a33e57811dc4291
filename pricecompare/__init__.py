"""
Cross-Country Grocery Price Comparison

Modules:
    models         - Data models (RawListing, NormalizedRecord, ComparisonGroup)
    common         - Shared utilities (config loader, logging, errors, number parsing)
    browser        - Scoped Playwright page sessions
    discovery      - Product URL discovery from storefront sitemaps
    extraction     - Listing extraction, retries and batch acquisition
    normalization  - Unit parsing, classification, size quantization, match keys
    comparison     - Cross-country aggregation into comparison groups
    storage        - SQLite persistence adapter
    pipeline       - Per-country acquisition runs
"""
