"""
Rate Finder

Loads a freight rate workbook and answers POL/POD lookups:
- RATES: main rate table (required), headers matched by alias + fallback tokens
- GASTOS_LOCALES: local charges (optional)
- REMARKS: free-form remarks (optional)

Usage:
    from rate_finder import load_app_config, load_rate_catalog, search

    config = load_app_config(Path("config.toml"))
    catalog = load_rate_catalog(config=config)
    result = search(catalog.rates, "Callao", "Rotterdam")
"""

from .config import AppConfig, load_app_config
from .lookup import build_index, query, search
from .models import AuxiliaryRecord, LocalCharge, RateCatalog, RateRecord, SearchResult
from .normalize import normalize_key
from .rate_sheets import load_rate_catalog

__all__ = [
    "AppConfig",
    "AuxiliaryRecord",
    "LocalCharge",
    "RateCatalog",
    "RateRecord",
    "SearchResult",
    "build_index",
    "load_app_config",
    "load_rate_catalog",
    "normalize_key",
    "query",
    "search",
]
