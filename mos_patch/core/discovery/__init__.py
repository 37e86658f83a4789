# mos_patch/core/discovery/__init__.py

from .links import (
    BASE_URL,
    WARMUP_URL,
    CATALOG_URL,
    search_url,
    detail_url,
    derive_filename,
    extract_candidates,
    detail_links,
    is_protected,
)
from .platforms import parse_platform_options

__all__ = [
    "BASE_URL",
    "WARMUP_URL",
    "CATALOG_URL",
    "search_url",
    "detail_url",
    "derive_filename",
    "extract_candidates",
    "detail_links",
    "is_protected",
    "parse_platform_options",
]
