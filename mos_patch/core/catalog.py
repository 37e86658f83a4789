from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .config import load_catalog, save_catalog
from .discovery import CATALOG_URL, parse_platform_options
from .errors import ConfigurationError
from .interact import LineSource, Reporter, ask_until_valid, validate_codes

logger = logging.getLogger(__name__)

PLATFORM_PROMPT = "Enter Comma separated platforms to list: "


def explicit_platforms(codes: List[str]) -> Dict[str, str]:
    # descriptions are unknown without a catalog fetch; the code stands in for it
    return {code: code for code in codes}


def fetch_catalog(transport) -> Dict[str, str]:
    html = transport.fetch_text(CATALOG_URL)
    options = parse_platform_options(html)
    logger.debug("catalog page offers %d platform(s)", len(options))
    return options


def resolve_platforms(
    transport,
    store: Path,
    source: LineSource,
    reporter: Reporter,
    reset: bool = False,
    explicit_codes: Optional[List[str]] = None,
) -> Dict[str, str]:
    """
    Decide which platform/language codes this run works on.

    explicit codes win (no fetch, cache untouched); otherwise a reset or an
    empty store triggers a live catalog fetch plus operator pick, persisted to
    ``store``; otherwise the store is used as is.
    """
    if explicit_codes:
        chosen = explicit_platforms(explicit_codes)
    else:
        cached = {} if reset else load_catalog(store)
        if cached:
            chosen = cached
        else:
            reporter.message("Platforms and languages need to be reset.")
            reporter.message("Obtaining the list of platforms and languages:")
            options = fetch_catalog(transport)
            if not options:
                raise ConfigurationError("the platform catalog page offered no platforms/languages")
            reporter.catalog(options)
            codes = ask_until_valid(
                source, PLATFORM_PROMPT, lambda raw: validate_codes(raw, options), reporter
            )
            chosen = {code: options[code] for code in codes}
            save_catalog(store, chosen)

    reporter.platforms(chosen)
    return chosen
