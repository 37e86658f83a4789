# mos_patch/core/select.py
from __future__ import annotations
import logging
from typing import Dict, List, Pattern

from .discovery import detail_links, detail_url, extract_candidates, search_url
from .errors import RetrievalError, TransportError
from .interact import LineSource, Reporter, ask_until_valid, validate_selection
from .models import DownloadList, PairResult, Selection

logger = logging.getLogger(__name__)

FILES_PROMPT = " Enter Comma separated files to download: "


def _fetch(transport, url: str) -> str:
    try:
        return transport.fetch_text(url)
    except TransportError as e:
        raise RetrievalError(f"could not retrieve {url}: {e}") from e


def evaluate_pair(transport, patch: str, code: str, pattern: Pattern[str]) -> PairResult:
    """
    Discover the candidate files of one patch for one platform: the search
    page plus every multi-part detail page it links to, merged in discovery
    order with dense 1-based ordinals.
    """
    result = PairResult(patch=patch, code=code)
    pages = [_fetch(transport, search_url(patch, code))]
    for path in detail_links(pages[0]):
        logger.debug("multi-part patch %s: expanding %s", patch, path)
        pages.append(_fetch(transport, detail_url(path)))

    for html in pages:
        urls, protected = extract_candidates(html, pattern)
        for url in urls:
            result.add(url)
        result.protected = result.protected or protected
    result.pages = len(pages)
    logger.debug("patch %s/%s: %d candidate(s) over %d page(s)",
                 patch, code, len(result.candidates), result.pages)

    if result.protected:
        # protected files need the web UI; nothing from this pair is offered
        logger.debug("patch %s/%s is password protected, dropping %d link(s)",
                      patch, code, len(result.candidates))
        result.candidates.clear()
    return result


def resolve_selection(
    result: PairResult,
    source: LineSource,
    reporter: Reporter,
    download_all: bool = False,
) -> Selection:
    if result.protected:
        reporter.protected(result)
    elif not result.candidates:
        reporter.no_files(result)
    else:
        reporter.candidates(result)

    if not result.candidates:
        return Selection.none()
    if download_all:
        reporter.auto_selected(result)
        return Selection.all()
    return ask_until_valid(
        source, FILES_PROMPT, lambda raw: validate_selection(raw, result), reporter
    )


def collect_downloads(
    transport,
    patches: List[str],
    platforms: Dict[str, str],
    pattern: Pattern[str],
    source: LineSource,
    reporter: Reporter,
    download_all: bool = False,
) -> DownloadList:
    """Patches in the order given, platforms in catalog order; empty patch tokens are skipped."""
    downloads = DownloadList()
    for patch in patches:
        patch = patch.strip()
        if not patch:
            continue
        for code, description in platforms.items():
            reporter.pair_started(patch, description, pattern.pattern)
            result = evaluate_pair(transport, patch, code, pattern)
            selection = resolve_selection(result, source, reporter, download_all)
            added = downloads.extend(selection.urls(result))
            logger.debug("%s/%s: %d selected, %d queued in total",
                         patch, code, len(added), len(downloads))
    return downloads
