"""
mos_patch.core.discovery.links
Page contract for the updates.oracle.com search/detail pages.

Every markup literal the downloader depends on lives here (and in
``platforms.py`` for the catalog page). When the portal markup changes,
this is the file to touch.
"""
from __future__ import annotations
import re
import urllib.parse
from typing import List, Pattern, Tuple, Union

BASE_URL    = "https://updates.oracle.com"
WARMUP_URL  = f"{BASE_URL}/Orion/SimpleSearch/switch_to_saved_searches"
CATALOG_URL = f"{BASE_URL}/Orion/SavedSearches/switch_to_simple"
SEARCH_URL  = f"{BASE_URL}/Orion/SimpleSearch/process_form"

DOWNLOAD_MARKER  = "process_form/"
ARCHIVE_EXT      = ".zip"
PROTECTED_MARKER = "Download Password Protected Patch"
MULTIPART_MARKER = "Download Multi Part Patch"

# https://updates.oracle.com/Orion/Download/process_form/p6880880_112000_Linux-x86-64.zip?aru=...
_LINK_RE = re.compile(
    r"https://[^\"'\s<>]+?Download/" + re.escape(DOWNLOAD_MARKER)
    + r"[^\"'\s<>]*?" + re.escape(ARCHIVE_EXT) + r"[^\"'\s<>]*"
)
# <a href="javascript:showDetails("/Orion/PatchDetails/process_form?...")">Download Multi Part Patch</a>
_DETAILS_RE = re.compile(
    r"javascript:showDetails.\"(/Orion/PatchDetails/process_form[^\"]*)\".*?"
    + re.escape(MULTIPART_MARKER)
)


def search_url(patch: str, code: str) -> str:
    query = urllib.parse.urlencode(
        {"search_type": "patch", "patch_number": patch, "plat_lang": code}
    )
    return f"{SEARCH_URL}?{query}"


def detail_url(path: str) -> str:
    return urllib.parse.urljoin(BASE_URL, path)


def filename_token(url: str) -> str:
    """Text between the download marker and the archive extension."""
    if DOWNLOAD_MARKER not in url:
        raise ValueError(f"not a download link: {url}")
    tail = url.split(DOWNLOAD_MARKER, 1)[1]
    if ARCHIVE_EXT not in tail:
        raise ValueError(f"no {ARCHIVE_EXT} archive in link: {url}")
    return tail.split(ARCHIVE_EXT, 1)[0]


def derive_filename(url: str) -> str:
    return filename_token(url) + ARCHIVE_EXT


def is_protected(html: str) -> bool:
    return PROTECTED_MARKER in (html or "")


def extract_candidates(
    html: str, filename_pattern: Union[str, Pattern[str]] = ".*"
) -> Tuple[List[str], bool]:
    """
    Return (download links whose filename token fully matches the pattern,
    password-protected flag) for one page. Links keep their order of
    appearance; a page without links is simply ([], flag).
    """
    if isinstance(filename_pattern, str):
        pat = re.compile(filename_pattern or ".*")
    else:
        pat = filename_pattern
    out: List[str] = []
    for m in _LINK_RE.finditer(html or ""):
        url = m.group(0)
        if pat.fullmatch(filename_token(url)):
            out.append(url)
    return out, is_protected(html)


def detail_links(html: str) -> List[str]:
    """Relative PatchDetails paths of multi-part patches on a search page."""
    return [m.group(1) for m in _DETAILS_RE.finditer(html or "")]
