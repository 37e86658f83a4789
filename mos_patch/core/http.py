# mos_patch/core/http.py
"""
Transport for the support portal: one requests.Session per run, manual
redirect following, lazy Basic credentials on the first 401 challenge and
streamed bodies with byte/time accounting.
"""
from __future__ import annotations
import logging
import os
import tempfile
import time
import urllib.parse
from pathlib import Path
from typing import Callable, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter, Retry
from requests.auth import AuthBase, HTTPBasicAuth
from requests.cookies import extract_cookies_to_jar

from .errors import TransportError
from .interact import LineSource
from .models import TransferStats
from .discovery.links import WARMUP_URL

logger = logging.getLogger(__name__)

UA = "MOS-Patch-CLI/2.0"
TIMEOUT = (30, 60)                   # connect, read (seconds)
CHUNK_SIZE = 8192
PROGRESS_INTERVAL = 1024 * 1024      # progress callback cadence (bytes)
PAGE_SIZE_LIMIT = 16 * 1024 * 1024   # cap for HTML pages
REDIRECT_CODES = (301, 302, 303, 307, 308)

ProgressCB = Callable[[int, int, Optional[int]], None]  # (done_bytes, elapsed_ms, total_bytes)


# ────────────────────────── Credentials ──────────────────────────
class CredentialProvider:
    """Username/secret for the portal, obtained at most once per run."""

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None,
                 source: Optional[LineSource] = None):
        self._username = username
        self._password = password
        self._source = source
        self._creds: Optional[Tuple[str, str]] = None
        self.calls = 0

    def get(self) -> Tuple[str, str]:
        if self._creds is None:
            self.calls += 1
            user = self._username
            if user is None and self._source:
                user = self._source.read_line("Enter your MOS username: ")
            secret = self._password
            if secret is None and self._source:
                secret = self._source.read_secret("Enter your MOS password: ")
            if not user or secret is None:
                raise TransportError("authentication required but no credentials were supplied")
            self._creds = (user, secret)
            # supplied values are used once; the memoized pair serves the rest of the run
            self._username = self._password = None
        return self._creds


def _origin(url: str) -> Tuple[str, str]:
    parts = urllib.parse.urlparse(url)
    return parts.scheme.lower(), parts.netloc.lower()


class ChallengeAuth(AuthBase):
    """
    Sends nothing until the server challenges with 401, then asks the
    provider, replays the request with Basic credentials and keeps
    sending them to the challenging scheme and host only.
    """

    def __init__(self, provider: CredentialProvider):
        self.provider = provider
        self.basic: Optional[HTTPBasicAuth] = None
        self.origin: Optional[Tuple[str, str]] = None

    def handle_401(self, r: requests.Response, **kwargs) -> requests.Response:
        if r.status_code != 401 or getattr(r.request, "_challenged", False):
            return r
        user, secret = self.provider.get()
        self.basic = HTTPBasicAuth(user, secret)
        self.origin = _origin(r.request.url)
        logger.debug("401 from %s, retrying with credentials for %s", r.url, user)

        # consume content so the connection can be released
        r.content
        r.close()
        prep = r.request.copy()
        extract_cookies_to_jar(prep._cookies, r.request, r.raw)
        prep.prepare_cookies(prep._cookies)
        self.basic(prep)
        prep._challenged = True
        _r = r.connection.send(prep, **kwargs)
        _r.history.append(r)
        _r.request = prep
        return _r

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        if self.basic and _origin(r.url) == self.origin:
            self.basic(r)
            r._challenged = True
        r.register_hook("response", self.handle_401)
        return r


def make_session(provider: Optional[CredentialProvider] = None) -> requests.Session:
    # no automatic retries: every network failure ends the run
    retries = Retry(total=0, connect=0, read=0, redirect=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retries, pool_connections=2, pool_maxsize=2)
    s = requests.Session()
    s.mount("http://", adapter); s.mount("https://", adapter)
    s.headers.update({"User-Agent": UA})
    if provider is not None:
        s.auth = ChallengeAuth(provider)
    return s


# ────────────────────────── Transport ──────────────────────────
class Transport:
    def __init__(self, session: requests.Session):
        self.session = session

    def _open(self, url: str, headers: Optional[dict] = None) -> requests.Response:
        """GET ``url`` following redirects by hand; returns the streaming final response."""
        location = url
        while True:
            try:
                r = self.session.get(
                    location, stream=True, allow_redirects=False,
                    timeout=TIMEOUT, headers=headers or {},
                )
            except requests.Timeout as e:
                raise TransportError(f"timed out fetching {location}: {e}") from e
            except requests.RequestException as e:
                raise TransportError(f"could not fetch {location}: {e}") from e

            nxt = r.headers.get("Location")
            if r.status_code in REDIRECT_CODES and nxt:
                r.close()
                location = urllib.parse.urljoin(location, nxt)
                logger.debug("redirect %d -> %s", r.status_code, location)
                continue
            if r.status_code >= 400:
                r.close()
                raise TransportError(f"HTTP {r.status_code} fetching {location}")
            return r

    def stream_to_file(
        self,
        url: str,
        destination: Path,
        byte_limit: Optional[int] = None,
        on_progress: Optional[ProgressCB] = None,
        resume_from: int = 0,
    ) -> TransferStats:
        headers = {"Range": f"bytes={resume_from}-"} if resume_from > 0 else {}
        r = self._open(url, headers)
        with r:
            resumed = resume_from > 0 and r.status_code == 206
            mode = "ab" if resumed else "wb"
            length = r.headers.get("Content-Length", "")
            total = int(length) if length.isdigit() else None
            if total is not None and resumed:
                total += resume_from

            base = resume_from if resumed else 0
            done = 0
            next_mark = PROGRESS_INTERVAL
            started = time.monotonic()
            try:
                with open(destination, mode) as f:
                    for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                        if not chunk:
                            continue
                        if byte_limit is not None and done + len(chunk) > byte_limit:
                            chunk = chunk[: byte_limit - done]
                        f.write(chunk)
                        done += len(chunk)
                        if on_progress and done >= next_mark:
                            on_progress(base + done, _elapsed_ms(started), total)
                            next_mark = (done // PROGRESS_INTERVAL + 1) * PROGRESS_INTERVAL
                        if byte_limit is not None and done >= byte_limit:
                            logger.debug("byte limit %d reached for %s", byte_limit, url)
                            break
            except requests.RequestException as e:
                raise TransportError(f"transfer of {url} failed: {e}") from e

        stats = TransferStats(done, _elapsed_ms(started))
        if on_progress:
            on_progress(base + done, stats.elapsed_ms, total)
        return stats

    def fetch_text(self, url: str, size_limit: int = PAGE_SIZE_LIMIT) -> str:
        """Fetch a page through a transient local buffer file and return its text."""
        fd, tmp_name = tempfile.mkstemp(prefix=".getMOSPatch.", suffix=".tmp")
        os.close(fd)
        tmp = Path(tmp_name)
        try:
            self.stream_to_file(url, tmp, byte_limit=size_limit)
            raw = tmp.read_bytes()
        finally:
            try:
                tmp.unlink()
            except OSError as e:
                logger.warning("could not remove temporary file %s: %s", tmp, e)
        logger.debug("fetched %s (%d bytes)", url, len(raw))
        return raw.decode("utf-8", errors="replace")

    def warm_up(self) -> None:
        """Authenticated request made once before any data request."""
        self.fetch_text(WARMUP_URL)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
