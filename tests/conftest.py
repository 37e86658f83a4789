from pathlib import Path

import pytest

from mos_patch.core.errors import TransportError
from mos_patch.core.interact import Reporter
from mos_patch.core.models import TransferStats


LINK = "https://updates.oracle.com/Orion/Download/process_form/{name}.zip?aru=1234&patch_file={name}.zip"


def link(name):
    return LINK.format(name=name)


def search_page(*names, protected=False, details=()):
    """Minimal stand-in for a SimpleSearch result page."""
    rows = [f'<tr><td><a href="{link(n)}">Download</a></td></tr>' for n in names]
    for path in details:
        rows.append(
            f"<tr><td><a href='javascript:showDetails(\"{path}\")'>"
            "Download Multi Part Patch</a></td></tr>"
        )
    if protected:
        rows.append('<tr><td><a href="#">Download Password Protected Patch</a></td></tr>')
    return "<html><body><table>\n" + "\n".join(rows) + "\n</table></body></html>"


class FakeResponse:
    def __init__(self, status_code=200, body=b"", headers=None):
        self.status_code = status_code
        self.body = body if isinstance(body, bytes) else body.encode("utf-8")
        self.headers = dict(headers or {})
        self.closed = False

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i:i + chunk_size]

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSession:
    """Routes GETs to canned responses; a list value is consumed in order."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        resp = self.routes[url]
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, list):
            resp = resp.pop(0)
        if callable(resp):
            resp = resp(url, kwargs)
        return resp


class FakeTransport:
    def __init__(self, pages=None, files=None):
        self.pages = dict(pages or {})
        self.files = dict(files or {})
        self.fetched = []
        self.streamed = []
        self.warmed = 0

    def warm_up(self):
        self.warmed += 1

    def fetch_text(self, url, size_limit=None):
        self.fetched.append(url)
        if url not in self.pages:
            raise TransportError(f"HTTP 404 fetching {url}")
        return self.pages[url]

    def stream_to_file(self, url, destination, byte_limit=None, on_progress=None, resume_from=0):
        self.streamed.append((url, Path(destination), resume_from))
        data = self.files[url]
        Path(destination).write_bytes(data)
        if on_progress:
            on_progress(len(data), 5, len(data))
        return TransferStats(len(data), 5)


class RecordingReporter(Reporter):
    def __init__(self):
        self.events = []

    def _rec(self, name, *args):
        self.events.append((name,) + args)

    def names(self):
        return [e[0] for e in self.events]

    def messages(self):
        return [e[1] for e in self.events if e[0] == "message"]

    def message(self, text):
        self._rec("message", text)

    def warning(self, text):
        self._rec("warning", text)

    def catalog(self, platforms):
        self._rec("catalog", dict(platforms))

    def platforms(self, platforms):
        self._rec("platforms", dict(platforms))

    def pair_started(self, patch, description, regexp):
        self._rec("pair_started", patch, description, regexp)

    def protected(self, result):
        self._rec("protected", result.patch, result.code)

    def no_files(self, result):
        self._rec("no_files", result.patch, result.code)

    def candidates(self, result):
        self._rec("candidates", [c.filename for c in result.candidates])

    def auto_selected(self, result):
        self._rec("auto_selected", result.patch)

    def invalid_input(self, error):
        self._rec("invalid_input", str(error))

    def download_started(self, task):
        self._rec("download_started", task.filename)

    def download_progress(self, task, done, elapsed_ms, total):
        self._rec("download_progress", task.filename, done)

    def download_done(self, task, stats):
        self._rec("download_done", task.filename, stats.bytes_transferred)

    def timings(self, phases):
        self._rec("timings", dict(phases))


@pytest.fixture
def reporter():
    return RecordingReporter()
