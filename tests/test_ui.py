import io

import pytest
from rich.console import Console

from mos_patch.core.catalog import PLATFORM_PROMPT
from mos_patch.ui import ConsoleLineSource


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def source(out):
    return ConsoleLineSource(Console(file=out, width=200, color_system=None))


def test_line_prompt_has_a_single_colon(monkeypatch, source, out):
    monkeypatch.setattr("builtins.input", lambda *a: "226P,3L")

    assert source.read_line(PLATFORM_PROMPT) == "226P,3L"
    assert out.getvalue() == "Enter Comma separated platforms to list: "


def test_secret_prompt_has_a_single_colon(monkeypatch, source, out):
    monkeypatch.setattr("rich.console.getpass", lambda *a, **kw: "tiger")

    assert source.read_secret("Enter your MOS password: ") == "tiger"
    assert out.getvalue() == "Enter your MOS password: "


def test_closed_input_reads_as_none(monkeypatch, source):
    def closed(*a):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed)
    assert source.read_line("Enter your MOS username: ") is None
