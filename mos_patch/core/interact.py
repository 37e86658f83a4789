# mos_patch/core/interact.py
"""
Operator interaction seams for the core.

The core never touches the terminal. It reads answers through a
``LineSource`` and reports through a ``Reporter``; ``mos_patch.ui`` supplies
the rich-based implementations, tests and scripted runs use
``ScriptedLineSource`` and the logging-only ``Reporter``.
"""
from __future__ import annotations
import logging
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from .errors import ConfigurationError, ValidationError
from .models import DownloadTask, PairResult, Selection, TransferStats

logger = logging.getLogger(__name__)

T = TypeVar("T")

INVALID_INPUT = "ERROR: Unparsable inputs. Try Again."


# ────────────────────────── Line sources ──────────────────────────
class LineSource:
    """Where answers come from. ``None`` means the source is exhausted."""

    def read_line(self, prompt: str) -> Optional[str]:
        raise NotImplementedError

    def read_secret(self, prompt: str) -> Optional[str]:
        return self.read_line(prompt)


class ScriptedLineSource(LineSource):
    def __init__(self, answers: Iterable[str] = (), secrets: Iterable[str] = ()):
        self.answers: List[str] = list(answers)
        self.secrets: List[str] = list(secrets)
        self.prompts: List[str] = []

    def read_line(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        return self.answers.pop(0) if self.answers else None

    def read_secret(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        return self.secrets.pop(0) if self.secrets else None


# ────────────────────────── Reporter ──────────────────────────
class Reporter:
    """Operator-facing events. The base class only logs."""

    def message(self, text: str) -> None:
        logger.info(text)

    def warning(self, text: str) -> None:
        logger.warning(text)

    def catalog(self, platforms: Dict[str, str]) -> None:
        for code, desc in platforms.items():
            logger.info("%s - %s", code, desc)

    def platforms(self, platforms: Dict[str, str]) -> None:
        logger.info("We're going to download patches for the following Platforms/Languages:")
        for code, desc in platforms.items():
            logger.info(" %s - %s", code, desc)

    def pair_started(self, patch: str, description: str, regexp: str) -> None:
        logger.info(
            "Processing patch %s for %s and applying regexp %s to the filenames:",
            patch, description, regexp,
        )

    def protected(self, result: PairResult) -> None:
        logger.warning(
            "! This patch contains password protected files (not listed). "
            "Use My Oracle Support to download them!"
        )

    def no_files(self, result: PairResult) -> None:
        logger.info(" No files available")

    def candidates(self, result: PairResult) -> None:
        for cand in result.candidates:
            logger.info(" %d - %s", cand.ordinal, cand.filename)

    def auto_selected(self, result: PairResult) -> None:
        logger.info(" All files will be downloaded because download=all was specified.")

    def invalid_input(self, error: ValidationError) -> None:
        logger.warning("%s (%s)", INVALID_INPUT, error)

    def download_started(self, task: DownloadTask) -> None:
        logger.info("Downloading %s", task.filename)

    def download_progress(self, task: DownloadTask, done: int, elapsed_ms: int, total: Optional[int]) -> None:
        logger.debug("%s: %d bytes in %d ms", task.filename, done, elapsed_ms)

    def download_done(self, task: DownloadTask, stats: TransferStats) -> None:
        logger.info(
            "Downloaded %s: %dMB at average speed of %dKB/s - DONE!",
            task.filename, stats.megabytes, stats.kb_per_second,
        )

    def timings(self, phases: Dict[str, float]) -> None:
        for name, secs in phases.items():
            logger.info("%-12s %8.2fs", name, secs)


# ────────────────────────── Validators ──────────────────────────
def validate_codes(raw: str, valid: Dict[str, str]) -> List[str]:
    """Comma list of platform codes, all of which must exist in ``valid``."""
    codes: List[str] = []
    for tok in (raw or "").split(","):
        code = tok.strip()
        if code not in valid:
            raise ValidationError(f"unknown platform code {code!r}")
        if code not in codes:
            codes.append(code)
    return codes


def validate_selection(raw: str, result: PairResult) -> Selection:
    """
    ``""`` selects nothing, ``all`` selects everything, otherwise a comma list
    of ordinals from the current candidate list (returned sorted, deduplicated).
    """
    text = (raw or "").strip()
    if text == "":
        return Selection.none()
    ordinals = set()
    want_all = False
    for tok in text.split(","):
        tok = tok.strip()
        if tok == "":
            continue
        if tok == "all":
            want_all = True
            continue
        if not (tok.isascii() and tok.isdigit()):
            raise ValidationError(f"not a number: {tok!r}")
        n = int(tok)
        if not 1 <= n <= len(result.candidates):
            raise ValidationError(f"no file #{n}")
        ordinals.add(n)
    if want_all:
        return Selection.all()
    if not ordinals:
        return Selection.none()
    return Selection("some", tuple(sorted(ordinals)))


def ask_until_valid(
    source: LineSource,
    prompt: str,
    validate: Callable[[str], T],
    reporter: Reporter,
) -> T:
    """Ask until ``validate`` accepts the answer; a dry source is a ConfigurationError."""
    while True:
        raw = source.read_line(prompt)
        if raw is None:
            raise ConfigurationError(f"no input available for: {prompt.strip()}")
        try:
            return validate(raw)
        except ValidationError as e:
            reporter.invalid_input(e)
