# mos_patch/core/pipeline.py
"""
Top-level run: warm-up login, platform resolution, discovery/selection over
patches x platforms, then sequential downloads into the stage directory.
"""
from __future__ import annotations
import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator

from .catalog import resolve_platforms
from .errors import ConfigurationError
from .interact import LineSource, Reporter
from .models import DownloadList, DownloadTask, TransferStats
from .options import Options
from .select import collect_downloads

logger = logging.getLogger(__name__)


class PhaseTimer:
    def __init__(self) -> None:
        self.phases: Dict[str, float] = {}

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        started = time.perf_counter()
        try:
            yield
        finally:
            self.phases[name] = self.phases.get(name, 0.0) + time.perf_counter() - started


def download_task(transport, task: DownloadTask, stage_dir: Path, reporter: Reporter,
                  show_progress: bool = True) -> TransferStats:
    """
    Stream one file to ``stage_dir/<filename>`` via ``<filename>.part``;
    an existing .part file is resumed.
    """
    out_path = task.destination(stage_dir)
    tmp = out_path.with_suffix(out_path.suffix + ".part")
    resume = tmp.stat().st_size if tmp.exists() else 0
    logger.debug("Starting download %s -> %s (resume=%d)", task.source_url, out_path, resume)

    def on_progress(done: int, elapsed_ms: int, total) -> None:
        reporter.download_progress(task, done, elapsed_ms, total)

    reporter.download_started(task)
    stats = transport.stream_to_file(
        task.source_url, tmp,
        on_progress=on_progress if show_progress else None,
        resume_from=resume,
    )
    tmp.replace(out_path)
    reporter.download_done(task, stats)
    return stats


def download_all(transport, downloads: DownloadList, stage_dir: Path, reporter: Reporter,
                 show_progress: bool = True) -> None:
    reporter.message("Downloading all selected files:")
    for task in downloads:
        download_task(transport, task, stage_dir, reporter, show_progress)


def check_stage_dir(stage_dir: Path) -> None:
    if not stage_dir.is_dir():
        raise ConfigurationError(f"stage directory {stage_dir} does not exist")


def run(options: Options, transport, source: LineSource, reporter: Reporter, store: Path) -> int:
    timer = PhaseTimer()

    with timer.phase("login"):
        transport.warm_up()

    if options.has_patches:
        check_stage_dir(options.stage_dir)

    if options.has_patches or options.reset:
        with timer.phase("platforms"):
            platforms = resolve_platforms(
                transport, store, source, reporter,
                reset=options.reset,
                explicit_codes=options.platforms,
            )

    if not options.has_patches:
        reporter.message("No patch numbers are specified.")
    else:
        with timer.phase("discovery"):
            downloads = collect_downloads(
                transport, options.patches, platforms, options.regexp,
                source, reporter, options.download_all,
            )
        if not downloads:
            reporter.message("There's nothing to download!")
        else:
            with timer.phase("download"):
                download_all(transport, downloads, options.stage_dir, reporter,
                             show_progress=not options.silent)

    if options.debug:
        reporter.timings(timer.phases)
    return 0
