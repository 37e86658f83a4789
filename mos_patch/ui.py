#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
UI layer for the MOS patch downloader

- Rich prompts for credentials, platform subset and per-patch file picks
- Tables for the platform catalog and the discovered files
- Progress bar + throughput summary per downloaded file
- Phase timing table (debug=yes)
"""

from __future__ import annotations
from typing import Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich import box
from rich.progress import (
    BarColumn, Progress, TaskID, TextColumn, TimeRemainingColumn, TransferSpeedColumn
)

from .core.errors import ValidationError
from .core.interact import INVALID_INPUT, LineSource, Reporter
from .core.models import DownloadTask, PairResult, TransferStats

console = Console()


# ────────────────────────── Prompts ──────────────────────────
def _question(prompt: str) -> str:
    # Prompt.ask appends its own ": "
    return escape(prompt.rstrip().rstrip(":").rstrip())


class ConsoleLineSource(LineSource):
    def __init__(self, console_: Console = console):
        self.console = console_

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return Prompt.ask(_question(prompt), default="", show_default=False,
                              console=self.console)
        except EOFError:
            return None

    def read_secret(self, prompt: str) -> Optional[str]:
        try:
            return Prompt.ask(_question(prompt), password=True, console=self.console)
        except EOFError:
            return None


# ────────────────────────── Reporter ──────────────────────────
class RichReporter(Reporter):
    def __init__(self, console_: Console = console):
        self.console = console_
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def message(self, text: str) -> None:
        self.console.print(escape(text))

    def warning(self, text: str) -> None:
        self.console.print(f"[yellow]{escape(text)}[/]")

    def catalog(self, platforms: Dict[str, str]) -> None:
        table = Table(title="Platforms / Languages", header_style="bold magenta",
                      box=box.SIMPLE_HEAVY)
        table.add_column("Code", no_wrap=True)
        table.add_column("Description", overflow="fold")
        for code, desc in platforms.items():
            table.add_row(escape(code), escape(desc))
        self.console.print(table)

    def platforms(self, platforms: Dict[str, str]) -> None:
        lines = "\n".join(f"[bold]{escape(c)}[/] - {escape(d)}" for c, d in platforms.items())
        self.console.print(Panel.fit(
            lines or "[dim](none)[/]",
            title="We're going to download patches for the following Platforms/Languages",
            border_style="cyan",
        ))

    def pair_started(self, patch: str, description: str, regexp: str) -> None:
        self.console.print(
            f"\nProcessing patch [bold]{escape(patch)}[/] for [bold]{escape(description)}[/] "
            f"and applying regexp [cyan]{escape(regexp)}[/] to the filenames:"
        )

    def protected(self, result: PairResult) -> None:
        self.console.print(
            "[yellow] ! This patch contains password protected files (not listed). "
            "Use My Oracle Support to download them![/]"
        )

    def no_files(self, result: PairResult) -> None:
        self.console.print("[dim] No files available[/]")

    def candidates(self, result: PairResult) -> None:
        for cand in result.candidates:
            self.console.print(f" [bold]{cand.ordinal}[/] - {escape(cand.filename)}")

    def auto_selected(self, result: PairResult) -> None:
        self.console.print(" Enter Comma separated files to download: all")
        self.console.print("[dim] All files will be downloaded because download=all was specified.[/]")

    def invalid_input(self, error: ValidationError) -> None:
        self.console.print(f"[red]  {INVALID_INPUT}[/] [dim]({escape(str(error))})[/]")

    # ---- downloads ----
    def download_started(self, task: DownloadTask) -> None:
        # the bar appears with the first progress tick, so silent runs render nothing
        self.close()

    def _start_bar(self, task: DownloadTask) -> None:
        self._progress = Progress(
            TextColumn(f"[bold]Downloading[/] {escape(task.filename)}", justify="left"),
            BarColumn(),
            TransferSpeedColumn(),
            TextColumn("{task.completed:>10.0f} B"),
            TimeRemainingColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task("dl", total=None)

    def download_progress(self, task: DownloadTask, done: int, elapsed_ms: int, total: Optional[int]) -> None:
        if self._progress is None:
            self._start_bar(task)
        if self._task_id is not None:
            self._progress.update(self._task_id, completed=done, total=total)

    def download_done(self, task: DownloadTask, stats: TransferStats) -> None:
        self.close()
        self.console.print(
            f" Downloading {escape(task.filename)}: {stats.megabytes}MB at average speed of "
            f"{stats.kb_per_second}KB/s - [bold green]DONE![/]"
        )

    def close(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def timings(self, phases: Dict[str, float]) -> None:
        table = Table(title="Phase timings", header_style="bold magenta", box=box.SIMPLE_HEAVY)
        table.add_column("Phase")
        table.add_column("Seconds", justify="right")
        for name, secs in phases.items():
            table.add_row(name, f"{secs:.2f}")
        table.add_row("[bold]total[/]", f"[bold]{sum(phases.values()):.2f}[/]")
        self.console.print(table)
