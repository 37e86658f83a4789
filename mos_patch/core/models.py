from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from .discovery.links import derive_filename


@dataclass(frozen=True)
class Candidate:
    ordinal: int
    url: str

    @property
    def filename(self) -> str:
        return derive_filename(self.url)


@dataclass
class PairResult:
    """Everything discovered for one (patch, platform) pair."""
    patch: str
    code: str
    candidates: List[Candidate] = field(default_factory=list)
    protected: bool = False
    pages: int = 0

    def add(self, url: str) -> Candidate:
        cand = Candidate(ordinal=len(self.candidates) + 1, url=url)
        self.candidates.append(cand)
        return cand

    def by_ordinal(self, ordinal: int) -> Candidate:
        return self.candidates[ordinal - 1]


@dataclass(frozen=True)
class Selection:
    kind: str  # "all" | "none" | "some"
    ordinals: Tuple[int, ...] = ()

    @classmethod
    def all(cls) -> "Selection":
        return cls("all")

    @classmethod
    def none(cls) -> "Selection":
        return cls("none")

    def urls(self, result: PairResult) -> List[str]:
        if self.kind == "all":
            return [c.url for c in result.candidates]
        if self.kind == "none":
            return []
        return [result.by_ordinal(o).url for o in self.ordinals]


@dataclass(frozen=True)
class DownloadTask:
    ordinal: int
    source_url: str
    filename: str

    def destination(self, stage_dir: Path) -> Path:
        return stage_dir / self.filename


class DownloadList:
    """Run-wide ordered list of selected URLs; ordinals are 1..N across all pairs."""

    def __init__(self) -> None:
        self._tasks: List[DownloadTask] = []

    def extend(self, urls: List[str]) -> List[DownloadTask]:
        added = []
        for url in urls:
            task = DownloadTask(len(self._tasks) + 1, url, derive_filename(url))
            self._tasks.append(task)
            added.append(task)
        return added

    def __iter__(self):
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __bool__(self) -> bool:
        return bool(self._tasks)


@dataclass(frozen=True)
class TransferStats:
    bytes_transferred: int
    elapsed_ms: int

    @property
    def megabytes(self) -> int:
        return self.bytes_transferred // (1024 * 1024)

    @property
    def kb_per_second(self) -> int:
        # bytes per millisecond ~ KB/s
        return self.bytes_transferred // max(self.elapsed_ms, 1)
