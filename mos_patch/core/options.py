from __future__ import annotations
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Pattern

from .errors import ConfigurationError

DEFAULT_REGEXP = ".*"

KNOWN_KEYS = (
    "patch", "platform", "regexp", "reset", "download", "stagedir",
    "MOSUser", "MOSPass", "silent", "debug",
)


def _split(value: Optional[str]) -> List[str]:
    # keeps empty tokens; the selection loop skips them
    return value.split(",") if value else []


@dataclass
class Options:
    patches: List[str] = field(default_factory=list)
    platforms: List[str] = field(default_factory=list)
    regexp: Pattern[str] = field(default_factory=lambda: re.compile(DEFAULT_REGEXP))
    reset: bool = False
    download_all: bool = False
    stage_dir: Path = Path(".")
    username: Optional[str] = None
    password: Optional[str] = None
    silent: bool = False
    debug: bool = False

    @property
    def has_patches(self) -> bool:
        return any(p.strip() for p in self.patches)

    @classmethod
    def from_mapping(cls, params: Mapping[str, str]) -> "Options":
        raw_re = params.get("regexp") or DEFAULT_REGEXP
        try:
            regexp = re.compile(raw_re)
        except re.error as e:
            raise ConfigurationError(f"invalid regexp {raw_re!r}: {e}") from e
        return cls(
            patches=_split(params.get("patch")),
            platforms=[c.strip() for c in _split(params.get("platform")) if c.strip()],
            regexp=regexp,
            reset=params.get("reset") == "yes",
            download_all=params.get("download") == "all",
            stage_dir=Path(params.get("stagedir") or "."),
            username=params.get("MOSUser"),
            password=params.get("MOSPass"),
            silent=params.get("silent") == "yes",
            debug=params.get("debug") == "yes",
        )


def parse_pairs(tokens: List[str]) -> Dict[str, str]:
    """``key=value`` tokens into a flat map; tokens without ``=`` are ignored."""
    out: Dict[str, str] = {}
    for tok in tokens:
        if "=" in tok:
            key, value = tok.split("=", 1)
            out[key] = value
    return out
