# mos_patch/core/config.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Dict

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# ---- location ----------------------------------------------------------------
# Same file name getMOSPatch has always used, in the working directory.
# Override with env var:
#   MOSPATCH_CONFIG=<full path to the platform list>
DEFAULT_NAME = ".getMOSPatch.cfg"


def catalog_path() -> Path:
    env_path = os.environ.get("MOSPATCH_CONFIG")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path.cwd() / DEFAULT_NAME


# ---- load / save -------------------------------------------------------------
def load_catalog(path: Path) -> Dict[str, str]:
    """
    Read ``code;description`` lines. A missing or empty file gives an empty
    mapping (which forces a live catalog fetch); a line without ``;`` is an error.
    """
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"cannot read platform list {path}: {e}") from e
    out: Dict[str, str] = {}
    for n, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        if ";" not in line:
            raise ConfigurationError(f"{path}:{n}: expected 'code;description', got {line!r}")
        code, desc = line.split(";", 1)
        out[code] = desc
    logger.debug("loaded %d platform(s) from %s", len(out), path)
    return out


def save_catalog(path: Path, platforms: Dict[str, str]) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    body = "".join(f"{code};{desc}\n" for code, desc in platforms.items())
    try:
        tmp.write_text(body, encoding="utf-8")
        tmp.replace(path)
    except OSError as e:
        raise ConfigurationError(f"cannot write platform list {path}: {e}") from e
    logger.debug("saved %d platform(s) to %s", len(platforms), path)
