# mos_patch/core/__init__.py
from .config import catalog_path, load_catalog, save_catalog
from .catalog import resolve_platforms
from .errors import (
    MosPatchError, TransportError, ConfigurationError, RetrievalError, ValidationError,
)
from .http import CredentialProvider, Transport, make_session
from .interact import LineSource, ScriptedLineSource, Reporter
from .options import Options, parse_pairs
from .pipeline import run
from .select import collect_downloads, evaluate_pair, resolve_selection

__all__ = [
    "catalog_path", "load_catalog", "save_catalog",
    "resolve_platforms",
    "MosPatchError", "TransportError", "ConfigurationError", "RetrievalError", "ValidationError",
    "CredentialProvider", "Transport", "make_session",
    "LineSource", "ScriptedLineSource", "Reporter",
    "Options", "parse_pairs",
    "run",
    "collect_downloads", "evaluate_pair", "resolve_selection",
    "setup_logging",
]

# ---- simple logging toggle for the package ----
import logging

def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s"
    )
    # quiet down noisy deps
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
