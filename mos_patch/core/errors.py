# mos_patch/core/errors.py
from __future__ import annotations


class MosPatchError(Exception):
    """Base class for every failure the downloader reports."""


class TransportError(MosPatchError):
    """Timeout, connection failure or an unexpected HTTP status."""


class ConfigurationError(MosPatchError):
    """Bad options, unreadable catalog store or a platform prompt that can't finish."""


class RetrievalError(MosPatchError):
    """A search or detail page could not be fetched mid-pipeline."""


class ValidationError(MosPatchError):
    """Operator input that doesn't parse; always handled by re-prompting."""
