"""Domain models and deterministic rules for link validation."""

from src.link_validation.domain.errors import DatasetError, LinkValidationError, SettingsError
from src.link_validation.domain.models import (
    GalaxyRecord,
    LinkCheckResult,
    ProbeOutcome,
    ProbeResult,
    RunSummary,
)
from src.link_validation.domain.rules import DEFAULT_WIKI_BASE, build_canonical_url

__all__ = [
    "build_canonical_url",
    "DatasetError",
    "DEFAULT_WIKI_BASE",
    "GalaxyRecord",
    "LinkCheckResult",
    "LinkValidationError",
    "ProbeOutcome",
    "ProbeResult",
    "RunSummary",
    "SettingsError",
]
