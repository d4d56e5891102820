"""Galaxy wiki link validation package."""

from src.link_validation.domain.errors import DatasetError, LinkValidationError, SettingsError
from src.link_validation.domain.models import GalaxyRecord, LinkCheckResult, ProbeResult, RunSummary
from src.link_validation.domain.rules import build_canonical_url

__all__ = [
    "build_canonical_url",
    "DatasetError",
    "GalaxyRecord",
    "LinkCheckResult",
    "LinkValidationError",
    "ProbeResult",
    "RunSummary",
    "SettingsError",
]
