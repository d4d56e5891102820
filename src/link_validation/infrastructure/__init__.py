"""Infrastructure adapters for link validation."""

from src.link_validation.infrastructure.dataset_loader import JsonDatasetLoader
from src.link_validation.infrastructure.http_prober import HttpProber

__all__ = ["HttpProber", "JsonDatasetLoader"]
