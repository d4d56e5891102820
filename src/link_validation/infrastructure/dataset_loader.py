import json
from pathlib import Path
from typing import Any

from src.link_validation.domain.errors import DatasetError
from src.link_validation.domain.models import GalaxyRecord

DEFAULT_RECORDS_FIELD = "galaxies"


class JsonDatasetLoader:
    def __init__(self, dataset_path: str | Path, records_field: str = DEFAULT_RECORDS_FIELD) -> None:
        self.dataset_path = Path(dataset_path)
        self.records_field = records_field

    def load(self) -> list[GalaxyRecord]:
        try:
            with self.dataset_path.open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError as exc:
            raise DatasetError(f"Dataset file not found: {self.dataset_path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise DatasetError(f"Could not read dataset {self.dataset_path}: {exc}") from exc

        entries = payload.get(self.records_field) if isinstance(payload, dict) else None
        if not isinstance(entries, list) or not entries:
            raise DatasetError(f"No {self.records_field} found in {self.dataset_path}.")

        return [self._to_record(index, entry) for index, entry in enumerate(entries)]

    def _to_record(self, index: int, entry: Any) -> GalaxyRecord:
        if not isinstance(entry, dict):
            raise DatasetError(
                f"Entry {index} in {self.records_field} is {type(entry).__name__}, expected an object."
            )
        name = entry.get("name")
        return GalaxyRecord(id=entry.get("id"), name="" if name is None else str(name))
