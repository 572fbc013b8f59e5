"""Load the listing dataset from disk."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from .models import Dataset

LOGGER = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    """Raised when the dataset file cannot be read or parsed."""


def _read_records(path: Path) -> List[Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise DatasetLoadError(f"Dataset file not found: {path}") from exc
    except OSError as exc:
        raise DatasetLoadError(f"Could not read dataset file {path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(f"Dataset file {path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise DatasetLoadError(
            f"Dataset file {path} must contain a JSON array, got {type(payload).__name__}"
        )
    for position, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise DatasetLoadError(
                f"Entry {position} in {path} is {type(entry).__name__}, expected an object"
            )
    return payload


def load_dataset(path: Union[str, Path]) -> Dataset:
    """Read ``path`` once and return the immutable :class:`Dataset`.

    Any problem with the file is fatal for the caller: there is no partial
    load and no retry.
    """

    dataset_path = Path(path)
    records = _read_records(dataset_path)
    dataset = Dataset.from_records(records, source=str(dataset_path))
    LOGGER.info("Loaded %d listings from %s", len(dataset), dataset_path)
    return dataset
