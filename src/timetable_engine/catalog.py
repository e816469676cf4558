"""Catalog loader for scheduling input data."""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from .exceptions import BatchNotFoundError, CatalogNotFoundError, InvalidDataError
from .models import Catalog, Faculty, Institution, Room, StudentBatch, Subject
from .scheduler.models import HardConstraint, OptimizationSettings, SoftConstraint
from .scheduler.timegrid import default_institution

logger = logging.getLogger(__name__)

T = TypeVar("T")

INSTITUTION_FILE = "institution.json"
SUBJECTS_FILE = "subjects.json"
FACULTY_FILE = "faculty.json"
ROOMS_FILE = "rooms.json"
BATCHES_FILE = "batches.json"
CONSTRAINTS_FILE = "constraints.json"
SETTINGS_FILE = "settings.json"


class CatalogLoader:
    """Loads institution configuration and catalog entities from a directory."""

    def __init__(self, data_dir: Path | str):
        """
        Initialize the loader and read every file.

        Args:
            data_dir: Directory containing the JSON files.
                     Expected files (all optional):
                     - institution.json (object)
                     - subjects.json, faculty.json, rooms.json, batches.json (lists)
                     - constraints.json ({"hard": [...], "soft": [...]})
                     - settings.json (optimization settings object)

        Raises:
            CatalogNotFoundError: If the directory does not exist
            InvalidDataError: If a file is not valid JSON or an item is malformed
        """
        self.data_dir = Path(data_dir)
        if not self.data_dir.is_dir():
            raise CatalogNotFoundError(str(self.data_dir))

        institution_data = self._read_json(INSTITUTION_FILE)
        if institution_data is None:
            logger.info(f"No {INSTITUTION_FILE} in {self.data_dir}, using default calendar")
            self.institution = default_institution()
        else:
            self.institution = self._build(
                Institution.from_dict, institution_data, INSTITUTION_FILE
            )

        self.catalog = Catalog(
            subjects=self._load_list(SUBJECTS_FILE, Subject.from_dict),
            faculty=self._load_list(FACULTY_FILE, Faculty.from_dict),
            rooms=self._load_list(ROOMS_FILE, Room.from_dict),
            batches=self._load_list(BATCHES_FILE, StudentBatch.from_dict),
        )

        self.hard_constraints: list[HardConstraint] | None = None
        self.soft_constraints: list[SoftConstraint] | None = None
        constraints = self._read_json(CONSTRAINTS_FILE)
        if constraints is not None:
            if not isinstance(constraints, dict):
                raise InvalidDataError("expected an object", file_name=CONSTRAINTS_FILE)
            if "hard" in constraints:
                self.hard_constraints = self._build_list(
                    constraints["hard"], HardConstraint.from_dict, CONSTRAINTS_FILE
                )
            if "soft" in constraints:
                self.soft_constraints = self._build_list(
                    constraints["soft"], SoftConstraint.from_dict, CONSTRAINTS_FILE
                )

        settings = self._read_json(SETTINGS_FILE)
        self.settings = (
            self._build(OptimizationSettings.from_dict, settings, SETTINGS_FILE)
            if settings is not None
            else OptimizationSettings()
        )

        logger.info(
            f"Loaded catalog: {len(self.catalog.subjects)} subjects, "
            f"{len(self.catalog.faculty)} faculty, {len(self.catalog.rooms)} rooms, "
            f"{len(self.catalog.batches)} batches"
        )

    def _get_path(self, filename: str) -> Path | None:
        """Get path to data file if it exists."""
        path = self.data_dir / filename
        return path if path.exists() else None

    def _read_json(self, filename: str) -> Any:
        path = self._get_path(filename)
        if path is None:
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidDataError(str(e), file_name=filename) from e

    def _load_list(self, filename: str, factory: Callable[[dict], T]) -> list[T]:
        data = self._read_json(filename)
        if data is None:
            return []
        return self._build_list(data, factory, filename)

    @staticmethod
    def _build_list(
        items: list[dict], factory: Callable[[dict], T], filename: str
    ) -> list[T]:
        if not isinstance(items, list):
            raise InvalidDataError("expected a list", file_name=filename)
        result = []
        for index, item in enumerate(items):
            result.append(CatalogLoader._build(factory, item, filename, index))
        return result

    @staticmethod
    def _build(
        factory: Callable[[dict], T],
        item: Any,
        filename: str,
        index: int | None = None,
    ) -> T:
        if not isinstance(item, dict):
            raise InvalidDataError("expected an object", file_name=filename, index=index)
        try:
            return factory(item)
        except KeyError as e:
            raise InvalidDataError(
                f"missing required field {e}", file_name=filename, index=index
            ) from e
        except (TypeError, ValueError) as e:
            raise InvalidDataError(str(e), file_name=filename, index=index) from e

    def select_batch(self, batch_id: str) -> Catalog:
        """Catalog narrowed to a single batch.

        Raises:
            BatchNotFoundError: If no batch has this id
        """
        batch = self.catalog.get_batch(batch_id)
        if batch is None:
            raise BatchNotFoundError(batch_id, [b.id for b in self.catalog.batches])
        return Catalog(
            subjects=self.catalog.subjects,
            faculty=self.catalog.faculty,
            rooms=self.catalog.rooms,
            batches=[batch],
        )
