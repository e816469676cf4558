"""Custom exceptions for the timetable engine."""


class TimetableError(Exception):
    """Base exception for timetable engine errors."""

    pass


class CatalogNotFoundError(TimetableError):
    """Catalog data directory does not exist."""

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        super().__init__(f"Catalog directory '{data_dir}' not found")


class InvalidDataError(TimetableError):
    """Catalog data validation failed."""

    def __init__(self, message: str, file_name: str | None = None, index: int | None = None):
        self.file_name = file_name
        self.index = index
        location = ""
        if file_name:
            location += f" in '{file_name}'"
        if index is not None:
            location += f" at item {index}"
        super().__init__(f"Invalid data{location}: {message}")


class BatchNotFoundError(TimetableError):
    """Requested batch is not in the catalog."""

    def __init__(self, batch_id: str, available_batches: list[str] | None = None):
        self.batch_id = batch_id
        self.available_batches = available_batches or []
        message = f"Batch '{batch_id}' not found in catalog"
        if self.available_batches:
            message += f". Available batches: {', '.join(self.available_batches)}"
        super().__init__(message)


class InvalidTransitionError(TimetableError):
    """Timetable status change is not allowed by the review workflow."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot move timetable from '{current}' to '{requested}'"
        )
