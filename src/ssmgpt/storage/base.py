"""Storage exceptions."""


class StorageError(Exception):
    """Base exception for storage errors."""

    def __init__(self, message: str, storage_type: str, original_error: Exception | None = None):
        self.message = message
        self.storage_type = storage_type
        self.original_error = original_error
        super().__init__(self.message)


class CorpusLoadError(StorageError):
    """The corpus file is missing or malformed. Fatal at startup."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message=message, storage_type="json", original_error=original_error)
