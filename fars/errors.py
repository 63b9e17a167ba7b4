"""Error taxonomy for loading and filtering FARS tables."""


class FarsError(Exception):
    """Base class for pipeline failures."""

    error_code = "FARS_ERROR"


class SourceNotFound(FarsError, FileNotFoundError):
    """Raised when a year's accident file does not exist."""

    error_code = "SOURCE_NOT_FOUND"

    def __init__(self, path: str):
        super().__init__(f"file '{path}' does not exist")
        self.path = path


class InvalidState(FarsError, ValueError):
    """Raised when a state code does not appear in the loaded year's data."""

    error_code = "INVALID_STATE"

    def __init__(self, state: int | str | None):
        super().__init__(f"invalid STATE number: {state}")
        self.state = state


class InvalidYearWarning(UserWarning):
    """Issued when one year of a batch could not be loaded and is skipped."""

    error_code = "INVALID_YEAR"
