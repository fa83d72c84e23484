"""
Error taxonomy for the menu API.
Each error knows the HTTP status it maps to; main.py renders them into the
uniform {"error", "details"} envelope.
"""


class MenuError(Exception):
    """Base class for menu API errors."""

    status_code = 500

    def __init__(self, error: str, details: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.details = details

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(MenuError):
    """A required field is missing, null or malformed."""

    status_code = 400


class NotFoundError(MenuError):
    """The referenced menu item does not exist."""

    status_code = 404


class StorageError(MenuError):
    """Any transactional or read failure against the store."""

    status_code = 500
