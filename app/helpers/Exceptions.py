from typing import Any, List, Optional


class NewsServiceError(Exception):
    """Base class for errors raised by the news data-access layer."""


class InvalidIdentifierError(NewsServiceError):
    """
    Raised when an identifier is not a well-formed ObjectId.
    """

    def __init__(self, entity: str, message: str = ""):
        self.entity = entity
        self.message = message
        detail = f"Invalid {entity} ID"
        if message:
            detail = f"{detail}: {message}"
        super().__init__(detail)


class NotFoundError(NewsServiceError):
    """
    Raised when a referenced entity does not exist.
    """

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} not found")


class AttachmentBatchError(NewsServiceError):
    """
    Raised when one or more operations in an attachment batch fail.
    Holds every collected error, plus the results that did succeed.
    """

    def __init__(self, action: str, errors: List[BaseException], completed: Optional[List[Any]] = None):
        self.action = action
        self.errors = list(errors)
        self.completed = list(completed or [])
        reasons = "; ".join(str(error) for error in self.errors)
        super().__init__(f"Unable to {action} {len(self.errors)} attachment(s): {reasons}")
