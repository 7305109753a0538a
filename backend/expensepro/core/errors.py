# expensepro/core/errors.py
"""Error taxonomy shared by the record store, the services and the API.

Every error carries the HTTP status the API answers with; the FastAPI app
installs a single handler for ``ExpenseProError``.
"""


class ExpenseProError(Exception):
    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class NotReadyError(ExpenseProError):
    """Store used before ``open()``."""
    status_code = 503


class NotFoundError(ExpenseProError):
    status_code = 404


class DuplicateKeyError(ExpenseProError):
    status_code = 409


class ValidationError(ExpenseProError):
    status_code = 400


class AuthorizationError(ExpenseProError):
    status_code = 403


class FormatError(ExpenseProError):
    """Malformed backup snapshot."""
    status_code = 400


class StorageError(ExpenseProError):
    """Underlying persistence failure; the original exception is chained as __cause__."""
    status_code = 500
