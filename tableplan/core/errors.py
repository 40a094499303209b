"""
Domain errors raised by the table plan services

Each error carries the HTTP status and error code the API layer renders it
with, so services never import FastAPI.
"""


class TablePlanError(Exception):
    """Base class for all table plan failures"""

    status_code = 400
    error_code = "table_plan_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TablePlanError):
    """A section or table does not exist"""

    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")
        self.resource = resource


class InvalidArgumentError(TablePlanError):
    status_code = 400
    error_code = "invalid_argument"


class InconsistentError(TablePlanError):
    """Cross-record check failed, e.g. a parent table outside the given section"""

    status_code = 400
    error_code = "inconsistent"


class StoreFailureError(TablePlanError):
    """The document store rejected or failed an operation"""

    status_code = 500
    error_code = "store_failure"
