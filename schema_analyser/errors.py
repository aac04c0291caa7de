"""Error types for the schema analyser."""

from typing import Optional, Dict, Any


class AnalyserError(Exception):
    """Base exception for schema analyser errors."""

    def __init__(self, message: str, code: str = "ANALYSER_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConnectionError(AnalyserError):
    """Error connecting to the database server."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class QueryError(AnalyserError):
    """A catalog query that must succeed failed on the server."""

    def __init__(self, query_name: str, message: str, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        error_details["query"] = query_name
        super().__init__(message, code="QUERY_ERROR", details=error_details)
        self.query_name = query_name


class UnknownQueryError(AnalyserError):
    """The dialect has no catalog query template with the requested name."""

    def __init__(self, query_name: str):
        super().__init__(
            f"Unknown catalog query: {query_name}",
            code="UNKNOWN_QUERY",
            details={"query": query_name}
        )
        self.query_name = query_name


class RowValidationError(AnalyserError):
    """A catalog row did not match the record expected for its query."""

    def __init__(self, query_name: str, message: str, errors: Optional[list] = None):
        super().__init__(
            message,
            code="ROW_VALIDATION_ERROR",
            details={"query": query_name, "errors": errors or []}
        )
        self.query_name = query_name


class ObjectNotFoundError(AnalyserError):
    """A single-object analysis found no object with the given name."""

    def __init__(self, kind: str, pure_name: str):
        super().__init__(
            f"Object not found: {pure_name} in {kind}",
            code="OBJECT_NOT_FOUND",
            details={"kind": kind, "pure_name": pure_name}
        )
