from .exercisedb_client import (
    FetchError,
    RateLimited,
    Unauthorized,
    NetworkUnreachable,
    MalformedResponse,
    EmptyOrInvalidPayload,
    RequestSetupFailed,
    HttpError,
    error_for_status,
    parse_exercises,
    fetch_exercises,
)

__all__ = [
    "FetchError",
    "RateLimited",
    "Unauthorized",
    "NetworkUnreachable",
    "MalformedResponse",
    "EmptyOrInvalidPayload",
    "RequestSetupFailed",
    "HttpError",
    "error_for_status",
    "parse_exercises",
    "fetch_exercises",
]
