from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from fitexplorer.config import Settings, get_settings
from fitexplorer.models.exercise import ExerciseRecord

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Base for every way the exercise request can fail.

    ``status_message`` is the short text shown in the status badge.
    """

    status_message = "Request Failed"


class RateLimited(FetchError):
    status_message = "Rate Limit Exceeded"


class Unauthorized(FetchError):
    status_message = "Authentication Failed"


class NetworkUnreachable(FetchError):
    status_message = "Network Error"


class MalformedResponse(FetchError):
    status_message = "Response Parse Error"


class EmptyOrInvalidPayload(FetchError):
    status_message = "Invalid API Response"


class RequestSetupFailed(FetchError):
    status_message = "Request Setup Failed"


class HttpError(FetchError):
    def __init__(self, code: int, detail: str = "") -> None:
        super().__init__(f"HTTP {code}: {detail}" if detail else f"HTTP {code}")
        self.code = code
        self.status_message = f"HTTP Error {code}"


def error_for_status(status: int, body: str = "") -> Optional[FetchError]:
    """Map a response status to its failure category, or None for 200."""
    if status == 200:
        return None
    if status == 429:
        return RateLimited("Too many requests (429)")
    if status in (401, 403):
        return Unauthorized(f"Check API key and subscription status ({status})")
    if status == 0:
        return NetworkUnreachable("Network error or CORS issue (status 0)")
    return HttpError(status, body[:200])


def parse_exercises(payload: Any) -> List[ExerciseRecord]:
    """Validate a decoded JSON body. Anything but a non-empty array of complete records fails."""
    if not isinstance(payload, list) or not payload:
        raise EmptyOrInvalidPayload(f"Expected a non-empty array, got {type(payload).__name__}")
    try:
        return [ExerciseRecord.model_validate(item) for item in payload]
    except ValidationError as e:
        raise EmptyOrInvalidPayload(f"Exercise records failed validation: {e.error_count()} error(s)") from e


def _headers(settings: Settings) -> Dict[str, str]:
    return {
        "x-rapidapi-key": settings.EXERCISEDB_API_KEY or "",
        "x-rapidapi-host": settings.EXERCISEDB_API_HOST,
    }


def fetch_exercises(
    settings: Settings | None = None,
    session: requests.Session | None = None,
) -> List[ExerciseRecord]:
    """Fetch the full exercise list with a single GET. Raises a FetchError subclass on any failure."""
    settings = settings or get_settings()
    if not settings.EXERCISEDB_API_KEY:
        raise RequestSetupFailed("EXERCISEDB_API_KEY is not set; cannot perform API call.")
    if not settings.EXERCISEDB_ENDPOINT:
        raise RequestSetupFailed("EXERCISEDB_ENDPOINT is not set; cannot perform API call.")

    endpoint = settings.EXERCISEDB_ENDPOINT.strip()
    logger.info("Requesting exercises from %s", endpoint)
    http = session or requests.Session()
    try:
        resp = http.get(endpoint, headers=_headers(settings), timeout=settings.EXERCISEDB_TIMEOUT_SECONDS)
    except (requests.ConnectionError, requests.Timeout) as e:
        raise NetworkUnreachable(str(e)) from e
    except requests.RequestException as e:
        raise RequestSetupFailed(str(e)) from e
    finally:
        if session is None:
            http.close()

    body = resp.text or ""
    logger.info("ExerciseDB responded with status %s (%d bytes)", resp.status_code, len(body))
    err = error_for_status(resp.status_code, body)
    if err is not None:
        raise err

    try:
        payload = resp.json()
    except ValueError as e:
        logger.debug("Unparseable body preview: %s", body[:300])
        raise MalformedResponse(f"Could not decode JSON body: {e}") from e

    exercises = parse_exercises(payload)
    logger.info("Parsed %d exercises from ExerciseDB", len(exercises))
    return exercises
