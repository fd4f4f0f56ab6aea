"""Client-side access to the school list.

``SchoolsClient`` mirrors what the grid UI needs: the last good list of
schools, a loading flag and a user-facing error message. It never raises to
its caller; every failure ends up as a string in ``error``.

``timeout`` is handed to requests as is, so it bounds the connect and each
socket read separately. A server that keeps trickling bytes can hold a fetch
open past it; there is no overall deadline.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from ..core.config import settings

logger = logging.getLogger(__name__)

REQUIRED_STRING_FIELDS = ("name", "address", "city", "state", "contact", "email_id")

TIMEOUT_MESSAGE = "Request timed out. Please try again."
CONNECTION_MESSAGE = "Unable to connect to the server. Please check your internet connection."
UNEXPECTED_MESSAGE = "An unexpected error occurred while loading schools."


class FetchError(Exception):
    pass


def status_message(status_code: int) -> str:
    if status_code == 404:
        return "Schools API endpoint not found"
    if status_code == 500:
        return "Server error occurred while fetching schools"
    if status_code == 503:
        return "Service temporarily unavailable"
    return f"Failed to fetch schools ({status_code})"


def is_valid_school(school: Any) -> bool:
    if not isinstance(school, dict):
        return False
    school_id = school.get("id")
    # bool is an int subclass but never a valid id
    if not isinstance(school_id, int) or isinstance(school_id, bool):
        return False
    return all(isinstance(school.get(f), str) for f in REQUIRED_STRING_FIELDS)


class SchoolsClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        autoload: bool = False,
    ) -> None:
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.CLIENT_TIMEOUT_SECONDS
        self.schools: List[Dict[str, Any]] = []
        self.loading = True
        self.error: Optional[str] = None
        if autoload:
            self.fetch_schools()

    @property
    def state(self) -> Dict[str, Any]:
        return {"schools": list(self.schools), "loading": self.loading, "error": self.error}

    def _get_list(self) -> List[Any]:
        response = self.session.get(
            f"{self.base_url}/api/schools",
            headers={"Content-Type": "application/json", "Cache-Control": "no-store"},
            timeout=self.timeout,
        )
        if not response.ok:
            raise FetchError(status_message(response.status_code))

        try:
            result = response.json()
        except ValueError:
            raise FetchError("Failed to fetch schools")
        if not isinstance(result, dict) or not result.get("success"):
            result = result if isinstance(result, dict) else {}
            raise FetchError(result.get("message") or result.get("error") or "Failed to fetch schools")

        data = result.get("data") or []
        if not isinstance(data, list):
            raise FetchError("Failed to fetch schools")
        return data

    def fetch_schools(self) -> None:
        try:
            self.error = None
            data = self._get_list()

            valid = [s for s in data if is_valid_school(s)]
            self.schools = valid
            if len(valid) != len(data):
                logger.warning(f"Filtered out {len(data) - len(valid)} invalid school records")
        except requests.Timeout:
            logger.error("Timed out fetching schools")
            self.error = TIMEOUT_MESSAGE
        except requests.ConnectionError as e:
            logger.error(f"Error fetching schools: {e}")
            self.error = CONNECTION_MESSAGE
        except FetchError as e:
            logger.error(f"Error fetching schools: {e}")
            self.error = str(e)
        except Exception as e:
            logger.error(f"Error fetching schools: {e}", exc_info=True)
            self.error = UNEXPECTED_MESSAGE
        finally:
            self.loading = False

    def refetch(self) -> None:
        """User-initiated retry; shows the loading state."""
        self.loading = True
        self.fetch_schools()

    def refresh(self) -> None:
        """Background revalidation without a loading flicker."""
        self.fetch_schools()
