# app/services/user_client.py
from dataclasses import dataclass
from enum import Enum

import requests
from pydantic import ValidationError
from requests import RequestException

from app.domain.schemas import UserProfile
from app.utils.retry import http_retry
from app.utils.settings import USER_SERVICE_URL, USER_SERVICE_TIMEOUT
from app.utils.logging import get_logger

logger = get_logger(__name__)


class LookupOutcome(str, Enum):
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    UNAVAILABLE = "UNAVAILABLE"


@dataclass(frozen=True)
class UserLookup:
    """
    Wynik zapytania do user-service.
    profile jest ustawione tylko dla FOUND.
    """

    outcome: LookupOutcome
    profile: UserProfile | None = None

    @property
    def found(self) -> bool:
        return self.outcome is LookupOutcome.FOUND


class UserClient:
    """
    Klient HTTP do user-service.
    fetch_user nigdy nie rzuca bledow transportu - zwraca UserLookup.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or USER_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else USER_SERVICE_TIMEOUT

    @http_retry()
    def _get(self, url: str) -> requests.Response:
        resp = requests.get(url, timeout=self.timeout)
        #404 to odpowiedz, nie blad transportu - bez retry
        if resp.status_code != 404:
            resp.raise_for_status()
        return resp

    def fetch_user(self, user_id: int) -> UserLookup:
        url = f"{self.base_url}/api/users/{user_id}"
        logger.info(f"UserClient GET {url}")

        try:
            resp = self._get(url)
        except RequestException as e:
            logger.warning(f"User service unavailable for user {user_id}: {e}")
            return UserLookup(LookupOutcome.UNAVAILABLE)

        if resp.status_code == 404:
            logger.info(f"User {user_id} not found in user service")
            return UserLookup(LookupOutcome.NOT_FOUND)

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning(f"User service returned invalid JSON for user {user_id}: {e}")
            return UserLookup(LookupOutcome.UNAVAILABLE)

        if not data:
            logger.warning(f"User service returned empty body for user {user_id}")
            return UserLookup(LookupOutcome.UNAVAILABLE)

        try:
            profile = UserProfile.model_validate(data)
        except ValidationError as e:
            logger.warning(f"User service returned malformed profile for user {user_id}: {e}")
            return UserLookup(LookupOutcome.UNAVAILABLE)

        return UserLookup(LookupOutcome.FOUND, profile)
