# app/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception
import requests

from app.utils.settings import USER_SERVICE_RETRY_ATTEMPTS


def is_transient_http_error(exc: BaseException) -> bool:
    #4xx to odpowiedz serwera, retry tylko dla bledow polaczenia i 5xx
    if isinstance(exc, requests.HTTPError):
        return exc.response is None or exc.response.status_code >= 500
    return isinstance(exc, requests.RequestException)


def http_retry(attempts: int = USER_SERVICE_RETRY_ATTEMPTS):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(is_transient_http_error),
    )
