import logging
from typing import Any, Iterable, Optional

import requests
from pydantic import ValidationError

from cinebook.core.config import settings
from cinebook.core.context import ClientContext
from cinebook.core.exceptions import RemoteApiError, RemoteUnavailableError
from cinebook.schemas.common import ApiEnvelope

logger = logging.getLogger(__name__)

SUCCESS_CODES = frozenset({200})


class ApiClient:
    """
    Thin wrapper around the remote cinema API.

    Every response is an envelope ``{code, message, result}``; callers get ``result``
    back, or an exception. Nothing is retried here, retry is always the user's call.
    """

    DEFAULT_HEADERS = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        context: Optional[ClientContext] = None,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.base_url = (base_url or settings.REMOTE_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REMOTE_API_TIMEOUT
        self.context = context or ClientContext()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def get(self, path: str, *, params: Optional[dict] = None, success_codes: Iterable[int] = SUCCESS_CODES) -> Any:
        return self.request("GET", path, params=params, success_codes=success_codes)

    def post(self, path: str, *, json: Any = None, success_codes: Iterable[int] = SUCCESS_CODES) -> Any:
        return self.request("POST", path, json=json, success_codes=success_codes)

    def delete(self, path: str, *, success_codes: Iterable[int] = SUCCESS_CODES) -> Any:
        return self.request("DELETE", path, success_codes=success_codes)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        success_codes: Iterable[int] = SUCCESS_CODES,
    ) -> Any:
        url = self.url_for(path)
        headers = {**self.DEFAULT_HEADERS, **self.context.auth_headers()}
        logger.debug("API request: %s %s", method, url)

        try:
            response = self.session.request(
                method, url, params=params, json=json, headers=headers, timeout=self.timeout
            )
        except requests.Timeout as exc:
            logger.warning("Timed out after %ss: %s %s", self.timeout, method, url)
            raise RemoteUnavailableError(
                "The server took too long to respond. Please try again later."
            ) from exc
        except requests.ConnectionError as exc:
            logger.warning("Network error: %s %s (%s)", method, url, exc)
            raise RemoteUnavailableError(
                "Cannot reach the server. Check your connection and try again."
            ) from exc

        return self._unwrap(response, method, url, frozenset(success_codes))

    # ------------------------------------------------------------------
    # Envelope handling
    # ------------------------------------------------------------------

    def _unwrap(self, response: requests.Response, method: str, url: str, success_codes: frozenset) -> Any:
        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            message = None
            if isinstance(body, dict):
                message = body.get("message")
            if response.status_code == 401:
                logger.info("Unauthorized: %s %s", method, url)
            else:
                logger.warning("API error %s: %s %s", response.status_code, method, url)
            raise RemoteApiError(
                message or f"Server error ({response.status_code})",
                status_code=response.status_code,
                payload=body,
            )

        try:
            envelope = ApiEnvelope[Any].model_validate(body)
        except ValidationError as exc:
            raise RemoteApiError(
                "Unexpected response from server",
                status_code=response.status_code,
                payload=body,
            ) from exc

        if envelope.code not in success_codes:
            logger.warning("API envelope code %s: %s %s", envelope.code, method, url)
            raise RemoteApiError(
                envelope.message or f"Request failed (code {envelope.code})",
                status_code=envelope.code,
                payload=body,
            )

        return envelope.result
