"""
Authenticated client for the marketplace REST API.

Every page goes through ApiClient.request():
  - attaches JSON headers and, when the session holds one, the bearer token
  - 401 clears the session token and raises Unauthorized; the caller decides
    where the user goes next
  - any other non-2xx raises HttpError with the server's message
  - transport failures raise NetworkError, non-JSON bodies raise ParseError

Typed wrappers use parse() to validate payloads with pydantic at the boundary.
"""

import time
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from stayfront.core.config import get_settings
from stayfront.core.errors import HttpError, NetworkError, ParseError, Unauthorized
from stayfront.core.logging import get_logger
from stayfront.core.metrics import record_api_request, record_session_event
from stayfront.services.session import Session

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiClient:

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @classmethod
    def from_settings(cls) -> "ApiClient":
        settings = get_settings()
        http = httpx.AsyncClient(
            base_url=settings.API_URL,
            timeout=settings.API_TIMEOUT,
        )
        return cls(http)

    async def close(self) -> None:
        await self.http.aclose()

    @staticmethod
    def _headers(session: Session) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if session.token:
            headers["Authorization"] = f"Bearer {session.token}"
        return headers

    async def request(
        self,
        session: Session,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        params: Optional[dict] = None,
        error_message: Optional[str] = None,
        raise_unauthorized: bool = True,
    ) -> Any:
        """
        Send one request and return the parsed JSON body.

        ``error_message`` replaces the generic fallback when a failing
        response carries no message of its own. With
        ``raise_unauthorized=False`` a 401 is reported as an ordinary
        HttpError (wrong password on the login form is not a lost session).
        """
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json")

        start = time.perf_counter()
        try:
            response = await self.http.request(
                method,
                endpoint,
                json=body,
                params=params,
                headers=self._headers(session),
            )
        except httpx.HTTPError as e:
            duration = time.perf_counter() - start
            record_api_request(method, "network_error", duration)
            logger.error("api_request_failed", method=method, endpoint=endpoint, error=str(e))
            raise NetworkError() from e

        duration = time.perf_counter() - start
        record_api_request(method, str(response.status_code), duration)
        logger.info(
            "api_request_completed",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        if response.status_code == 401 and raise_unauthorized:
            if session.token:
                record_session_event("expired")
            await session.clear_token()
            raise Unauthorized()

        if not response.is_success:
            raise HttpError(response.status_code, self._error_message(response, error_message))

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("api_response_not_json", endpoint=endpoint, status_code=response.status_code)
            raise ParseError() from e

    @staticmethod
    def _error_message(response: httpx.Response, fallback: Optional[str]) -> str:
        generic = fallback or f"Request failed (Status: {response.status_code})"
        try:
            data = response.json()
        except ValueError:
            return generic
        if isinstance(data, dict):
            message = data.get("message") or data.get("error")
            if isinstance(message, str) and message:
                return message
        return generic


def parse(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a remote payload, turning shape mismatches into ParseError."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.error("api_payload_invalid", model=model.__name__, errors=e.error_count())
        raise ParseError() from e


def parse_list(model: type[ModelT], payload: Any) -> list[ModelT]:
    if not isinstance(payload, list):
        logger.error("api_payload_invalid", model=model.__name__, reason="expected_list")
        raise ParseError()
    return [parse(model, item) for item in payload]
