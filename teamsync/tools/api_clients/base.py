"""Base API client for all entity services"""
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

import httpx

from ...utils.exceptions import (
    RemoteFailure, RemoteValidationFailure, NotFoundFailure, MalformedResponseFailure
)

logger = logging.getLogger(__name__)


def many(decoder: Callable[[Any], Any]) -> Callable[[Any], List[Any]]:
    """Decoder for a JSON array of models"""
    return lambda items: [decoder(item) for item in items]


class BaseAPIClient:
    """Shared request handling for the remote dashboard API.

    Every call either returns the decoded JSON body or raises a
    ``RemoteFailure``. Nothing is retried here.
    """

    service = "api"

    def __init__(self, base_url: str, api_key: Optional[str] = None,
                 timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.headers = self._build_headers()
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    def _build_headers(self) -> Dict[str, str]:
        """Build common headers"""
        headers = {
            'Content-Type': 'application/json',
            'User-Agent': 'TeamSync/1.0'
        }
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def get_endpoint(self, path: str) -> str:
        """Build full endpoint URL"""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _request(self, method: str, path: str,
                       decode: Optional[Callable[[Any], Any]] = None, **kwargs) -> Any:
        """Send a request and return its body, passed through ``decode`` when given.

        A 2xx body that is not JSON, or that ``decode`` cannot turn into a
        model, raises ``MalformedResponseFailure``.
        """
        endpoint = f"{method} {path}"
        headers = {**self.headers, 'X-Request-ID': uuid.uuid4().hex}
        try:
            resp = await self._client.request(method, self.get_endpoint(path),
                                              headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{endpoint} failed: {e}")
            raise RemoteFailure(self.service, f"Network error: {e} (endpoint: {endpoint})") from e

        self._raise_for_status(resp, endpoint)
        if resp.status_code == 204 or not resp.content:
            return None

        try:
            data = resp.json()
        except ValueError as e:
            raise self._malformed(resp, endpoint, "response is not JSON") from e

        if decode is None or data is None:
            return data
        try:
            return decode(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise self._malformed(resp, endpoint, f"{type(e).__name__}: {e}") from e

    def _malformed(self, resp: httpx.Response, endpoint: str, reason: str) -> MalformedResponseFailure:
        message = f"Invalid response body, {reason} (endpoint: {endpoint})"
        logger.error(f"{self.service} returned {resp.status_code}: {message}")
        return MalformedResponseFailure(self.service, message, resp.status_code, resp.text,
                                        resp.headers.get('x-request-id'))

    def _empty_body(self, endpoint: str) -> MalformedResponseFailure:
        message = f"Invalid response body, expected an entity but got none (endpoint: {endpoint})"
        logger.error(f"{self.service}: {message}")
        return MalformedResponseFailure(self.service, message)

    def _raise_for_status(self, resp: httpx.Response, endpoint: str) -> None:
        """Raise the matching RemoteFailure for an error response"""
        if resp.status_code < 400:
            return

        request_id = resp.headers.get('x-request-id')
        try:
            body = resp.json()
        except ValueError:
            body = resp.text

        if isinstance(body, dict):
            message = body.get('message') or body.get('detail') or str(body)
        else:
            message = str(body) or resp.reason_phrase

        full_message = f"{message} (endpoint: {endpoint})"
        logger.warning(f"{self.service} returned {resp.status_code}: {full_message}")

        if resp.status_code == 404:
            raise NotFoundFailure(self.service, full_message, resp.status_code, body, request_id)
        if resp.status_code in (400, 422):
            raise RemoteValidationFailure(self.service, full_message, resp.status_code, body, request_id)
        raise RemoteFailure(self.service, full_message, resp.status_code, body, request_id)

    async def close(self) -> None:
        await self._client.aclose()
