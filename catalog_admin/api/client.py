"""HTTP client for the content store.

Each call is a single attempt: failures are logged and reported in the
returned ``ApiResult``, never retried. The bearer token is read from the
injected ``Session`` on every request, and a 401 clears the session.
"""

from dataclasses import dataclass
from typing import Any, BinaryIO, Optional

import httpx
from loguru import logger

from catalog_admin.auth.session import Session
from catalog_admin.config import AdminConfig
from catalog_admin.errors import AuthenticationError, RemoteError, TransportError

SESSION_EXPIRED = "Session expired"


@dataclass
class ApiResult:
    """Outcome of one store request."""

    success: bool
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def auth_failed(self) -> bool:
        return self.status_code == 401

    def raise_for_failure(self) -> Any:
        """Return ``data`` on success, otherwise raise the matching error.

        Raises:
            AuthenticationError: Token rejected (401)
            TransportError: No response was received
            RemoteError: Store reported a failure
        """
        if self.success:
            return self.data
        message = self.error or "Request failed"
        if self.auth_failed:
            raise AuthenticationError(message, self.status_code)
        if self.status_code is None:
            raise TransportError(message)
        raise RemoteError(message, self.status_code)


class StoreClient:
    """Thin request layer over the store's REST endpoints."""

    def __init__(
        self,
        config: AdminConfig,
        session: Session,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the store client.

        Args:
            config: API URL and timeout
            session: Session supplying the bearer token
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self.session = session
        self.client = httpx.Client(
            base_url=config.api_url,
            timeout=httpx.Timeout(config.timeout, connect=10.0),
            headers={"accept": "application/json"},
            transport=transport,
        )

    def get(self, path: str) -> ApiResult:
        return self._request("GET", path)

    def post(self, path: str, body: Any = None, clear_on_401: bool = True) -> ApiResult:
        return self._request("POST", path, clear_on_401=clear_on_401, json=body)

    def put(self, path: str, body: Any = None) -> ApiResult:
        return self._request("PUT", path, json=body)

    def delete(self, path: str) -> ApiResult:
        return self._request("DELETE", path)

    def upload(
        self,
        path: str,
        field_name: str,
        filename: str,
        fileobj: BinaryIO,
        content_type: str,
    ) -> ApiResult:
        """Send one file as multipart form data.

        Progress reporting is the caller's concern: ``fileobj`` is read in
        chunks while the request body is streamed.
        """
        files = {field_name: (filename, fileobj, content_type)}
        return self._request("POST", path, files=files)

    def _request(
        self, method: str, path: str, clear_on_401: bool = True, **kwargs: Any
    ) -> ApiResult:
        """Send one request.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            clear_on_401: Drop the session when the store answers 401. Off for
                the login call, where a 401 means wrong credentials
            **kwargs: Passed through to ``httpx.Client.request``
        """
        url = "/" + path.lstrip("/")
        logger.debug(f"{method} {url}")

        try:
            response = self.client.request(
                method, url, headers=self.session.auth_headers(), **kwargs
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            return ApiResult(success=False, error=f"Network error: {e}")

        if response.status_code == 401:
            if clear_on_401:
                self.session.clear(SESSION_EXPIRED)
            return ApiResult(
                success=False,
                error=_error_message(response) or SESSION_EXPIRED,
                status_code=401,
            )

        return _parse_response(method, url, response)

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _parse_response(method: str, url: str, response: httpx.Response) -> ApiResult:
    """Unwrap the two envelopes the store uses.

    ``{"success": ..., "data"|"token"|"url": ...}`` for catalog, auth and
    upload endpoints; bare JSON for the home and static-page collections.
    """
    status = response.status_code

    body: Any = None
    if response.content:
        try:
            body = response.json()
        except ValueError:
            if response.is_success:
                logger.error(f"{method} {url} returned invalid JSON")
                return ApiResult(
                    success=False, error="Invalid response from server", status_code=status
                )

    if not response.is_success:
        message = _error_message(response) or f"Request failed with status {status}"
        logger.warning(f"{method} {url} rejected ({status}): {message}")
        return ApiResult(success=False, error=message, status_code=status)

    if isinstance(body, dict) and "success" in body:
        if not body.get("success"):
            message = body.get("error") or body.get("message") or "Request failed"
            logger.warning(f"{method} {url} reported failure: {message}")
            return ApiResult(success=False, error=message, status_code=status)
        data = body["data"] if "data" in body else body
        return ApiResult(success=True, data=data, status_code=status)

    return ApiResult(success=True, data=body, status_code=status)


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("error") or body.get("message")
    return None
