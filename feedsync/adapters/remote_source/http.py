"""HTTP remote source backed by a content portal.

Documents are served at ``{base_url}/{owner_identity}/{path}``. The portal
returns the document's data link in the ``Skynet-Skylink`` header (falling
back to the ``ETag``), and honours ``If-None-Match`` with a 304 when the
content is unchanged.
"""

import hashlib
from typing import Optional
from urllib.parse import quote

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from feedsync.core.exceptions import MalformedDocumentError, NotFoundException, RemoteSourceError
from feedsync.core.logging import ContextualLogger
from feedsync.core.logging import logger as default_logger
from feedsync.core.protocols.remote_source import RemoteDocument

FINGERPRINT_HEADER = "Skynet-Skylink"


def should_retry(exception: BaseException) -> bool:
    """Retry on rate limits, server errors, timeouts and connection errors.

    Args:
        exception: Exception to check

    Returns:
        True if the request should be retried
    """
    if isinstance(exception, httpx.HTTPStatusError):
        status = exception.response.status_code
        return status == 429 or status >= 500
    return isinstance(
        exception,
        (
            httpx.ConnectTimeout,
            httpx.ReadTimeout,
            httpx.WriteTimeout,
            httpx.PoolTimeout,
            httpx.ConnectError,
        ),
    )


def _fingerprint(response: httpx.Response) -> str:
    link = response.headers.get(FINGERPRINT_HEADER) or response.headers.get("ETag")
    if link:
        return link.strip('"')
    return hashlib.sha256(response.content).hexdigest()


class HttpRemoteSource:
    """RemoteSource implementation over httpx."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 5,
        client: Optional[httpx.AsyncClient] = None,
        wait: Optional[wait_base] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the remote source.

        Args:
            base_url: Portal base URL
            timeout: Request timeout in seconds
            max_retries: Attempts per document before giving up
            client: Pre-built client (tests inject one with a mock transport)
            wait: Wait strategy between retries, exponential backoff by default
            logger: Logger to use
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.wait = wait or wait_exponential(multiplier=1, min=2, max=10)
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self.logger = (logger or default_logger).with_context(component="remote_source")

    def _url(self, owner_identity: str, path: str) -> str:
        return f"{self.base_url}/{quote(owner_identity, safe='')}/{quote(path, safe='/')}"

    async def fetch(
        self, owner_identity: str, path: str, cached_fingerprint: str = ""
    ) -> RemoteDocument:
        """Fetch a JSON document, conditionally when a fingerprint is given."""
        url = self._url(owner_identity, path)
        headers = {"If-None-Match": f'"{cached_fingerprint}"'} if cached_fingerprint else {}

        try:
            response = await self._get_with_retry(url, headers)
        except httpx.HTTPStatusError as e:
            raise RemoteSourceError(
                f"Portal returned HTTP {e.response.status_code} for '{path}' "
                f"of user '{owner_identity}'",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise RemoteSourceError(
                f"Request for '{path}' of user '{owner_identity}' failed: {type(e).__name__}"
            ) from e

        if response.status_code == 304:
            self.logger.debug(f"Unchanged: {owner_identity} {path}")
            return RemoteDocument(data=None, fingerprint=cached_fingerprint, unchanged=True)

        if response.status_code == 404:
            raise NotFoundException(
                f"Could not find file for user '{owner_identity}' at path '{path}'"
            )

        try:
            data = response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            raise MalformedDocumentError(path, f"invalid JSON ({e})") from e

        if data is None:
            raise NotFoundException(
                f"Could not find file for user '{owner_identity}' at path '{path}'"
            )

        fingerprint = _fingerprint(response)
        if cached_fingerprint and fingerprint == cached_fingerprint:
            return RemoteDocument(data=None, fingerprint=fingerprint, unchanged=True)

        self.logger.debug(f"Fetched: {owner_identity} {path}")
        return RemoteDocument(data=data, fingerprint=fingerprint)

    async def _get_with_retry(self, url: str, headers: dict) -> httpx.Response:
        @retry(
            stop=stop_after_attempt(self.max_retries),
            retry=retry_if_exception(should_retry),
            wait=self.wait,
            before_sleep=self._log_retry,
            reraise=True,
        )
        async def _get() -> httpx.Response:
            response = await self._client.get(url, headers=headers)
            if response.status_code not in (304, 404):
                response.raise_for_status()
            return response

        return await _get()

    def _log_retry(self, retry_state) -> None:
        exception = retry_state.outcome.exception()
        wait_time = retry_state.next_action.sleep if retry_state.next_action else 0
        if isinstance(exception, httpx.HTTPStatusError):
            error_desc = f"HTTP {exception.response.status_code}"
        else:
            error_desc = f"{type(exception).__name__}"
        self.logger.warning(
            f"Portal request failed ({error_desc}), retrying in {wait_time:.1f}s "
            f"(attempt {retry_state.attempt_number}/{self.max_retries})"
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
