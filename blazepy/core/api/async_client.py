"""
Async B2 API client.

Thin request/response transport used by every blazepy component.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import quote

import aiohttp

from .config import APIConfig
from .errors import B2APIError, ErrorClassifier, ErrorKind
from ..listing.models import ListBucketsConfig, ListBucketsResult, ListFileNamesConfig, ListFileNamesResult
from ..logging import get_logger
from ..session.models import AuthorizedSession
from ..models import AUTO_CONTENT_TYPE, FileVersion, UploadLease

T = TypeVar('T')


class AsyncAPIClient:
    """
    Asynchronous B2 API client.

    Every failure is raised as a B2APIError:
    - transport failures are classified without consulting a body
    - 4xx/5xx responses are classified from their error body
    - undecodable success bodies become ErrorKind.DESERIALIZE

    No request is retried.

    Example:
        >>> async with AsyncAPIClient(APIConfig.default()) as client:
        ...     data = await client.request('GET', url, headers=headers)
    """

    def __init__(self, config: Optional[APIConfig] = None):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False

        self._logger = get_logger('blazepy.api')
        # Leave the level to the root logger once basicConfig has been called
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncAPIClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[bytes] = None,
        auth: Optional[aiohttp.BasicAuth] = None,
        decoder: Optional[Callable[[Any], T]] = None
    ) -> Any:
        """
        Send one request and decode its JSON response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra request headers
            params: Query string parameters
            json: JSON request body
            data: Raw request body
            auth: Basic auth credentials
            decoder: Optional callable applied to the decoded JSON

        Returns:
            Decoded JSON, or decoder(json) when a decoder is given

        Raises:
            B2APIError: On any transport, HTTP or decoding failure
        """
        if self._closed:
            self._logger.debug(f"Request on closed client: {method} {url}")
            raise B2APIError(ErrorKind.CONNECT, ErrorClassifier.TRANSPORT_MESSAGES[ErrorKind.CONNECT])

        session = await self._ensure_session()
        self._logger.debug(f"{method} {url}")

        error: Optional[B2APIError] = None
        payload: Any = None
        try:
            async with session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                data=data,
                auth=auth,
                proxy=self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
            ) as response:
                if response.status >= 400:
                    error = await ErrorClassifier.classify(response)
                else:
                    payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            self._logger.error(f"Request failed: {method} {url}: {e!r}")
            raise ErrorClassifier.classify_exception(e) from e

        if error is not None:
            self._logger.debug(f"{method} {url} -> {error.status} {error.code}")
            raise error

        if decoder is None:
            return payload

        try:
            return decoder(payload)
        except (KeyError, TypeError, ValueError) as e:
            self._logger.error(f"Malformed response from {url}: {e!r}")
            raise ErrorClassifier.classify_exception(e) from e

    # Convenience methods

    async def get_upload_url(self, session: AuthorizedSession, bucket_id: str, issued_at: float) -> UploadLease:
        """
        Request an upload endpoint for a bucket.

        Args:
            session: Authorized session
            bucket_id: Bucket id
            issued_at: Issue time recorded on the lease

        Returns:
            New UploadLease
        """
        url = self._config.endpoint(session.api_url, 'b2_get_upload_url')
        return await self.request(
            'GET',
            url,
            headers={'Authorization': session.token},
            params={'bucketId': bucket_id},
            decoder=lambda data: UploadLease.from_upload_url_response(data, bucket_id, issued_at)
        )

    async def upload_file(
        self,
        lease: UploadLease,
        file_name: str,
        content: bytes,
        content_sha1: str,
        content_type: str = AUTO_CONTENT_TYPE
    ) -> FileVersion:
        """
        Upload content to a leased upload URL.

        Args:
            lease: Upload lease
            file_name: Destination file name
            content: File content
            content_sha1: Lowercase hex SHA-1 of content
            content_type: MIME type (auto-detected by default)

        Returns:
            FileVersion of the uploaded file
        """
        headers = {
            'Authorization': lease.token,
            'X-Bz-File-Name': quote(file_name, safe='/'),
            'Content-Type': content_type,
            'Content-Length': str(len(content)),
            'X-Bz-Content-Sha1': content_sha1,
        }
        return await self.request(
            'POST',
            lease.url,
            headers=headers,
            data=content,
            decoder=FileVersion.from_dict
        )

    async def list_buckets(
        self,
        session: AuthorizedSession,
        options: Optional[ListBucketsConfig] = None
    ) -> ListBucketsResult:
        """List the account's buckets."""
        options = options or ListBucketsConfig()
        url = self._config.endpoint(session.api_url, 'b2_list_buckets')
        return await self.request(
            'POST',
            url,
            headers={'Authorization': session.token},
            json=options.to_request(session.account_id),
            decoder=ListBucketsResult.from_response
        )

    async def list_file_names(
        self,
        session: AuthorizedSession,
        options: ListFileNamesConfig
    ) -> ListFileNamesResult:
        """List one page of file names in a bucket."""
        url = self._config.endpoint(session.api_url, 'b2_list_file_names')
        return await self.request(
            'GET',
            url,
            headers={'Authorization': session.token},
            params=options.to_params(),
            decoder=ListFileNamesResult.from_response
        )
