"""
Async authorization service.

Exchanges an application key for an authorized session.
"""
import aiohttp

from .async_client import AsyncAPIClient
from ..session.models import ApplicationKey, AuthorizedSession


class AsyncAuthService:
    """
    Asynchronous authorization service.

    Performs b2_authorize_account with HTTP basic auth.
    """

    def __init__(self, client: AsyncAPIClient):
        """
        Initialize auth service.

        Args:
            client: Async API client
        """
        self._client = client

    async def authorize_account(self, key: ApplicationKey) -> AuthorizedSession:
        """
        Authorize the account owning the key.

        Args:
            key: Application key

        Returns:
            AuthorizedSession with API URLs and token

        Raises:
            B2APIError: If authorization fails
        """
        config = self._client.config
        url = config.endpoint(config.api_url, 'b2_authorize_account')

        return await self._client.request(
            'GET',
            url,
            auth=aiohttp.BasicAuth(key.id, key.secret),
            decoder=AuthorizedSession.from_authorize_response
        )
