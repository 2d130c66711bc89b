"""
Session data models.

Contains the application key and the authorized session it yields.
"""
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ApplicationKey:
    """
    B2 application key.

    Attributes:
        id: Application key id
        secret: Application key (never shown in repr)
    """
    id: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class AuthorizedSession:
    """
    Result of a successful b2_authorize_account call.

    The token has no local expiry; it is treated as valid until the API
    rejects it with bad_auth_token or expired_auth_token.

    Attributes:
        account_id: B2 account id
        api_url: Base URL for account API calls
        download_url: Base URL for downloads
        token: Account authorization token
    """
    account_id: str
    api_url: str
    download_url: str
    token: str = field(repr=False)

    @classmethod
    def from_authorize_response(cls, data: Dict[str, Any]) -> 'AuthorizedSession':
        """
        Create from a b2_authorize_account response body.

        Args:
            data: Decoded JSON response

        Returns:
            AuthorizedSession instance

        Raises:
            KeyError: If a required field is missing
        """
        storage_api = data['apiInfo']['storageApi']
        return cls(
            account_id=data['accountId'],
            api_url=storage_api['apiUrl'],
            download_url=storage_api['downloadUrl'],
            token=data['authorizationToken'],
        )
