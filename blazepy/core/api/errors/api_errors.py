"""B2 API error kinds, the classified error and the classifier."""
import asyncio
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp

from ...exceptions import BlazeException
from ...logging import get_logger

logger = get_logger('blazepy.errors')


class ErrorKind(Enum):
    """Closed set of failure kinds surfaced by blazepy."""

    BAD_AUTH_TOKEN = 'bad_auth_token'
    EXPIRED_AUTH_TOKEN = 'expired_auth_token'
    BAD_BUCKET_ID = 'bad_bucket_id'
    BAD_REQUEST = 'bad_request'
    UNAUTHORIZED = 'unauthorized'
    UNSUPPORTED = 'unsupported'
    TRANSACTION_CAP_EXCEEDED = 'transaction_cap_exceeded'
    CONNECT = 'connect'
    TIMEOUT = 'timeout'
    DESERIALIZE = 'deserialize'
    UNKNOWN = 'unknown'


class B2APIError(BlazeException):
    """
    Classified failure of a B2 API call.

    Attributes:
        kind: ErrorKind of the failure
        message: Server message, or a fixed description for transport failures
        status: HTTP status from the error body (None for transport failures)
        code: Raw server error code (None for transport failures)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None
    ):
        self.kind = kind
        self.message = message
        self.code = code
        super().__init__(message, status)

    @property
    def is_auth_error(self) -> bool:
        """True when the token used for the call is no longer accepted."""
        return self.kind in (ErrorKind.BAD_AUTH_TOKEN, ErrorKind.EXPIRED_AUTH_TOKEN)

    def __repr__(self) -> str:
        return f"B2APIError(kind={self.kind.name}, message={self.message!r}, status={self.status})"


class ErrorClassifier:
    """
    Maps failures of any origin to a B2APIError.

    Server error bodies are mapped through ERROR_CODES; codes missing from
    the table become ErrorKind.UNKNOWN and are logged so the table can be
    extended later.
    """

    ERROR_CODES: Dict[str, ErrorKind] = {
        'bad_auth_token': ErrorKind.BAD_AUTH_TOKEN,
        'expired_auth_token': ErrorKind.EXPIRED_AUTH_TOKEN,
        'bad_bucket_id': ErrorKind.BAD_BUCKET_ID,
        'bad_request': ErrorKind.BAD_REQUEST,
        'unauthorized': ErrorKind.UNAUTHORIZED,
        'unsupported': ErrorKind.UNSUPPORTED,
        'transaction_cap_exceeded': ErrorKind.TRANSACTION_CAP_EXCEEDED,
    }

    TRANSPORT_MESSAGES: Dict[ErrorKind, str] = {
        ErrorKind.CONNECT: 'could not connect',
        ErrorKind.TIMEOUT: 'timed out',
        ErrorKind.DESERIALIZE: 'invalid or malformed response',
        ErrorKind.UNKNOWN: 'unknown error related to communication',
    }

    @classmethod
    def kind_for_code(cls, code: str) -> ErrorKind:
        """Gets the error kind for a server error code."""
        kind = cls.ERROR_CODES.get(code)
        if kind is None:
            logger.warning(f"Encountered unknown error code: {code}")
            return ErrorKind.UNKNOWN
        return kind

    @classmethod
    def classify_body(cls, body: Dict[str, Any]) -> B2APIError:
        """
        Classify a decoded error body.

        Args:
            body: Error body of the form {status, code, message}

        Returns:
            Classified error carrying the server message
        """
        try:
            status = int(body['status'])
            code = str(body['code'])
            message = str(body['message'])
        except (KeyError, TypeError, ValueError) as e:
            return cls.classify_exception(e)

        return B2APIError(cls.kind_for_code(code), message, status=status, code=code)

    @classmethod
    async def classify(cls, response: aiohttp.ClientResponse) -> B2APIError:
        """
        Classify a 4xx/5xx response by reading its error body.

        Args:
            response: Response with a client or server error status

        Returns:
            Classified error (DESERIALIZE if the body cannot be decoded)
        """
        try:
            body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            return cls.classify_exception(e)

        if not isinstance(body, dict):
            return cls._transport_error(ErrorKind.DESERIALIZE)

        return cls.classify_body(body)

    @classmethod
    def classify_exception(cls, exc: BaseException) -> B2APIError:
        """
        Classify a failure that happened before a server body was available.

        Args:
            exc: Exception raised by the transport or while decoding

        Returns:
            Classified error with a fixed message for its kind
        """
        if isinstance(exc, B2APIError):
            return exc
        # ServerTimeoutError is also a ClientConnectionError, so check it first
        if isinstance(exc, asyncio.TimeoutError):
            kind = ErrorKind.TIMEOUT
        elif isinstance(exc, (aiohttp.ContentTypeError, ValueError, KeyError, TypeError)):
            kind = ErrorKind.DESERIALIZE
        elif isinstance(exc, aiohttp.ClientConnectionError):
            kind = ErrorKind.CONNECT
        else:
            kind = ErrorKind.UNKNOWN

        return cls._transport_error(kind)

    @classmethod
    def _transport_error(cls, kind: ErrorKind) -> B2APIError:
        return B2APIError(kind, cls.TRANSPORT_MESSAGES[kind])
