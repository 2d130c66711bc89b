"""Pytest fixtures for blazepy tests."""
import pytest

from blazepy.core.session import ApplicationKey, AuthorizedSession
from blazepy.core.upload import UploadLease


class FakeResponse:
    """Stands in for aiohttp.ClientResponse inside `async with`."""

    def __init__(self, status=200, body=None, exc=None):
        self.status = status
        self._body = body
        self._exc = exc

    async def json(self, content_type='application/json'):
        if self._exc is not None:
            raise self._exc
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """
    Stands in for aiohttp.ClientSession.

    Each queued item is a FakeResponse or an exception raised on request.
    """

    def __init__(self, *items):
        self.items = list(items)
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        item = self.items.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self):
        self.closed = True


class FakeClock:
    """Manually advanced Unix clock."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def app_key():
    """Returns a test application key."""
    return ApplicationKey("key-id", "key-secret")


@pytest.fixture
def authorized_session():
    """Returns a test authorized session."""
    return AuthorizedSession(
        account_id="account-1",
        api_url="https://api001.backblazeb2.com",
        download_url="https://f001.backblazeb2.com",
        token="account-token"
    )


@pytest.fixture
def authorize_response():
    """Returns a b2_authorize_account response body."""
    return {
        'accountId': 'account-1',
        'authorizationToken': 'account-token',
        'apiInfo': {
            'storageApi': {
                'apiUrl': 'https://api001.backblazeb2.com',
                'downloadUrl': 'https://f001.backblazeb2.com',
            }
        },
    }


@pytest.fixture
def upload_url_response():
    """Returns a b2_get_upload_url response body."""
    return {
        'uploadUrl': 'https://pod-000-1000-00.backblaze.com/b2api/v3/b2_upload_file/bucket-1/c001',
        'authorizationToken': 'upload-token',
    }


@pytest.fixture
def upload_response():
    """Returns a b2_upload_file response body."""
    return {
        'accountId': 'account-1',
        'bucketId': 'bucket-1',
        'contentLength': 11,
        'contentSha1': '2aae6c35c94fcfb415dbe95f408b9ce91ee846ed',
        'contentMd5': None,
        'contentType': 'text/plain',
        'fileId': '4_z27c88f1d182b150646ff0b16_f1004ba650fe24e6b_d20230820_m101209_c001_v0001100_t0049',
        'fileName': 'docs/hello.txt',
        'uploadTimestamp': 1692526329000,
    }


@pytest.fixture
def lease():
    """Returns a fresh upload lease."""
    return UploadLease(
        bucket_id='bucket-1',
        url='https://pod-000-1000-00.backblaze.com/b2api/v3/b2_upload_file/bucket-1/c001',
        token='upload-token',
        issued_at=1_700_000_000.0
    )


@pytest.fixture
def clock():
    """Returns a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def fake_session():
    """Returns the FakeSession class."""
    return FakeSession


@pytest.fixture
def fake_response():
    """Returns the FakeResponse class."""
    return FakeResponse
