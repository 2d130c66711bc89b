"""Tests for the async API client."""
import asyncio

import aiohttp
import pytest

from blazepy.core.api import APIConfig, AsyncAPIClient, AsyncAuthService, B2APIError, ErrorKind
from blazepy.core.listing import ListBucketsConfig, ListFileNamesConfig
from blazepy.core.upload import AUTO_CONTENT_TYPE


@pytest.fixture
def api():
    """Create client instance."""
    return AsyncAPIClient(APIConfig.default())


class TestRequest:
    """Test suite for AsyncAPIClient.request."""
    
    @pytest.mark.asyncio
    async def test_returns_payload(self, api, fake_session, fake_response):
        """Test a 2xx response returns the decoded JSON."""
        api._session = fake_session(fake_response(200, {'ok': True}))
        
        result = await api.request('GET', 'https://example.com/x')
        
        assert result == {'ok': True}
    
    @pytest.mark.asyncio
    async def test_applies_decoder(self, api, fake_session, fake_response):
        """Test the decoder receives the decoded JSON."""
        api._session = fake_session(fake_response(200, {'n': 2}))
        
        result = await api.request('GET', 'https://example.com/x', decoder=lambda d: d['n'] * 2)
        
        assert result == 4
    
    @pytest.mark.asyncio
    async def test_error_status_raises_classified(self, api, fake_session, fake_response):
        """Test a 4xx response raises the classified error body."""
        api._session = fake_session(fake_response(
            400, {'status': 400, 'code': 'bad_bucket_id', 'message': 'Invalid bucketId: nope'}
        ))
        
        with pytest.raises(B2APIError) as exc_info:
            await api.request('GET', 'https://example.com/x')
        
        assert exc_info.value.kind is ErrorKind.BAD_BUCKET_ID
        assert exc_info.value.message == 'Invalid bucketId: nope'
        assert exc_info.value.status == 400
    
    @pytest.mark.asyncio
    async def test_connection_error(self, api, fake_session):
        """Test a refused connection raises CONNECT."""
        api._session = fake_session(aiohttp.ClientConnectionError("refused"))
        
        with pytest.raises(B2APIError) as exc_info:
            await api.request('GET', 'https://example.com/x')
        
        assert exc_info.value.kind is ErrorKind.CONNECT
    
    @pytest.mark.asyncio
    async def test_timeout(self, api, fake_session):
        """Test a timeout raises TIMEOUT."""
        api._session = fake_session(asyncio.TimeoutError())
        
        with pytest.raises(B2APIError) as exc_info:
            await api.request('GET', 'https://example.com/x')
        
        assert exc_info.value.kind is ErrorKind.TIMEOUT
    
    @pytest.mark.asyncio
    async def test_invalid_json(self, api, fake_session, fake_response):
        """Test an undecodable success body raises DESERIALIZE."""
        api._session = fake_session(fake_response(200, exc=ValueError("Expecting value")))
        
        with pytest.raises(B2APIError) as exc_info:
            await api.request('GET', 'https://example.com/x')
        
        assert exc_info.value.kind is ErrorKind.DESERIALIZE
    
    @pytest.mark.asyncio
    async def test_decoder_key_error(self, api, fake_session, fake_response):
        """Test a body missing fields raises DESERIALIZE."""
        api._session = fake_session(fake_response(200, {}))
        
        with pytest.raises(B2APIError) as exc_info:
            await api.request('GET', 'https://example.com/x', decoder=lambda d: d['fileId'])
        
        assert exc_info.value.kind is ErrorKind.DESERIALIZE
    
    @pytest.mark.asyncio
    async def test_closed_client(self, api):
        """Test requests on a closed client fail as connection errors."""
        await api.close()
        
        with pytest.raises(B2APIError) as exc_info:
            await api.request('GET', 'https://example.com/x')
        
        assert exc_info.value.kind is ErrorKind.CONNECT
        assert exc_info.value.message == "could not connect"
        assert exc_info.value.status is None


class TestConvenienceMethods:
    """Test suite for the B2 operation helpers."""
    
    @pytest.mark.asyncio
    async def test_authorize_account(self, api, app_key, authorize_response, fake_session, fake_response):
        """Test authorization uses basic auth and decodes the session."""
        api._session = fake_session(fake_response(200, authorize_response))
        
        session = await AsyncAuthService(api).authorize_account(app_key)
        
        method, url, kwargs = api._session.calls[0]
        assert method == 'GET'
        assert url == 'https://api.backblazeb2.com/b2api/v3/b2_authorize_account'
        assert kwargs['auth'] == aiohttp.BasicAuth('key-id', 'key-secret')
        assert session.account_id == 'account-1'
        assert session.api_url == 'https://api001.backblazeb2.com'
        assert session.download_url == 'https://f001.backblazeb2.com'
        assert session.token == 'account-token'
    
    @pytest.mark.asyncio
    async def test_get_upload_url(
        self, api, authorized_session, upload_url_response, fake_session, fake_response
    ):
        """Test the upload URL request and the lease it yields."""
        api._session = fake_session(fake_response(200, upload_url_response))
        
        lease = await api.get_upload_url(authorized_session, 'bucket-1', 123.0)
        
        method, url, kwargs = api._session.calls[0]
        assert method == 'GET'
        assert url == 'https://api001.backblazeb2.com/b2api/v3/b2_get_upload_url'
        assert kwargs['params'] == {'bucketId': 'bucket-1'}
        assert kwargs['headers'] == {'Authorization': 'account-token'}
        assert lease.url == upload_url_response['uploadUrl']
        assert lease.token == 'upload-token'
        assert lease.issued_at == 123.0
        assert lease.bucket_id == 'bucket-1'
    
    @pytest.mark.asyncio
    async def test_get_upload_url_ignores_body_bucket(
        self, api, authorized_session, upload_url_response, fake_session, fake_response
    ):
        """Test the lease is bound to the requested bucket."""
        body = {**upload_url_response, 'bucketId': 'other-bucket'}
        api._session = fake_session(fake_response(200, body))
        
        lease = await api.get_upload_url(authorized_session, 'bucket-1', 1.0)
        
        assert lease.bucket_id == 'bucket-1'
    
    @pytest.mark.asyncio
    async def test_upload_file_headers(self, api, lease, upload_response, fake_session, fake_response):
        """Test the upload request headers and body."""
        api._session = fake_session(fake_response(200, upload_response))
        
        version = await api.upload_file(lease, 'docs/my file.txt', b'hello world', 'abc123')
        
        method, url, kwargs = api._session.calls[0]
        assert method == 'POST'
        assert url == lease.url
        assert kwargs['data'] == b'hello world'
        assert kwargs['headers'] == {
            'Authorization': 'upload-token',
            'X-Bz-File-Name': 'docs/my%20file.txt',
            'Content-Type': AUTO_CONTENT_TYPE,
            'Content-Length': '11',
            'X-Bz-Content-Sha1': 'abc123',
        }
        assert version.file_id == upload_response['fileId']
    
    @pytest.mark.asyncio
    async def test_list_buckets(self, api, authorized_session, fake_session, fake_response):
        """Test the list buckets body includes the account and filters."""
        api._session = fake_session(fake_response(200, {'buckets': [
            {'accountId': 'account-1', 'bucketId': 'bucket-1', 'bucketName': 'photos'}
        ]}))
        
        result = await api.list_buckets(authorized_session, ListBucketsConfig(bucket_name='photos'))
        
        method, url, kwargs = api._session.calls[0]
        assert method == 'POST'
        assert url.endswith('/b2api/v3/b2_list_buckets')
        assert kwargs['json'] == {'accountId': 'account-1', 'bucketName': 'photos'}
        assert [b.bucket_name for b in result.buckets] == ['photos']
    
    @pytest.mark.asyncio
    async def test_list_file_names(
        self, api, authorized_session, upload_response, fake_session, fake_response
    ):
        """Test listing file names sends the options as query parameters."""
        api._session = fake_session(fake_response(200, {
            'files': [upload_response],
            'nextFileName': 'docs/next.txt',
        }))
        
        result = await api.list_file_names(
            authorized_session, ListFileNamesConfig('bucket-1', prefix='docs/', max_file_count=1)
        )
        
        method, url, kwargs = api._session.calls[0]
        assert method == 'GET'
        assert url.endswith('/b2api/v3/b2_list_file_names')
        assert kwargs['params'] == {'bucketId': 'bucket-1', 'maxFileCount': '1', 'prefix': 'docs/'}
        assert result.next_file_name == 'docs/next.txt'
        assert result.files[0].file_name == 'docs/hello.txt'
