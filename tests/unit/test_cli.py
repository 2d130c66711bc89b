"""Tests for the command-line interface."""
import logging
from unittest.mock import AsyncMock, Mock, patch

import pytest
from typer.testing import CliRunner

from blazepy import B2APIError, Bucket, BucketInfo, ErrorKind, UploadedFile
from blazepy.cli.main import app

runner = CliRunner()

CREDENTIALS = ['--id', 'key-id', '--secret', 'key-secret']

LIBRARY_LOGGERS = ['blazepy.errors', 'blazepy.session', 'blazepy.upload', 'blazepy.upload.lease']


def fake_client_class(bucket, buckets=()):
    """Build a B2Client stand-in whose get_bucket returns bucket."""
    instance = Mock()
    instance.get_bucket = AsyncMock(return_value=bucket)
    instance.list_buckets = AsyncMock(return_value=list(buckets))
    instance.__aenter__ = AsyncMock(return_value=instance)
    instance.__aexit__ = AsyncMock(return_value=False)
    return Mock(return_value=instance)


@pytest.fixture
def local_file(tmp_path):
    path = tmp_path / "hello.txt"
    path.write_bytes(b"hello world")
    return path


@pytest.fixture
def log_levels():
    """Restore blazepy logger levels after the test."""
    names = set(LIBRARY_LOGGERS) | {'blazepy'} | {
        name for name in logging.Logger.manager.loggerDict if name.startswith('blazepy')
    }
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestUploadCommand:
    """Tests for 'blaze upload'."""
    
    def test_missing_bucket(self, local_file):
        with patch('blazepy.B2Client', fake_client_class(None)):
            result = runner.invoke(app, ['upload', 'photos', str(local_file), *CREDENTIALS])
        
        assert result.exit_code == 1
        assert 'Bucket not found' in result.output
    
    def test_upload(self, local_file):
        bucket = Mock()
        bucket.upload_file = AsyncMock(return_value=UploadedFile('fid', 'docs/hello.txt', 11, 0))
        
        with patch('blazepy.B2Client', fake_client_class(bucket)):
            result = runner.invoke(
                app, ['upload', 'photos', str(local_file), '--name', 'docs/hello.txt', *CREDENTIALS]
            )
        
        assert result.exit_code == 0
        bucket.upload_file.assert_awaited_once_with(local_file, 'docs/hello.txt')
        assert 'fid' in result.output
    
    def test_upload_error(self, local_file):
        bucket = Mock()
        bucket.upload_file = AsyncMock(side_effect=B2APIError(ErrorKind.BAD_REQUEST, 'sha1 mismatch'))
        
        with patch('blazepy.B2Client', fake_client_class(bucket)):
            result = runner.invoke(app, ['upload', 'photos', str(local_file), *CREDENTIALS])
        
        assert result.exit_code == 1
        assert 'sha1 mismatch' in result.output
    
    def test_credentials_from_env(self, local_file):
        client_class = fake_client_class(None)
        
        with patch('blazepy.B2Client', client_class):
            runner.invoke(
                app, ['upload', 'photos', str(local_file)],
                env={'B2_APPLICATION_KEY_ID': 'env-id', 'B2_APPLICATION_KEY': 'env-secret'}
            )
        
        client_class.assert_called_once_with('env-id', 'env-secret')


class TestLsCommand:
    """Tests for 'blaze ls'."""
    
    def test_lists_names(self):
        async def iter_files(prefix=None):
            for name in ('a.txt', 'b.txt'):
                yield UploadedFile(f'id-{name}', name, 1, 0)
        
        bucket = Mock()
        bucket.iter_files = iter_files
        
        with patch('blazepy.B2Client', fake_client_class(bucket)):
            result = runner.invoke(app, ['ls', 'photos', *CREDENTIALS])
        
        assert result.exit_code == 0
        assert 'a.txt' in result.output
        assert 'b.txt' in result.output


class TestBucketsCommand:
    """Tests for 'blaze buckets'."""
    
    def test_lists_buckets(self):
        found = [
            Bucket(Mock(), BucketInfo('account-1', 'id-photos', 'photos', 'allPrivate')),
            Bucket(Mock(), BucketInfo('account-1', 'id-logs', 'logs')),
        ]
        
        with patch('blazepy.B2Client', fake_client_class(None, found)):
            result = runner.invoke(app, ['buckets', *CREDENTIALS])
        
        assert result.exit_code == 0
        assert 'photos' in result.output
        assert 'allPrivate' in result.output
        assert 'id-logs' in result.output
    
    def test_error(self):
        client_class = fake_client_class(None)
        client_class.return_value.list_buckets = AsyncMock(
            side_effect=B2APIError(ErrorKind.BAD_AUTH_TOKEN, 'invalid key')
        )
        
        with patch('blazepy.B2Client', client_class):
            result = runner.invoke(app, ['buckets', *CREDENTIALS])
        
        assert result.exit_code == 1
        assert 'BAD_AUTH_TOKEN' in result.output


class TestVerboseOption:
    """Tests for the global --verbose flag."""
    
    def test_verbose_enables_library_debug_logs(self, local_file, log_levels):
        # Loggers created at import time before any handler existed
        for name in LIBRARY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        
        with patch('blazepy.B2Client', fake_client_class(None)):
            runner.invoke(app, ['--verbose', 'upload', 'photos', str(local_file), *CREDENTIALS])
        
        for name in LIBRARY_LOGGERS:
            assert logging.getLogger(name).getEffectiveLevel() == logging.DEBUG, name
    
    def test_default_is_warning(self, local_file, log_levels):
        with patch('blazepy.B2Client', fake_client_class(None)):
            runner.invoke(app, ['upload', 'photos', str(local_file), *CREDENTIALS])
        
        for name in LIBRARY_LOGGERS:
            assert logging.getLogger(name).getEffectiveLevel() == logging.WARNING, name
