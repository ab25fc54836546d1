"""
Pytest fixtures and configuration for the paramfinder test suite.
"""

import os
from unittest.mock import AsyncMock, Mock

import pytest

from paramfinder.config.settings import MinerConfig
from paramfinder.core.models import AttackSurface, Parameter, Request

MULTIPART_BOUNDARY = "----WebKitFormBoundary7MA4YWxkTrZu0gW"

# ============================================================================
# Request Fixtures
# ============================================================================

@pytest.fixture
def get_request():
    """Plain GET request with an existing query string."""
    return Request(
        url="https://target.example.com/api/search",
        method="GET",
        query="q=shoes",
        headers={"Host": ["target.example.com"], "Accept": ["*/*"]},
    )

@pytest.fixture
def json_request():
    """POST request with a nested JSON body."""
    body = '{"data":{"name":"alice"},"page":1}'
    return Request(
        url="https://target.example.com/api/users",
        method="POST",
        headers={
            "Content-Type": ["application/json"],
            "Content-Length": [str(len(body))],
        },
        body=body,
    )

@pytest.fixture
def form_request():
    """POST request with a URL-encoded body."""
    return Request(
        url="https://target.example.com/login",
        method="POST",
        headers={"Content-Type": ["application/x-www-form-urlencoded"]},
        body="user=alice&pass=secret",
    )

@pytest.fixture
def multipart_body():
    """Two-part multipart body terminated by the closing boundary."""
    return (
        f"--{MULTIPART_BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="title"\r\n'
        "\r\n"
        "hello\r\n"
        f"--{MULTIPART_BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="file"; filename="a.txt"\r\n'
        "Content-Type: text/plain\r\n"
        "\r\n"
        "file contents\r\n"
        f"--{MULTIPART_BOUNDARY}--\r\n"
    )

@pytest.fixture
def multipart_request(multipart_body):
    """POST request with a multipart/form-data body."""
    return Request(
        url="https://target.example.com/upload",
        method="POST",
        headers={"Content-Type": [f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"]},
        body=multipart_body,
    )

@pytest.fixture
def candidate_params():
    """A small batch of candidate parameters."""
    return [Parameter("debug", "1"), Parameter("admin", "true")]

# ============================================================================
# Collaborator Fixtures
# ============================================================================

@pytest.fixture
def mock_transport():
    """Transport that records requests and returns a canned response."""
    transport = Mock()
    transport.send = AsyncMock(return_value=Mock(status_code=200, length=42))
    return transport

@pytest.fixture
def miner_config():
    """Default miner configuration."""
    return MinerConfig()

@pytest.fixture
def body_config():
    """Miner configuration targeting the request body."""
    return MinerConfig(attack_type=AttackSurface.BODY)

@pytest.fixture
def clean_env(monkeypatch):
    """Clean environment for isolated tests."""
    for key in list(os.environ.keys()):
        if key.startswith("PARAMFINDER_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch

# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")
    config.addinivalue_line("markers", "integration: marks integration tests")
