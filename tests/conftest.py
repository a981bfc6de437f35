"""Shared pytest fixtures and configuration."""

import pytest
import tempfile
from pathlib import Path

from smartagent_receiver.loader import load_config_file
from smartagent_receiver.monitors import default_catalog


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def testdata_dir():
    """Directory holding the YAML receiver configs used by the tests."""
    return Path(__file__).parent / "testdata"


@pytest.fixture
def catalog():
    """The built-in monitor catalog."""
    return default_catalog()


@pytest.fixture
def load_testdata(testdata_dir):
    """Load receivers from a testdata file without validating them."""

    def _load(filename, validate=False):
        return load_config_file(testdata_dir / filename, validate=validate)

    return _load


@pytest.fixture
def haproxy_fields():
    """Generic field map of a haproxy receiver entry."""
    return {
        "type": "haproxy",
        "intervalSeconds": 123,
        "username": "SomeUser",
        "password": "secret",
        "timeout": "10s",
    }
