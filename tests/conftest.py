"""
Pytest configuration and fixtures for pkgquery tests.
"""

import io
import json

import pytest

from pkgquery.backends.local import InMemoryLocalDatabase
from pkgquery.backends.remote import InMemoryRemoteRepository
from pkgquery.core.interfaces import QueryConfig
from tests.fixtures.sample_data import (
    SAMPLE_LOCAL_DB_YAML, SAMPLE_RPC_DUMP,
    sample_installed, sample_remote, sample_repositories
)


@pytest.fixture
def local_db():
    """Create a local database with installed packages and two sync repositories."""
    return InMemoryLocalDatabase(sample_installed(), sample_repositories())


@pytest.fixture
def remote_repo():
    """Create a remote repository with a few packages."""
    return InMemoryRemoteRepository(sample_remote())


@pytest.fixture
def plain_config():
    """Create a configuration without colors."""
    return QueryConfig(color=False)


@pytest.fixture
def output():
    """Create an output stream to capture printed results."""
    return io.StringIO()


@pytest.fixture
def data_files(tmp_path):
    """Write the sample local database and remote dump to files."""
    local_path = tmp_path / "local.yaml"
    local_path.write_text(SAMPLE_LOCAL_DB_YAML)
    remote_path = tmp_path / "remote.json"
    remote_path.write_text(json.dumps(SAMPLE_RPC_DUMP))
    return {'dir': tmp_path, 'local': local_path, 'remote': remote_path}
