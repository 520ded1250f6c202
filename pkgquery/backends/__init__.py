"""
Package sources consumed by the query layer.

This module provides the local package database (installed packages and sync
repositories) and the remote user repository, both readable from files.
"""

from .local import LocalDatabase, InMemoryLocalDatabase, load_local_database
from .remote import RemoteRepository, InMemoryRemoteRepository, load_remote_repository, remote_package_from_rpc

__all__ = [
    'LocalDatabase',
    'InMemoryLocalDatabase',
    'load_local_database',
    'RemoteRepository',
    'InMemoryRemoteRepository',
    'load_remote_repository',
    'remote_package_from_rpc'
]
