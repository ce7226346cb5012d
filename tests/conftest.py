"""
Pytest configuration for unit tests.
"""
import pytest
import sys
import os

# Ensure project root is in python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


@pytest.fixture
def cert_files(tmp_path):
    """Root cert, client cert and client key that exist on disk."""
    paths = {}
    for name in ("root.crt", "client.crt", "client.key"):
        path = tmp_path / name
        path.write_text("-----BEGIN TEST-----\n")
        paths[name] = str(path)
    return paths


@pytest.fixture
def reset_config():
    """Clear the cached configuration before and after a test."""
    from config.configuration import ConfigLoader
    ConfigLoader.reset()
    yield ConfigLoader
    ConfigLoader.reset()
