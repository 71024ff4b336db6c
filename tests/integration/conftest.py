"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_QUOTELIST_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_QUOTELIST_NETWORK_TESTS") != "1",
    reason="Requires network access and Cloudinary credentials. "
    "Set RUN_QUOTELIST_NETWORK_TESTS=1 to run",
)
