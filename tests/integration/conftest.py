"""Shared fixtures for integration tests.

These tests use real infrastructure components (config loader, channel
registry, ECP client, executor) with mocked HTTP via respx.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
import respx


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Hide ROKUCAST_* variables from the host and drop any a test loads."""
    for key in list(os.environ):
        if key.startswith("ROKUCAST_"):
            monkeypatch.delenv(key)
    yield
    for key in [k for k in os.environ if k.startswith("ROKUCAST_")]:
        del os.environ[key]


@pytest.fixture()
def respx_mock() -> Iterator[respx.MockRouter]:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router
