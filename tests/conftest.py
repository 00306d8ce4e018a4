"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from reuse_score.models import RepositoryIdentity


def _json_response(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(data).encode(),
        headers={"content-type": "application/json"},
        request=httpx.Request("GET", "https://example.test"),
    )


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    """Factory for real httpx.Response objects carrying a JSON body."""
    return _json_response


@pytest.fixture
def identity() -> RepositoryIdentity:
    return RepositoryIdentity(owner="owner", name="repo")


@pytest.fixture
def unresolved() -> RepositoryIdentity:
    return RepositoryIdentity.unresolved()
