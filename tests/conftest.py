from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from adapters.aot_client import AotClient
from core.config import AppSettings

FIXTURES_DIR = Path(__file__).parent / "fixtures"

Responder = Callable[[httpx.Request], httpx.Response]


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


def json_responder(payload: Any, status_code: int = 200) -> Responder:
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return respond


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def mock_http() -> Callable[[Responder], tuple[httpx.AsyncClient, list[httpx.Request]]]:
    """Factory: `httpx.AsyncClient` sobre `MockTransport` + lista de requests vistos."""

    def factory(responder: Responder) -> tuple[httpx.AsyncClient, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return responder(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler)), seen

    return factory


@pytest.fixture
def make_client(settings, mock_http) -> Callable[[Responder], tuple[AotClient, list[httpx.Request]]]:
    def factory(responder: Responder) -> tuple[AotClient, list[httpx.Request]]:
        http_client, seen = mock_http(responder)
        return AotClient(settings=settings, http_client=http_client), seen

    return factory
