# tests/tools/test_wikipedia_tool.py
"""
Testes da Tool da Wikipedia com transporte httpx simulado (sem rede).
"""

import asyncio

import httpx
import pytest

from pipeflow.tools import ToolError, execute_tool, wikipedia, wikipedia_tool


def _tool(handler):
    return wikipedia_tool(transport=httpx.MockTransport(handler))


def test_returns_page_extract():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["params"] = dict(request.url.params)
        captured["host"] = request.url.host
        return httpx.Response(
            200,
            json={"query": {"pages": {"123": {"title": "Python", "extract": "A language."}}}},
        )

    out = asyncio.run(execute_tool(_tool(handler), "Python"))

    assert out == "A language."
    assert captured["host"] == "en.wikipedia.org"
    assert captured["params"]["titles"] == "Python"
    assert captured["params"]["prop"] == "extracts"


def test_missing_page():
    def handler(request):
        return httpx.Response(200, json={"query": {"pages": {"-1": {"title": "Nope", "missing": ""}}}})

    with pytest.raises(ToolError) as excinfo:
        asyncio.run(execute_tool(_tool(handler), "Nope"))

    assert excinfo.value.code == "E_MISSING"
    assert str(excinfo.value) == "Page not found"


def test_http_error():
    def handler(request):
        return httpx.Response(503)

    with pytest.raises(ToolError) as excinfo:
        asyncio.run(execute_tool(_tool(handler), "Python"))

    assert excinfo.value.code == "E_FETCH"
    assert str(excinfo.value.errors[0]) == "Service Unavailable"


def test_transport_failure_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(ToolError) as excinfo:
        asyncio.run(execute_tool(_tool(handler), "Python"))

    assert excinfo.value.code == "E_FALL"
    assert isinstance(excinfo.value.errors[0], httpx.ConnectError)


def test_default_tool_metadata():
    assert wikipedia.id == "wikipedia"
    assert "api:en.wikipedia.org" in wikipedia.keywords
    assert wikipedia.spec.args == {"query": "string"}
