# src/pipeflow/tools/wikipedia.py
"""Tool de busca do resumo (extract) de uma página da Wikipedia em inglês."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from pipeflow.core.errors import TOOL_FETCH, TOOL_MISSING

from .base import Tool, ToolContext, ToolError, ToolSpec, ToolType, create_tool


WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"


def wikipedia_tool(
    *,
    api_url: str = WIKIPEDIA_API_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = 10.0,
) -> Tool:
    """
    Cria a Tool da Wikipedia.

    Args:
        api_url: Endpoint da API MediaWiki.
        transport: Transport httpx alternativo (ex.: `httpx.MockTransport` em testes).
        timeout: Timeout, em segundos, de cada requisição.
    """

    tool: Tool

    async def execute(title: str, context: ToolContext) -> str:
        params = {
            "action": "query",
            "format": "json",
            "prop": "extracts",
            "exintro": "true",
            "explaintext": "true",
            "titles": title,
        }
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            response = await client.get(api_url, params=params)

        if not response.is_success:
            raise ToolError(
                TOOL_FETCH,
                tool,
                [RuntimeError(response.reason_phrase or str(response.status_code))],
                "Failed to fetch Wikipedia",
            )

        data: Any = response.json()
        pages = ((data or {}).get("query") or {}).get("pages") or {}
        page = next(iter(pages.values()), None)

        if page is None or "missing" in page:
            raise ToolError(TOOL_MISSING, tool, [], "Page not found")

        return page.get("extract", "")

    tool = create_tool(
        ToolType.TOOL,
        id="wikipedia",
        name="Wikipedia English",
        description="Searches Wikipedia for the given query.",
        keywords=[
            "wikipedia",
            "wikipedia-en",
            "wiki",
            "wiki-en",
            "api:en.wikipedia.org",
        ],
        spec=ToolSpec(input="string", output="string", args={"query": "string"}),
        execute=execute,
    )
    return tool


wikipedia = wikipedia_tool()
