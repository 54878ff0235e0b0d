# src/pipeflow/tools/base.py
"""
Contrato de Tools e adaptação para Steps.

Uma Tool é uma integração externa com metadados (`id`, `name`,
`keywords`, `spec`) e uma operação assíncrona `execute(input, context)`.
O core do pipeflow não conhece Tools: `tool_step` adapta uma Tool ao
contrato de Step.

Decisões arquiteturais:
    - O `id` da Tool é informado explicitamente pelo chamador e é estável
    - Falhas de Tool são sempre `ToolError`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from pipeflow.core.errors import TOOL_FALL
from pipeflow.core.exceptions import PipeflowException
from pipeflow.core.pipeline.context import RunContext


class ToolType(str, Enum):
    TOOL = "tool"


@dataclass(frozen=True)
class ToolSpec:
    """Descrição textual dos tipos de input/output e dos argumentos da Tool."""

    input: str
    output: str
    args: Dict[str, str] = field(default_factory=dict)


@dataclass
class ToolContext:
    """Contexto recebido por `Tool.execute`: argumentos da chamada e, quando houver, a run."""

    args: Dict[str, Any] = field(default_factory=dict)
    run: Optional[RunContext] = None


Execute = Callable[[Any, ToolContext], Awaitable[Any]]


@dataclass(frozen=True)
class Tool:
    id: str
    name: str
    type: ToolType
    description: str
    keywords: List[str]
    spec: ToolSpec
    execute: Execute = field(repr=False, compare=False)


class ToolError(PipeflowException):
    """Falha de execução de uma Tool."""

    def __init__(
        self,
        code: str,
        tool: Tool,
        errors: Iterable[BaseException] = (),
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message or f"Failed to execute tool {tool.name}", errors)
        self.code = code
        self.tool = tool

    def details(self) -> Dict[str, Any]:
        return {"tool_id": self.tool.id, "tool_name": self.tool.name}


def create_tool(
    type: ToolType,
    *,
    id: str,
    name: str,
    description: str,
    keywords: Iterable[str],
    spec: ToolSpec,
    execute: Execute,
) -> Tool:
    if not id:
        raise ValueError("tool id must be a non-empty string")
    return Tool(
        id=id,
        name=name,
        type=type,
        description=description,
        keywords=list(keywords),
        spec=spec,
        execute=execute,
    )


async def execute_tool(tool: Tool, input: Any, context: Optional[ToolContext] = None) -> Any:
    """Executa a Tool; exceções que não são ToolError viram ToolError(E_FALL)."""
    try:
        return await tool.execute(input, context or ToolContext())
    except ToolError:
        raise
    except Exception as exc:
        raise ToolError(TOOL_FALL, tool, [exc], f"Uncaught error in tool {tool.name}") from exc


def tool_step(tool: Tool, args: Optional[Dict[str, Any]] = None):
    """Adapta uma Tool ao contrato de Step. O nome do Step é o `id` da Tool."""

    async def step(value: Any, ctx: RunContext) -> Any:
        return await execute_tool(tool, value, ToolContext(args=dict(args or {}), run=ctx))

    step.name = tool.id  # type: ignore[attr-defined]
    step.__name__ = tool.id
    return step
