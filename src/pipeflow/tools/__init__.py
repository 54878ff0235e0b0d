# src/pipeflow/tools/__init__.py
"""
Tools: integrações externas utilizáveis como Steps via `tool_step`.
"""

from .base import (
    Tool,
    ToolContext,
    ToolError,
    ToolSpec,
    ToolType,
    create_tool,
    execute_tool,
    tool_step,
)
from .wikipedia import wikipedia, wikipedia_tool

__all__ = [
    "Tool",
    "ToolContext",
    "ToolError",
    "ToolSpec",
    "ToolType",
    "create_tool",
    "execute_tool",
    "tool_step",
    "wikipedia",
    "wikipedia_tool",
]
