# src/pipeflow/core/pipeline/step.py
"""
Contrato canônico de Step do pipeflow.

Um Step é a menor unidade executável: uma função assíncrona que recebe
o valor corrente e o `RunContext` e devolve o próximo valor.

    async def normalize(value, ctx):
        return value.strip()

Responsabilidades de um Step:
    - transformar o valor recebido
    - ler/escrever campos da aplicação via RunContext

Invariantes:
    - Um Step nunca acrescenta registros em `ctx.steps` (a Task faz isso)
    - O nome do Step é o atributo `name`, ou `__name__`, ou vazio

Limites explícitos:
    - Não define retry, timeout ou cancelamento
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable, Protocol, TypeVar, Union, runtime_checkable

from .context import RunContext


@runtime_checkable
class Step(Protocol):
    """Protocolo estrutural de um Step: ``(input, ctx) -> awaitable``."""

    def __call__(self, value: Any, ctx: RunContext) -> Union[Awaitable[Any], Any]: ...


Selector = Callable[[Any, RunContext], Any]

F = TypeVar("F", bound=Callable[..., Any])


def step_name(step: Any) -> str:
    """Resolve o nome de diagnóstico de um Step."""
    name = getattr(step, "name", None)
    if isinstance(name, str):
        return name
    name = getattr(step, "__name__", None)
    if isinstance(name, str):
        return name
    return ""


def named_step(name: str) -> Callable[[F], F]:
    """Decorator que atribui um nome explícito e estável a um Step.

    Útil para lambdas e `functools.partial`, cujo `__name__` é pouco
    informativo ou inexistente.
    """

    def decorate(fn: F) -> F:
        @functools.wraps(fn)
        async def wrapper(value: Any, ctx: RunContext) -> Any:
            return await invoke_step(fn, value, ctx)

        wrapper.name = name  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorate


async def invoke_step(step: Callable[..., Any], value: Any, ctx: RunContext) -> Any:
    """Chama o Step e aguarda o resultado quando ele é awaitable."""
    result = step(value, ctx)
    if inspect.isawaitable(result):
        result = await result
    return result
