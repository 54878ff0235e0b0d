"""
pipeflow — Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas pelo runtime do pipeflow.

Hierarquia:
- PipeflowException
    - TaskError       → falha agregada de uma run de Task
    - PipelineError   → falha agregada de uma run de Pipeline

Regras:
- TaskError e PipelineError carregam o `context` no momento da falha
- As causas ficam em `errors`, na ordem em que foram coletadas
- Nenhuma exceção é recuperada ou repetida internamente
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Tuple

from .errors import ErrorPayload, FALL_THROUGH, PIPELINE_FAILED, exception_payload

if TYPE_CHECKING:
    from .pipeline.context import RunContext


class PipeflowException(Exception):
    """Base class para exceções internas do pipeflow.

    Importante:
    - Mensagem deve ser curta e humana
    - `errors` guarda as causas agregadas (pode ser vazio)
    """

    code: str = "PIPEFLOW_ERROR"
    hint: Optional[str] = None

    def __init__(self, message: str, errors: Iterable[BaseException] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.errors: Tuple[BaseException, ...] = tuple(errors)

    def __str__(self) -> str:
        return self.message

    def details(self) -> Dict[str, Any]:
        return {}

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(
            type=self.code,
            message=self.message,
            details=self.details(),
            hint=self.hint,
            causes=[exception_payload(e) for e in self.errors],
        )


class TaskError(PipeflowException):
    """Falha de uma run de Task.

    Levantada quando um Step falha com uma exceção que ainda não é um
    TaskError; um TaskError vindo de um Step é propagado sem novo
    encapsulamento.
    """

    def __init__(
        self,
        code: str,
        context: "RunContext",
        errors: Iterable[BaseException],
        message: str = "Task failed",
    ) -> None:
        super().__init__(message, errors)
        self.code = code
        self.context = context

    def details(self) -> Dict[str, Any]:
        return {"run_id": self.context.run_id}


class PipelineError(PipeflowException):
    """Falha de uma run de Pipeline.

    `errors` contém os TaskErrors de todos os StepRecords em FAILURE do
    log da run, na ordem do log.
    """

    code = PIPELINE_FAILED
    hint = "Inspecione context.steps para localizar o Step que falhou e o input recebido"

    def __init__(
        self,
        errors: Iterable["TaskError"],
        context: "RunContext",
        message: str = "Pipeline failed",
    ) -> None:
        super().__init__(message, errors)
        self.context = context

    def details(self) -> Dict[str, Any]:
        return {
            "run_id": self.context.run_id,
            "failed_steps": [r.name for r in self.context.failures()],
        }


__all__ = [
    "PipeflowException",
    "TaskError",
    "PipelineError",
    "FALL_THROUGH",
]
