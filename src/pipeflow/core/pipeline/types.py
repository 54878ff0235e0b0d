# src/pipeflow/core/pipeline/types.py
"""
Tipos canônicos do pipeline do pipeflow.

Este módulo define as estruturas que padronizam o registro de execução
de Steps dentro do `RunContext`.

Componentes principais:
    - StepStatus → enum de estados (PENDING, SUCCESS, FAILURE)
    - StepRecord → entrada do log de Steps de uma run
    - TaskOutput / PipelineOutput → valores de retorno das runs

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Nenhuma lógica de execução vive neste módulo

Invariantes:
    - Um StepRecord nasce PENDING e transita exatamente uma vez
      para SUCCESS ou FAILURE
    - `output` só é preenchido em SUCCESS; `error` só em FAILURE
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from pipeflow.core.exceptions import TaskError
    from .context import RunContext


class StepStatus(str, Enum):
    """
    Estados possíveis de um StepRecord.

    Os valores são strings para facilitar serialização em JSON e
    persistência no manifest.

    Estados definidos:
        - PENDING: registrado, ainda não finalizado
        - SUCCESS: execução concluída com sucesso
        - FAILURE: execução interrompida por erro

    Invariantes:
        - PENDING é o único estado transitório
        - O valor textual do enum é estável e canônico
    """
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class StepRecord:
    """
    Registro de uma invocação de Step no log da run.

    Cada Task acrescenta um StepRecord por Step antes de executar qualquer
    um deles. O próprio Task mantém a referência ao registro que criou,
    e é o único que o finaliza.

    Campos:
        - name: nome do Step (pode ser vazio ou repetido)
        - task: nome da Task dona do Step
        - status: estado atual (ver `StepStatus`)
        - input: valor recebido pelo Step
        - output: valor produzido (apenas em SUCCESS)
        - error: `TaskError` propagado pela falha (apenas em FAILURE)
        - cause: exceção original levantada pelo Step (apenas em FAILURE)
        - started_at / finished_at: timestamps UTC da invocação

    Limites explícitos:
        - Não executa o Step
        - Não decide políticas de erro
    """
    name: str
    task: str = ""
    status: StepStatus = StepStatus.PENDING
    input: Any = None
    output: Any = None
    error: Optional["TaskError"] = None
    cause: Optional[BaseException] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    _input_set: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def finalized(self) -> bool:
        return self.status is not StepStatus.PENDING

    def begin(self, value: Any) -> None:
        """Registra o input; só pode ser chamado uma vez por registro."""
        if self._input_set:
            raise RuntimeError(f"StepRecord '{self.name}' already received its input")
        self.input = value
        self._input_set = True
        self.started_at = datetime.now(timezone.utc)

    def succeed(self, output: Any) -> None:
        self._finalize(StepStatus.SUCCESS)
        self.output = output

    def fail(self, error: "TaskError", cause: BaseException) -> None:
        self._finalize(StepStatus.FAILURE)
        self.error = error
        self.cause = cause

    def _finalize(self, status: StepStatus) -> None:
        if self.finalized:
            raise RuntimeError(
                f"StepRecord '{self.name}' already finalized as {self.status.value}"
            )
        self.status = status
        self.finished_at = datetime.now(timezone.utc)


@dataclass(frozen=True)
class TaskOutput:
    """Resultado de uma run de Task: o output do último Step."""

    output: Any


@dataclass(frozen=True)
class PipelineOutput:
    """Resultado de uma run de Pipeline: output da última Task e o contexto final."""

    output: Any
    context: "RunContext"
