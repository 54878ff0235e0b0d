# src/pipeflow/core/pipeline/__init__.py
"""
# Pipeline Core — pipeflow

Este pacote define os contratos e as estruturas de execução do pipeflow.

## Componentes

- **types**
  - `StepStatus`: estados de um registro de Step
  - `StepRecord`: entrada do log de Steps
  - `TaskOutput`, `PipelineOutput`: valores de retorno das runs

- **context**
  - `RunContext`: contexto compartilhado (campos da aplicação, log de Steps, eventos, warnings)

- **step**
  - `Step` (Protocol), `named_step`, `step_name`

- **task** / **pipeline**
  - `Task`: Steps em sequência sobre um valor
  - `Pipeline`, `TaskConfiguration`: Tasks em sequência com seletores opcionais

## Invariantes

- Um único RunContext por run, compartilhado por referência
- O log de Steps só cresce; nunca é substituído nem reordenado
- Execução estritamente sequencial
"""

from .context import RunContext
from .pipeline import Pipeline, PipelineConfiguration, TaskConfiguration
from .step import Selector, Step, named_step, step_name
from .task import Task
from .types import PipelineOutput, StepRecord, StepStatus, TaskOutput

__all__ = [
    "RunContext",
    "Pipeline",
    "PipelineConfiguration",
    "TaskConfiguration",
    "Selector",
    "Step",
    "named_step",
    "step_name",
    "Task",
    "PipelineOutput",
    "StepRecord",
    "StepStatus",
    "TaskOutput",
]
