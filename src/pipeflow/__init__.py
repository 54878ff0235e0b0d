# src/pipeflow/__init__.py
"""
pipeflow — composição de Steps assíncronos em Tasks e Pipelines.

    - Step     → função assíncrona ``(input, ctx) -> output``
    - Task     → Steps em sequência sobre um valor
    - Pipeline → Tasks em sequência, com seletores opcionais entre elas
    - RunContext → registro compartilhado e mutável da run

Cada invocação de Step é registrada em ``ctx.steps``; falhas sobem como
``TaskError`` e, no nível do Pipeline, como ``PipelineError``.
"""

from .core.engine import PipelineRunner, RunOutcome, RunStatus
from .core.exceptions import PipelineError, PipeflowException, TaskError
from .core.pipeline import (
    Pipeline,
    PipelineOutput,
    RunContext,
    StepRecord,
    StepStatus,
    Task,
    TaskConfiguration,
    TaskOutput,
    named_step,
)

__version__ = "0.1.0"

__all__ = [
    "Pipeline",
    "PipelineOutput",
    "PipelineRunner",
    "PipelineError",
    "PipeflowException",
    "RunContext",
    "RunOutcome",
    "RunStatus",
    "StepRecord",
    "StepStatus",
    "Task",
    "TaskConfiguration",
    "TaskError",
    "TaskOutput",
    "named_step",
]
