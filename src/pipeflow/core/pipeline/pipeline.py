# src/pipeflow/core/pipeline/pipeline.py
"""
Pipeline — sequência ordenada de Tasks com seletores opcionais.

Cada configuração do Pipeline é uma Task simples (input = output
acumulado) ou um `TaskConfiguration`, cujo `selector` escolhe o input
da Task a partir do output acumulado e do contexto.

Todas as Tasks de uma run compartilham o mesmo `RunContext`, de forma
que `ctx.steps` contém, em ordem, os registros de todas elas.

Política de falha:
    - Qualquer exceção de uma Task (ou de um seletor) interrompe a run
    - A falha é reportada como um único `PipelineError`, cujos `errors`
      são coletados de todos os StepRecords em FAILURE do log
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from pipeflow.core.exceptions import PipelineError, TaskError

from .context import RunContext
from .step import Selector
from .task import Task
from .types import PipelineOutput


@dataclass(frozen=True)
class TaskConfiguration:
    """Task com seletor opcional de input. Sem seletor, o input é o output acumulado."""

    task: Task
    selector: Optional[Selector] = None


PipelineConfiguration = Union[Task, TaskConfiguration]


def _normalize(entry: Any) -> TaskConfiguration:
    if isinstance(entry, TaskConfiguration):
        return entry
    if isinstance(entry, Task):
        return TaskConfiguration(task=entry)
    if isinstance(entry, Mapping) and isinstance(entry.get("task"), Task):
        return TaskConfiguration(task=entry["task"], selector=entry.get("selector"))
    raise TypeError(
        f"Pipeline entries must be Task or TaskConfiguration, got {type(entry).__name__}"
    )


class Pipeline:
    """
    Sequência nomeada e ordenada de Tasks.

    Exemplo::

        pipeline = Pipeline(
            name="shout",
            tasks=[
                greet,
                TaskConfiguration(task=echo, selector=lambda out, ctx: out.upper()),
            ],
        )
        result = await pipeline.run("hi", {"user": "ana"})
        result.output, result.context.steps

    Raises:
        ValueError: se nenhuma configuração for informada.
    """

    def __init__(self, *, name: str, tasks: Iterable[Any]) -> None:
        self.name = name
        configurations = [_normalize(entry) for entry in tasks]
        if not configurations:
            raise ValueError("Expected at least one task")
        self._tasks: Tuple[TaskConfiguration, ...] = tuple(configurations)

    def __repr__(self) -> str:
        return f"Pipeline(name={self.name!r}, tasks={len(self._tasks)})"

    @property
    def tasks(self) -> Tuple[TaskConfiguration, ...]:
        return self._tasks

    async def run(
        self,
        input: Any,
        context: Optional[Mapping[str, Any]] = None,
        *,
        run_id: Optional[str] = None,
        log_level: str = "DEBUG",
    ) -> PipelineOutput:
        """
        Executa as Tasks em ordem, encadeando outputs.

        Args:
            input: Input da primeira Task (ou do seu seletor).
            context: Campos da aplicação (mapeamento ou RunContext). Um
                RunContext novo, com log de Steps vazio, é criado a partir
                deles para esta run.
            run_id: Identificador explícito da run (gerado quando ausente).
            log_level: Nível mínimo dos eventos mantidos no contexto.

        Returns:
            PipelineOutput com o output da última Task e o contexto final.

        Raises:
            PipelineError: se qualquer Task falhar.
        """
        ctx = RunContext.create(context, run_id=run_id, log_level=log_level)
        ctx.log(source=self.name, level="INFO", message="pipeline.started", tasks=len(self._tasks))

        output = input
        for configuration in self._tasks:
            task = configuration.task
            try:
                task_input = (
                    configuration.selector(output, ctx)
                    if configuration.selector is not None
                    else output
                )
                result = await task.run(task_input, ctx)
            except Exception as exc:
                errors = _collect_task_errors(ctx)
                ctx.log(
                    source=self.name,
                    level="ERROR",
                    message="pipeline.failed",
                    task=task.name,
                    errors=len(errors),
                )
                raise PipelineError(errors, ctx) from exc
            output = result.output

        ctx.log(source=self.name, level="INFO", message="pipeline.succeeded", steps=len(ctx.steps))
        return PipelineOutput(output=output, context=ctx)


def _collect_task_errors(ctx: RunContext) -> List[TaskError]:
    return [r.error for r in ctx.failures() if r.error is not None]
