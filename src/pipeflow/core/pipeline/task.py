# src/pipeflow/core/pipeline/task.py
"""
Task — sequência ordenada de Steps sobre um único valor.

Uma Task executa seus Steps em ordem, passando o output de cada Step
como input do próximo e registrando cada invocação no `RunContext`.

Política de falha:
    - O primeiro Step que falha interrompe a Task
    - Steps já concluídos não são desfeitos
    - A falha é sempre propagada como `TaskError`
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from pipeflow.core.errors import FALL_THROUGH
from pipeflow.core.exceptions import TaskError

from .context import RunContext
from .step import Step, invoke_step, step_name
from .types import StepRecord, TaskOutput


class Task:
    """
    Sequência nomeada e ordenada de Steps.

    A Task não guarda estado entre runs além da própria lista de Steps,
    portanto pode ser reutilizada em várias runs (cada uma com seu
    próprio RunContext).

    Exemplo::

        task = Task(name="greet", steps=[prefix, suffix])
        out = await task.run("1", RunContext.create())
        out.output
    """

    def __init__(self, *, name: str, steps: Optional[Iterable[Step]] = None) -> None:
        self.name = name
        self._steps: List[Step] = list(steps or [])

    def __repr__(self) -> str:
        return f"Task(name={self.name!r}, steps={len(self._steps)})"

    @property
    def steps(self) -> Tuple[Step, ...]:
        return tuple(self._steps)

    @property
    def id(self) -> str:
        """Nomes dos Steps unidos por ponto. Identificador de diagnóstico, não é único."""
        return ".".join(step_name(step) for step in self._steps)

    def push(self, *steps: Step) -> "Task":
        """Acrescenta Steps ao final da Task. Afeta apenas runs futuras."""
        if not steps:
            raise ValueError("Expected at least one step")
        self._steps.extend(steps)
        return self

    async def run(self, input: Any, context: RunContext) -> TaskOutput:
        """
        Executa os Steps em ordem com o input e o contexto informados.

        Todos os StepRecords desta run são acrescentados ao log (PENDING)
        antes de qualquer Step executar. Cada Step é associado ao registro
        criado para ele, independentemente do que mais exista no log.

        Raises:
            TaskError: se algum Step falhar. Um TaskError levantado pelo
                próprio Step é propagado sem alteração.
        """
        steps = list(self._steps)
        records = [StepRecord(name=step_name(step), task=self.name) for step in steps]
        context.steps.extend(records)

        context.log(source=self.name, level="DEBUG", message="task.started", steps=len(steps))

        output = input
        for index, (step, record) in enumerate(zip(steps, records)):
            record.begin(output)
            context.log(
                source=self.name,
                level="DEBUG",
                message="step.started",
                step=record.name,
                index=index,
            )

            try:
                output = await invoke_step(step, output, context)
            except Exception as exc:
                error = exc if isinstance(exc, TaskError) else TaskError(FALL_THROUGH, context, [exc])
                record.fail(error, exc)
                context.log(
                    source=self.name,
                    level="ERROR",
                    message="step.failed",
                    step=record.name,
                    index=index,
                    code=error.code,
                    exception_class=exc.__class__.__name__,
                )
                if error is exc:
                    raise
                raise error from exc

            record.succeed(output)
            context.log(
                source=self.name,
                level="DEBUG",
                message="step.succeeded",
                step=record.name,
                index=index,
            )

        context.log(source=self.name, level="INFO", message="task.succeeded", steps=len(steps))
        return TaskOutput(output=output)
