# src/pipeflow/core/engine/runner.py
"""
Runner do pipeflow: execução de um Pipeline guiada por configuração.

O Runner converte a falha de um Pipeline em valor: em vez de propagar
`PipelineError`, devolve um `RunOutcome` com status explícito, o
contexto final, o erro (quando houver) e o Manifest da run.

Configuração utilizada (ver `pipeflow.core.config.settings`):
    - runtime.log_level
    - manifest.enabled / manifest.path / manifest.capture_values
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pipeflow.core.config import compute_config_hash, resolve_config, runtime_settings
from pipeflow.core.errors import ErrorPayload
from pipeflow.core.exceptions import PipelineError
from pipeflow.core.pipeline.context import RunContext
from pipeflow.core.pipeline.pipeline import Pipeline
from pipeflow.core.traceability import RunManifest, build_manifest, save_manifest


class RunStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class RunOutcome:
    """Resultado de uma run executada pelo Runner (sucesso ou falha)."""

    status: RunStatus
    context: RunContext
    output: Any = None
    error: Optional[PipelineError] = None
    manifest: Optional[RunManifest] = None

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.SUCCESS

    def error_payload(self) -> Optional[ErrorPayload]:
        return self.error.to_payload() if self.error is not None else None

    def unwrap(self) -> Any:
        """Devolve o output, ou levanta o PipelineError da run."""
        if self.error is not None:
            raise self.error
        return self.output


class PipelineRunner:
    """
    Executa um Pipeline com configuração resolvida e devolve um RunOutcome.

    Exemplo::

        runner = PipelineRunner(pipeline=pipeline, config=load_config(defaults_path="pipeflow.yaml"))
        outcome = await runner.run("hi", {"user": "ana"})
        if not outcome.ok:
            print(outcome.error_payload())
    """

    def __init__(self, *, pipeline: Pipeline, config: Optional[Dict[str, Any]] = None):
        self.pipeline = pipeline
        self.config: Dict[str, Any] = resolve_config(config)
        self.settings = runtime_settings(self.config)
        self.config_hash = compute_config_hash(self.config)

    async def run(
        self,
        input: Any,
        fields: Optional[Mapping[str, Any]] = None,
        *,
        run_id: Optional[str] = None,
    ) -> RunOutcome:
        """
        Executa o Pipeline e devolve o RunOutcome; `PipelineError` nunca é propagado.

        Falha ao gravar o Manifest em `manifest.path` também não é propagada:
        vira warning em `context.warnings["manifest"]` e o outcome é devolvido.
        """
        try:
            result = await self.pipeline.run(
                input,
                fields,
                run_id=run_id,
                log_level=self.settings.log_level,
            )
        except PipelineError as exc:
            return self._outcome(RunStatus.FAILURE, exc.context, error=exc)

        return self._outcome(RunStatus.SUCCESS, result.context, output=result.output)

    def run_sync(
        self,
        input: Any,
        fields: Optional[Mapping[str, Any]] = None,
        *,
        run_id: Optional[str] = None,
    ) -> RunOutcome:
        """Executa `run` em um event loop novo. Não usar dentro de um loop ativo."""
        return asyncio.run(self.run(input, fields, run_id=run_id))

    def _outcome(
        self,
        status: RunStatus,
        ctx: RunContext,
        *,
        output: Any = None,
        error: Optional[PipelineError] = None,
    ) -> RunOutcome:
        manifest = None
        if self.settings.manifest_enabled:
            manifest = build_manifest(
                ctx=ctx,
                pipeline=self.pipeline.name,
                status=status.value,
                finished_at=datetime.now(timezone.utc),
                config_hash=self.config_hash,
                error=error,
                capture_values=self.settings.capture_values,
            )
            if self.settings.manifest_path is not None:
                try:
                    save_manifest(manifest, self.settings.manifest_path)
                except OSError as exc:
                    # a run já terminou; a falha de escrita não substitui o resultado
                    message = f"manifest not saved to {self.settings.manifest_path}: {exc}"
                    ctx.add_warning(source="manifest", message=message)
                    ctx.log(
                        source=self.pipeline.name,
                        level="ERROR",
                        message="manifest.save_failed",
                        path=str(self.settings.manifest_path),
                        exception_class=exc.__class__.__name__,
                    )

        return RunOutcome(
            status=status,
            context=ctx,
            output=output,
            error=error,
            manifest=manifest,
        )
