# src/pipeflow/core/traceability/manifest.py
"""
Manifest v1 — registro serializável de uma run do pipeflow.

O Manifest consolida, a partir do `RunContext` final:
    - metadados da run (run_id, pipeline, status, timestamps, duração)
    - hash da configuração resolvida
    - o log de Steps, na ordem de execução
    - o log de eventos e os warnings
    - o erro agregado da run, quando houver

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - O formato de persistência é JSON determinístico (chaves ordenadas)
    - Valores de input/output não serializáveis são convertidos com `repr`
    - O Manifest é construído no fim da run; não observa a execução

Limites explícitos:
    - Não executa pipeline
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pipeflow.core.errors import ErrorPayload, exception_payload
from pipeflow.core.pipeline.context import RunContext
from pipeflow.core.pipeline.types import StepRecord


MANIFEST_VERSION = "1"


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Timestamps sem timezone são assumidos como UTC; os demais são convertidos."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return _ensure_tzaware_utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    s = _ensure_tzaware_utc(start)
    e = _ensure_tzaware_utc(end)
    return max(0, int((e - s).total_seconds() * 1000))


def _jsonable(value: Any) -> Any:
    """Devolve `value` se ele for serializável em JSON; caso contrário, seu `repr`."""
    try:
        json.dumps(value, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        return repr(value)
    return value


def _record_to_dict(index: int, record: StepRecord, *, capture_values: bool) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "index": index,
        "name": record.name,
        "task": record.task,
        "status": record.status.value,
        "started_at": _iso(record.started_at),
        "finished_at": _iso(record.finished_at),
    }
    if record.started_at is not None and record.finished_at is not None:
        entry["duration_ms"] = _ms_between(record.started_at, record.finished_at)
    if capture_values:
        entry["input"] = _jsonable(record.input)
        entry["output"] = _jsonable(record.output)
    if record.error is not None:
        entry["error"] = record.error.to_payload().to_dict()
    return entry


@dataclass
class RunManifest:
    """
    Manifest v1 — registro de uma run de Pipeline.

    Invariantes:
        - `steps` preserva a ordem do log de Steps da run
        - `events` preserva a ordem de emissão
        - A estrutura completa é serializável (round-trip via to_dict/from_dict)
    """

    run_id: str
    pipeline: str
    status: str
    created_at: str
    finished_at: Optional[str] = None
    duration_ms: Optional[int] = None
    config_hash: Optional[str] = None
    manifest_version: str = MANIFEST_VERSION
    steps: List[Dict[str, Any]] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)
    error: Optional[ErrorPayload] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "manifest_version": self.manifest_version,
            "run": {
                "run_id": self.run_id,
                "pipeline": self.pipeline,
                "status": self.status,
                "created_at": self.created_at,
                "finished_at": self.finished_at,
                "duration_ms": self.duration_ms,
            },
            "inputs": {"config_hash": self.config_hash},
            "steps": [dict(s) for s in self.steps],
            "events": [dict(e) for e in self.events],
            "warnings": {k: list(v) for k, v in self.warnings.items()},
            "error": self.error.to_dict() if self.error is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunManifest":
        run = dict(data.get("run", {}) or {})
        inputs = dict(data.get("inputs", {}) or {})
        error = data.get("error")
        return cls(
            run_id=run["run_id"],
            pipeline=run.get("pipeline", ""),
            status=run.get("status", ""),
            created_at=run.get("created_at", ""),
            finished_at=run.get("finished_at"),
            duration_ms=run.get("duration_ms"),
            config_hash=inputs.get("config_hash"),
            manifest_version=str(data.get("manifest_version", MANIFEST_VERSION)),
            steps=[dict(s) for s in (data.get("steps", []) or [])],
            events=[dict(e) for e in (data.get("events", []) or [])],
            warnings={k: list(v) for k, v in (data.get("warnings", {}) or {}).items()},
            error=ErrorPayload.from_dict(error) if error else None,
        )


def build_manifest(
    *,
    ctx: RunContext,
    pipeline: str,
    status: str,
    finished_at: Optional[datetime] = None,
    config_hash: Optional[str] = None,
    error: Optional[BaseException] = None,
    capture_values: bool = True,
) -> RunManifest:
    """
    Constrói o Manifest de uma run a partir do RunContext final.

    Args:
        ctx: Contexto final da run.
        pipeline: Nome do Pipeline executado.
        status: Status final da run ("success" ou "failure").
        finished_at: Fim da run (agora, quando ausente).
        config_hash: Hash da configuração resolvida.
        error: Exceção agregada da run, quando houver.
        capture_values: Inclui input/output de cada Step.
    """
    finished = _ensure_tzaware_utc(finished_at or datetime.now(timezone.utc))

    # eventos podem carregar extras arbitrários vindos dos Steps
    events = [{k: _jsonable(v) for k, v in e.items()} for e in ctx.events]

    return RunManifest(
        run_id=ctx.run_id,
        pipeline=pipeline,
        status=status,
        created_at=_iso(ctx.created_at) or "",
        finished_at=_iso(finished),
        duration_ms=_ms_between(ctx.created_at, finished),
        config_hash=config_hash,
        steps=[
            _record_to_dict(i, r, capture_values=capture_values)
            for i, r in enumerate(ctx.steps)
        ],
        events=events,
        warnings={k: list(v) for k, v in ctx.warnings.items()},
        error=exception_payload(error) if error is not None else None,
    )


def save_manifest(manifest: RunManifest, path: Path) -> None:
    """
    Persiste o Manifest em JSON (UTF-8, chaves ordenadas, indentado).

    Diretórios intermediários são criados automaticamente.

    Raises:
        OSError: Em caso de falha ao criar diretórios ou escrever o arquivo.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def load_manifest(path: Path) -> RunManifest:
    """Restaura um Manifest salvo por `save_manifest`."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return RunManifest.from_dict(data)
