# src/pipeflow/core/pipeline/context.py
"""
Contexto de execução compartilhado do pipeline.

Este módulo define o `RunContext`, a estrutura canônica que acompanha,
por referência, todas as Tasks e Steps de uma run.

O RunContext atua como o único meio permitido de:
    - transportar campos da aplicação entre Steps (`ctx["chave"]`)
    - registrar cada invocação de Step (`ctx.steps`)
    - registrar eventos de log estruturados (`ctx.events`)
    - coletar warnings não fatais (`ctx.warnings`)

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto)
    - Comunicação explícita e rastreável
    - Ausência de estado global compartilhado

Invariantes:
    - `steps` nunca é substituído, apenas recebe novos registros
    - Logs sempre incluem `run_id` e `source`
    - Warnings são agrupados por `source`

Limites explícitos:
    - Não executa Steps
    - Não é seguro para runs concorrentes compartilhando a mesma instância
    - Não persiste dados automaticamente
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .types import StepRecord, StepStatus


LOG_LEVELS: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


def _level_value(level: str) -> int:
    key = str(level).upper()
    if key not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level!r}")
    return LOG_LEVELS[key]


@dataclass
class RunContext:
    """
    Contexto de execução compartilhado de uma run.

    Criado uma vez por run de Pipeline (ou de Task, quando executada
    isoladamente) e compartilhado por referência com todas as Tasks e
    Steps dessa run.

    Campos da aplicação são livres e acessados como mapeamento::

        ctx["user_id"] = 42
        ctx.get("locale", "en")

    O log de Steps (`steps`) é exposto somente para leitura do atributo:
    é possível acrescentar registros, mas não trocar a lista.

    Invariantes:
        - Cada run possui um RunContext único
        - Eventos abaixo de `log_level` são descartados
    """
    run_id: str
    created_at: datetime
    data: Dict[str, Any] = field(default_factory=dict)
    log_level: str = "DEBUG"

    _steps: List[StepRecord] = field(default_factory=list, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.log_level = str(self.log_level).upper()
        _level_value(self.log_level)

    @classmethod
    def create(
        cls,
        fields: Optional[Mapping[str, Any]] = None,
        *,
        run_id: Optional[str] = None,
        log_level: str = "DEBUG",
    ) -> "RunContext":
        """Cria um contexto novo, com log de Steps vazio, a partir dos campos da aplicação.

        `fields` pode ser um mapeamento ou outro RunContext; deste, apenas
        os campos da aplicação são copiados (log, eventos e warnings não).
        """
        if isinstance(fields, RunContext):
            fields = fields.data
        ctx = cls(
            run_id=run_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            data={},
            log_level=log_level,
        )
        for key, value in (fields or {}).items():
            if key == "steps":
                ctx.add_warning(
                    source="context",
                    message="application field 'steps' ignored: the step log is owned by the run",
                )
                continue
            ctx.data[key] = value
        return ctx

    # -----------------------------
    # Step log
    # -----------------------------
    @property
    def steps(self) -> List[StepRecord]:
        return self._steps

    def failures(self) -> List[StepRecord]:
        return [r for r in self._steps if r.status is StepStatus.FAILURE]

    # -----------------------------
    # Application fields
    # -----------------------------
    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key == "steps":
            raise KeyError("'steps' is reserved for the step log")
        self.data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        if _level_value(level) < _level_value(self.log_level):
            return
        event = {
            "run_id": self.run_id,
            "source": source,
            "level": str(level).upper(),
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, source: str, message: str) -> None:
        if source not in self.warnings:
            self.warnings[source] = []
        self.warnings[source].append(message)
