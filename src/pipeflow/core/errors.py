"""
pipeflow — Canonical Error Structures (v1)

Este módulo define o padrão canônico de representação serializável de
erros do pipeflow. Exceções levantadas em runtime (ver `exceptions.py`)
são convertidas para `ErrorPayload` quando precisam ser persistidas ou
devolvidas como valor (manifest, RunOutcome).

Erros devem ser:

- explícitos
- serializáveis
- rastreáveis
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do pipeflow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    - causes: payloads das causas encadeadas (TaskError -> erro do Step)
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None
    causes: List["ErrorPayload"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorPayload":
        return cls(
            type=str(data["type"]),
            message=str(data.get("message", "")),
            details=dict(data.get("details") or {}),
            hint=data.get("hint"),
            causes=[cls.from_dict(c) for c in (data.get("causes") or [])],
        )


# ---------------------------------------------------------------------------
# Catálogo canônico de códigos (v1)
# ---------------------------------------------------------------------------

# Task / Pipeline
FALL_THROUGH = "FALL_THROUGH"
PIPELINE_FAILED = "PIPELINE_FAILED"

# Erro levantado por um Step, sem classificação própria
STEP_EXCEPTION = "STEP_EXCEPTION"

# Tools
TOOL_FALL = "E_FALL"
TOOL_FETCH = "E_FETCH"
TOOL_MISSING = "E_MISSING"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def exception_payload(exc: BaseException) -> ErrorPayload:
    """Converte uma exceção arbitrária em ErrorPayload sem expor stack trace.

    Exceções do pipeflow sabem se serializar (`to_payload`); as demais são
    encapsuladas como STEP_EXCEPTION com o nome da classe em `details`.
    """
    to_payload = getattr(exc, "to_payload", None)
    if callable(to_payload):
        return to_payload()

    return ErrorPayload(
        type=STEP_EXCEPTION,
        message=str(exc) or exc.__class__.__name__,
        details={"exception_class": exc.__class__.__name__},
    )
