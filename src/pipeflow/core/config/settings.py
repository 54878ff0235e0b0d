# src/pipeflow/core/config/settings.py
"""
Defaults embutidos e leitura tipada das chaves usadas pelo runtime.

Chaves reconhecidas (v1)::

    runtime:
      log_level: INFO          # nível mínimo dos eventos no RunContext
    manifest:
      enabled: true            # constrói o manifest da run
      path: null               # quando definido, salva o manifest em JSON
      capture_values: true     # inclui input/output dos Steps no manifest

Chaves desconhecidas são preservadas e ignoradas pelo runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from pipeflow.core.pipeline.context import LOG_LEVELS

from .errors import InvalidConfigValueError
from .merge import deep_merge


DEFAULT_CONFIG: Dict[str, Any] = {
    "runtime": {"log_level": "INFO"},
    "manifest": {"enabled": True, "path": None, "capture_values": True},
}


@dataclass(frozen=True)
class RuntimeSettings:
    log_level: str = "INFO"
    manifest_enabled: bool = True
    manifest_path: Optional[Path] = None
    capture_values: bool = True


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Aplica `config` sobre os defaults embutidos."""
    return deep_merge(DEFAULT_CONFIG, config or {})


def runtime_settings(config: Dict[str, Any]) -> RuntimeSettings:
    """
    Extrai e valida as configurações do runtime a partir de uma config resolvida.

    Raises:
        InvalidConfigValueError: Se algum valor estiver fora do domínio aceito.
    """
    runtime = config.get("runtime") or {}
    manifest = config.get("manifest") or {}

    level = str(runtime.get("log_level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise InvalidConfigValueError(
            f"runtime.log_level inválido: {runtime.get('log_level')!r} "
            f"(aceitos: {', '.join(LOG_LEVELS)})"
        )

    for key in ("enabled", "capture_values"):
        if key in manifest and not isinstance(manifest[key], bool):
            raise InvalidConfigValueError(f"manifest.{key} deve ser booleano")

    raw_path = manifest.get("path")
    if raw_path is not None and not isinstance(raw_path, str):
        raise InvalidConfigValueError("manifest.path deve ser string ou null")

    return RuntimeSettings(
        log_level=level,
        manifest_enabled=manifest.get("enabled", True),
        manifest_path=Path(raw_path) if raw_path else None,
        capture_values=manifest.get("capture_values", True),
    )
