# src/pipeflow/core/config/merge.py
"""
Deep-merge determinístico de configuração.

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total
    - None        → aceito em qualquer lado (limpa ou define o valor)
    - escalar     → sobrescrita direta
    - conflito de tipos → ConfigTypeConflictError

Os inputs nunca são mutados.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `override` sobre `base`, produzindo um novo dicionário.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se a mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, value in override.items():
        if key not in result:
            result[key] = deepcopy(value)
            continue

        current = result[key]

        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif isinstance(value, list) or current is None or value is None:
            result[key] = deepcopy(value)
        elif type(current) is not type(value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(current).__name__} vs {type(value).__name__}"
            )
        else:
            result[key] = deepcopy(value)

    return result
