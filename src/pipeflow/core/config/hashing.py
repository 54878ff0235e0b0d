# src/pipeflow/core/config/hashing.py
"""Hash canônico da configuração resolvida, usado no manifest da run."""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    SHA-256 hexadecimal da serialização JSON canônica da configuração.

    Serialização: chaves ordenadas, separadores compactos, UTF-8.
    A mesma configuração sempre produz o mesmo hash, independentemente
    da ordem original das chaves.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical = json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
