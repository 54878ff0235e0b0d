# src/pipeflow/core/traceability/__init__.py
"""
Rastreabilidade do pipeflow — Manifest v1.

API pública:
    - RunManifest     → estrutura canônica do Manifest
    - build_manifest  → construção a partir do RunContext final
    - save_manifest   → persistência em JSON
    - load_manifest   → restauração determinística
"""

from .manifest import (
    MANIFEST_VERSION,
    RunManifest,
    build_manifest,
    load_manifest,
    save_manifest,
)

__all__ = [
    "MANIFEST_VERSION",
    "RunManifest",
    "build_manifest",
    "load_manifest",
    "save_manifest",
]
