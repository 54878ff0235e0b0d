# src/pipeflow/core/config/__init__.py
"""
Camada de configuração do pipeflow.

Responsabilidades do pacote:
    - Carregamento de arquivos (defaults + overrides locais)
    - Deep-merge determinístico
    - Hash canônico para rastreabilidade
    - Leitura tipada das chaves usadas pelo runtime

Limites explícitos:
    - Não executa pipeline
    - Não valida campos da aplicação
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import DEFAULT_CONFIG, RuntimeSettings, resolve_config, runtime_settings

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidConfigValueError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "load_config",
    "deep_merge",
    "DEFAULT_CONFIG",
    "RuntimeSettings",
    "resolve_config",
    "runtime_settings",
]
