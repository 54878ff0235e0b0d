# src/pipeflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do pipeflow.

As exceções aqui definidas representam violações estruturais da
configuração, e não erros de execução de Steps ou Tasks.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Erros estruturais são fatais: nenhuma configuração parcial é devolvida
"""


class ConfigError(Exception):
    """Exceção base para erros de carregamento ou resolução de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de configuração base (defaults) não existe no caminho informado.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos para a mesma chave durante o deep-merge.

    Exemplo de conflito:
        - base:     {"runtime": {"log_level": "INFO"}}
        - override: {"runtime": "DEBUG"}
    """


class InvalidConfigValueError(ConfigError):
    """Valor presente na configuração, mas fora do domínio aceito pelo runtime."""
