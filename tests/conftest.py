# tests/conftest.py
"""
Fixtures compartilhados para testes do pipeflow.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas (dict e YAML)
- contexto de execução controlado (RunContext)
- Steps de teste (sucesso, falha, espionagem de input)

Decisões arquiteturais:
    - Código assíncrono é executado com `asyncio.run` dentro do teste
    - Steps de teste são funções simples, sem herança
    - Imports do core são feitos de forma lazy dentro das fixtures

Invariantes:
    - Nenhuma fixture realiza I/O de rede
    - Nenhuma fixture compartilha RunContext entre testes
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults), semelhante a um `pipeflow.defaults.yaml`.

    Returns:
        str: Conteúdo YAML de defaults.
    """
    return """\
runtime:
  log_level: INFO
manifest:
  enabled: true
  capture_values: true
extras:
  tags: [a, b]
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de overrides locais, semelhante a um `pipeflow.local.yaml`."""
    return """\
runtime:
  log_level: DEBUG
manifest:
  capture_values: false
extras:
  tags: [c]
"""


@pytest.fixture
def dummy_config() -> dict:
    """Configuração já resolvida, mínima e válida, para o Runner."""
    return {
        "runtime": {"log_level": "DEBUG"},
        "manifest": {"enabled": True, "path": None, "capture_values": True},
    }


# =====================================================
# Pipeline fixtures
# =====================================================

@pytest.fixture
def dummy_ctx():
    """
    RunContext determinístico para testes de Task.

    `run_id` e `created_at` são fixos; o log de Steps começa vazio.
    """
    from pipeflow.core.pipeline.context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        data={"source": "pytest"},
    )


@pytest.fixture
def make_step():
    """
    Factory de Steps assíncronos nomeados.

    `make_step("upper", str.upper)` devolve um Step chamado "upper" que
    aplica a função ao input. Cada chamada é registrada em `step.calls`.
    """

    def factory(name, fn):
        async def step(value, ctx):
            step.calls.append(value)
            return fn(value)

        step.__name__ = name
        step.calls = []
        return step

    return factory


@pytest.fixture
def failing_step():
    """Factory de Steps que sempre falham com a exceção informada."""

    def factory(name, exc):
        async def step(value, ctx):
            step.calls.append(value)
            raise exc

        step.__name__ = name
        step.calls = []
        return step

    return factory
