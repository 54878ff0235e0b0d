# src/pipeflow/core/engine/__init__.py
"""
Engine do pipeflow.

Camada que executa um Pipeline a partir da configuração resolvida e
devolve o resultado como valor (`RunOutcome`), acompanhado do Manifest.

Limites explícitos:
    - Não define Steps de domínio
    - Não faz retry nem agenda runs
"""

from .runner import PipelineRunner, RunOutcome, RunStatus

__all__ = ["PipelineRunner", "RunOutcome", "RunStatus"]
