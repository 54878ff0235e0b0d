# src/pipeflow/core/__init__.py
"""
Core do pipeflow.

Componentes principais:
    - pipeline     → Step, Task, Pipeline e RunContext
    - engine       → Runner orientado a configuração (RunOutcome)
    - config       → carregamento, merge e hashing de configuração
    - traceability → Manifest da run
    - errors / exceptions → payloads serializáveis e exceções tipadas

Princípios fundamentais:
    - Execução estritamente sequencial
    - Toda invocação de Step é registrada no contexto da run
    - Falhas nunca são silenciadas nem repetidas
"""
