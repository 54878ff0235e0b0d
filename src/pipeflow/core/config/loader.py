# src/pipeflow/core/config/loader.py
"""
Leitura de arquivos de configuração do pipeflow.

Um arquivo de defaults é obrigatório. Um arquivo local de overrides é
opcional e, quando existe, é aplicado por cima via `deep_merge`.

Formatos (v1): YAML (.yaml, .yml) e JSON (.json). O parser é escolhido
pela extensão do arquivo.

Invariantes:
    - Arquivo vazio equivale a `{}`
    - A raiz de todo arquivo é um mapeamento
    - Os defaults carregados não são mutados pelo merge
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


PathLike = Union[str, Path]


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


def _parse_json(text: str) -> Any:
    return json.loads(text) if text.strip() else None


_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".json": _parse_json,
}


def _read_mapping(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de configuração e devolve seu conteúdo como dict.

    Raises:
        DefaultsNotFoundError: Arquivo inexistente.
        UnsupportedConfigFormatError: Extensão sem parser registrado.
        InvalidConfigRootTypeError: Raiz diferente de mapeamento.
    """
    if not path.is_file():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {path.suffix or '<sem extensão>'} ({path.name})"
        )

    content = parser(path.read_text(encoding="utf-8"))
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise InvalidConfigRootTypeError(
            f"{path.name}: raiz da configuração deve ser um mapeamento, "
            f"encontrado {type(content).__name__}"
        )
    return content


def load_config(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Monta a configuração efetiva: defaults, com o arquivo local por cima.

    Um `local_path` que não existe é ignorado silenciosamente.

    Raises:
        DefaultsNotFoundError: Defaults ausentes.
        UnsupportedConfigFormatError: Extensão não suportada.
        InvalidConfigRootTypeError: Raiz de algum arquivo não é dict.
        ConfigTypeConflictError: Tipos incompatíveis entre defaults e local.
    """
    config = _read_mapping(Path(defaults_path))

    if local_path is None:
        return config

    local = Path(local_path)
    if not local.exists():
        return config
    return deep_merge(config, _read_mapping(local))
