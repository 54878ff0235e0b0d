# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de configuração.

Os testes asseguram que:
- escalares são sobrescritos
- dicionários são mesclados recursivamente
- listas são sobrescritas integralmente
- None é aceito como valor em qualquer lado
- conflitos de tipo são rejeitados
- os inputs não são mutados
"""

import pytest

from pipeflow.core.config.errors import ConfigTypeConflictError
from pipeflow.core.config.merge import deep_merge


def test_merge_simple_override():
    base = {"a": 1, "b": 2}
    override = {"b": 99}

    out = deep_merge(base, override)

    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_nested_dicts():
    base = {"runtime": {"log_level": "INFO", "extra": {"x": 1}}}
    override = {"runtime": {"extra": {"y": 2}}}

    assert deep_merge(base, override) == {
        "runtime": {"log_level": "INFO", "extra": {"x": 1, "y": 2}}
    }


def test_lists_are_replaced():
    assert deep_merge({"tags": [1, 2]}, {"tags": [3]}) == {"tags": [3]}


def test_none_replaces_and_is_replaced():
    assert deep_merge({"path": None}, {"path": "out.json"}) == {"path": "out.json"}
    assert deep_merge({"path": "out.json"}, {"path": None}) == {"path": None}


def test_type_conflict_is_rejected():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"runtime": {"log_level": "INFO"}}, {"runtime": "DEBUG"})


def test_root_must_be_dicts():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["not", "a", "dict"])


def test_result_does_not_alias_inputs():
    base = {"nested": {"list": [1]}}
    out = deep_merge(base, {})

    out["nested"]["list"].append(2)

    assert base == {"nested": {"list": [1]}}
