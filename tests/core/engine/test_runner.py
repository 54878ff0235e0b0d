# tests/core/engine/test_runner.py
"""
Testes do PipelineRunner.

Os testes asseguram que:
- falhas do Pipeline viram um RunOutcome FAILURE (sem exceção propagada)
- o sucesso devolve output e contexto final
- `runtime.log_level` filtra os eventos do contexto
- o Manifest é construído, e salvo quando `manifest.path` está definido
"""

import asyncio
from pathlib import Path

import pytest

from pipeflow.core.engine.runner import PipelineRunner, RunStatus
from pipeflow.core.exceptions import PipelineError
from pipeflow.core.pipeline.pipeline import Pipeline
from pipeflow.core.pipeline.task import Task
from pipeflow.core.traceability import load_manifest


@pytest.fixture
def ok_pipeline(make_step):
    return Pipeline(
        name="ok",
        tasks=[Task(name="t", steps=[make_step("upper", str.upper), make_step("bang", lambda v: v + "!")])],
    )


@pytest.fixture
def broken_pipeline(make_step, failing_step):
    return Pipeline(
        name="broken",
        tasks=[
            Task(name="t1", steps=[make_step("upper", str.upper)]),
            Task(name="t2", steps=[failing_step("explode", RuntimeError("boom"))]),
        ],
    )


def test_success_outcome(ok_pipeline, dummy_config):
    runner = PipelineRunner(pipeline=ok_pipeline, config=dummy_config)

    outcome = asyncio.run(runner.run("hi", {"user": "ana"}, run_id="run-ok"))

    assert outcome.ok
    assert outcome.status is RunStatus.SUCCESS
    assert outcome.output == "HI!"
    assert outcome.unwrap() == "HI!"
    assert outcome.error is None
    assert outcome.error_payload() is None
    assert outcome.context.run_id == "run-ok"
    assert outcome.context["user"] == "ana"
    assert outcome.manifest.status == "success"
    assert [s["name"] for s in outcome.manifest.steps] == ["upper", "bang"]


def test_failure_outcome_does_not_raise(broken_pipeline, dummy_config):
    runner = PipelineRunner(pipeline=broken_pipeline, config=dummy_config)

    outcome = asyncio.run(runner.run("hi"))

    assert not outcome.ok
    assert outcome.status is RunStatus.FAILURE
    assert outcome.output is None
    assert isinstance(outcome.error, PipelineError)
    assert outcome.context is outcome.error.context
    assert outcome.error_payload().details["failed_steps"] == ["explode"]
    assert outcome.manifest.status == "failure"
    assert outcome.manifest.error.type == "PIPELINE_FAILED"
    with pytest.raises(PipelineError):
        outcome.unwrap()


def test_log_level_from_config_filters_events(ok_pipeline):
    runner = PipelineRunner(pipeline=ok_pipeline, config={"runtime": {"log_level": "INFO"}})

    outcome = runner.run_sync("x")

    assert outcome.context.log_level == "INFO"
    assert {e["level"] for e in outcome.context.events} == {"INFO"}


def test_manifest_can_be_disabled(ok_pipeline):
    runner = PipelineRunner(pipeline=ok_pipeline, config={"manifest": {"enabled": False}})

    assert runner.run_sync("x").manifest is None


def test_manifest_is_saved_when_path_is_configured(broken_pipeline, tmp_path: Path):
    target = tmp_path / "runs" / "manifest.json"
    runner = PipelineRunner(
        pipeline=broken_pipeline,
        config={"manifest": {"path": str(target), "capture_values": False}},
    )

    outcome = runner.run_sync("hi", run_id="run-saved")
    loaded = load_manifest(target)

    assert target.exists()
    assert loaded.run_id == "run-saved"
    assert loaded.pipeline == "broken"
    assert loaded.config_hash == runner.config_hash
    assert loaded.to_dict() == outcome.manifest.to_dict()
    assert "input" not in loaded.steps[0]


def test_manifest_write_failure_keeps_outcome(ok_pipeline, tmp_path: Path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    target = blocker / "manifest.json"
    runner = PipelineRunner(pipeline=ok_pipeline, config={"manifest": {"path": str(target)}})

    outcome = runner.run_sync("hi")

    assert outcome.ok
    assert outcome.output == "HI!"
    assert outcome.manifest is not None
    assert not target.exists()
    assert len(outcome.context.warnings["manifest"]) == 1
    assert any(e["message"] == "manifest.save_failed" for e in outcome.context.events)


def test_config_is_resolved_over_defaults(ok_pipeline):
    runner = PipelineRunner(pipeline=ok_pipeline)

    assert runner.config["runtime"]["log_level"] == "INFO"
    assert runner.settings.manifest_enabled is True
    assert len(runner.config_hash) == 64
