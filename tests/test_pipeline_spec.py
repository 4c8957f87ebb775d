from __future__ import annotations

import json
from pathlib import Path

import pytest

from symhuff.pipeline_spec import PipelineSpecError, load_pipeline_spec


def test_pipeline_inline_minimal() -> None:
    spec = load_pipeline_spec(json.dumps({"spec": "symhuff.pipeline.v1"}))
    assert spec.name == "pipeline"
    assert spec.profile == "lossless"
    assert spec.decoder == "table"


def test_pipeline_full() -> None:
    obj = {
        "spec": "symhuff.pipeline.v1",
        "name": "compat",
        "profile": "Reference",
        "decoder": "tree",
    }
    spec = load_pipeline_spec(json.dumps(obj))
    assert spec.name == "compat"
    assert spec.profile == "reference"
    assert spec.decoder == "tree"


@pytest.mark.parametrize(
    "obj",
    [
        {},
        {"spec": "symhuff.pipeline.v0"},
        {"spec": "symhuff.pipeline.v1", "wat": 1},
        {"spec": "symhuff.pipeline.v1", "profile": "fast"},
        {"spec": "symhuff.pipeline.v1", "decoder": 3},
        {"spec": "symhuff.pipeline.v1", "name": ""},
    ],
)
def test_pipeline_rejected(obj: dict) -> None:
    with pytest.raises(PipelineSpecError):
        load_pipeline_spec(json.dumps(obj))


def test_pipeline_bad_json() -> None:
    with pytest.raises(PipelineSpecError):
        load_pipeline_spec("{not json")
    with pytest.raises(PipelineSpecError):
        load_pipeline_spec("[1, 2]")
    with pytest.raises(PipelineSpecError):
        load_pipeline_spec("   ")


def test_pipeline_from_file(tmp_path: Path) -> None:
    p = tmp_path / "p.json"
    p.write_text(
        json.dumps({"spec": "symhuff.pipeline.v1", "profile": "reference"}),
        encoding="utf-8",
    )
    spec = load_pipeline_spec("@" + str(p))
    assert spec.profile == "reference"

    with pytest.raises(PipelineSpecError):
        load_pipeline_spec("@" + str(tmp_path / "missing.json"))
