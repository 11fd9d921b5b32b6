from __future__ import annotations

import subprocess  # noqa: S404

import pytest

from schemadesigner.exceptions import EvaluationError
from schemadesigner.interchange import NodeEvaluator


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=["node"], returncode=returncode, stdout=stdout, stderr=stderr)


def test_node_evaluator_passes_code_and_name(mocker) -> None:
    run = mocker.patch(
        "schemadesigner.interchange.node.subprocess.run",
        return_value=_completed(stdout='{"$ref": "#/definitions/a"}'),
    )

    document = NodeEvaluator(node_binary="nodejs", node_modules_path="/srv/node_modules").evaluate("code", "a")

    assert document == {"$ref": "#/definitions/a"}
    args, kwargs = run.call_args
    assert args[0][0] == "nodejs"
    assert kwargs["input"] == "code"
    assert kwargs["env"]["SCHEMA_NAME"] == "a"
    assert kwargs["env"]["NODE_PATH"] == "/srv/node_modules"


def test_node_evaluator_reports_error_line(mocker) -> None:
    stderr = "undefined:3\n    at eval\nTypeError: z.file is not a function\n    at Object.<anonymous>\n"
    mocker.patch("schemadesigner.interchange.node.subprocess.run", return_value=_completed(returncode=1, stderr=stderr))

    with pytest.raises(EvaluationError, match="TypeError: z.file is not a function"):
        NodeEvaluator().evaluate("code", "a")


def test_node_evaluator_reports_missing_binary(mocker) -> None:
    mocker.patch("schemadesigner.interchange.node.subprocess.run", side_effect=FileNotFoundError("node"))

    with pytest.raises(EvaluationError, match="not found"):
        NodeEvaluator().evaluate("code", "a")


def test_node_evaluator_reports_timeout(mocker) -> None:
    mocker.patch(
        "schemadesigner.interchange.node.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="node", timeout=1),
    )

    with pytest.raises(EvaluationError, match="timed out"):
        NodeEvaluator(timeout=1).evaluate("code", "a")


def test_node_evaluator_rejects_invalid_output(mocker) -> None:
    mocker.patch("schemadesigner.interchange.node.subprocess.run", return_value=_completed(stdout="not json"))

    with pytest.raises(EvaluationError, match="invalid JSON"):
        NodeEvaluator().evaluate("code", "a")

    mocker.patch("schemadesigner.interchange.node.subprocess.run", return_value=_completed(stdout="[1]"))

    with pytest.raises(EvaluationError, match="non-object"):
        NodeEvaluator().evaluate("code", "a")
