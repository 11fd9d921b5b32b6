"""Evaluation of generated Zod modules with Node.js and zod-to-json-schema."""

from __future__ import annotations

import json
import os
import subprocess  # noqa: S404
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemadesigner.exceptions import EvaluationError
from schemadesigner.logging import get_logger

logger = get_logger(__name__)

_NODE_SCRIPT = r"""
const { z } = require('zod');
const { zodToJsonSchema } = require('zod-to-json-schema');
let source = '';
process.stdin.setEncoding('utf8');
process.stdin.on('data', (chunk) => { source += chunk; });
process.stdin.on('end', () => {
  const body = source.replace("import { z } from 'zod';", '').replace('export default', 'return');
  const schema = new Function('z', body)(z);
  process.stdout.write(JSON.stringify(zodToJsonSchema(schema, process.env.SCHEMA_NAME)));
});
"""


class NodeEvaluator(BaseModel):
    """Evaluator running generated code in a Node.js subprocess."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    node_binary: str = Field(default="node", description="Node.js executable.")
    node_modules_path: str | None = Field(
        default=None,
        description="Directory resolving `zod` and `zod-to-json-schema`.",
    )
    timeout: float = Field(default=10.0, gt=0, description="Timeout in seconds.")

    def _environment(self, name: str) -> dict[str, str]:
        environment = {**os.environ, "SCHEMA_NAME": name}
        if self.node_modules_path:
            environment["NODE_PATH"] = self.node_modules_path
        return environment

    def evaluate(self, code: str, name: str) -> dict[str, Any]:
        """Evaluate code with Node.js.

        Args:
            code (str): Generated module text.
            name (str): Definition name of the root schema.

        Raises:
            EvaluationError: If node is missing, times out, fails or prints invalid JSON.

        Returns:
            dict[str, Any]: zod-to-json-schema document.
        """
        try:
            completed = subprocess.run(  # noqa: S603
                [self.node_binary, "-e", _NODE_SCRIPT],
                input=code,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=self._environment(name),
                check=False,
            )
        except FileNotFoundError as exc:
            raise EvaluationError(message=f"Node.js executable not found: {self.node_binary}") from exc
        except subprocess.TimeoutExpired as exc:
            raise EvaluationError(message=f"Evaluation timed out after {self.timeout}s") from exc

        if completed.returncode != 0:
            lines = [line for line in completed.stderr.splitlines() if line.strip()]
            detail = next((line for line in lines if "Error" in line), lines[-1] if lines else "")
            logger.debug("Node evaluation failed", extra={"returncode": completed.returncode})
            raise EvaluationError(message=detail or f"node exited with status {completed.returncode}")

        try:
            document = json.loads(completed.stdout)
        except json.JSONDecodeError as exc:
            raise EvaluationError(message=f"Evaluator returned invalid JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise EvaluationError(message="Evaluator returned a non-object document")
        return document
