"""Engine adapter running the ``critical`` npm package in a Node.js subprocess."""

import asyncio
import os
from typing import Mapping, Optional

import orjson

from ..utils.config import ENGINE_MODULE, NODE_BINARY
from ..utils.error import EngineError
from ..utils.logging import get_logger
from .base import EngineRequest, ProcessingResult

logger = get_logger(__name__)

# Reads the payload from stdin, revives encoded regular expressions,
# calls generate() and prints html/css/uncritical as JSON.
NODE_SCRIPT = r"""
const chunks = [];
process.stdin.on('data', (chunk) => chunks.push(chunk));
process.stdin.on('end', async () => {
  try {
    const options = JSON.parse(Buffer.concat(chunks).toString('utf8'), (key, value) =>
      value && typeof value === 'object' && '__regexp__' in value
        ? new RegExp(value.__regexp__, value.flags || '')
        : value
    );
    const { generate } = await import(process.env.CRITICAL_CSS_MODULE);
    const result = await generate(options);
    process.stdout.write(JSON.stringify({
      html: result.html,
      css: result.css,
      uncritical: result.uncritical
    }));
  } catch (error) {
    process.stderr.write(String((error && error.stack) || error));
    process.exit(1);
  }
});
"""

STDERR_LIMIT = 2000


class NodeCriticalEngine:
    """Call ``generate()`` from the ``critical`` package through ``node``.

    The package must be resolvable from ``cwd`` (for example installed in
    the project's ``node_modules``). Rendering timeouts belong to the
    package and are configured through the ``penthouse`` options.
    """

    def __init__(self, node: str = NODE_BINARY, module: str = ENGINE_MODULE,
                 cwd: Optional[str] = None, env: Optional[Mapping[str, str]] = None):
        """Initialize the engine.

        Args:
            node: Node.js executable
            module: Module specifier exporting ``generate``
            cwd: Directory the module is resolved from
            env: Extra environment variables for the subprocess
        """
        self.node = node
        self.module = module
        self.cwd = cwd
        self.env = dict(env or {})

    def _environment(self):
        environment = dict(os.environ)
        environment.update(self.env)
        environment['CRITICAL_CSS_MODULE'] = self.module
        return environment

    async def generate(self, request: EngineRequest) -> ProcessingResult:
        """Run the engine for one request.

        Raises:
            EngineError: If node is missing, exits non-zero or prints
                something that is not a JSON result
        """
        payload = orjson.dumps(request.to_payload())
        logger.debug(f"Engine payload for {request.src}: {payload.decode('utf-8')}")

        try:
            process = await asyncio.create_subprocess_exec(
                self.node, '-e', NODE_SCRIPT,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
                env=self._environment(),
            )
        except FileNotFoundError as e:
            raise EngineError(f"Node.js executable not found: {self.node}") from e

        stdout, stderr = await process.communicate(payload)
        error_output = stderr.decode('utf-8', errors='replace').strip()

        if process.returncode != 0:
            raise EngineError(
                f"{self.module} exited with status {process.returncode}: {error_output[:STDERR_LIMIT]}",
                stderr=error_output,
                returncode=process.returncode,
            )

        try:
            data = orjson.loads(stdout)
        except orjson.JSONDecodeError as e:
            raise EngineError(f"{self.module} returned invalid output: {e}", stderr=error_output) from e

        try:
            return ProcessingResult.from_mapping(data)
        except TypeError as e:
            raise EngineError(str(e), stderr=error_output) from e


__all__ = ['NodeCriticalEngine', 'NODE_SCRIPT']
