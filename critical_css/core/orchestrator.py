"""Fan-out of per-file processing across every discovered HTML file."""

import asyncio
import os
import warnings
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..assets.base import BaseAssetSet
from ..engine.base import CriticalEngine
from ..utils.error import DiscoveryEmptyWarning
from ..utils.logging import get_logger
from .discovery import discover_html_files
from .options import Configuration
from .processor import process_file

logger = get_logger(__name__)


class OrchestratorState(Enum):
    """Orchestrator states."""
    IDLE = "idle"
    DISCOVERING = "discovering"
    DISPATCHING = "dispatching"
    AWAITING = "awaiting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class OrchestrationResult:
    """Outcome of one post-build run."""
    state: OrchestratorState
    files: List[str] = field(default_factory=list)
    succeeded: List[str] = field(default_factory=list)
    # Failures in the order they were observed
    failed: Dict[str, Exception] = field(default_factory=dict)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Orchestrator:
    """Runs the per-file processor for every HTML file of one build.

    All files are dispatched before any is awaited. A failing file does
    not cancel its siblings: every task settles, then the first failure
    observed is raised. Writes made by files that succeeded stay in the
    asset set; nothing is rolled back.
    """

    def __init__(self, config: Configuration, engine: CriticalEngine):
        self.config = config
        self.engine = engine
        self.state = OrchestratorState.IDLE

    def _transition(self, state: OrchestratorState) -> None:
        logger.debug(f"Orchestrator {self.state.value} -> {state.value}")
        self.state = state

    def resolve_base(self, output_path: Optional[Union[str, Path]]) -> str:
        """Directory the engine reads from: configured ``base``, else the host's output path."""
        if self.config.base:
            return self.config.base
        if output_path is not None:
            return os.fspath(output_path)
        return os.getcwd()

    async def _settle(self, filename: str, asset_set: BaseAssetSet,
                      base: str) -> Tuple[str, Optional[Exception]]:
        try:
            await process_file(filename, self.config, asset_set, self.engine, base)
        except Exception as e:
            return filename, e
        return filename, None

    async def run(self, asset_set: BaseAssetSet,
                  output_path: Optional[Union[str, Path]] = None) -> OrchestrationResult:
        """Process every HTML file in the asset set.

        Args:
            asset_set: Build output, mutated in place
            output_path: Host output directory, used when no ``base`` is configured

        Returns:
            Result listing the files processed

        Raises:
            EngineInvocationError: First per-file failure observed, raised
                once all files have settled
            RuntimeError: If this orchestrator already ran
        """
        if self.state is not OrchestratorState.IDLE:
            raise RuntimeError(f"Orchestrator already ran (state: {self.state.value})")

        self._transition(OrchestratorState.DISCOVERING)
        files = discover_html_files(asset_set)
        result = OrchestrationResult(state=self.state, files=files)

        if not files:
            message = "No HTML files found to process"
            logger.warning(message)
            warnings.warn(message, DiscoveryEmptyWarning)
            self._transition(OrchestratorState.COMPLETED)
            result.state = self.state
            return result

        base = self.resolve_base(output_path)

        self._transition(OrchestratorState.DISPATCHING)
        tasks = [
            asyncio.ensure_future(self._settle(filename, asset_set, base))
            for filename in files
        ]

        self._transition(OrchestratorState.AWAITING)
        for settled in asyncio.as_completed(tasks):
            filename, error = await settled
            if error is None:
                result.succeeded.append(filename)
                continue

            result.failed[filename] = error
            if result.error is None:
                result.error = error
                self._transition(OrchestratorState.FAILED)
            else:
                logger.error(f"Additional failure for {filename} not reported to the host: {error}")

        if result.error is not None:
            result.state = self.state
            logger.error(
                f"Critical CSS failed for {len(result.failed)} of {len(files)} files"
            )
            result.error.result = result
            raise result.error

        self._transition(OrchestratorState.COMPLETED)
        result.state = self.state
        logger.info(f"Critical CSS processed for {len(files)} files")
        return result


__all__ = ['OrchestratorState', 'OrchestrationResult', 'Orchestrator']
