"""Per-file processing: one HTML file through the engine and back into the asset set."""

from typing import List

from ..assets.base import BaseAssetSet
from ..engine.base import CriticalEngine, EngineRequest, ProcessingResult
from ..utils.error import AssetWriteError, EngineInvocationError
from ..utils.logging import get_logger
from .options import Configuration, SplitTarget

logger = get_logger(__name__)


def build_request(filename: str, config: Configuration, base: str) -> EngineRequest:
    """Build the engine invocation for one discovered HTML file.

    ``src`` is always the discovered file; ``dest`` is plugin-only and is
    turned into the engine's ``target`` instead.
    """
    destination = config.destination_for(filename)
    if isinstance(config.target, SplitTarget):
        target = config.target.to_dict()
        target.setdefault('html', destination)
    else:
        target = destination

    return EngineRequest(
        base=base,
        src=filename,
        target=target,
        inline=config.inline,
        extract=config.extract,
        width=config.width,
        height=config.height,
        dimensions=config.dimensions,
        ignore=config.ignore,
        asset_paths=config.asset_paths,
        penthouse=config.penthouse,
    )


def apply_result(filename: str, result: ProcessingResult, config: Configuration,
                 asset_set: BaseAssetSet) -> List[str]:
    """Write the engine's output into the asset set.

    Each artifact is written only when both the configuration asks for it
    and the engine produced it. Writes replace whole assets.

    Returns:
        Names written, in write order
    """
    written = []

    if config.inline and result.html:
        destination = config.destination_for(filename)
        existed = asset_set.replace(destination, result.html, owner=filename)
        verb = 'Updated' if existed else 'Created'
        logger.info(f"{verb} {destination} with inlined critical CSS")
        written.append(destination)

    target = config.target
    if isinstance(target, SplitTarget):
        if config.extract and target.css and result.css:
            asset_set.replace(target.css, result.css, owner=filename)
            logger.info(f"Generated critical CSS file: {target.css}")
            written.append(target.css)

        if target.uncritical and result.uncritical:
            asset_set.replace(target.uncritical, result.uncritical, owner=filename)
            logger.info(f"Generated uncritical CSS file: {target.uncritical}")
            written.append(target.uncritical)

    return written


async def process_file(filename: str, config: Configuration, asset_set: BaseAssetSet,
                       engine: CriticalEngine, base: str) -> ProcessingResult:
    """Generate critical CSS for one HTML file and apply it.

    Args:
        filename: Discovered HTML asset
        config: Resolved options shared by every file
        asset_set: Build output, written in place
        engine: Critical CSS engine
        base: Output directory the engine reads files from

    Returns:
        The engine's result

    Raises:
        EngineInvocationError: If the engine fails or returns something unusable
        AssetWriteError: If a strict asset set reports a write collision
    """
    request = build_request(filename, config, base)
    logger.info(f"Processing critical CSS for {filename}")

    try:
        result = ProcessingResult.from_mapping(await engine.generate(request))
    except Exception as e:
        logger.error(f"Failed to process {filename}: {e}")
        raise EngineInvocationError(filename, e) from e

    try:
        apply_result(filename, result, config, asset_set)
    except AssetWriteError as e:
        logger.error(f"Failed to write results for {filename}: {e}")
        raise

    return result


__all__ = ['build_request', 'apply_result', 'process_file']
