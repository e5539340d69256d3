#!/usr/bin/env python3
"""
Command-line interface: inline critical CSS into an already built output directory.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson

from critical_css.assets.directory import DirectoryAssetSet
from critical_css.engine.node import NodeCriticalEngine
from critical_css.plugin import CriticalCSSPlugin
from critical_css.utils.config import ENGINE_MODULE, NODE_BINARY, VERSION
from critical_css.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

MAX_CONFIG_SIZE = 1024 * 1024  # 1MB


def load_options(config_file: Optional[Path]) -> Dict[str, Any]:
    """Read plugin options from a JSON file."""
    if config_file is None:
        return {}

    if not config_file.is_file():
        raise FileNotFoundError(f"Config file not found: {config_file}")
    if config_file.stat().st_size > MAX_CONFIG_SIZE:
        raise ValueError(f"Config file too large (max {MAX_CONFIG_SIZE/1024/1024}MB): {config_file}")

    options = orjson.loads(config_file.read_bytes())
    if not isinstance(options, dict):
        raise ValueError(f"Config file must hold a JSON object: {config_file}")
    return options


def apply_overrides(options: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Layer command-line flags over options from the config file."""
    options = dict(options)

    for name in ('src', 'dest', 'width', 'height', 'base'):
        value = getattr(args, name)
        if value is not None:
            options[name] = value
    if args.no_inline:
        options['inline'] = False
    if args.no_extract:
        options['extract'] = False

    if args.css_target or args.uncritical_target:
        target = options.get('target')
        target = dict(target) if isinstance(target, dict) else {}
        if args.css_target:
            target['css'] = args.css_target
        if args.uncritical_target:
            target['uncritical'] = args.uncritical_target
        options['target'] = target

    return options


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='critical-css',
        description='Inline critical CSS into the HTML files of a build output directory'
    )

    parser.add_argument(
        'output_dir',
        help='Build output directory',
        type=Path
    )
    parser.add_argument(
        '-c', '--config',
        help='JSON file with plugin options',
        type=Path
    )

    # Option overrides
    parser.add_argument('--base', help='Directory the engine reads files from')
    parser.add_argument('--src', help='HTML source file')
    parser.add_argument('--dest', help='Output file for the inlined HTML of --src')
    parser.add_argument('--width', help='Viewport width', type=float)
    parser.add_argument('--height', help='Viewport height', type=float)
    parser.add_argument(
        '--no-inline',
        help='Do not inline critical CSS into HTML',
        action='store_true'
    )
    parser.add_argument(
        '--no-extract',
        help='Do not extract inlined styles from referenced stylesheets',
        action='store_true'
    )
    parser.add_argument('--css-target', help='Write critical CSS to this asset')
    parser.add_argument('--uncritical-target', help='Write uncritical CSS to this asset')

    # Engine options
    parser.add_argument(
        '--node',
        help='Node.js executable',
        default=NODE_BINARY
    )
    parser.add_argument(
        '--engine-module',
        help='Module exporting generate()',
        default=ENGINE_MODULE
    )
    parser.add_argument(
        '--engine-cwd',
        help='Directory the engine module is resolved from',
        type=Path
    )

    # Other options
    parser.add_argument(
        '-v', '--verbose',
        help='Enable verbose output',
        action='store_true'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')

    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    """Process the output directory and write modified assets back."""
    options = apply_overrides(load_options(args.config), args)
    engine = NodeCriticalEngine(
        node=args.node,
        module=args.engine_module,
        cwd=str(args.engine_cwd) if args.engine_cwd else None
    )
    plugin = CriticalCSSPlugin(options, engine=engine)

    assets = await DirectoryAssetSet.from_directory(args.output_dir)
    try:
        result = await plugin.process(assets, args.output_dir.resolve())
    except Exception:
        # Files that succeeded are written even when a sibling failed
        try:
            await write_back(assets, args.output_dir)
        except OSError as e:
            logger.error(f"Failed to write processed assets: {e}")
        raise

    await write_back(assets, args.output_dir)
    logger.info(f"Processed {len(result.files)} HTML files")
    return 0


async def write_back(assets: DirectoryAssetSet, output_dir: Path) -> None:
    for name in await assets.flush():
        logger.info(f"Wrote {output_dir / name}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        return asyncio.run(run(args))
    except Exception as e:
        logger.error(f"Error: {str(e)}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
