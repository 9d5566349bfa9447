#!/usr/bin/env python3
"""
BasePlan CLI

Command-line interface for the building layout generator.

Usage:
    baseplan generate [layout.json] [options]
    baseplan presets [--buildings]
    baseplan export --preset NAME -o layout.json
    baseplan share [layout.json] [--decode URL]
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from . import __version__

DEFAULT_BASE_URL = "https://example.invalid/baseplan"


def configure_logging(verbose: bool = False):
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def load_inputs(layout_arg: Optional[str], preset: Optional[str]):
    """
    Resolve layout inputs from a layout file or a preset.

    Args:
        layout_arg: Path to a layout file (takes precedence)
        preset: Preset configuration name

    Returns:
        LayoutFile, or None if the layout file could not be read
    """
    from .layout.layout_file import LayoutFile, parse_layout_file
    from .layout.presets import get_default_preset, get_preset

    if layout_arg:
        layout = parse_layout_file(Path(layout_arg))
        if layout is None:
            print(f"Error: Cannot read layout file: {layout_arg}")
        return layout

    configuration = get_preset(preset) if preset else get_default_preset()
    print(f"Using preset: {configuration.name}")
    return LayoutFile(
        buildings=list(configuration.buildings),
        links=list(configuration.links),
    )


def cmd_generate(args):
    """Run the layout simulation."""
    from .config import LayoutConfig, load_config
    from .placement.simulation import DEFAULT_SEED, generate_layout
    from .placement.visualizer import export_svg

    layout = load_inputs(args.layout, args.preset)
    if layout is None:
        return 1

    config = load_config(Path(args.config)) if args.config else LayoutConfig()
    if args.grid is not None:
        config = dataclasses.replace(config, grid_width=args.grid, grid_height=args.grid)

    seed = args.seed if args.seed is not None else (layout.seed or DEFAULT_SEED)

    print(f"  Buildings: {len(layout.buildings)}")
    print(f"  Links: {len(layout.links)}")
    print(f"  Seed: {seed}")

    def progress_callback(state):
        if state.tick % 50 == 0:
            print(f"  Tick {state.tick}: alpha={state.alpha:.4f}")

    print("\nRunning layout simulation...")
    result = generate_layout(
        layout.buildings,
        layout.links,
        seed=seed,
        fast=not args.animate,
        config=config,
        callback=progress_callback if args.animate else None,
    )
    print(f"  Converged after {result.ticks} ticks")

    print("\nPositions:")
    for body in result.bodies:
        print(f"  {body.id:20s} ({body.round_x:4d}, {body.round_y:4d})")

    if args.output:
        output = Path(args.output)
        data = result.to_dict()
        if output.suffix.lower() in (".yaml", ".yml"):
            output.write_text(yaml.safe_dump(data, default_flow_style=None, sort_keys=False))
        else:
            output.write_text(json.dumps(data, indent=2))
        print(f"\nSaved layout to: {output}")

    if args.svg:
        export_svg(result, Path(args.svg), show_outlines=args.outlines)
        print(f"Saved SVG to: {args.svg}")

    return 0


def cmd_presets(args):
    """List preset configurations and building templates."""
    from .layout.presets import BUILDING_PRESETS, get_preset, list_presets

    print("Preset configurations:")
    for name in list_presets():
        preset = get_preset(name)
        print(f"  {name}: {len(preset.buildings)} buildings, {len(preset.links)} links")

    if args.buildings:
        print("\nBuilding presets:")
        for template in BUILDING_PRESETS.values():
            size = (f"d={template.width:g}" if template.shape.value == "circle"
                    else f"{template.width:g}x{template.height:g}")
            print(f"  {template.id:20s} {template.name:20s} {template.shape.value:10s} {size}")

    return 0


def cmd_export(args):
    """Write a layout file from a preset."""
    from .layout.layout_file import default_export_name, write_layout_file
    from .placement.simulation import DEFAULT_SEED

    layout = load_inputs(None, args.preset)
    layout.seed = args.seed if args.seed is not None else DEFAULT_SEED

    path = write_layout_file(layout, Path(args.output or default_export_name()))
    print(f"Saved layout file: {path}")
    return 0


def cmd_share(args):
    """Encode a layout as a shareable link, or decode one."""
    from .layout.layout_file import decode_share_link, encode_share_link, write_layout_file
    from .placement.simulation import DEFAULT_SEED

    if args.decode:
        layout = decode_share_link(args.decode)
        if layout is None:
            print("Error: Link does not contain a layout")
            return 1
        print(f"Decoded {len(layout.buildings)} buildings, "
              f"{len(layout.links)} links, seed {layout.seed}")
        if args.output:
            write_layout_file(layout, Path(args.output))
            print(f"Saved layout file: {args.output}")
        return 0

    layout = load_inputs(args.layout, args.preset)
    if layout is None:
        return 1
    seed = args.seed if args.seed is not None else (layout.seed or DEFAULT_SEED)
    print(encode_share_link(layout.buildings, layout.links, seed, args.base_url))
    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="BasePlan - building layout generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Presets
  baseplan presets --buildings
  baseplan generate --preset "Industrial Base" --seed 42 --svg base.svg

  # Layout files
  baseplan export --preset "Basic Colony" -o colony.json
  baseplan generate colony.json -o positions.yaml
  baseplan share colony.json
        """,
    )

    parser.add_argument('--version', action='version', version=f'baseplan {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose (debug) logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Generate command
    generate_parser = subparsers.add_parser('generate', help='Generate a building layout')
    generate_parser.add_argument('layout', nargs='?', help='Layout file (.json/.yaml)')
    generate_parser.add_argument('-p', '--preset', help='Preset configuration name')
    generate_parser.add_argument('-s', '--seed', type=int, help='Seed (default: file seed or 12345)')
    generate_parser.add_argument('-c', '--config', help='YAML layout config file')
    generate_parser.add_argument('--grid', type=int, help='Square canvas size in cells')
    generate_parser.add_argument('--animate', action='store_true',
                                 help='Tick-by-tick mode with progress output')
    generate_parser.add_argument('-o', '--output', help='Write positions and tiles (.json/.yaml)')
    generate_parser.add_argument('--svg', help='Write an SVG rendering')
    generate_parser.add_argument('--outlines', action='store_true',
                                 help='Draw collision outlines in the SVG')

    # Presets command
    presets_parser = subparsers.add_parser('presets', help='List presets')
    presets_parser.add_argument('--buildings', action='store_true',
                                help='Also list building templates')

    # Export command
    export_parser = subparsers.add_parser('export', help='Write a layout file from a preset')
    export_parser.add_argument('-p', '--preset', help='Preset configuration name')
    export_parser.add_argument('-s', '--seed', type=int, help='Seed stored in the file')
    export_parser.add_argument('-o', '--output', help='Output path (.json/.yaml)')

    # Share command
    share_parser = subparsers.add_parser('share', help='Encode or decode a shareable link')
    share_parser.add_argument('layout', nargs='?', help='Layout file (.json/.yaml)')
    share_parser.add_argument('-p', '--preset', help='Preset configuration name')
    share_parser.add_argument('-s', '--seed', type=int, help='Seed to embed')
    share_parser.add_argument('--base-url', default=DEFAULT_BASE_URL, help='Link base URL')
    share_parser.add_argument('--decode', metavar='URL', help='Decode a link instead')
    share_parser.add_argument('-o', '--output', help='Write the decoded layout file')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    # Dispatch command
    commands = {
        'generate': cmd_generate,
        'presets': cmd_presets,
        'export': cmd_export,
        'share': cmd_share,
    }

    try:
        return commands[args.command](args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
