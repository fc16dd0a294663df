#!/usr/bin/env python
"""
Puppet Physics CLI - Preview secondary motion presets against scripted anchor motion

Usage:
    puppet-physics [options]

Examples:
    puppet-physics --preset earring --motion sway          # Print a summary
    puppet-physics --preset cape --motion step -o cape.gif --format gif
    puppet-physics --preset hair_short --motion shake --seed 7 -o hair.csv --format csv
    puppet-physics --list-presets
"""

import argparse
import logging
import sys
from pathlib import Path


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Secondary motion preview for rigged 2D characters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Anchor Motions:
  still   - Anchor never moves (watch a preset settle)
  step    - One sideways jump
  sway    - Side-to-side sine motion
  shake   - Random jitter that calms down
  circle  - Constant-speed circle
  dash    - Eased move out and back

Examples:
  %(prog)s --preset earring --motion sway
  %(prog)s --preset cape --motion step -o cape.gif --format gif
  %(prog)s --preset-info hair_long
        """
    )

    parser.add_argument(
        '-p', '--preset',
        type=str,
        default='hair_long',
        metavar='NAME',
        help='Driver preset to simulate (default: hair_long)'
    )

    parser.add_argument(
        '-m', '--motion',
        type=str,
        default='sway',
        help='Anchor motion (default: sway)'
    )

    parser.add_argument(
        '-d', '--duration',
        type=float,
        default=2.0,
        help='Clip length in seconds (default: 2.0)'
    )

    parser.add_argument(
        '--fps',
        type=float,
        default=60.0,
        help='Frames per second (default: 60)'
    )

    parser.add_argument(
        '-a', '--amplitude',
        type=float,
        default=None,
        help='Anchor motion size in pixels (motion default if not specified)'
    )

    parser.add_argument(
        '--frequency',
        type=float,
        default=None,
        help='Anchor motion frequency in Hz for sway/circle'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for the shake motion'
    )

    parser.add_argument(
        '--gravity',
        type=float,
        default=9.8,
        help='Puppet gravity in m/s^2 (default: 9.8)'
    )

    parser.add_argument(
        '--pixels-per-meter',
        type=float,
        default=1000.0,
        help='Puppet scale (default: 1000)'
    )

    parser.add_argument(
        '--settings',
        type=str,
        default=None,
        metavar='PATH',
        help='YAML file with simulation settings (max_dt, max_substep, max_substeps)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Export the trace to this path'
    )

    parser.add_argument(
        '--format',
        type=str,
        default=None,
        choices=['json', 'csv', 'gif'],
        help='Export format (default: from output suffix, else json)'
    )

    parser.add_argument(
        '--presets-dir',
        type=str,
        default=None,
        metavar='DIR',
        help='Directory with user preset YAML files'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List all available presets and exit'
    )

    parser.add_argument(
        '--preset-info',
        type=str,
        default=None,
        metavar='NAME',
        help='Show detailed info about a preset and exit'
    )

    parser.add_argument(
        '--list-motions',
        action='store_true',
        help='List anchor motions and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Debug logging'
    )

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    # Import here to avoid slow startup for --help
    from . import simulate
    from .core import ANCHOR_PATHS, PresetManager, PuppetPhysics, load_settings

    manager = PresetManager(Path(args.presets_dir) if args.presets_dir else None)

    if args.list_presets:
        print("Available Physics Presets:\n")
        for tag in manager.list_tags():
            print(f"  [{tag.upper()}]")
            for name in manager.list_by_tag(tag):
                preset = manager.get(name)
                desc = preset.description[:50] + "..." if len(preset.description) > 50 else preset.description
                print(f"    {name:<16} {preset.system:<16} - {desc}")
            print()
        print(f"Total: {len(manager.list_all())} presets")
        return 0

    if args.preset_info:
        info = manager.get_preset_info(args.preset_info)
        if info is None:
            print(f"Error: Preset '{args.preset_info}' not found")
            print("Use --list-presets to see available presets")
            return 1

        print(f"Preset: {info['name']}")
        print(f"Description: {info['description']}")
        print(f"\nSystem: {info['system']}")
        print(f"Map mode: {info['map_mode']}")
        print(f"Local only: {info['local_only']}")
        print("\nProps:")
        for key, value in info['props'].items():
            print(f"  {key}: {value}")
        print(f"\nTags: {', '.join(info['tags'])}")
        return 0

    if args.list_motions:
        for name in sorted(ANCHOR_PATHS):
            print(f"  {name}")
        return 0

    motion_kwargs = {}
    if args.frequency is not None:
        motion_kwargs['frequency'] = args.frequency
    if args.seed is not None:
        motion_kwargs['seed'] = args.seed

    fmt = args.format
    if fmt is None and args.output:
        suffix = Path(args.output).suffix.lstrip('.').lower()
        fmt = suffix if suffix in ('json', 'csv', 'gif') else 'json'

    try:
        settings = load_settings(args.settings)
        trace = simulate(
            preset=args.preset,
            motion=args.motion,
            duration=args.duration,
            fps=args.fps,
            amplitude=args.amplitude,
            output_path=args.output,
            format=fmt or 'json',
            settings=settings,
            physics=PuppetPhysics(pixels_per_meter=args.pixels_per_meter, gravity=args.gravity),
            presets=manager,
            **motion_kwargs
        )
    except (ValueError, OSError) as e:
        if args.verbose:
            logger.exception("Simulation failed")
        else:
            logger.error(f"Simulation failed: {e}")
        return 1

    outputs = trace.outputs
    print(f"Simulated: {trace.name} ({len(trace)} frames, map mode {trace.map_mode})")
    print(f"Output X range: {outputs[:, 0].min():+.4f} .. {outputs[:, 0].max():+.4f}")
    print(f"Output Y range: {outputs[:, 1].min():+.4f} .. {outputs[:, 1].max():+.4f}")
    print(f"Final output: ({outputs[-1, 0]:+.4f}, {outputs[-1, 1]:+.4f})")
    if args.output:
        print(f"Output: {args.output}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
