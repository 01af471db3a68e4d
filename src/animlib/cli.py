"""
AnimLib - Command Line Version
Extracts raw skeletal animations (and optional property tracks) from GLTF/GLB files
"""

import argparse
import logging
import sys
from pathlib import Path

from .config.settings import DEFAULT_SAMPLING_RATE, DEFAULT_UNIT_SCALE, LOG_FORMAT, LOG_LEVEL
from .errors import AnimationExtractionError
from .extraction import SamplingPlanner, extract_animations, extract_track
from .scene.converter import AxisSystem, TransformConverter
from .scene.gltf_scene import GltfScene

# Supported file extensions
VALID_EXTENSIONS = {'.gltf', '.glb'}

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='animlib-extract',
        description='Resample the animations of a GLTF/GLB asset into raw skeletal keyframe tracks',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract every animation at the scene frame rate
  animlib-extract character.glb

  # Resample at 60hz from a Z-up asset authored in centimeters
  animlib-extract character.glb --sampling-rate 60 --axis z_up_rh --unit-scale 0.01

  # Also extract a property track over the "Walk" clip
  animlib-extract character.glb --clip Walk --track Hips:translation
        """
    )

    parser.add_argument('input', type=str, help='Input scene file (.gltf, .glb)')
    parser.add_argument('--sampling-rate', type=float, default=DEFAULT_SAMPLING_RATE,
                        help='Sampling rate in hz (default: scene frame rate)')
    parser.add_argument('--axis', choices=[axis.value for axis in AxisSystem], default=AxisSystem.Y_UP_RH.value,
                        help='Axis system of the source asset (default: y_up_rh)')
    parser.add_argument('--unit-scale', type=float, default=DEFAULT_UNIT_SCALE,
                        help='Multiplier from scene units to output units (default: 1.0)')
    parser.add_argument('--track', action='append', default=[], metavar='NODE:PROPERTY',
                        help='Extract a property track (repeatable)')
    parser.add_argument('--clip', type=str,
                        help='Clip used for --track extraction (default: first clip)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG if args.verbose else LOG_LEVEL)

    # Validate input file exists
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    if input_path.suffix.lower() not in VALID_EXTENSIONS:
        print(f"Error: Unsupported file format: {input_path.suffix}", file=sys.stderr)
        print(f"Supported formats: {', '.join(sorted(VALID_EXTENSIONS))}", file=sys.stderr)
        return 1

    try:
        converter = TransformConverter(args.axis, args.unit_scale)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        scene = GltfScene.load(input_path)
        skeleton = scene.load_skeleton()
    except Exception as e:
        logger.debug("Scene load failed", exc_info=True)
        print(f"Error: Failed to load scene {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        animations = extract_animations(scene, skeleton, args.sampling_rate, converter)
        for animation in animations:
            print(
                f"{animation.name}: duration={animation.duration:.3f}s, "
                f"joints={animation.num_tracks}, keys={animation.key_count}"
            )

        if args.track:
            clips = scene.get_clips()
            clip = next((c for c in clips if c.name == args.clip), None) if args.clip else clips[0]
            if clip is None:
                print(f"Error: Unknown clip: {args.clip}", file=sys.stderr)
                return 1
            window = SamplingPlanner(args.sampling_rate).plan(scene, clip)

            for track_arg in args.track:
                node_name, sep, property_name = track_arg.partition(':')
                if not sep or not node_name or not property_name:
                    print(f"Error: Invalid track '{track_arg}', expected NODE:PROPERTY", file=sys.stderr)
                    return 1
                track = extract_track(scene, node_name, property_name, window, clip)
                print(f"{track.name}: kind={track.value_kind.name}, keys={len(track)}")
    except AnimationExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
