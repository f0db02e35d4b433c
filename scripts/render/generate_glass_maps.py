from __future__ import annotations

import argparse
import json
import logging
import time
from datetime import UTC, datetime
from pathlib import Path

from liquidglass.glass.config import GLASS_PRESETS, GlassConfig, get_preset, load_glass_config
from liquidglass.glass.instance import GlassInstance
from liquidglass.maps.encoding import save_png
from liquidglass.motion.driver import run_motion_trace

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "data" / "processed" / "glass_maps"


def generate_glass_maps(
    *,
    config: GlassConfig,
    name: str,
    output_dir: Path,
    trace_frames: int = 0,
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    start_time = time.perf_counter()

    instance = GlassInstance(config)
    maps = instance.filter_maps()
    displacement_path = save_png(maps.displacement, output_dir / f"{name}_displacement.png")
    specular_path = save_png(maps.specular, output_dir / f"{name}_specular.png")

    manifest = {
        "timestamp_utc": datetime.now(tz=UTC).isoformat(),
        "config": config.to_dict(),
        "maximum_displacement": maps.maximum_displacement,
        "displacement_scale": maps.displacement_scale,
        "specular_slope": maps.specular_slope,
        "blur": maps.blur,
        "displacement_map": displacement_path.name,
        "specular_map": specular_path.name,
    }

    if trace_frames > 0:
        trace = run_motion_trace(
            frames=trace_frames,
            press_frame=0,
            release_frame=trace_frames // 3,
            pointer_velocity=(900.0, -300.0),
            maximum_displacement=maps.maximum_displacement,
            refraction_scale=config.refraction_scale,
        )
        trace_path = output_dir / f"{name}_motion_trace.parquet"
        trace.to_parquet(trace_path, index=False)
        manifest["motion_trace"] = trace_path.name

    manifest_path = output_dir / f"{name}_manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")

    elapsed_s = time.perf_counter() - start_time
    print(f"Rendered {config.object_width}x{config.object_height} glass maps in {elapsed_s:.2f}s")
    print(f"Wrote manifest to: {manifest_path}")
    return manifest_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render liquid glass displacement and specular maps as PNG files."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--preset",
        default="panel",
        choices=sorted(GLASS_PRESETS),
        help="Built-in glass configuration to render.",
    )
    source.add_argument(
        "--config",
        default=None,
        help="Path to a JSON glass configuration (overrides --preset).",
    )
    parser.add_argument(
        "--output-dir",
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory where PNG maps and the manifest are written.",
    )
    parser.add_argument(
        "--trace-frames",
        type=int,
        default=0,
        help="Also record a press/drag/release spring trace with this many frames.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log cache and animation details.",
    )
    return parser


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None:
        config = load_glass_config(args.config)
        name = Path(args.config).stem
    else:
        config = get_preset(args.preset)
        name = args.preset

    generate_glass_maps(
        config=config,
        name=name,
        output_dir=Path(args.output_dir),
        trace_frames=args.trace_frames,
    )


if __name__ == "__main__":
    main()
