"""
Face crop tool: detect faces in images, outline them and save padded crops.

Batch mode processes every image in the input directory. Single-image mode
processes one file and prints a JSON log record.

Usage:
    python src/main.py --config config/config.yaml
    python src/main.py --input-dir photos --output-dir out
    python src/main.py --input photo.jpg --output output.webp

Arguments:
    --config: Path to configuration file
    --input-dir / --output-dir: Batch mode directories (override config)
    --input / --output: Single-image mode
    --width / --height: Working raster bounding box (override config)
    --classifier: Haar cascade definition file (override config)
"""

import os
import sys
import argparse
import json
import logging
import yaml
from typing import Any, Dict, List, Optional, Tuple

from detection.cascade import CascadeFaceDetector
from imaging.codec import WebpEncoder
from imaging.resize import ThumbnailResizer
from models.config import Config
from ops.errors import ConfigError, FaceCropError
from ops.logging import setup_logging
from pipeline.batch import BatchConfig, BatchRunner
from pipeline.processor import FaceCropPipeline, PipelineConfig


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def _read_yaml(path: str) -> Dict[str, Any]:
    """Parse one YAML layer. An empty file is an empty layer; a non-mapping is an error."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def _config_layers(config_path: str) -> List[str]:
    """Layer files next to config_path, lowest precedence first."""
    config_dir = os.path.dirname(config_path)
    layers = [
        os.path.join(config_dir, "default.yaml"),
        os.path.join(config_dir, "config.yaml"),
    ]
    if os.path.abspath(config_path) not in [os.path.abspath(p) for p in layers]:
        layers.append(config_path)
    return layers


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Merge the YAML layers found beside config_path.

    default.yaml is read first, then config.yaml, then config_path itself
    when it names some other file. Layers that do not exist are skipped, so
    a directory with no config files gives an empty dict.

    Raises:
        ConfigError: If a layer exists but cannot be read or parsed.
    """
    merged: Dict[str, Any] = {}
    for layer in _config_layers(config_path):
        if not os.path.isfile(layer):
            continue
        try:
            _deep_merge(merged, _read_yaml(layer))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration from {layer}: {e}") from e
        logging.debug(f"Loaded config layer {layer}")
    return merged


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    for key in ('target_width', 'target_height'):
        if key in config and not _is_positive_int(config[key]):
            return False, f"{key} must be a positive integer"

    for key in ('input_dir', 'output_dir', 'classifier_path'):
        if key in config and not (isinstance(config[key], str) and config[key]):
            return False, f"{key} must be a non-empty string"

    extensions = config.get('extensions')
    if extensions is not None:
        if not isinstance(extensions, list) or not all(isinstance(e, str) and e.startswith('.') for e in extensions):
            return False, "extensions must be a list of suffixes like '.jpg'"

    detection = config.get('detection', {}) or {}
    if 'scale_factor' in detection:
        sf = detection['scale_factor']
        if not isinstance(sf, (int, float)) or sf <= 1.0:
            return False, "detection.scale_factor must be a number greater than 1"
    if 'min_neighbors' in detection:
        mn = detection['min_neighbors']
        if not isinstance(mn, int) or mn < 0:
            return False, "detection.min_neighbors must be a non-negative integer"
    if 'min_size' in detection:
        ms = detection['min_size']
        if not isinstance(ms, (list, tuple)) or len(ms) != 2 or not all(isinstance(x, int) and x >= 0 for x in ms):
            return False, "detection.min_size must be a list of [width, height]"

    annotation = config.get('annotation', {}) or {}
    if 'color' in annotation:
        color = annotation['color']
        if not isinstance(color, (list, tuple)) or len(color) != 3 or not all(isinstance(c, int) and 0 <= c <= 255 for c in color):
            return False, "annotation.color must be a list of three 0-255 integers (B, G, R)"
    if 'thickness' in annotation and not _is_positive_int(annotation['thickness']):
        return False, "annotation.thickness must be a positive integer"

    valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if config.get('log_level', 'INFO') not in valid_log_levels:
        return False, f"log_level must be one of: {', '.join(valid_log_levels)}"

    return True, None


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Apply command-line flags on top of the loaded configuration."""
    overrides = {
        'input_dir': args.input_dir,
        'output_dir': args.output_dir,
        'target_width': args.width,
        'target_height': args.height,
        'classifier_path': args.classifier,
        'log_level': args.log_level.upper() if args.log_level else None,
    }
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Detect, outline and crop faces in images')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--input-dir', type=str, default=None,
                        help='Directory of images to process (batch mode)')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory for annotated images and face crops')
    parser.add_argument('--input', type=str, default=None,
                        help='Process a single image instead of a directory')
    parser.add_argument('--output', type=str, default=None,
                        help='Annotated output path for single-image mode')
    parser.add_argument('--width', type=int, default=None,
                        help='Working raster max width')
    parser.add_argument('--height', type=int, default=None,
                        help='Working raster max height')
    parser.add_argument('--classifier', type=str, default=None,
                        help='Haar cascade classifier definition file')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Logging level (DEBUG, INFO, WARNING, ERROR)')
    return parser


def create_pipeline(config: Config) -> FaceCropPipeline:
    """Wire the OpenCV-backed detector, resizer and encoder into a pipeline."""
    detector = CascadeFaceDetector.from_config(config)
    return FaceCropPipeline(
        detector=detector,
        resizer=ThumbnailResizer(),
        encoder=WebpEncoder(),
        config=PipelineConfig.from_config(config),
    )


def run_single(pipeline: FaceCropPipeline, input_path: str, output_path: Optional[str]) -> int:
    """Process one image and print its log record. Any failure is fatal."""
    if output_path is None:
        os.makedirs(pipeline.config.output_dir, exist_ok=True)
    try:
        result = pipeline.process_image(input_path, output_path)
    except (FaceCropError, OSError) as e:
        logging.error(f"Failed to detect face: {e}")
        return 1

    print(f"Face detection log:\n{json.dumps(result.to_log_record(), indent=2)}")
    if result.has_face:
        print(f"Image successfully processed and saved to: {result.output_path}")
    return 0


def run_batch(pipeline: FaceCropPipeline, config: Config) -> int:
    """Process the input directory. Per-file failures do not change the exit status."""
    runner = BatchRunner(
        pipeline,
        BatchConfig(
            input_dir=config.input_dir,
            output_dir=config.output_dir,
            extensions=config.extensions,
        ),
    )
    runner.run()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application function. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        raw_config = apply_overrides(load_config(args.config), args)
        is_valid, error_msg = validate_config(raw_config)
        if not is_valid:
            raise ConfigError(f"Configuration validation failed: {error_msg}")
        config = Config.from_dict(raw_config)

        setup_logging(config.log_path, config.log_level)
        logging.info("Starting face crop")

        pipeline = create_pipeline(config)
        if args.input:
            return run_single(pipeline, args.input, args.output)
        return run_batch(pipeline, config)
    except (ConfigError, OSError) as e:
        logging.error(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
