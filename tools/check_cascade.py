#!/usr/bin/env python3
"""
Cascade classifier diagnostic script.

Loads the Haar cascade and runs it on one image without writing anything,
printing each raw detection and the padded crop region derived from it.
Use this to check a classifier file or tune detection parameters.

Usage:
    python tools/check_cascade.py --image photo.jpg
    python tools/check_cascade.py --image photo.jpg --classifier my_cascade.xml --min-neighbors 3
"""

import argparse
import os
import sys

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from detection.cascade import CascadeFaceDetector
from imaging.loader import load_image
from imaging.resize import ThumbnailResizer
from models.config import DEFAULT_CLASSIFIER
from models.region import expand_region
from ops.errors import FaceCropError


def main():
    """Main function for cascade checking."""
    parser = argparse.ArgumentParser(description='Check Haar cascade face detection on one image')
    parser.add_argument('--image', type=str, required=True,
                        help='Image to run detection on')
    parser.add_argument('--classifier', type=str, default=DEFAULT_CLASSIFIER,
                        help=f'Cascade definition file (default: {DEFAULT_CLASSIFIER})')
    parser.add_argument('--size', type=str, default='1024x1024',
                        help='Working raster box in format WIDTHxHEIGHT (default: 1024x1024)')
    parser.add_argument('--scale-factor', type=float, default=1.1,
                        help='detectMultiScale scaleFactor (default: 1.1)')
    parser.add_argument('--min-neighbors', type=int, default=5,
                        help='detectMultiScale minNeighbors (default: 5)')
    args = parser.parse_args()

    try:
        width, height = map(int, args.size.split('x'))
    except ValueError:
        print(f"Invalid size format: {args.size}, using default 1024x1024")
        width, height = 1024, 1024

    try:
        detector = CascadeFaceDetector(
            args.classifier,
            scale_factor=args.scale_factor,
            min_neighbors=args.min_neighbors,
        )
        print(f"Classifier: {detector.classifier_path}")

        original = load_image(args.image)
        working = ThumbnailResizer().resize(original, width, height)
        print(f"Image: {original.shape[1]}x{original.shape[0]} -> working {working.shape[1]}x{working.shape[0]}")

        faces = detector.detect(working)
    except (FaceCropError, OSError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Faces detected: {len(faces)}")
    for index, face in enumerate(faces, start=1):
        region = expand_region(face, working.shape[1], working.shape[0])
        print(f"  face_{index}: raw={face.as_tuple()} crop={region.as_tuple()} "
              f"({region.width}x{region.height})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
