#!/usr/bin/env python3
"""
Canny Edge Detection Tool

Runs the Canny edge detector over a single image or every image in a folder
and writes one binary edge map per input, named <stem>_canny.<ext>.

Usage:
    python detect_edges.py --input images/ --output-dir edges/ [--report run.json]
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Dict, Any, List

from canny_edges.canny_constants import (
    GAUSSIAN_RADIUS,
    GAUSSIAN_SIGMA,
    DEFAULT_SENSITIVITY,
    DEFAULT_THRESHOLD_RATIO,
    DEFAULT_SUPPRESSION_MODE,
    VALID_SUPPRESSION_MODES,
    DEFAULT_OUTPUT_EXT,
)
from canny_edges.debug_observer import DebugObserver
from canny_edges.image_io import (
    validate_input,
    validate_output_ext,
    load_grayscale,
    build_output_path,
    save_edges,
    list_images,
)
from canny_edges.pipeline import run_canny
from canny_edges.validation import (
    InputValidationError,
    validate_kernel_params,
    validate_ratio,
    validate_sensitivity,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Detect edges in grayscale images with the Canny method.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python detect_edges.py --input photo.png --output-dir edges/
    python detect_edges.py --input photos/ --output-dir edges/ --ext jpg
    python detect_edges.py --input photos/ --output-dir edges/ --sensitivity 2 --ratio 0.3
        """,
    )

    # Required arguments
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Input image or folder of images",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        required=True,
        help="Folder for the <name>_canny.<ext> edge maps",
    )

    # Output options
    parser.add_argument(
        "--ext",
        type=str,
        default=DEFAULT_OUTPUT_EXT,
        help=f"Output image format (default: {DEFAULT_OUTPUT_EXT})",
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Path to save a JSON run report",
    )
    parser.add_argument(
        "--debug-dir",
        type=str,
        default=None,
        help="Folder to save intermediate stage images",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    # Canny parameters
    parser.add_argument(
        "--sensitivity",
        type=int,
        default=DEFAULT_SENSITIVITY,
        help=f"High threshold in std devs above mean magnitude, typically 1-3 "
             f"(default: {DEFAULT_SENSITIVITY})",
    )
    parser.add_argument(
        "--ratio",
        type=float,
        default=DEFAULT_THRESHOLD_RATIO,
        help=f"Low threshold as a fraction of the high threshold, 0-1 "
             f"(default: {DEFAULT_THRESHOLD_RATIO})",
    )
    parser.add_argument(
        "--radius",
        type=int,
        default=GAUSSIAN_RADIUS,
        help=f"Gaussian kernel radius (default: {GAUSSIAN_RADIUS})",
    )
    parser.add_argument(
        "--sigma",
        type=float,
        default=GAUSSIAN_SIGMA,
        help=f"Gaussian sigma (default: {GAUSSIAN_SIGMA})",
    )
    parser.add_argument(
        "--suppression",
        type=str,
        choices=VALID_SUPPRESSION_MODES,
        default=DEFAULT_SUPPRESSION_MODE,
        help=f"Non-maximum suppression variant (default: {DEFAULT_SUPPRESSION_MODE})",
    )

    return parser.parse_args(argv)


def collect_inputs(input_path: str) -> List[Path]:
    """
    Resolve --input to a list of image files.

    Raises:
        ValueError: If the path is missing or a single file is not a supported image
    """
    path = Path(input_path)

    if path.is_dir():
        return list_images(path)

    error = validate_input(path)
    if error:
        raise ValueError(error)

    return [path]


def create_entry(
    input_path: Path,
    output_path: Optional[Path] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    mean: Optional[int] = None,
    std_dev: Optional[int] = None,
    threshold_high: Optional[float] = None,
    threshold_low: Optional[float] = None,
    edge_pixels: Optional[int] = None,
    elapsed_ms: float = 0.0,
    fail_reason: Optional[str] = None,
) -> Dict[str, Any]:
    """Create one per-image report entry."""
    return {
        "input": str(input_path),
        "output": str(output_path) if output_path is not None else None,
        "width": width,
        "height": height,
        "mean": mean,
        "std_dev": std_dev,
        "threshold_high": round(float(threshold_high), 3) if threshold_high is not None else None,
        "threshold_low": round(float(threshold_low), 3) if threshold_low is not None else None,
        "edge_pixels": edge_pixels,
        "elapsed_ms": round(float(elapsed_ms), 1),
        "fail_reason": fail_reason,
    }


def create_output(entries: List[Dict[str, Any]], args: argparse.Namespace) -> Dict[str, Any]:
    """Create the run report from per-image entries."""
    return {
        "parameters": {
            "sensitivity": args.sensitivity,
            "ratio": args.ratio,
            "radius": args.radius,
            "sigma": args.sigma,
            "suppression": args.suppression,
        },
        "num_images": len(entries),
        "num_failed": sum(1 for e in entries if e["fail_reason"] is not None),
        "images": entries,
    }


def save_output(output: Dict[str, Any], output_path: str) -> None:
    """Save output dictionary to JSON file."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(output, f, indent=2)


def process_image(
    input_path: Path,
    args: argparse.Namespace,
    observer: Optional[DebugObserver] = None,
) -> Dict[str, Any]:
    """
    Run the detector on one image file and write its edge map.

    Returns:
        Report entry; `fail_reason` is set instead of raising
    """
    start = time.perf_counter()
    output_path = build_output_path(input_path, args.output_dir, args.ext)

    gray = load_grayscale(input_path)
    if gray is None:
        return create_entry(
            input_path,
            elapsed_ms=(time.perf_counter() - start) * 1000,
            fail_reason=f"Failed to load image: {input_path}",
        )

    h, w = gray.shape
    try:
        result = run_canny(
            gray,
            sensitivity=args.sensitivity,
            ratio=args.ratio,
            radius=args.radius,
            sigma=args.sigma,
            suppression=args.suppression,
        )
        save_edges(result.edges, output_path)
    except (InputValidationError, IOError) as e:
        return create_entry(
            input_path,
            width=w,
            height=h,
            elapsed_ms=(time.perf_counter() - start) * 1000,
            fail_reason=str(e),
        )

    if observer is not None:
        observer.save_canny_stages(input_path.stem, gray, result)

    return create_entry(
        input_path,
        output_path=output_path,
        width=w,
        height=h,
        mean=result.field.mean,
        std_dev=result.field.std_dev,
        threshold_high=result.thresholds.high,
        threshold_low=result.thresholds.low,
        edge_pixels=result.edge_pixels,
        elapsed_ms=(time.perf_counter() - start) * 1000,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Reject bad parameters before touching any image
    try:
        validate_ratio(args.ratio)
        validate_sensitivity(args.sensitivity)
        validate_kernel_params(args.radius, args.sigma)
    except InputValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    ext_error = validate_output_ext(args.ext)
    if ext_error:
        print(f"Error: {ext_error}", file=sys.stderr)
        return 1

    try:
        inputs = collect_inputs(args.input)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not inputs:
        print(f"Error: No supported images found in: {args.input}", file=sys.stderr)
        return 1

    observer = DebugObserver(args.debug_dir) if args.debug_dir else None

    entries = []
    for counter, input_path in enumerate(inputs, start=1):
        entry = process_image(input_path, args, observer)
        entries.append(entry)

        if entry["fail_reason"]:
            print(f"Error processing {input_path}: {entry['fail_reason']}", file=sys.stderr)

        print(f"Completed {counter} out of {len(inputs)} images. "
              f"That image took {entry['elapsed_ms']:.0f}ms. "
              f"File created: {entry['output']}")

    if args.report:
        save_output(create_output(entries, args), args.report)
        print(f"Report saved to: {args.report}")

    num_failed = sum(1 for e in entries if e["fail_reason"] is not None)
    if num_failed:
        print(f"{num_failed} of {len(entries)} images failed")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
