"""
Image file handling around the Canny core.

This module handles:
- Input path validation
- Decoding images and reducing them to one intensity channel
- Output naming (<stem>_canny.<ext>) and encoding
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import cv2
import numpy as np

from canny_edges.canny_constants import OUTPUT_SUFFIX, SUPPORTED_EXTENSIONS

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def validate_input(input_path: PathLike) -> Optional[str]:
    """
    Validate input file exists and is a supported image format.

    Args:
        input_path: Path to input image

    Returns:
        Error message if validation fails, None if valid
    """
    path = Path(input_path)

    if not path.exists():
        return f"Input file not found: {input_path}"

    if not path.is_file():
        return f"Input path is not a file: {input_path}"

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        return f"Unsupported image format: {suffix}. Use one of {', '.join(SUPPORTED_EXTENSIONS)}."

    return None


def validate_output_ext(ext: str) -> Optional[str]:
    """Return an error message if OpenCV has no encoder for the extension."""
    ext = ext.lstrip(".")
    if not ext or not cv2.haveImageWriter(f"edges.{ext}"):
        return f"Unsupported output format: {ext!r}"
    return None


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Reduce a decoded image to a single uint8 intensity channel.

    Args:
        image: Grayscale, BGR or BGRA image (uint8 or uint16)

    Returns:
        H x W uint8 intensity grid
    """
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)

    if image.ndim == 2:
        return image

    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0]
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)

    raise ValueError(f"Unsupported channel count: {channels}")


def load_grayscale(input_path: PathLike) -> Optional[np.ndarray]:
    """
    Load an image from file as a single-channel intensity grid.

    Args:
        input_path: Path to input image

    Returns:
        H x W uint8 grid, or None if the file cannot be decoded
    """
    image = cv2.imread(str(input_path), cv2.IMREAD_UNCHANGED)
    if image is None:
        return None
    return to_grayscale(image)


def build_output_path(input_path: PathLike, output_dir: PathLike, ext: str) -> Path:
    """
    Name the edge map for an input image: <output_dir>/<stem>_canny.<ext>.

    Only the final extension is dropped ("a.b.png" -> "a.b_canny.png").
    """
    ext = ext.lstrip(".")
    return Path(output_dir) / f"{Path(input_path).stem}{OUTPUT_SUFFIX}.{ext}"


def save_edges(edges: np.ndarray, output_path: PathLike) -> None:
    """Encode a binary edge map to disk, creating parent directories."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        written = cv2.imwrite(str(path), edges)
    except cv2.error as e:
        raise IOError(f"Failed to write image: {path}: {e}") from e
    if not written:
        raise IOError(f"Failed to write image: {path}")


def list_images(folder: PathLike) -> List[Path]:
    """
    List supported image files directly inside a folder, sorted by name.

    Sub-directories and unsupported files are skipped.
    """
    images = []
    for entry in sorted(Path(folder).iterdir()):
        if entry.is_dir():
            logger.debug(f"Skipping sub-directory: {entry}")
            continue
        if entry.suffix.lower() not in SUPPORTED_EXTENSIONS:
            logger.debug(f"Skipping unsupported file: {entry}")
            continue
        images.append(entry)
    return images
