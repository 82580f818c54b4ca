#!/usr/bin/env python3
"""Simple web demo for the Canny edge detector.

Upload an image, run edge detection, and return JSON + the edge map.
"""

from __future__ import annotations

import json
import sys
import uuid
from pathlib import Path
from typing import Dict, Any

import cv2
import numpy as np
from flask import Flask, jsonify, render_template, request, send_from_directory
from werkzeug.utils import secure_filename

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

from canny_edges.canny_constants import (
    DEFAULT_SENSITIVITY,
    DEFAULT_THRESHOLD_RATIO,
    SUPPORTED_EXTENSIONS,
)
from canny_edges.image_io import to_grayscale, build_output_path, save_edges
from canny_edges.pipeline import run_canny

APP_ROOT = Path(__file__).resolve().parent
UPLOAD_DIR = APP_ROOT / "uploads"
RESULTS_DIR = APP_ROOT / "results"

app = Flask(__name__)


def _allowed_file(filename: str) -> bool:
    return Path(filename).suffix.lower() in SUPPORTED_EXTENSIONS


def _save_json(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def _error(message: str, status: int = 400):
    return jsonify({"success": False, "error": message}), status


@app.route("/")
def index():
    return render_template(
        "index.html",
        default_sensitivity=DEFAULT_SENSITIVITY,
        default_ratio=DEFAULT_THRESHOLD_RATIO,
    )


@app.route("/results/<path:filename>")
def serve_result(filename: str):
    return send_from_directory(RESULTS_DIR, filename)


@app.route("/uploads/<path:filename>")
def serve_upload(filename: str):
    return send_from_directory(UPLOAD_DIR, filename)


@app.route("/api/detect", methods=["POST"])
def api_detect():
    if "image" not in request.files:
        return _error("Missing image file")

    file = request.files["image"]
    if file.filename == "":
        return _error("Empty filename")

    if not _allowed_file(file.filename):
        return _error("Unsupported file type")

    try:
        sensitivity = int(request.form.get("sensitivity", DEFAULT_SENSITIVITY))
        ratio = float(request.form.get("ratio", DEFAULT_THRESHOLD_RATIO))
    except ValueError:
        return _error("Sensitivity must be an integer and ratio a number")

    run_id = uuid.uuid4().hex[:12]
    safe_name = secure_filename(file.filename)
    upload_name = f"{run_id}__{safe_name}"
    upload_path = UPLOAD_DIR / upload_name
    upload_path.parent.mkdir(parents=True, exist_ok=True)
    file.save(upload_path)

    image = cv2.imread(str(upload_path), cv2.IMREAD_UNCHANGED)
    if image is None:
        return _error("Failed to load image")

    return _run_detection(
        image=image,
        upload_name=upload_name,
        sensitivity=sensitivity,
        ratio=ratio,
    )


def _run_detection(
    image: np.ndarray,
    upload_name: str,
    sensitivity: int,
    ratio: float,
):
    try:
        gray = to_grayscale(image)
        result = run_canny(gray, sensitivity=sensitivity, ratio=ratio)
    except ValueError as e:
        return _error(str(e))

    edges_path = build_output_path(upload_name, RESULTS_DIR, "png")
    try:
        save_edges(result.edges, edges_path)
    except IOError as e:
        return _error(str(e), status=500)

    h, w = gray.shape
    summary = {
        "width": w,
        "height": h,
        "mean": result.field.mean,
        "std_dev": result.field.std_dev,
        "threshold_high": result.thresholds.high,
        "threshold_low": result.thresholds.low,
        "edge_pixels": result.edge_pixels,
        "sensitivity": sensitivity,
        "ratio": ratio,
    }
    _save_json(edges_path.with_suffix(".json"), summary)

    payload = {
        "success": True,
        "result": summary,
        "edges_image_url": f"/results/{edges_path.name}",
        "input_image_url": f"/uploads/{upload_name}",
    }

    return jsonify(payload)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000, debug=True)
