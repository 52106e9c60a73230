from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from zyracss import __version__
from zyracss.errors import Failure, ZyraError
from zyracss.parser.extractor import extract_classes_from_many

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.after_request
def add_cors_headers(response):
    """Allow cross-origin requests to the API."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


@api_bp.route("/generate", methods=["OPTIONS"])
@api_bp.route("/parse", methods=["OPTIONS"])
def preflight():
    """Handle CORS preflight for the POST endpoints."""
    return "", 204


def _engine():
    return current_app.extensions["engine"]


def _gather_classes(data: dict) -> list | None:
    """Classes from the ``classes`` field plus any found in ``html``."""
    if "classes" not in data and "html" not in data:
        return None
    classes = data.get("classes", [])
    if isinstance(classes, str):
        classes = classes.split()
    elif not isinstance(classes, list):
        raise ZyraError("classes must be a string or a list")
    html = data.get("html")
    if html is not None:
        documents = [html] if isinstance(html, str) else html
        if not isinstance(documents, list) or not all(isinstance(d, str) for d in documents):
            raise ZyraError("html must be a string or a list of strings")
        classes = [*classes, *extract_classes_from_many(documents)]
    return classes


@api_bp.route("/generate", methods=["POST"])
def generate():
    """Compile classes (and/or class attributes in markup) to CSS."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body required"}), 400
    try:
        classes = _gather_classes(data)
        if classes is None:
            return jsonify({"error": "classes or html required"}), 400
        result = _engine().generate(classes, data.get("options"))
    except ZyraError as exc:
        logger.info("Rejected generate request: %s", exc)
        return jsonify({"error": str(exc)}), 400
    return jsonify(result.to_dict())


@api_bp.route("/parse", methods=["POST"])
def parse():
    """Parse a single class token."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "class" not in data:
        return jsonify({"error": "class required"}), 400
    result = _engine().parse(data["class"])
    if isinstance(result, Failure):
        return jsonify({"valid": False, "error": result.to_dict()})
    return jsonify({"valid": True, "parsed": result.to_dict()})


@api_bp.route("/cache/stats")
def cache_stats():
    """Return tier and key memoizer statistics."""
    return jsonify(_engine().cache.stats())


@api_bp.route("/health")
def health():
    return jsonify({"status": "ok", "version": __version__})
