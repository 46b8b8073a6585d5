from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from silkcss.errors import SilkError

api_bp = Blueprint("api", __name__)


@api_bp.after_request
def add_cors_headers(response):
    """Allow cross-origin requests from the app under development."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


@api_bp.route("/css", methods=["POST", "OPTIONS"])
def compile_css():
    """Compile one style object and return its class string."""
    if request.method == "OPTIONS":
        return "", 204
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get("style"), dict):
        return jsonify({"error": "style object required"}), 400

    system = current_app.extensions["style_system"]
    try:
        result = system.compile(data["style"], origin=data.get("origin"))
    except SilkError as exc:
        return jsonify({"error": str(exc)}), 500
    return jsonify(result.to_dict())


@api_bp.route("/stats")
def stats():
    system = current_app.extensions["style_system"]
    return jsonify(system.stats())


@api_bp.route("/manifest")
def manifest():
    """Identifier/rule pairs in registration order."""
    system = current_app.extensions["style_system"]
    return jsonify({
        "rules": [[identifier, text] for identifier, text in system.registry.rule_pairs()],
        "stats": system.registry.get_stats().to_dict(),
    })


@api_bp.route("/reset", methods=["POST"])
def reset():
    system = current_app.extensions["style_system"]
    system.reset()
    return jsonify({"status": "reset"})
