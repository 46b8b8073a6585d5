from __future__ import annotations

from flask import Blueprint, Response, current_app, request

styles_bp = Blueprint("styles", __name__)


@styles_bp.route("/styles.css")
def stylesheet():
    """The current stylesheet; ``?layers=0`` skips cascade layers."""
    system = current_app.extensions["style_system"]
    layers = request.args.get("layers")
    use_layers = None if layers is None else layers not in ("0", "false", "no")
    css = system.get_css(layers=use_layers)
    return Response(css, mimetype="text/css", headers={"Cache-Control": "no-store"})
