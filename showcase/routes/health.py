from flask import Blueprint, jsonify

from showcase.health import run_health_checks

health_bp = Blueprint("health", __name__, url_prefix="/api")


@health_bp.route("/health", methods=["GET"])
def health():
    """Overall status is "degraded" (503) when any configured dependency fails."""
    report = run_health_checks()
    return jsonify(report), 200 if report["status"] == "ok" else 503
