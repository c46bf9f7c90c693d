"""
Liveness and readiness probes.

Liveness always answers 200 while the process can serve requests.
Readiness turns to 503 as soon as the bootstrap has started a graceful
shutdown, so a load balancer stops routing new traffic here before the
listening socket is closed.
"""

from __future__ import annotations

from flask import Blueprint, current_app

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def liveness():
    """Return 200 while the process is alive."""
    return {"status": "UP"}, 200


@health_bp.route("/health/readiness", methods=["GET"])
def readiness():
    """Return 200 while ready for traffic, 503 once shutting down."""
    if current_app.extensions["readiness"].is_ready:
        return {"status": "UP"}, 200
    return {"status": "DOWN"}, 503
