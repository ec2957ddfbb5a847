from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..core.enums import HealthStatus


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        status = container.health_checker.check()
        code = 503 if status.health == HealthStatus.ERROR else 200
        return jsonify(status.as_dict()), code
