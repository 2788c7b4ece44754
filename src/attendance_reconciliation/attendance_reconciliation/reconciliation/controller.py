from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest

from ..core.exceptions import DataFetchError, ValidationError
from ..container import Container
from .model import RunRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reconciliation/runs", methods=["POST"], endpoint="reconciliation_run")
    def reconciliation_run():
        try:
            run_request = RunRequest.from_payload(request.get_json(force=True))
        except BadRequest:
            return jsonify({"error": "Request body must be valid JSON"}), 400
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        try:
            summary = container.reconciliation_service.run(run_request)
        except DataFetchError as e:
            logger.error("reconciliation aborted for company=%s: %s", run_request.company_id, e)
            return jsonify({"error": "Attendance data is unavailable, try again later"}), 503

        return jsonify(summary.to_dict()), 200
