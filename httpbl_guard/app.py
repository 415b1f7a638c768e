"""Flask application exposing the http:BL check for reverse proxy auth subrequests."""

import logging
import time

from flask import Flask, Response, jsonify, request

from httpbl_guard.config import Config
from httpbl_guard.services.logger import log_ip_check, log_rejected_request
from httpbl_guard.services.reputation import ReputationService
from httpbl_guard.utils.ip_utils import parse_client_ip


class HealthCheckFilter(logging.Filter):
    """Suppress werkzeug access log lines for /health."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


# Apply filter to werkzeug logger (Flask's HTTP request logger)
logging.getLogger("werkzeug").addFilter(HealthCheckFilter())


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def create_app(config: Config, service: ReputationService) -> Flask:
    """Create the Flask application.

    Args:
        config: Application configuration.
        service: Reputation service shared by all requests.

    Returns:
        Flask: Configured application.
    """
    app = Flask(__name__)

    @app.route("/check-ip", methods=["GET"])
    def check_ip() -> Response:
        """Allow or deny the client IP forwarded by the proxy."""
        start = time.time()
        header = config.client_ip_header
        raw_value = request.headers.get(header)

        # Without an address there is nothing to check, so deny
        client_ip = parse_client_ip(raw_value)
        if client_ip is None:
            log_rejected_request(header, raw_value)
            return _text(f"Invalid or missing client IP header ({header})", 403)

        blocked = service.check(client_ip)

        log_ip_check(
            ip=str(client_ip),
            blocked=blocked,
            header=header,
            duration_ms=int((time.time() - start) * 1000),
        )

        if blocked:
            return _text("Access denied.", 403)
        return _text("Access allowed.", 200)

    @app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint."""
        policy = service.policy
        status = {
            "status": "healthy",
            "config": {
                "client_ip_header": config.client_ip_header,
                "block_min_threat_score": policy.block_min_threat_score,
                "block_type_mask": policy.block_type_mask,
                "allow_search_engines": policy.allow_search_engines,
                "dns_timeout": config.dns_timeout,
            },
        }
        return jsonify(status), 200

    return app
