"""
a11yscan - Scan Server
Flask upload service around the accessibility analyzer.
"""

import argparse
import logging
import os
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from a11yscan.analyzer import AccessibilityAnalyzer
from a11yscan.server.routers.analyze_router import analyze_router, too_large_response
from a11yscan.utils.config_manager import config_manager
from a11yscan.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3200
# Room for the multipart boundary and part headers on top of the file itself
MULTIPART_HEADROOM = 64 * 1024


def create_app(analyzer: Optional[AccessibilityAnalyzer] = None, max_upload_bytes: Optional[int] = None) -> Flask:
    """
    Application factory wiring the analyzer and upload limits into Flask.
    """
    flask_app = Flask(__name__)

    # 1. Shared, read-only analyzer (the rule registry is assembled once here)
    flask_app.config['ANALYZER'] = analyzer or AccessibilityAnalyzer()

    # 2. Upload cap on the file itself; Werkzeug gets headroom for the multipart envelope
    if max_upload_bytes is None:
        max_upload_bytes = int(config_manager.get_nested("server.max_upload_bytes", 5 * 1024 * 1024))
    flask_app.config['MAX_UPLOAD_BYTES'] = max_upload_bytes
    flask_app.config['MAX_CONTENT_LENGTH'] = max_upload_bytes + MULTIPART_HEADROOM

    # 3. Open CORS, the scanner is called from browser front ends
    CORS(flask_app)

    # 4. Register Blueprints and error handlers
    flask_app.register_blueprint(analyze_router)

    @flask_app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(_error):
        return too_large_response(flask_app.config['MAX_UPLOAD_BYTES'])

    @flask_app.errorhandler(404)
    def handle_not_found(_error):
        return jsonify({"error": "Not found"}), 404

    return flask_app


def resolve_port(cli_port: Optional[int]) -> int:
    """Port precedence: --port, then the PORT environment variable, then settings."""
    if cli_port:
        return cli_port
    env_port = os.environ.get("PORT")
    if env_port:
        try:
            return int(env_port)
        except ValueError:
            logger.warning(f"Ignoring invalid PORT value '{env_port}'")
    return int(config_manager.get_nested("server.port", DEFAULT_PORT))


def main():
    """
    Parses arguments, configures logging and starts the server.
    """
    parser = argparse.ArgumentParser(description="a11yscan Scan Server")
    parser.add_argument("--port", type=int, default=None, help="Port to bind the server to")
    parser.add_argument("--host", type=str, default=None, help="Host interface to bind to")
    parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode")
    parser.add_argument(
        "--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
        help="Overrides a setting, e.g. --set server.max_upload_bytes=1048576 (repeatable)"
    )
    args = parser.parse_args()

    try:
        config_manager.apply_overrides(args.overrides)
    except ValueError as e:
        parser.error(str(e))
    host = args.host or config_manager.get_nested("server.host", "0.0.0.0")

    configure_logger(
        general_level=config_manager.get_nested("logging.level", "INFO"),
        module_specific_levels=config_manager.get_nested("logging.modules", {}),
        silenced_loggers=config_manager.get_nested("logging.silenced", {})
    )

    app = create_app()
    port = resolve_port(args.port)

    logger.info(f"Server running on http://{host}:{port}")
    for rule in app.url_map.iter_rules():
        if rule.endpoint != 'static':
            logger.info(f"Route: {rule}")

    app.run(debug=args.debug, host=host, port=port, use_reloader=False)


if __name__ == '__main__':
    main()
