"""
Minimal status server.

Usage:
    python server.py
"""

import logging
from datetime import datetime, timezone

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import read_port


logger = logging.getLogger(__name__)


def create_app() -> Flask:
    """Build the Flask app exposing GET /api/status."""
    app = Flask(__name__)

    @app.route("/api/status", methods=["GET"])
    def status():
        return jsonify({
            "status": "Backend is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    load_dotenv()
    port = read_port()

    app = create_app()
    logger.info(f"Server is listening on http://localhost:{port}")
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
