"""Health Controller - reports database connectivity and file area presence"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, jsonify

from services import catalog_service

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    """
    GET /health - Status snapshot

    Always answers 200; ``status`` is "degraded" when the database is
    unreachable or the upload folder is missing.
    """
    database = catalog_service.database_status()
    file_service = catalog_service.get_file_service()
    uploads_present = file_service.folder_exists()

    healthy = database["connected"] and uploads_present
    health = {
        "status": "ok" if healthy else "degraded",
        "message": "BIM model catalog is running" if healthy else "BIM model catalog is degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database,
        "uploads": {
            "directory": "exists" if uploads_present else "missing",
            "path": str(file_service.upload_folder),
        },
    }
    if not healthy:
        logger.warning(f"Health check degraded: {health}")
    return jsonify(health), 200
