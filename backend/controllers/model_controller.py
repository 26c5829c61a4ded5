"""
Model Controller - handles 3D model upload and catalog endpoints
"""
import logging
from flask import Blueprint, request, jsonify
from werkzeug.exceptions import HTTPException

from models import db
from services import catalog_service
from utils import success_response, error_response, CatalogError

logger = logging.getLogger(__name__)

model_bp = Blueprint('models', __name__, url_prefix='/api')

# Multipart field that carries the model file
MODEL_FILE_FIELD = 'model'


@model_bp.route('/upload', methods=['POST'])
def upload_model():
    """
    POST /api/upload - Upload a model file and create its catalog record

    Content-Type: multipart/form-data
    Form:
        model: The file (.glb, .obj or .fbx)
        name, category, description: Text metadata (placeholders when blank)
        materials, specifications: Comma-separated lists

    Returns:
        {"success": true, "message": "...", "model": {...}}
    """
    try:
        file = request.files.get(MODEL_FILE_FIELD)
        logger.info(
            f"Upload request: file={file.filename if file else None}, "
            f"content_length={request.content_length}"
        )
        model = catalog_service.create_model(file, request.form)
        return success_response(
            catalog_service.annotate_model(model),
            message='Model uploaded successfully',
            key='model'
        )

    except CatalogError as e:
        logger.warning(f"Upload rejected ({e.error_code}): {e.message}")
        return error_response(e.error_code, e.message, e.status_code)
    except HTTPException:
        raise
    except Exception as e:
        db.session.rollback()
        logger.error(f"Upload failed: {str(e)}", exc_info=True)
        return error_response('SERVER_ERROR', str(e), 500)


@model_bp.route('/models', methods=['GET'])
def list_models():
    """
    GET /api/models - List all models, newest first

    Each entry carries fileExists / fileStatus computed from the file area.
    """
    try:
        file_service = catalog_service.get_file_service()
        models = catalog_service.list_models()
        return jsonify([catalog_service.annotate_model(m, file_service) for m in models])

    except CatalogError as e:
        return error_response(e.error_code, e.message, e.status_code)
    except Exception as e:
        logger.error(f"Error listing models: {str(e)}", exc_info=True)
        return error_response('SERVER_ERROR', str(e), 500)


@model_bp.route('/models/<model_id>', methods=['GET'])
def get_model(model_id):
    """
    GET /api/models/{model_id} - Get one model

    400 for a malformed id, 404 when no record matches.
    """
    try:
        model = catalog_service.get_model(model_id)
        return jsonify(catalog_service.annotate_model(model))

    except CatalogError as e:
        return error_response(e.error_code, e.message, e.status_code)
    except Exception as e:
        logger.error(f"Error getting model {model_id}: {str(e)}", exc_info=True)
        return error_response('SERVER_ERROR', str(e), 500)
