"""
File Controller - serves stored model files and the basic (record-less) upload
"""
import logging
from flask import Blueprint, request, send_from_directory, current_app, jsonify
from werkzeug.exceptions import HTTPException

from services import catalog_service
from utils import error_response, not_found, bad_request
from utils.errors import PersistenceError
from utils.path_utils import is_allowed_extension

logger = logging.getLogger(__name__)

file_bp = Blueprint('files', __name__)

MISSING_FILE_MESSAGE = (
    'File not found. Stored files are not kept across deployments; '
    'please re-upload the model.'
)


@file_bp.route('/uploads/<filename>', methods=['GET'])
def serve_model_file(filename):
    """
    GET /uploads/{filename} - Serve a stored model file

    Args:
        filename: Stored file name (<timestamp>-<original name>)
    """
    try:
        file_service = catalog_service.get_file_service()

        # Rejects names that escape the upload folder
        file_path = file_service.get_absolute_path(filename)
        if file_path is None or not file_path.is_file():
            logger.info(f"Requested file is missing: {filename}")
            return not_found('File', MISSING_FILE_MESSAGE)

        return send_from_directory(str(file_path.parent), file_path.name)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error serving file {filename}: {str(e)}", exc_info=True)
        return error_response('SERVER_ERROR', str(e), 500)


@file_bp.route('/upload', methods=['POST'])
def basic_upload():
    """
    POST /upload - Store a file without creating a catalog record

    Content-Type: multipart/form-data
    Form:
        file: The model file

    Returns:
        {"success": true, "filename": "...", "path": "/uploads/..."}
    """
    try:
        file = request.files.get('file')
        if file is None or not file.filename:
            return bad_request('No file uploaded')

        allowed = current_app.config['ALLOWED_MODEL_EXTENSIONS']
        if not is_allowed_extension(file.filename, allowed):
            return bad_request(f"Invalid file type. Allowed: {', '.join(sorted(allowed))}")

        file_service = catalog_service.get_file_service()
        stored_name, _ = file_service.save_model_file(file)
        return jsonify({
            'success': True,
            'message': 'File uploaded successfully',
            'filename': stored_name,
            'path': file_service.get_file_url(stored_name),
        })

    except PersistenceError as e:
        return error_response(e.error_code, e.message, e.status_code)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Basic upload failed: {str(e)}", exc_info=True)
        return error_response('SERVER_ERROR', str(e), 500)
