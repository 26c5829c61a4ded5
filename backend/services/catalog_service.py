"""
Catalog Service - upload-and-catalog workflow for 3D model files

Create writes the file first and commits the record only after the write
succeeded; a failed commit removes the written file again. Reads annotate
each record with the live state of its file.
"""
import uuid
import logging
from typing import Dict, List, Mapping, Optional

from flask import current_app
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from werkzeug.datastructures import FileStorage

from models import db, CatalogModel
from utils.errors import (
    ClientInputError, NotFoundError, PersistenceError, StorageUnavailableError
)
from utils.path_utils import is_allowed_extension
from utils.text_sanitize import clean_text_field, parse_list_field
from .file_service import FileService

logger = logging.getLogger(__name__)

FILE_AVAILABLE = 'available'
FILE_MISSING = 'missing'


def get_file_service() -> FileService:
    return FileService(current_app.config['UPLOAD_FOLDER'])


def check_database() -> None:
    """
    Ping the database.

    Raises:
        StorageUnavailableError: if the database cannot be reached
    """
    try:
        db.session.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database ping failed: {str(e)}")
        raise StorageUnavailableError('Database not connected') from e


def database_status() -> Dict:
    """Connectivity snapshot used by the health check"""
    engine = db.engine
    status = {
        'connected': True,
        'dialect': engine.dialect.name,
        'database': engine.url.database,
    }
    try:
        check_database()
    except StorageUnavailableError:
        status['connected'] = False
    return status


def create_model(file: Optional[FileStorage], form: Mapping[str, str],
                 file_service: Optional[FileService] = None) -> CatalogModel:
    """
    Store an uploaded model file and persist its catalog record.

    Args:
        file: The ``model`` part of the multipart request
        form: Text parts (name, category, description, materials, specifications)
        file_service: File area to write to (defaults to the app's upload folder)

    Returns:
        The committed CatalogModel

    Raises:
        ClientInputError: no file, or an extension outside ALLOWED_MODEL_EXTENSIONS
        StorageUnavailableError: the database cannot be reached
        PersistenceError: the file or the record could not be written
    """
    config = current_app.config
    if file is None or not file.filename:
        raise ClientInputError('No file uploaded', 'NO_FILE')

    allowed = config['ALLOWED_MODEL_EXTENSIONS']
    if not is_allowed_extension(file.filename, allowed):
        raise ClientInputError(
            f"Invalid file type. Allowed: {', '.join(sorted(allowed))}",
            'INVALID_FILE_TYPE'
        )

    check_database()

    file_service = file_service or get_file_service()
    stored_name, size = file_service.save_model_file(file)

    model = CatalogModel(
        name=clean_text_field(form.get('name'), config['DEFAULT_MODEL_NAME'], max_chars=200),
        category=clean_text_field(form.get('category'), config['DEFAULT_CATEGORY'], max_chars=100),
        description=clean_text_field(form.get('description'), config['DEFAULT_DESCRIPTION']),
        file_path=file_service.get_file_url(stored_name),
        file_size=size,
        original_name=file.filename,
    )
    model.set_materials(parse_list_field(form.get('materials')))
    model.set_specifications(parse_list_field(form.get('specifications')))

    try:
        db.session.add(model)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        file_service.delete_file(stored_name)
        logger.error(f"Failed to save model record, removed orphaned file {stored_name}: {str(e)}")
        raise PersistenceError(f"Failed to save model: {str(e)}") from e

    logger.info(f"Created model {model.id} ({model.name}) -> {model.file_path}")
    return model


def list_models() -> List[CatalogModel]:
    """All models, newest first"""
    try:
        return CatalogModel.query.order_by(CatalogModel.upload_date.desc()).all()
    except OperationalError as e:
        db.session.rollback()
        logger.error(f"Failed to list models: {str(e)}")
        raise StorageUnavailableError('Database not connected') from e


def parse_model_id(raw_id: str) -> str:
    """
    Normalize a model id to its canonical UUID string.

    Raises:
        ClientInputError: if the id is not a valid UUID
    """
    try:
        return str(uuid.UUID(str(raw_id)))
    except (ValueError, AttributeError, TypeError):
        raise ClientInputError(f"Invalid model id: {raw_id}", 'INVALID_ID')


def get_model(raw_id: str) -> CatalogModel:
    """
    Fetch one model by id.

    Raises:
        ClientInputError: malformed id
        NotFoundError: no record with this id
        StorageUnavailableError: the database cannot be reached
    """
    model_id = parse_model_id(raw_id)
    try:
        model = db.session.get(CatalogModel, model_id)
    except OperationalError as e:
        db.session.rollback()
        logger.error(f"Failed to load model {model_id}: {str(e)}")
        raise StorageUnavailableError('Database not connected') from e

    if model is None:
        raise NotFoundError('Model not found', 'MODEL_NOT_FOUND')
    return model


def annotate_model(model: CatalogModel, file_service: Optional[FileService] = None) -> Dict:
    """Serialize a model with its read-time fileExists / fileStatus flags"""
    file_service = file_service or get_file_service()
    exists = file_service.url_exists(model.file_path)
    data = model.to_dict()
    data['fileExists'] = exists
    data['fileStatus'] = FILE_AVAILABLE if exists else FILE_MISSING
    return data
