"""
Catalog model - stores metadata for an uploaded 3D model file
"""
import uuid
import json
from datetime import datetime
from . import db


class CatalogModel(db.Model):
    """
    CatalogModel - one entry of the BIM asset library.

    Records are created once at upload time and never updated in place.
    """
    __tablename__ = 'models'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)
    materials = db.Column(db.Text, nullable=False, default='[]')  # JSON string: ["oak", "steel"]
    specifications = db.Column(db.Text, nullable=False, default='[]')  # JSON string
    file_path = db.Column(db.String(500), nullable=False)  # URL path: /uploads/<stored name>
    file_size = db.Column(db.Integer, nullable=True)  # File size in bytes
    original_name = db.Column(db.String(500), nullable=True)  # Client filename before renaming
    upload_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    def get_materials(self):
        return _load_list(self.materials)

    def set_materials(self, values):
        self.materials = json.dumps(list(values or []))

    def get_specifications(self):
        return _load_list(self.specifications)

    def set_specifications(self, values):
        self.specifications = json.dumps(list(values or []))

    @property
    def stored_filename(self):
        """Name of the blob inside the upload folder"""
        return self.file_path.rsplit('/', 1)[-1] if self.file_path else None

    def to_dict(self):
        """Convert to dictionary (wire format used by the browse page)"""
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'description': self.description,
            'materials': self.get_materials(),
            'specifications': self.get_specifications(),
            'filePath': self.file_path,
            'fileSize': self.file_size,
            'originalName': self.original_name,
            'uploadDate': self.upload_date.isoformat() if self.upload_date else None,
        }

    def __repr__(self):
        return f'<CatalogModel {self.id}: {self.name} ({self.file_path})>'


def _load_list(raw):
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return value if isinstance(value, list) else []
