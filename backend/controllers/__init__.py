"""Controllers package"""
from .model_controller import model_bp
from .file_controller import file_bp
from .health_controller import health_bp

__all__ = ['model_bp', 'file_bp', 'health_bp']
