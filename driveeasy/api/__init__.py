"""
REST API поверх JSON-хранилища
"""
from .app import create_app

__all__ = ['create_app']
