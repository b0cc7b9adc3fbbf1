"""
Слой хранения: JSON-хранилище и репозитории
"""
from .store import JsonStore, create_store, store

__all__ = [
    'JsonStore',
    'create_store',
    'store',
]
