"""
Services package for the Selectel storage client.
"""

from .storage import StorageService, get_storage_service

__all__ = ['StorageService', 'get_storage_service']
