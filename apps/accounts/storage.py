# apps/accounts/storage.py
"""Blob storage for uploaded profile files, on top of Django's default storage."""
import logging
import os
import secrets

from django.conf import settings
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)


def _storage_name(url):
    prefix = settings.MEDIA_URL
    if not url or not url.startswith(prefix):
        return None
    return url[len(prefix):]


def put(uploaded_file, folder):
    """Store ``uploaded_file`` under ``folder`` and return its public URL."""
    _, ext = os.path.splitext(uploaded_file.name)
    name = default_storage.save(f"{folder}/{secrets.token_hex(12)}{ext.lower()}", uploaded_file)
    return default_storage.url(name)


def delete(url):
    """Remove a previously stored blob; unknown or foreign URLs are ignored."""
    name = _storage_name(url)
    if name is None:
        return False
    try:
        default_storage.delete(name)
        return True
    except OSError:
        logger.warning("Could not delete stored file %s", name, exc_info=True)
        return False
