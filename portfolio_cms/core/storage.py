"""
Storage Utility
===============

Uploads to the backend's public asset bucket and resolves stored asset
references to public URLs.
"""

from werkzeug.utils import secure_filename

from .config import get_config_value
from .data_service import get_data_service


CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
    'svg': 'image/svg+xml', 'pdf': 'application/pdf',
}


def guess_content_type(filename):
    """Content type from the file extension"""
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    return CONTENT_TYPES.get(ext, 'application/octet-stream')


def get_bucket():
    return get_config_value('STORAGE_BUCKET', 'public-assets')


def upload_file(file_bytes, filename, subfolder):
    """Upload a file to the asset bucket, overwriting any existing object.

    Args:
        file_bytes: Raw bytes of the file.
        filename: Original filename (sanitised before use).
        subfolder: Folder inside the bucket (e.g. "profile", "resume").

    Returns:
        Public URL of the stored object.

    Raises:
        DataServiceError: the upload was rejected or the backend is unreachable.
    """
    service = get_data_service()
    bucket = get_bucket()
    safe_name = secure_filename(filename) or 'upload'
    path = f"{subfolder}/{safe_name}"

    service.upload(bucket, path, file_bytes,
                   content_type=guess_content_type(safe_name), overwrite=True)
    return service.get_public_url(bucket, path)


def resolve_public_url(value):
    """Public URL for a stored asset reference.

    Stored values are either full URLs (what uploads save) or bucket paths
    such as "profile/me.jpg".
    """
    if not value:
        return None
    if value.startswith(('http://', 'https://', '/')):
        return value
    return get_data_service().get_public_url(get_bucket(), value)
