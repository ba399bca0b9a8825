"""
Uploads Module - Image and resume uploads to the asset host

Files are validated first (size, extension and mimetype), then handed to
the configured asset store which returns the public URL. Uploads are not
retried; a failed upload must be sent again by the client.
"""

import io
import os
import uuid

import cloudinary.exceptions
import cloudinary.uploader
from flask import current_app
from werkzeug.utils import secure_filename

from .errors import ValidationError, UploadFailed, ConfigurationError
from .helpers import allowed_file


IMAGE_EXTENSIONS = {'jpeg', 'jpg', 'png', 'gif', 'webp'}
IMAGE_MIMETYPES = {f'image/{ext}' for ext in IMAGE_EXTENSIONS}
RESUME_EXTENSIONS = {'pdf'}
RESUME_MIMETYPES = {'application/pdf'}

IMAGE_FOLDER = 'portfolio/images'
RESUME_FOLDER = 'portfolio/resumes'


class CloudinaryStore:
    """Uploads through the Cloudinary SDK"""

    def __init__(self, cloud_name, api_key, api_secret, timeout=30):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def save(self, data, filename, mimetype, folder, resource_type='image'):
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(data),
                filename=filename,
                folder=folder,
                resource_type=resource_type,
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                timeout=self.timeout,
            )
        except (cloudinary.exceptions.Error, OSError) as e:
            current_app.logger.error(f"Cloudinary upload error: {str(e)}")
            raise UploadFailed()

        secure_url = (result or {}).get('secure_url')
        if not secure_url:
            current_app.logger.error("Cloudinary upload error: response without secure_url")
            raise UploadFailed()
        return secure_url


class LocalStore:
    """Saves files below UPLOAD_FOLDER, served from /uploads"""

    def __init__(self, upload_folder, url_prefix='/uploads'):
        self.upload_folder = upload_folder
        self.url_prefix = url_prefix

    def save(self, data, filename, mimetype, folder, resource_type='image'):
        name = f"{uuid.uuid4().hex[:12]}_{secure_filename(filename) or 'upload'}"
        target_dir = os.path.join(self.upload_folder, folder)
        try:
            os.makedirs(target_dir, exist_ok=True)
            with open(os.path.join(target_dir, name), 'wb') as f:
                f.write(data)
        except OSError as e:
            current_app.logger.error(f"Local upload error: {str(e)}")
            raise UploadFailed()
        return f"{self.url_prefix}/{folder}/{name}"


def get_asset_store():
    config = current_app.config
    store = config.get('ASSET_STORE', 'local')
    if store == 'cloudinary':
        if not all([config.get('CLOUDINARY_CLOUD_NAME'), config.get('CLOUDINARY_API_KEY'),
                    config.get('CLOUDINARY_API_SECRET')]):
            current_app.logger.error("Cloudinary credentials are not configured")
            raise ConfigurationError()
        return CloudinaryStore(config['CLOUDINARY_CLOUD_NAME'], config['CLOUDINARY_API_KEY'],
                               config['CLOUDINARY_API_SECRET'], timeout=config.get('UPLOAD_TIMEOUT', 30))
    if store == 'local':
        upload_folder = config.get('UPLOAD_FOLDER', 'uploads')
        if not os.path.isabs(upload_folder):
            upload_folder = os.path.join(current_app.root_path, upload_folder)
        return LocalStore(upload_folder)
    raise ConfigurationError(f"Unknown asset store: {store}")


def validate_upload(data, filename, mimetype, max_size, extensions, mimetypes, message):
    if data is None or not filename:
        raise ValidationError('No file uploaded')
    if len(data) > max_size:
        raise ValidationError(f'File is too large. Maximum size is {max_size // (1024 * 1024)}MB.')
    if not allowed_file(filename, extensions) or (mimetype or '').lower() not in mimetypes:
        raise ValidationError(message)


def upload_image(data, filename, mimetype, store=None):
    """Validate an image and upload it; returns its public URL"""
    validate_upload(data, filename, mimetype, current_app.config['MAX_IMAGE_SIZE'],
                    IMAGE_EXTENSIONS, IMAGE_MIMETYPES, 'Only image files are allowed!')
    store = store or get_asset_store()
    url = store.save(data, filename, mimetype, IMAGE_FOLDER, resource_type='image')
    current_app.logger.info(f"Image uploaded: {url}")
    return url


def upload_resume(data, filename, mimetype, store=None):
    """Validate a PDF resume and upload it as a raw asset; returns its public URL"""
    validate_upload(data, filename, mimetype, current_app.config['MAX_RESUME_SIZE'],
                    RESUME_EXTENSIONS, RESUME_MIMETYPES, 'Only PDF files are allowed!')
    store = store or get_asset_store()
    url = store.save(data, filename, mimetype, RESUME_FOLDER, resource_type='raw')
    current_app.logger.info(f"Resume uploaded: {url}")
    return url


__all__ = [
    'IMAGE_FOLDER',
    'RESUME_FOLDER',
    'CloudinaryStore',
    'LocalStore',
    'get_asset_store',
    'validate_upload',
    'upload_image',
    'upload_resume'
]
