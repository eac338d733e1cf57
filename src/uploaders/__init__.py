"""
Image hosting for product photos.
"""

from .cloudinary_uploader import CloudinaryUploader, ImageFile, ImageHost

__all__ = ["CloudinaryUploader", "ImageHost", "ImageFile"]
