"""
Image Blob Store

Stores full-size recipe images on disk, named by recipe id, and generates
the JPEG thumbnail kept on the recipe row. Images are validated through PIL
before anything is written.
"""

import logging
import os
from collections import namedtuple
from io import BytesIO

from PIL import Image, ImageOps

from constants import ALLOWED_IMAGE_FORMATS

logger = logging.getLogger(__name__)


class ImageValidationError(Exception):
    """Raised when an image fails validation."""
    pass


StoredImage = namedtuple('StoredImage', ['filename', 'thumbnail'])

# PIL format name -> file extension
FORMAT_EXTENSIONS = {
    'JPEG': 'jpg',
    'PNG': 'png',
    'GIF': 'gif',
    'WEBP': 'webp',
    'TIFF': 'tiff',
}

# Maximum image dimensions (prevent decompression bombs)
MAX_WIDTH = 8192
MAX_HEIGHT = 8192

# Maximum file size (25MB)
MAX_FILE_SIZE = 25 * 1024 * 1024


def inspect_image(image_data):
    """
    Validate raw image bytes and return the PIL format name.

    Raises:
        ImageValidationError: If the image is invalid or potentially malicious
    """
    if not image_data:
        raise ImageValidationError("Empty image data")
    if len(image_data) > MAX_FILE_SIZE:
        raise ImageValidationError(f"Image too large: {len(image_data)} bytes (max {MAX_FILE_SIZE})")

    try:
        img = Image.open(BytesIO(image_data))
        # Verify it's actually an image (detects corrupted/fake files)
        img.verify()
    except Image.DecompressionBombError:
        raise ImageValidationError("Image appears to be a decompression bomb (too large when decoded)")
    except Exception as e:
        raise ImageValidationError(f"Invalid or corrupted image: {str(e)}")

    if img.format not in ALLOWED_IMAGE_FORMATS:
        raise ImageValidationError(
            f"Invalid image format: {img.format}. "
            f"Allowed formats: {', '.join(sorted(ALLOWED_IMAGE_FORMATS))}"
        )

    width, height = img.size
    if width > MAX_WIDTH or height > MAX_HEIGHT:
        raise ImageValidationError(
            f"Image dimensions too large: {width}x{height}. "
            f"Maximum: {MAX_WIDTH}x{MAX_HEIGHT}"
        )

    return img.format


def make_thumbnail(image_data, size=(300, 300)):
    """Center-crop and scale an image to fill size, returned as JPEG bytes."""
    # Re-open after verify (verify() leaves the image unusable)
    img = Image.open(BytesIO(image_data))
    img = ImageOps.exif_transpose(img)

    # Flatten transparency onto white for JPEG
    if img.mode in ('RGBA', 'LA', 'P'):
        if img.mode == 'P':
            img = img.convert('RGBA')
        background = Image.new('RGB', img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        img = background
    elif img.mode != 'RGB':
        img = img.convert('RGB')

    thumb = ImageOps.fit(img, size, Image.Resampling.LANCZOS)
    output = BytesIO()
    thumb.save(output, 'JPEG', quality=80, optimize=True)
    return output.getvalue()


class ImageStore:
    """
    File-system blob store for recipe images.

    Args:
        folder: Directory holding the image files (created if missing)
        thumbnail_size: (width, height) of generated thumbnails
    """

    def __init__(self, folder, thumbnail_size=(300, 300)):
        self.folder = folder
        self.thumbnail_size = tuple(thumbnail_size)
        os.makedirs(folder, exist_ok=True)

    def _path(self, filename):
        # Filenames come from the database; never let one escape the folder
        return os.path.join(self.folder, os.path.basename(filename))

    def store(self, owner_id, image_data):
        """
        Save image bytes for a recipe.

        Args:
            owner_id: Recipe id the file is named after
            image_data: Raw image bytes

        Returns:
            StoredImage(filename, thumbnail)

        Raises:
            ImageValidationError: If the bytes are not an acceptable image
        """
        image_format = inspect_image(image_data)
        filename = f"{owner_id}.{FORMAT_EXTENSIONS[image_format]}"
        thumbnail = make_thumbnail(image_data, self.thumbnail_size)

        with open(self._path(filename), 'wb') as fh:
            fh.write(image_data)

        logger.debug("Stored image %s (%d bytes)", filename, len(image_data))
        return StoredImage(filename, thumbnail)

    def load(self, filename):
        """Return the stored bytes, or None if the file does not exist."""
        if not filename:
            return None
        try:
            with open(self._path(filename), 'rb') as fh:
                return fh.read()
        except FileNotFoundError:
            logger.warning("Image file %s is missing", filename)
            return None

    def delete(self, filename):
        if not filename:
            return
        try:
            os.remove(self._path(filename))
        except FileNotFoundError:
            pass
