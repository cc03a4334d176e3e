# Utility modules for the recipe library
from .url_validator import is_safe_url, safe_fetch, fetch_page, fetch_bytes, SSRFError
from .image_store import ImageStore, StoredImage, ImageValidationError
from .sanitizer import sanitize_text, sanitize_name, sanitize_url
