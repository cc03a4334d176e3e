"""
Validation Constants

Limits and whitelists applied to imported data and uploaded files.
"""

# Maximum field lengths for imported text
MAX_LENGTHS = {
    'recipe_name': 500,
    'reference_name': 200,
    'source': 500,
    'yield': 200,
}

# Image formats accepted by the image store (PIL format names)
ALLOWED_IMAGE_FORMATS = {'JPEG', 'PNG', 'GIF', 'WEBP', 'TIFF'}

# File extensions routed to each file parser
MACGOURMET_EXTENSIONS = {'mgourmet', 'plist', 'xml'}
CANONICAL_EXTENSIONS = {'json', 'saltyrecipe'}
