"""
Text Heuristic Constants

Markers and unit suffixes recognized when normalizing free text and
schema.org nutrition values.
"""

# Leading list markers removed from pasted ingredient/direction lines
LIST_MARKERS = ('*', '-', '•', '○', '▪', '▫', '‣', '⁃')

# Stripped in this order before parsing a nutrition value as a number.
# 'Âµg' is the UTF-8 micro sign decoded as Latin-1, common on recipe sites.
NUTRITION_UNIT_SUFFIXES = (' calories', 'kcal', 'mcg', 'Âµg', 'µg', 'μg', 'mg', 'g')

# schema.org NutritionInformation property -> our nutrition field
NUTRITION_FIELDS = {
    'calories': 'calories',
    'proteinContent': 'protein',
    'carbohydrateContent': 'carbohydrates',
    'fatContent': 'fat',
    'saturatedFatContent': 'saturated_fat',
    'transFatContent': 'trans_fat',
    'fiberContent': 'fiber',
    'sugarContent': 'sugar',
    'sodiumContent': 'sodium',
    'cholesterolContent': 'cholesterol',
    'vitaminDContent': 'vitamin_d',
    'calciumContent': 'calcium',
    'ironContent': 'iron',
    'potassiumContent': 'potassium',
    'vitaminAContent': 'vitamin_a',
    'vitaminCContent': 'vitamin_c',
}

# A nutrition block is kept only if one of these was recovered
CORE_NUTRITION_FIELDS = (
    'calories', 'protein', 'carbohydrates', 'fat', 'fiber',
    'sugar', 'sodium', 'cholesterol', 'serving_size',
)
