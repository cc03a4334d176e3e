"""
MacGourmet Lookup Tables

Integer codes used in MacGourmet property-list exports, mapped to the
labels stored on imported notes and preparation times.
"""

# Label used for any code not listed below
MG_DEFAULT_LABEL = 'Other'

# NOTES_LIST -> TYPE_ID
MG_NOTE_TYPES = {
    6: 'Chef',
    7: 'Preparation',
    8: 'Serving',
    10: 'Cooking',
}

# PREP_TIMES -> TIME_TYPE_ID
MG_TIME_TYPES = {
    1: 'Active',
    2: 'Bake',
    3: 'Chill',
    4: 'Cook',
    7: 'Grill',
    9: 'Prep',
    10: 'Rise',
    18: 'Boil',
    19: 'Ready In',
    28: 'Inactive',
    30: 'Total Time',
}

# PREP_TIMES -> TIME_UNIT_ID / TIME_UNIT_2_ID (0 and unknown codes have no label)
MG_TIME_UNITS = {
    1: 'hr',
    2: 'min',
    3: 'sec',
    5: '°C',
    6: '°F',
}
