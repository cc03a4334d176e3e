"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db, new_id

from .recipe import Recipe
from .taxonomy import fold_name, Course, Category, Tag, RecipeCategory, RecipeTag

__all__ = [
    'db',
    'new_id',
    'fold_name',
    'Recipe',
    'Course',
    'Category',
    'Tag',
    'RecipeCategory',
    'RecipeTag',
]
