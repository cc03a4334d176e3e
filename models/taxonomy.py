"""
Taxonomy Models

Category, Tag and Course reference rows plus the join rows linking recipes
to categories and tags. Names are unique case-insensitively. Each row keeps
a casefolded copy of its name in name_key, which is what lookups compare;
the import engine enforces uniqueness with explicit lookups on that key.
"""

from .base import db, new_id


def fold_name(name):
    """Lookup key for a reference name (Unicode casefold, so 'CAFÉ' matches 'Café')."""
    return name.casefold()


class Course(db.Model):
    """Course a recipe belongs to (Main, Dessert, ...). At most one per recipe."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(200), nullable=False)
    name_key = db.Column(db.String(200), nullable=False, index=True)


class Category(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(200), nullable=False)
    name_key = db.Column(db.String(200), nullable=False, index=True)
    recipe_links = db.relationship('RecipeCategory', backref='category', lazy=True, cascade='all, delete-orphan')


class Tag(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(200), nullable=False)
    name_key = db.Column(db.String(200), nullable=False, index=True)
    recipe_links = db.relationship('RecipeTag', backref='tag', lazy=True, cascade='all, delete-orphan')


class RecipeCategory(db.Model):
    """Join row linking a recipe to a category."""
    __tablename__ = 'recipe_category'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    recipe_id = db.Column(db.String(36), db.ForeignKey('recipe.id', ondelete='CASCADE'), nullable=False, index=True)
    category_id = db.Column(db.String(36), db.ForeignKey('category.id', ondelete='CASCADE'), nullable=False, index=True)


class RecipeTag(db.Model):
    """Join row linking a recipe to a tag."""
    __tablename__ = 'recipe_tag'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    recipe_id = db.Column(db.String(36), db.ForeignKey('recipe.id', ondelete='CASCADE'), nullable=False, index=True)
    tag_id = db.Column(db.String(36), db.ForeignKey('tag.id', ondelete='CASCADE'), nullable=False, index=True)
