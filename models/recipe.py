"""
Recipe Model

The persisted recipe aggregate. Directions, ingredients, notes, preparation
times and nutrition are owned by the recipe and stored as JSON columns.
"""

from datetime import datetime, timezone

from .base import db, new_id


def utcnow():
    return datetime.now(timezone.utc)


class Recipe(db.Model):
    """Recipe with metadata, owned lists, one course and many categories/tags."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.Text, nullable=False, default='', index=True)
    created_date = db.Column(db.DateTime(timezone=True), default=utcnow)
    last_modified_date = db.Column(db.DateTime(timezone=True), default=utcnow)
    last_prepared = db.Column(db.DateTime(timezone=True), nullable=True)
    source = db.Column(db.Text, default='')
    source_details = db.Column(db.Text, default='')  # URL or publication page
    introduction = db.Column(db.Text, default='')
    difficulty = db.Column(db.Integer, default=0)  # constants.Difficulty
    rating = db.Column(db.Integer, default=0)  # constants.Rating
    image_filename = db.Column(db.String(255), nullable=True)
    image_thumbnail = db.Column(db.LargeBinary, nullable=True)
    is_favorite = db.Column(db.Boolean, default=False)
    want_to_make = db.Column(db.Boolean, default=False)
    yield_text = db.Column('yield', db.Text, default='')
    servings = db.Column(db.Integer, nullable=True)
    course_id = db.Column(db.String(36), db.ForeignKey('course.id', ondelete='SET NULL'), nullable=True, index=True)

    # Owned lists: [{'text', 'is_heading'}], [{'text', 'is_heading', 'is_main'}],
    # [{'title', 'content'}], [{'type', 'time_string'}], {nutrition fields}
    directions = db.Column(db.JSON, default=list)
    ingredients = db.Column(db.JSON, default=list)
    notes = db.Column(db.JSON, default=list)
    preparation_times = db.Column(db.JSON, default=list)
    nutrition = db.Column(db.JSON, nullable=True)

    course = db.relationship('Course')
    recipe_categories = db.relationship('RecipeCategory', backref='recipe', lazy=True, cascade='all, delete-orphan')
    recipe_tags = db.relationship('RecipeTag', backref='recipe', lazy=True, cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Recipe {self.id} {self.name!r}>'
