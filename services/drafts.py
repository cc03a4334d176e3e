"""
Recipe Drafts

Transient recipe representations produced by the parsers and consumed once
by the import orchestrator. Image bytes and category/tag/course names travel
next to the draft in RecipeSideData because they can only be resolved once
the recipe row exists.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import List, NamedTuple, Optional

from constants import Difficulty, Rating


@dataclass
class DirectionDraft:
    text: str
    is_heading: bool = False


@dataclass
class IngredientDraft:
    text: str
    is_heading: bool = False
    is_main: bool = False


@dataclass
class NoteDraft:
    title: str
    content: str


@dataclass
class PreparationTimeDraft:
    type: str
    time_string: str


@dataclass
class NutritionInformation:
    """Per-serving nutrition. Grams unless noted."""
    serving_size: Optional[str] = None
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbohydrates: Optional[float] = None
    fat: Optional[float] = None
    saturated_fat: Optional[float] = None
    trans_fat: Optional[float] = None
    fiber: Optional[float] = None
    sugar: Optional[float] = None
    added_sugar: Optional[float] = None
    sodium: Optional[float] = None  # mg
    cholesterol: Optional[float] = None  # mg
    vitamin_d: Optional[float] = None  # mcg
    calcium: Optional[float] = None  # mg
    iron: Optional[float] = None  # mg
    potassium: Optional[float] = None  # mg
    vitamin_a: Optional[float] = None  # mcg
    vitamin_c: Optional[float] = None  # mg

    def to_dict(self):
        """Only the fields that are set."""
        return {key: value for key, value in asdict(self).items() if value is not None}


def _now():
    return datetime.now(timezone.utc)


@dataclass
class RecipeDraft:
    name: str
    created_date: datetime = field(default_factory=_now)
    last_modified_date: datetime = field(default_factory=_now)
    last_prepared: Optional[datetime] = None
    source: str = ''
    source_details: str = ''
    introduction: str = ''
    difficulty: Difficulty = Difficulty.NOT_SET
    rating: Rating = Rating.NOT_SET
    is_favorite: bool = False
    want_to_make: bool = False
    yield_text: str = ''
    servings: Optional[int] = None
    directions: List[DirectionDraft] = field(default_factory=list)
    ingredients: List[IngredientDraft] = field(default_factory=list)
    notes: List[NoteDraft] = field(default_factory=list)
    preparation_times: List[PreparationTimeDraft] = field(default_factory=list)
    nutrition: Optional[NutritionInformation] = None


@dataclass
class RecipeSideData:
    """Data resolved against the store after the recipe row is inserted."""
    image_data: Optional[bytes] = None
    image_url: Optional[str] = None
    categories: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    course: Optional[str] = None


class ParsedRecipe(NamedTuple):
    draft: RecipeDraft
    side: RecipeSideData
