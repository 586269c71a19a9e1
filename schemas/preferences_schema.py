"""Schemas for dietary preferences."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List

from core.config import MAX_DAILY_BUDGET
from schemas.enums import DEFAULT_DIET_TYPE


def unique_strings(values: List[str]) -> List[str]:
    """Strip entries, drop blanks and remove duplicates keeping first occurrence."""
    seen = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.append(value)
    return seen


class Preferences(BaseModel):
    """Dietary preferences as stored for a user.

    The lower budget bound is not enforced here; it is re-asserted when
    onboarding is committed.
    """

    model_config = ConfigDict(populate_by_name=True)

    diet_type: str = Field(DEFAULT_DIET_TYPE, alias="dietType", examples=["Vegetarian"])
    allergens: List[str] = Field(default_factory=list, examples=[["Peanuts", "Shellfish"]])
    spice_level: int = Field(3, ge=1, le=5, alias="spiceLevel", description="1 (Mild) to 5 (Very Spicy)")
    daily_budget: int = Field(250, le=MAX_DAILY_BUDGET, alias="dailyBudget", description="Daily food budget in currency units")
    food_preferences: List[str] = Field(default_factory=list, alias="foodPreferences", examples=[["Bengali", "Indian"]])

    @field_validator("diet_type")
    @classmethod
    def default_blank_diet_type(cls, value: str) -> str:
        return value.strip() or DEFAULT_DIET_TYPE

    @field_validator("allergens", "food_preferences")
    @classmethod
    def dedupe(cls, value: List[str]) -> List[str]:
        return unique_strings(value)


class PreferencesSubmission(Preferences):
    """Step 3 form payload: checklist allergens plus free-text additions."""

    custom_allergens: List[str] = Field(default_factory=list, alias="customAllergens", examples=[["Prawns"]])
