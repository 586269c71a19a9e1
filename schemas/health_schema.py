"""Schemas for health condition flags."""

from pydantic import BaseModel, ConfigDict, Field


class HealthConditions(BaseModel):
    """Independent condition flags; skipping the step equals submitting all False."""

    model_config = ConfigDict(populate_by_name=True)

    has_diabetes: bool = Field(False, strict=True, alias="hasDiabetes")
    has_hypertension: bool = Field(False, strict=True, alias="hasHypertension")
    has_high_cholesterol: bool = Field(False, strict=True, alias="hasHighCholesterol")
    has_gastritis: bool = Field(False, strict=True, alias="hasGastritis")
