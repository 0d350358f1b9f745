from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, field_validator

Healthiness = Literal["good", "okay", "bad"]

# No coercion: "95" or true is not a number. int stays int, float stays float.
Number = Optional[Union[StrictInt, StrictFloat]]


class Nutrition(BaseModel):
    model_config = ConfigDict(extra="allow")

    carbs: Number = None
    protein: Number = None
    fat: Number = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    foodName: Optional[StrictStr] = None
    calories: Number = None
    nutrition: Nutrition = Nutrition()
    healthiness: Healthiness
    suggestions: List[StrictStr] = []

    @field_validator("healthiness", mode="before")
    @classmethod
    def _fold_healthiness(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("suggestions", mode="before")
    @classmethod
    def _null_suggestions(cls, v):
        return [] if v is None else v

    @field_validator("nutrition", mode="before")
    @classmethod
    def _null_nutrition(cls, v):
        return {} if v is None else v

    def label(self) -> str:
        """Display label for the rating; the stored value is left as is."""
        return self.healthiness.capitalize()
