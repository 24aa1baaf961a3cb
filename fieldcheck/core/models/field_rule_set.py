"""
FieldRuleSet model: the ordered rules configured for one field of an input mapping.
"""

from pydantic import BaseModel, Field

from .validation_rule import ValidationRule


class FieldRuleSet(BaseModel):
    """
    Rules for one field, in evaluation order.

    Attributes:
        field: Key of the value in the input mapping
        alias: Error key to use instead of the field name (optional)
        rules: Rules evaluated in order until the first failure
    """

    field: str = Field(..., min_length=1)
    alias: str | None = Field(None, min_length=1)
    rules: list[ValidationRule] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "field": "name",
                "alias": "name-2",
                "rules": [
                    {"specifier": "required", "message": "Please enter a name."},
                ],
            }
        }
