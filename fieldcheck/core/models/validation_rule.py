"""
ValidationRule model: one rule specifier plus the message reported when it fails.
"""

from pydantic import BaseModel, Field

DEFAULT_SEPARATOR = "||"


class ValidationRule(BaseModel):
    """
    A rule attached to a field value.

    Attributes:
        specifier: Rule name optionally followed by separator-delimited arguments
                   ("required", "min||16", "date||d.m.Y")
        message: Message stored for the field when the rule fails
    """

    specifier: str = Field(..., min_length=1)
    message: str

    def split(self, separator: str = DEFAULT_SEPARATOR) -> tuple[str, list[str]]:
        """
        Split the specifier into the rule name and its positional arguments.

        Examples:
            >>> ValidationRule(specifier="minMax||1||10", message="").split()
            ('minMax', ['1', '10'])
        """
        name, *arguments = self.specifier.split(separator)
        return name, arguments

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "specifier": "match||^[1-9]\\d{3}$",
                "message": "Please enter a valid ID.",
            }
        }
