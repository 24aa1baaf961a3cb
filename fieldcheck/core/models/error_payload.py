"""
ErrorPayload model: the structured object emitted when validation halts.
"""

from typing import Literal

from pydantic import BaseModel


class ErrorPayload(BaseModel):
    """
    First stored validation error, in the shape emitted to the client.

    Attributes:
        status: Always "error"
        control: Alias of the field the error belongs to
        message: The stored error message
    """

    status: Literal["error"] = "error"
    control: str | int
    message: str

    def to_json(self) -> str:
        """Serialize to compact JSON with the fields in declaration order."""
        return self.model_dump_json()

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "status": "error",
                "control": "id",
                "message": "Please enter a valid ID.",
            }
        }
