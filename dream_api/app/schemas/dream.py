"""
Pydantic models for dream data.

``DreamBase`` holds the four mutable text fields.  ``DreamCreate`` and
``DreamUpdate`` are request bodies; ``DreamRead`` adds the server‑owned
``id`` and ``version`` for responses.  Unknown keys in request bodies
are ignored, so clients may echo back a full ``DreamRead``.
"""

from typing import Optional

from pydantic import BaseModel, Field


MUTABLE_FIELDS = ("title", "description", "explanation", "category")


class DreamBase(BaseModel):
    title: Optional[str] = Field(None, examples=["Flight"])
    description: Optional[str] = Field(None, examples=["I was flying over a city at night"])
    explanation: Optional[str] = Field(None, examples=["A wish for freedom"])
    category: Optional[str] = Field(None, examples=["adventure"])


class DreamCreate(DreamBase):
    """Schema for creating a dream.  ``id`` and ``version`` are ignored."""
    pass


class DreamUpdate(DreamBase):
    """Schema for updating a dream.

    Only the fields present in the request body are applied; omitted
    fields keep their stored values.  An explicit ``null`` clears a
    field.  ``id`` is optional and, when given, must match the path.
    """

    id: Optional[str] = None

    def changes(self) -> dict:
        """Return the mutable fields the client actually sent."""
        return {name: getattr(self, name) for name in MUTABLE_FIELDS if name in self.model_fields_set}


class DreamRead(DreamBase):
    """Schema for reading a dream from the API."""

    id: str
    version: int
