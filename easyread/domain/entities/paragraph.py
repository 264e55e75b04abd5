"""Paragraph entity."""

from pydantic import BaseModel, ConfigDict, Field


class Paragraph(BaseModel):
    """One paragraph of an article. Identity is ``id``; order is significant."""

    model_config = ConfigDict(frozen=True)

    id: int
    text: str = Field(description="Paragraph text")
