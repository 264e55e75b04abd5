"""Glossary entities: terms picked from an article and their definitions."""

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .job import BaseJob

GENERAL_TAG = "일반"


class TermCandidate(BaseModel):
    """A term the oracle picked as hard or domain specific."""

    word: str = Field(min_length=1)
    tag: Optional[str] = None


class TermDefinition(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    short_definition: str = ""
    long_definition: str = ""


class GlossaryEntry(BaseModel):
    """One glossary line, served as ``{term, tag, shortDefinition, ...}``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    term: str
    tag: str = GENERAL_TAG
    short_definition: str = ""
    long_definition: str = ""
    image_url: str = ""


class GlossaryJob(BaseJob):
    """Background glossary build for one article.

    The result lives in ``entries``; a completed job may hold an empty list.
    """

    result_field: ClassVar[str] = "entries"

    text: str
    entries: Optional[list[GlossaryEntry]] = None
