from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """One generated constant."""

    model_config = ConfigDict(frozen=True)

    name: str
    content: str
    comment: str = ""


class GenerationContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str
    package: str = "main"
    entries: List[Entry] = Field(default_factory=list)
