"""Pydantic response/request models for the API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class AddRequest(BaseModel):
    """Request body for adding one word."""

    word: str = Field(..., max_length=200)


class AddResponse(BaseModel):
    """Outcome of adding one word."""

    word: str
    added: bool


class AddManyRequest(BaseModel):
    """Request body for adding several words."""

    words: list[str] = Field(..., max_length=1000)


class AddManyResponse(BaseModel):
    """Words that were not known before."""

    added: list[str]


class RemoveResponse(BaseModel):
    """Outcome of removing one word."""

    word: str
    removed: bool


class CompletionResponse(BaseModel):
    """Completions for a prefix, ascending."""

    prefix: str
    completions: list[str]


class StatsResponse(BaseModel):
    """Space usage of the corpus."""

    key: str
    leaf_count: int
    leaf_char_total: int
    prefix_char_total: int
    total: int


class FlushResponse(BaseModel):
    """Number of keys deleted by a flush."""

    deleted: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
    added: Optional[list[str]] = None
