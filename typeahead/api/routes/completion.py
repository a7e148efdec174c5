"""Word and completion routes."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Query, Request

from typeahead.api.schemas import (
    AddManyRequest,
    AddManyResponse,
    AddRequest,
    AddResponse,
    CompletionResponse,
    ErrorResponse,
    FlushResponse,
    RemoveResponse,
    StatsResponse,
)

router = APIRouter(tags=["completion"])


@router.get("/complete", response_model=CompletionResponse)
async def complete(
    request: Request,
    q: str = Query(..., min_length=1, max_length=200, description="Prefix to complete"),
    limit: int | None = Query(None, ge=1, description="Max completions"),
) -> CompletionResponse:
    """Return known words starting with a prefix."""
    cfg = request.app.state.settings.completion
    limit = min(limit or cfg.default_limit, cfg.max_limit)

    completion = await request.app.state.engine.complete(q, limit=limit)
    return CompletionResponse(prefix=completion.prefix, completions=completion.words)


@router.post("/words", response_model=AddResponse)
async def add_word(request: Request, body: AddRequest) -> AddResponse:
    """Add one word."""
    engine = request.app.state.engine
    word = await engine.add(body.word)
    if word is None:
        return AddResponse(word=body.word.strip().lower(), added=False)
    return AddResponse(word=word, added=True)


@router.post(
    "/words/batch",
    response_model=AddManyResponse,
    responses={502: {"model": ErrorResponse}},
)
async def add_words(request: Request, body: AddManyRequest) -> AddManyResponse:
    """Add several words. Words added before a failure are kept."""
    added = await request.app.state.engine.add_many(body.words)
    return AddManyResponse(added=added)


@router.delete("/words/{word}", response_model=RemoveResponse)
async def remove_word(request: Request, word: str) -> RemoveResponse:
    """Remove one word."""
    removed = await request.app.state.engine.remove(word)
    return RemoveResponse(word=word.strip().lower(), removed=removed)


@router.delete("/words", response_model=FlushResponse)
async def flush(request: Request) -> FlushResponse:
    """Delete the whole corpus."""
    deleted = await request.app.state.engine.flush()
    return FlushResponse(deleted=deleted)


@router.get("/stats", response_model=StatsResponse)
async def stats(request: Request) -> StatsResponse:
    """Return space usage of the corpus."""
    engine = request.app.state.engine
    statistics = await engine.statistics()
    return StatsResponse(key=engine.key, **asdict(statistics))
