"""
Public search endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import Optional

from app.core.database import get_session
from app.models import LessonLevel
from app.schemas.search import (
    AdvancedSearchResponse,
    LessonHit,
    SearchFilters,
    SearchResponse,
    SearchResults,
    SearchType,
    SuggestionsResponse,
    TopicHit,
)
from app.services import search_service

router = APIRouter(prefix="/search", tags=["search"])


def _results(topics, lessons) -> SearchResults:
    return SearchResults(
        topics=[TopicHit.model_validate(topic) for topic in topics],
        lessons=[LessonHit.model_validate(lesson) for lesson in lessons],
    )


@router.get("", response_model=SearchResponse)
async def search(
    q: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Search published topics and lessons."""
    query, topics, lessons = search_service.search(session, q)
    return SearchResponse(
        query=query,
        total_results=len(topics) + len(lessons),
        data=_results(topics, lessons)
    )


@router.get("/advanced", response_model=AdvancedSearchResponse)
async def advanced_search(
    q: Optional[str] = None,
    type: Optional[SearchType] = None,
    level: Optional[LessonLevel] = None,
    topic_slug: Optional[str] = Query(None, alias="topicSlug"),
    session: Session = Depends(get_session)
):
    """Search with optional result type, lesson level and topic filters."""
    query, topics, lessons = search_service.advanced_search(
        session, q, search_type=type, level=level, topic_slug=topic_slug
    )
    return AdvancedSearchResponse(
        query=query,
        filters=SearchFilters(type=type, level=level, topic_slug=topic_slug),
        total_results=len(topics) + len(lessons),
        data=_results(topics, lessons)
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
async def search_suggestions(
    q: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Autocomplete suggestions; short queries return an empty list."""
    return SuggestionsResponse(data=search_service.suggestions(session, q))
