"""Mention and notification routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status

from huddle.application.usecase.notification import (
    GetMentionsRequest,
    GetMentionsResponse,
    GetMentionsUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
    NotificationItem,
    SearchMentionCandidatesRequest,
    SearchMentionCandidatesResponse,
    SearchMentionCandidatesUseCase,
)
from huddle.domain.error import NotFoundError

router = APIRouter(tags=["notifications"], route_class=DishkaRoute)


@router.get("/users/{user_id}/mentions", response_model=GetMentionsResponse)
async def get_mentions(
    user_id: UUID,
    get_mentions_use_case: FromDishka[GetMentionsUseCase],
    limit: int = Query(default=50, ge=1, le=100),
) -> GetMentionsResponse:
    """List mentions addressed to a member, newest first."""
    return await get_mentions_use_case.execute(
        GetMentionsRequest(user_id=str(user_id), limit=limit)
    )


@router.post("/notifications/{notification_id}/read", response_model=NotificationItem)
async def mark_notification_read(
    notification_id: UUID,
    mark_read_use_case: FromDishka[MarkNotificationReadUseCase],
) -> NotificationItem:
    """Mark a notification as read."""
    try:
        return await mark_read_use_case.execute(
            MarkNotificationReadRequest(notification_id=str(notification_id))
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/companies/{company_id}/mention-candidates",
    response_model=SearchMentionCandidatesResponse,
)
async def search_mention_candidates(
    company_id: UUID,
    search_use_case: FromDishka[SearchMentionCandidatesUseCase],
    q: str = Query(default="", max_length=30),
    limit: int = Query(default=10, ge=1, le=50),
) -> SearchMentionCandidatesResponse:
    """Autocomplete members for ``@`` mentions."""
    return await search_use_case.execute(
        SearchMentionCandidatesRequest(company_id=str(company_id), query=q, limit=limit)
    )
