"""Search mention candidates use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import NotificationService
from huddle.domain.value import CompanyId


class MentionCandidateItem(BaseModel):
    """Member suggested while typing a mention."""

    user_id: str
    username: str
    display_name: str | None
    role: str | None
    avatar_url: str | None


class SearchMentionCandidatesRequest(BaseModel):
    """Search mention candidates request."""

    company_id: str  # UUID string
    query: str  # Text typed after ``@``
    limit: int = Field(default=10, ge=1, le=50)


class SearchMentionCandidatesResponse(BaseModel):
    """Search mention candidates response."""

    candidates: list[MentionCandidateItem]


class SearchMentionCandidatesUseCase(BaseUseCase):
    """Use case for mention autocomplete."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize search mention candidates use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: SearchMentionCandidatesRequest
    ) -> SearchMentionCandidatesResponse:
        """Find active members whose username or display name contains the query.

        An empty query returns no candidates.
        """
        query = request.query.strip().lstrip("@")
        if not query:
            return SearchMentionCandidatesResponse(candidates=[])

        users = await self.notification_service.search_users_for_mention(
            query, CompanyId(UUID(request.company_id)), limit=request.limit
        )
        return SearchMentionCandidatesResponse(
            candidates=[
                MentionCandidateItem(
                    user_id=str(user.id),
                    username=user.username.root,
                    display_name=user.display_name,
                    role=user.role,
                    avatar_url=user.avatar_url,
                )
                for user in users
            ]
        )
