"""Domain layer DI providers."""

from dishka import Scope, provide

from engage.config import AuthSettings, CommentSettings
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    LikeRepository,
    UnitOfWork,
)
from engage.domain.service import (
    BestAnswerService,
    CommentService,
    CommentStatsService,
    CommentTreeService,
    CounterService,
    IdentityService,
    LikeService,
    MutationPublisher,
)
from engage.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances sharing one unit of work.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_service(self, auth_settings: AuthSettings) -> IdentityService:
        """Provide caller identity domain service."""
        return IdentityService(auth_settings=auth_settings)

    @provide
    def get_counter_service(
        self,
        content_item_repository: ContentItemRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        unit_of_work: UnitOfWork,
        publisher: MutationPublisher,
    ) -> CounterService:
        """Provide counter domain service."""
        return CounterService(
            content_item_repository=content_item_repository,
            comment_repository=comment_repository,
            like_repository=like_repository,
            unit_of_work=unit_of_work,
            publisher=publisher,
        )

    @provide
    def get_like_service(
        self,
        like_repository: LikeRepository,
        content_item_repository: ContentItemRepository,
        comment_repository: CommentRepository,
        counter_service: CounterService,
        unit_of_work: UnitOfWork,
        publisher: MutationPublisher,
    ) -> LikeService:
        """Provide like domain service."""
        return LikeService(
            like_repository=like_repository,
            content_item_repository=content_item_repository,
            comment_repository=comment_repository,
            counter_service=counter_service,
            unit_of_work=unit_of_work,
            publisher=publisher,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        content_item_repository: ContentItemRepository,
        unit_of_work: UnitOfWork,
        publisher: MutationPublisher,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            content_item_repository=content_item_repository,
            unit_of_work=unit_of_work,
            publisher=publisher,
            comment_settings=comment_settings,
        )

    @provide
    def get_comment_tree_service(
        self,
        comment_repository: CommentRepository,
        content_item_repository: ContentItemRepository,
        like_repository: LikeRepository,
        comment_settings: CommentSettings,
    ) -> CommentTreeService:
        """Provide comment tree domain service."""
        return CommentTreeService(
            comment_repository=comment_repository,
            content_item_repository=content_item_repository,
            like_repository=like_repository,
            comment_settings=comment_settings,
        )

    @provide
    def get_best_answer_service(
        self,
        comment_repository: CommentRepository,
        content_item_repository: ContentItemRepository,
        unit_of_work: UnitOfWork,
        publisher: MutationPublisher,
    ) -> BestAnswerService:
        """Provide best answer domain service."""
        return BestAnswerService(
            comment_repository=comment_repository,
            content_item_repository=content_item_repository,
            unit_of_work=unit_of_work,
            publisher=publisher,
        )

    @provide
    def get_comment_stats_service(
        self,
        comment_repository: CommentRepository,
        content_item_repository: ContentItemRepository,
        like_repository: LikeRepository,
    ) -> CommentStatsService:
        """Provide comment stats domain service."""
        return CommentStatsService(
            comment_repository=comment_repository,
            content_item_repository=content_item_repository,
            like_repository=like_repository,
        )
