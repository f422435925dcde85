"""Application layer DI providers."""

from dishka import Scope, provide

from engage.application.usecase.best_answer import (
    GetBestAnswerUseCase,
    SelectBestAnswerUseCase,
)
from engage.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentStatsUseCase,
    GetCommentsPageUseCase,
    GetRepliesUseCase,
    UpdateCommentUseCase,
)
from engage.application.usecase.counter import (
    SyncCountersUseCase,
    VerifyCountersUseCase,
)
from engage.application.usecase.like import ToggleLikeUseCase
from engage.config import CommentSettings
from engage.domain.service import (
    BestAnswerService,
    CommentService,
    CommentStatsService,
    CommentTreeService,
    CounterService,
    LikeService,
)
from engage.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Like use cases
    @provide
    def get_toggle_like_use_case(self, like_service: LikeService) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(like_service=like_service)

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide
    def get_comments_page_use_case(
        self,
        comment_tree_service: CommentTreeService,
        comment_settings: CommentSettings,
    ) -> GetCommentsPageUseCase:
        """Provide get comments page use case."""
        return GetCommentsPageUseCase(
            comment_tree_service=comment_tree_service,
            comment_settings=comment_settings,
        )

    @provide
    def get_replies_use_case(
        self,
        comment_tree_service: CommentTreeService,
        comment_settings: CommentSettings,
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(
            comment_tree_service=comment_tree_service,
            comment_settings=comment_settings,
        )

    @provide
    def get_comment_stats_use_case(
        self, comment_stats_service: CommentStatsService
    ) -> GetCommentStatsUseCase:
        """Provide get comment stats use case."""
        return GetCommentStatsUseCase(comment_stats_service=comment_stats_service)

    # Best answer use cases
    @provide
    def get_select_best_answer_use_case(
        self, best_answer_service: BestAnswerService
    ) -> SelectBestAnswerUseCase:
        """Provide select best answer use case."""
        return SelectBestAnswerUseCase(best_answer_service=best_answer_service)

    @provide
    def get_best_answer_use_case(
        self, best_answer_service: BestAnswerService
    ) -> GetBestAnswerUseCase:
        """Provide get best answer use case."""
        return GetBestAnswerUseCase(best_answer_service=best_answer_service)

    # Counter use cases
    @provide
    def get_verify_counters_use_case(
        self, counter_service: CounterService
    ) -> VerifyCountersUseCase:
        """Provide verify counters use case."""
        return VerifyCountersUseCase(counter_service=counter_service)

    @provide
    def get_sync_counters_use_case(
        self, counter_service: CounterService
    ) -> SyncCountersUseCase:
        """Provide sync counters use case."""
        return SyncCountersUseCase(counter_service=counter_service)
