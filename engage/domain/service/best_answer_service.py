"""Best answer domain service."""

from typing import Optional

import logfire
from sqlalchemy.exc import IntegrityError

from engage.domain.error import (
    ForbiddenError,
    InvalidTargetError,
    NotFoundError,
    TransientStoreFailure,
    UnauthorizedError,
)
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    UnitOfWork,
)
from engage.domain.value import CommentId, ContentItemId, UserId

from .base import Service
from .mutation import MutationPublisher, MutationReason


class BestAnswerService(Service):
    """Domain service for best answer selection.

    A content item is either without a best answer or has exactly one,
    which is always a top-level comment on that item. Only the item's
    author moves it between those states.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_item_repository: ContentItemRepository,
        unit_of_work: UnitOfWork,
        publisher: MutationPublisher,
    ) -> None:
        """Initialize best answer service.

        Args:
            comment_repository: Comment repository
            content_item_repository: Content item repository
            unit_of_work: Transaction boundary
            publisher: Mutation signal publisher
        """
        self.comment_repository = comment_repository
        self.content_item_repository = content_item_repository
        self.unit_of_work = unit_of_work
        self.publisher = publisher

    async def select_best_answer(
        self,
        comment_id: CommentId,
        content_item_id: ContentItemId,
        caller_id: Optional[UserId],
    ) -> Optional[CommentId]:
        """Mark a comment as best answer, or unmark it if already selected.

        Selecting a different comment replaces the previous best answer in
        the same transaction.

        Args:
            comment_id: Comment to select
            content_item_id: Content item the comment answers
            caller_id: Caller's user ID (None if unauthenticated)

        Returns:
            The best answer after the change, None if it was toggled off

        Raises:
            UnauthorizedError: If no caller
            NotFoundError: If the content item or comment doesn't exist
            ForbiddenError: If the caller is not the content item's author
            InvalidTargetError: If the comment is a reply or on another item
            TransientStoreFailure: If a concurrent selection won the race
        """
        with logfire.span(
            "best_answer_service.select_best_answer",
            comment_id=str(comment_id),
            content_item_id=str(content_item_id),
            caller_id=str(caller_id) if caller_id else None,
        ):
            if caller_id is None:
                raise UnauthorizedError("select a best answer")

            content_item = await self.content_item_repository.find_by_id(
                content_item_id
            )
            if not content_item:
                raise NotFoundError("Content item", str(content_item_id))

            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            if content_item.author_id != caller_id:
                logfire.warn(
                    "Best answer selection by non-author",
                    content_item_id=str(content_item_id),
                    caller_id=str(caller_id),
                )
                raise ForbiddenError(
                    action="select a best answer",
                    resource="content item",
                    resource_id=str(content_item_id),
                    user_id=str(caller_id),
                )

            if comment.content_item_id != content_item_id:
                raise InvalidTargetError(
                    f"Comment {comment_id} does not belong to content item {content_item_id}"
                )
            if not comment.is_top_level:
                raise InvalidTargetError(
                    f"Comment {comment_id} is a reply; only top-level comments can be best answers"
                )

            try:
                async with self.unit_of_work.transaction():
                    if comment.is_best_answer:
                        await self.comment_repository.set_best_answer(
                            comment_id, False
                        )
                        best_answer_id = None
                    else:
                        await self.comment_repository.clear_best_answers(
                            content_item_id
                        )
                        await self.comment_repository.set_best_answer(
                            comment_id, True
                        )
                        best_answer_id = comment_id
                    self.unit_of_work.after_commit(
                        lambda: self.publisher.publish(
                            content_item_id, MutationReason.BEST_ANSWER_CHANGED
                        )
                    )
            except IntegrityError as e:
                # idx_comments_unique_best_answer rejected a concurrent selection
                logfire.warn(
                    "Concurrent best answer selection",
                    content_item_id=str(content_item_id),
                    comment_id=str(comment_id),
                )
                raise TransientStoreFailure(
                    "Another best answer was selected concurrently, please retry"
                ) from e

            logfire.info(
                "Best answer changed",
                content_item_id=str(content_item_id),
                best_answer_id=str(best_answer_id) if best_answer_id else None,
            )
            return best_answer_id

    async def get_best_answer(
        self, content_item_id: ContentItemId
    ) -> Optional[CommentId]:
        """Get the current best answer of a content item.

        Raises:
            NotFoundError: If the content item doesn't exist
        """
        with logfire.span(
            "best_answer_service.get_best_answer",
            content_item_id=str(content_item_id),
        ):
            content_item = await self.content_item_repository.find_by_id(
                content_item_id
            )
            if not content_item:
                raise NotFoundError("Content item", str(content_item_id))

            best_answer = await self.comment_repository.find_best_answer(
                content_item_id
            )
            return best_answer.id if best_answer else None
