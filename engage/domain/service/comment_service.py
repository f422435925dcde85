"""Comment domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from engage.config import CommentSettings
from engage.domain.error import (
    DepthExceededError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from engage.domain.model.comment import Comment
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    UnitOfWork,
)
from engage.domain.value import CommentId, ContentItemId, UserId

from .base import Service
from .mutation import MutationPublisher, MutationReason


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_item_repository: ContentItemRepository,
        unit_of_work: UnitOfWork,
        publisher: MutationPublisher,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            content_item_repository: Content item repository
            unit_of_work: Transaction boundary
            publisher: Mutation signal publisher
            comment_settings: Content length and depth limits
        """
        self.comment_repository = comment_repository
        self.content_item_repository = content_item_repository
        self.unit_of_work = unit_of_work
        self.publisher = publisher
        self.comment_settings = comment_settings

    def validate_content(self, content: str) -> str:
        """Trim comment content and check its length.

        Args:
            content: Raw content as submitted

        Returns:
            The trimmed content

        Raises:
            ValidationFailedError: If the trimmed content is empty or too long
        """
        trimmed = content.strip()
        if len(trimmed) < self.comment_settings.min_length:
            raise ValidationFailedError("Comment content cannot be empty")
        if len(trimmed) > self.comment_settings.max_length:
            raise ValidationFailedError(
                f"Comment must be at most {self.comment_settings.max_length} characters"
            )
        return trimmed

    async def create_comment(
        self,
        content_item_id: ContentItemId,
        author_id: Optional[UserId],
        content: str,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment on a content item or reply to another comment.

        The new comment and the parent's replies_count increment are
        written in one transaction.

        Args:
            content_item_id: Content item ID
            author_id: Author user ID (None if unauthenticated)
            content: Comment content, trimmed before validation
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            UnauthorizedError: If no author
            ValidationFailedError: If content is empty or too long
            NotFoundError: If the content item or parent doesn't exist
            DepthExceededError: If the reply would nest too deep
        """
        with logfire.span(
            "comment_service.create_comment",
            content_item_id=str(content_item_id),
            author_id=str(author_id) if author_id else None,
            parent_id=str(parent_id) if parent_id else None,
        ):
            if author_id is None:
                logfire.warn(
                    "Comment without caller", content_item_id=str(content_item_id)
                )
                raise UnauthorizedError("comment")

            text = self.validate_content(content)

            content_item = await self.content_item_repository.find_by_id(
                content_item_id
            )
            if not content_item:
                logfire.warn(
                    "Comment on non-existent content item",
                    content_item_id=str(content_item_id),
                )
                raise NotFoundError("Content item", str(content_item_id))

            # If replying, verify parent and calculate depth
            depth = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent or parent.content_item_id != content_item_id:
                    logfire.warn(
                        "Parent comment not found on content item",
                        parent_id=str(parent_id),
                        content_item_id=str(content_item_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_id))
                depth = parent.depth + 1

            max_depth = self.comment_settings.max_depth_for(content_item.kind)
            if depth > max_depth:
                logfire.warn(
                    "Reply depth exceeded",
                    parent_id=str(parent_id),
                    depth=depth,
                    max_depth=max_depth,
                )
                raise DepthExceededError(depth, max_depth)

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                content_item_id=content_item_id,
                author_id=author_id,
                content=text,
                parent_id=parent_id,
                depth=depth,
                created_at=now,
                updated_at=now,
            )

            async with self.unit_of_work.transaction():
                saved = await self.comment_repository.save(comment)
                if parent_id:
                    replies = await self.comment_repository.increment_replies_count(
                        parent_id
                    )
                    if replies is None:
                        # Parent vanished after the existence check
                        raise NotFoundError("Parent comment", str(parent_id))
                self.unit_of_work.after_commit(
                    lambda: self.publisher.publish(
                        content_item_id, MutationReason.COMMENT_CREATED
                    )
                )

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                content_item_id=str(content_item_id),
                depth=depth,
            )
            return saved

    async def update_comment(
        self,
        caller_id: Optional[UserId],
        comment_id: CommentId,
        content_item_id: ContentItemId,
        content: str,
    ) -> Comment:
        """Replace a comment's content. Only the author may edit.

        Args:
            caller_id: Caller's user ID (None if unauthenticated)
            comment_id: Comment ID
            content_item_id: Content item the comment is expected on
            content: New content, trimmed before validation

        Returns:
            Updated comment

        Raises:
            UnauthorizedError: If no caller
            NotFoundError: If the comment doesn't exist on the content item
            ForbiddenError: If the caller is not the author
            ValidationFailedError: If content is empty or too long
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            caller_id=str(caller_id) if caller_id else None,
        ):
            if caller_id is None:
                raise UnauthorizedError("edit a comment")

            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment or comment.content_item_id != content_item_id:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != caller_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    author_id=str(comment.author_id),
                    caller_id=str(caller_id),
                )
                raise ForbiddenError(
                    action="edit",
                    resource="comment",
                    resource_id=str(comment_id),
                    user_id=str(caller_id),
                )

            text = self.validate_content(content)

            async with self.unit_of_work.transaction():
                updated = await self.comment_repository.update_content(
                    comment_id, text
                )
                if not updated:
                    raise NotFoundError("Comment", str(comment_id))
                self.unit_of_work.after_commit(
                    lambda: self.publisher.publish(
                        content_item_id, MutationReason.COMMENT_UPDATED
                    )
                )

            logfire.info(
                "Comment content updated",
                comment_id=str(comment_id),
                content_length=len(text),
            )
            return updated

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            return await self.comment_repository.find_by_id(comment_id)
