"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from engage.domain.model.like import Like
from engage.domain.value import LikeTargetType, UserId


class LikeRepository(ABC):
    """Repository for the like ledger.

    The ledger is append/remove-only and is the source of truth for
    "is liked". Implementations must enforce uniqueness on
    (user_id, target_type, target_id).
    """

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a user's like on a specific target.

        Args:
            user_id: The user's ID
            target_type: Type of target (content item or comment)
            target_id: ID of the target

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> List[Like]:
        """Find a user's likes on multiple targets (batch query).

        Args:
            user_id: The user's ID
            target_type: Type of targets
            target_ids: IDs of the targets to check

        Returns:
            List of likes by the user on the given targets
        """
        pass

    @abstractmethod
    async def save(self, like: Like) -> Like:
        """Insert a like.

        Args:
            like: The like to insert

        Returns:
            The saved like

        Raises:
            IntegrityError: If the user already likes this target
        """
        pass

    @abstractmethod
    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> bool:
        """Delete a user's like on a target.

        Args:
            user_id: The user's ID
            target_type: Type of target
            target_id: ID of the target

        Returns:
            True if a like was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def count_by_targets(
        self,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """Count likes per target (batch query).

        Args:
            target_type: Type of targets
            target_ids: IDs of the targets

        Returns:
            Mapping of target ID to like count (0 for targets without likes)
        """
        pass
