"""Mutation signal adapters."""

import logfire

from engage.domain.service.mutation import MutationPublisher, MutationReason
from engage.domain.value import ContentItemId


class LogfireMutationPublisher(MutationPublisher):
    """Publishes "target mutated" signals as structured log events.

    Cache layers in the surrounding application subscribe to the
    ``content_item.mutated`` event to refresh views of the item.
    """

    async def publish(
        self, content_item_id: ContentItemId, reason: MutationReason
    ) -> None:
        logfire.info(
            "content_item.mutated",
            content_item_id=str(content_item_id),
            reason=reason.value,
        )
