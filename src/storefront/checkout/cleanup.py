"""Expired checkout sweep — command and handler.

Meant to be triggered by an external scheduler (cron, K8s CronJob) through
the maintenance endpoint. Deletes every pending checkout whose expiry time
has passed and returns how many were removed.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.fields import DateTime
from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Checkout")
class CleanupExpiredCheckouts:
    as_of = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=Checkout)
class CleanupExpiredCheckoutsHandler:
    @handle(CleanupExpiredCheckouts)
    def cleanup_expired_checkouts(self, command):
        as_of = command.as_of or datetime.now(UTC)
        repo = current_domain.repository_for(Checkout)

        expired = repo.remove_expired(as_of)
        if not expired:
            logger.info("No expired checkouts found", as_of=as_of.isoformat())
            return 0

        for checkout in expired:
            logger.info(
                "Deleted expired checkout",
                checkout_number=checkout.checkout_number,
                expired_at=str(checkout.expires_at),
            )

        logger.info("Expired checkout cleanup complete", deleted_count=len(expired))
        return len(expired)
