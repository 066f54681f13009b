#!/usr/bin/env python3
"""Expire pending invitations whose validity window has passed.

Meant for a periodic job (cron or a scheduled container). The sweep runs
in one request scope, so it commits as a single transaction.
"""

import asyncio
import sys

import logfire
from dishka import AsyncContainer

from callbridge.config import Settings
from callbridge.domain.service import InvitationService
from callbridge.util.di.container import create_container
from callbridge.util.observability import configure_logfire


async def expire_invitations(container: AsyncContainer) -> int:
    """Run the expiry sweep and return the number of invitations expired."""
    async with container() as request_container:
        invitation_service = await request_container.get(InvitationService)
        return await invitation_service.expire_overdue()


async def _run() -> int:
    container = create_container()
    try:
        return await expire_invitations(container)
    finally:
        await container.close()


def main() -> int:
    """Sweep overdue invitations and log any failure to Logfire."""
    settings = Settings()

    configure_logfire(settings)

    try:
        expired = asyncio.run(_run())
        logfire.info("Invitation expiry sweep finished", expired=expired)
        return 0

    except Exception as e:
        logfire.error(
            "Invitation expiry sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
