"""
Super admin bootstrap.

The only way a SuperAdmin row is ever created. Run by an operator with
direct access to the deployment:

    python -m scripts.seed_super_admin <user-uuid>

Exits 0 when the user is (now or already) a super admin, 1 on bad input
or an unknown user.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional
from uuid import UUID

from clubauthz.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from clubauthz.app.use_cases.admin import SeedSuperAdminUseCase

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grant platform super admin to a user")
    parser.add_argument("user_id", help="UUID of an existing user")
    return parser.parse_args(argv)


async def seed(user_id: UUID, session_factory) -> int:
    async with session_factory() as session:
        result = await SeedSuperAdminUseCase(SqlAlchemyUnitOfWork(session)).execute(user_id)

    if result.is_err():
        logger.error(result.error.message)
        return 1

    if result.value.status == "already_super_admin":
        logger.info(f"User {user_id} is already a super admin")
    else:
        logger.info(f"User {user_id} is now a super admin")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = parse_args(argv)
    try:
        user_id = UUID(args.user_id)
    except ValueError:
        logger.error(f"Not a valid UUID: {args.user_id}")
        return 1

    from clubauthz.depends import AsyncSessionLocal

    return asyncio.run(seed(user_id, AsyncSessionLocal))


if __name__ == "__main__":
    sys.exit(main())
