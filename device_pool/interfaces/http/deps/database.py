"""Database session dependency bound to the application's container."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.infrastructure.database.session import open_session


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    factory = request.app.state.container.init_infrastructure()
    async for session in open_session(factory):
        yield session
