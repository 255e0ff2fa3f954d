"""Per-application wiring of settings, database access and serialization points."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from device_pool.core.config import Settings, get_settings
from device_pool.infrastructure.database.session import (
    build_engine,
    build_session_factory,
    create_tables,
)
from device_pool.modules.checkout.policy import AdmissionWindow
from device_pool.modules.common.locks import RegistryLocks


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    locks: RegistryLocks = field(default_factory=RegistryLocks)
    engine: AsyncEngine | None = None
    session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def admission_window(self) -> AdmissionWindow:
        return AdmissionWindow.from_settings(self.settings.pool)

    @property
    def capacity(self) -> int:
        return self.settings.device_capacity

    def init_infrastructure(self) -> async_sessionmaker[AsyncSession]:
        """Ensure the database engine and session factory exist."""
        if self.engine is None or self.session_factory is None:
            self.engine = build_engine(self.settings)
            self.session_factory = build_session_factory(self.engine)
        return self.session_factory

    async def create_tables(self) -> None:
        self.init_infrastructure()
        assert self.engine is not None  # for mypy
        await create_tables(self.engine)

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None


def build_container(settings: Settings | None = None) -> ApplicationContainer:
    return ApplicationContainer(settings=settings or get_settings())


__all__ = ["ApplicationContainer", "build_container"]
