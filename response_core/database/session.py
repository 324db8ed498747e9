from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .base import Base


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Async engine; pool tuning only applies to server databases."""
    options = {"echo": echo, "future": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_pre_ping=True,  # Check connection liveness before checkout
            pool_size=20,
            max_overflow=10,
        )
    return create_async_engine(database_url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables. Deployments use the Alembic revisions instead."""
    from ..models import incident, notification, response_route, zone  # noqa: F401  (register tables)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
