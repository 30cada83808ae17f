from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from deskpet.models.account_schemas import Base


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # One factory per application; services open a session per operation.
    return async_sessionmaker(
        autocommit=False,
        class_=AsyncSession,
        autoflush=True,
        expire_on_commit=False,
        bind=engine,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create tables if not exists"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
