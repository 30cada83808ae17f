from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine for either SQLite (aiosqlite) or PostgreSQL (asyncpg)."""
    if database_url.startswith("sqlite"):
        return create_async_engine(url=database_url, echo=False)
    return create_async_engine(database_url, pool_size=20, max_overflow=20)
