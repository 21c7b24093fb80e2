from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker


def make_engine(db_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(db_url, echo=echo)


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)
