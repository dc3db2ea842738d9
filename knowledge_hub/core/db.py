from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from knowledge_hub.core.config import settings

# Асинхронный движок с пулом соединений
engine = create_async_engine(settings.database_url, echo=settings.database_echo, pool_pre_ping=True)

# Сессии
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session
