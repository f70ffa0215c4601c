from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset import RedeemResetUseCase, RequestResetUseCase

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_request_reset_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RequestResetUseCase:
    return RequestResetUseCase(
        uow,
        reset_link_base_url=ApplicationConfig.RESET_LINK_BASE_URL,
        token_ttl_seconds=ApplicationConfig.RESET_TOKEN_TTL_SECONDS,
    )


def get_redeem_reset_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RedeemResetUseCase:
    return RedeemResetUseCase(uow, hash_rounds=ApplicationConfig.PASSWORD_HASH_ROUNDS)
