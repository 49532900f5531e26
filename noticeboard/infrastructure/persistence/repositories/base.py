"""Base repository: session handling and error translation shared by all repositories."""

from typing import Any

from sqlalchemy import Executable
from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import AsyncSession

from noticeboard.infrastructure.persistence.database import translate_store_errors


class BaseRepository:
    """Holds the session; every statement goes through _execute so transient
    driver errors surface as StoreUnavailableException."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @property
    def dialect_name(self) -> str:
        return self.db.get_bind().dialect.name

    async def _execute(self, stmt: Executable, **kwargs: Any) -> Result[Any]:
        async with translate_store_errors():
            return await self.db.execute(stmt, **kwargs)

    async def _flush(self) -> None:
        async with translate_store_errors():
            await self.db.flush()
