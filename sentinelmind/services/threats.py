# sentinelmind/services/threats.py
import logging
from enum import StrEnum

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from sentinelmind.core.errors import StorageUnavailable
from sentinelmind.db.models import Threat

logger = logging.getLogger(__name__)


class ThreatType(StrEnum):
    URL = "URL"
    EMAIL = "Email"


class Severity(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


# Más reciente primero; el id desempata timestamps iguales
_NEWEST_FIRST = (Threat.timestamp.desc(), Threat.id.desc())


class ThreatStore:
    """
    Registro de amenazas analizadas. Solo inserción y lectura: los registros
    son inmutables una vez creados.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._sessions = session_factory

    async def insert(
        self,
        type: str,
        content: str,
        risk_score: int,
        severity: str,
        intent: str,
        verdict: str,
    ) -> int:
        row = Threat(
            type=type,
            content=content,
            risk_score=risk_score,
            severity=severity,
            intent=intent,
            verdict=verdict,
        )
        try:
            async with self._sessions() as s:
                s.add(row)
                await s.commit()
        except SQLAlchemyError as e:
            logger.error("threat insert failed: %s", e)
            raise StorageUnavailable(f"threats insert failed: {e.__class__.__name__}") from e
        logger.info("threat recorded: id=%s type=%s severity=%s", row.id, row.type, row.severity)
        return row.id

    async def list_all(self) -> list[Threat]:
        return await self._rows(select(Threat).order_by(*_NEWEST_FIRST))

    async def count_all(self) -> int:
        return await self._scalar(select(func.count(Threat.id)))

    async def average_risk_score(self) -> float:
        avg = await self._scalar(select(func.avg(Threat.risk_score)))
        return float(avg) if avg is not None else 0.0

    async def count_by_severity(self, label: str) -> int:
        return await self._scalar(select(func.count(Threat.id)).where(Threat.severity == label))

    async def recent(self, n: int) -> list[Threat]:
        """Los n más recientes, en orden cronológico (antiguo -> nuevo) para gráficas."""
        rows = await self._rows(select(Threat).order_by(*_NEWEST_FIRST).limit(max(n, 0)))
        rows.reverse()
        return rows

    async def _rows(self, stmt) -> list[Threat]:
        try:
            async with self._sessions() as s:
                return list((await s.execute(stmt)).scalars().all())
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"threats query failed: {e.__class__.__name__}") from e

    async def _scalar(self, stmt):
        try:
            async with self._sessions() as s:
                return (await s.execute(stmt)).scalar_one()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"threats query failed: {e.__class__.__name__}") from e
