"""
catalog_api.db.repositories.health_checks

Repository for `HealthCheck` rows written by the liveness probe.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.db.models import HealthCheck, utcnow


class HealthCheckRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(self) -> HealthCheck:
        check = HealthCheck(check_datetime=utcnow())
        self._session.add(check)
        await self._session.flush()
        return check
