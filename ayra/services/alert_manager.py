"""Read access to alerts and their safety guidance."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.models.alert import AlertDB
from ayra.models.pagination import IntensityFilter
from ayra.services.exceptions import EntityNotFoundError
from ayra.services.filters import (
    ALERT_SORT_FIELDS,
    PageRequest,
    apply_page,
    build_alert_filters,
    parse_sort,
)

DEFAULT_ALERT_SORT = "alert_datetime,desc"


class AlertManager:
    """Lists alerts and loads one alert with its routes, locations and tips."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def list_alerts(
        self,
        filters: IntensityFilter | None = None,
        page_request: PageRequest | None = None,
        sort: str | None = None,
    ) -> tuple[list[AlertDB], int]:
        """List alerts, newest first unless another sort is given.

        Returns:
            Tuple of (alerts on this page, total matching alerts)
        """
        page_request = page_request or PageRequest()
        clauses = build_alert_filters(filters)
        order_by = parse_sort(sort, ALERT_SORT_FIELDS, DEFAULT_ALERT_SORT)

        total = (
            await self.db_session.execute(select(func.count(AlertDB.id)).where(*clauses))
        ).scalar_one()

        query = select(AlertDB).where(*clauses).order_by(order_by, AlertDB.id.desc())
        result = await self.db_session.execute(apply_page(query, page_request))
        return list(result.scalars().all()), total

    async def get_alert(self, alert_id: int) -> AlertDB:
        """Get an alert by identifier.

        Raises:
            EntityNotFoundError: If no alert has this identifier
        """
        alert = await self.db_session.get(AlertDB, alert_id)
        if alert is None:
            raise EntityNotFoundError("Alert", alert_id)
        return alert
