# parking_app/client/lot_board.py
"""
Presentation-side state for the lots list and the enforcement table.

LotBoard fetches GET /api/lots and ranks the result locally for the chosen
permit class, target building and sort mode. EnforcementBoard fetches
GET /api/enforcement/alerts. Both refresh on a PeriodicTask; a failed fetch
keeps the last good data and sets `error`. `on_update(board)` runs after
every refresh, successful or not.
"""

from typing import Callable, List, Optional

import httpx

from parking_app.client.poller import PeriodicTask
from parking_app.config import settings
from parking_app.services.ranking_service import (
    PERMIT_CLASSES, SORT_MODES, RankedLot, rank_lots,
)
from parking_app.utils.logger import get_logger

logger = get_logger(__name__)


async def _fetch_list(client: httpx.AsyncClient, path: str) -> list:
    response = await client.get(path)
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, list):
        raise ValueError(f"expected a list from {path}, got {type(data).__name__}")
    return data


class LotBoard:
    def __init__(
        self,
        client: httpx.AsyncClient,
        permit: str = "commuter",
        building: str = None,
        sort_mode: str = "hybrid",
        interval: float = None,
        buildings: dict = None,
        on_update: Callable[["LotBoard"], None] = None,
    ):
        self.client = client
        self.buildings = buildings or settings.BUILDINGS
        self.permit = permit
        self.building = building or settings.DEFAULT_BUILDING
        self.sort_mode = sort_mode
        self._check(self.permit, self.building, self.sort_mode)
        self.on_update = on_update

        self.raw_lots: List[dict] = []
        self.lots: List[RankedLot] = []
        self.loading = True
        self.error: Optional[str] = None
        self.poller = PeriodicTask(self.refresh, interval or settings.LOT_REFRESH_SECONDS, name="lots")

    def _check(self, permit, building, sort_mode):
        if permit not in PERMIT_CLASSES:
            raise ValueError(f"Unknown permit class: {permit}")
        if building not in self.buildings:
            raise ValueError(f"Unknown building: {building}")
        if sort_mode not in SORT_MODES:
            raise ValueError(f"Unknown sort mode: {sort_mode}")

    def rerank(self):
        self.lots = rank_lots(self.raw_lots, self.permit, self.buildings[self.building], self.sort_mode)

    def configure(self, permit: str = None, building: str = None, sort_mode: str = None):
        """Change any of permit / building / sort mode and re-rank the current data."""
        permit = permit or self.permit
        building = building or self.building
        sort_mode = sort_mode or self.sort_mode
        self._check(permit, building, sort_mode)
        self.permit, self.building, self.sort_mode = permit, building, sort_mode
        self.rerank()

    async def refresh(self):
        try:
            self.raw_lots = await _fetch_list(self.client, "/api/lots")
            self.error = None
            self.rerank()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to load lots: {e}")
            self.error = "Failed to load lots"
        finally:
            self.loading = False
        if self.on_update:
            self.on_update(self)

    def start(self):
        self.poller.start()

    async def stop(self):
        await self.poller.stop()


class EnforcementBoard:
    def __init__(self, client: httpx.AsyncClient, interval: float = None,
                 on_update: Callable[["EnforcementBoard"], None] = None):
        self.client = client
        self.on_update = on_update
        self.alerts: List[dict] = []
        self.loading = True
        self.error: Optional[str] = None
        self.poller = PeriodicTask(self.refresh, interval or settings.ALERT_REFRESH_SECONDS, name="alerts")

    async def refresh(self):
        try:
            self.alerts = await _fetch_list(self.client, "/api/enforcement/alerts")
            self.error = None
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to load alerts: {e}")
            self.error = "Failed to load alerts"
        finally:
            self.loading = False
        if self.on_update:
            self.on_update(self)

    def start(self):
        self.poller.start()

    async def stop(self):
        await self.poller.stop()
