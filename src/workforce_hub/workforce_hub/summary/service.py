from __future__ import annotations

from typing import Optional

from ..access.resolver import Capabilities
from ..metrics.service import MetricsService
from .client import SummaryClient


class SummaryService:
    """Feeds executive-report payloads to the summary collaborator."""

    def __init__(self, metrics: MetricsService, client: SummaryClient):
        self._metrics = metrics
        self._client = client

    async def executive_summary(self, actor: Capabilities, org_id: Optional[str] = None) -> str:
        report = self._metrics.executive_report(actor, org_id)
        return await self._client.generate(report.to_dict())
