"""SIRENE (French company registry) client.

API docs: https://public.opendatasoft.com/explore/dataset/economicref-france-sirene-v3/
No authentication required.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ...config import get_sirene_api_base, get_sirene_timeout
from ..models import CLOSED_VERDICT, OPENED_VERDICT, UNREACHABLE_VERDICT, Verdict

logger = logging.getLogger(__name__)

DATASET = "economicref-france-sirene-v3"
ACTIVE_STATE = "Actif"
CONNECT_TIMEOUT_SECONDS = 10.0


class SireneClient:
    """Looks up a SIREN number and normalizes the answer into a Verdict.

    `lookup` never raises: any transport or payload problem becomes the
    unable_to_reach_api verdict.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or get_sirene_api_base()
        self.timeout = timeout if timeout is not None else get_sirene_timeout()
        self._transport = transport

    async def lookup(self, siren: str) -> Verdict:
        try:
            status = await self._fetch_administrative_status(siren)
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("SIRENE lookup failed for %s: %s", siren, exc)
            return UNREACHABLE_VERDICT

        logger.debug("SIRENE %s administrative status: %s", siren, status)
        if status == ACTIVE_STATE:
            return OPENED_VERDICT
        return CLOSED_VERDICT

    async def _fetch_administrative_status(self, siren: str) -> str:
        """Return the administrative status of the most recently processed head office."""
        params = {
            "dataset": DATASET,
            "q": siren,
            "sort": "datederniertraitementetablissement",
            "refine.etablissementsiege": "oui",
        }

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=min(CONNECT_TIMEOUT_SECONDS, self.timeout)),
            transport=self._transport,
        ) as client:
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()

        records = data["records"]
        if not records:
            raise IndexError(f"no head office record for {siren}")
        return records[0]["fields"]["etatadministratifetablissement"]
