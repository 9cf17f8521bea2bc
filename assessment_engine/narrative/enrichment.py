import logging
import httpx
import json
from typing import Dict, Any, Optional

from assessment_engine.config import EngineSettings, get_settings

logger = logging.getLogger(__name__)

OVERALL_ASSESSMENT_PATH = "/api/assessment"
CATEGORY_ASSESSMENT_PATH = "/api/category-assessment"


class NarrativeEnrichmentClient:
    """
    Asks an external text-generation service for richer prose about computed results.

    Every failure mode (disabled, non-2xx, timeout, transport error, bad body)
    returns None so callers fall back to the template text.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        settings = settings or get_settings()
        self.enabled = settings.enrichment_enabled
        self.base_url = settings.enrichment_base_url.rstrip("/")
        self.timeout = settings.enrichment_timeout_seconds

    async def fetch_overall_assessment(self, context: Dict[str, Any]) -> Optional[str]:
        return await self._post(OVERALL_ASSESSMENT_PATH, context)

    async def fetch_category_assessment(self, context: Dict[str, Any]) -> Optional[str]:
        """Used for both categories and areas; the payload names which one."""
        return await self._post(CATEGORY_ASSESSMENT_PATH, context)

    async def _post(self, path: str, context: Dict[str, Any]) -> Optional[str]:
        if not self.enabled:
            return None

        url = f"{self.base_url}{path}"
        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }

        async with httpx.AsyncClient() as client:
            try:
                logger.debug(f"Sending POST request to {url}")
                response = await client.post(
                    url,
                    headers=headers,
                    content=json.dumps(context),
                    timeout=self.timeout,
                )
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"HTTP error occurred while fetching assessment text: {e.response.status_code} - {e.response.text}")
                return None
            except httpx.RequestError as e:
                logger.error(f"Request error occurred while fetching assessment text: {e}")
                return None
            except ValueError as e:
                logger.warning(f"Assessment service returned a non-JSON body: {e}")
                return None

        if not isinstance(data, dict):
            logger.warning("Assessment service returned an unexpected payload shape")
            return None
        text = data.get("assessment")
        if not isinstance(text, str) or not text.strip():
            return None
        return text.strip()
