"""Bots API Client for the Eclipse bot registry."""

import logging
from typing import List

from ..models import BotRecord
from .base_client import APIClientError, EclipseAPIClient

logger = logging.getLogger(__name__)


class BotsAPIClient(EclipseAPIClient):
    """API client listing registered bot accounts."""

    def get_bots(self) -> List[BotRecord]:
        """Fetch every registered bot record.

        Raises:
            APIClientError: If the registry cannot be read
        """
        data = self._get_json("")
        if not isinstance(data, list):
            raise APIClientError(f"Unexpected bots response type: {type(data)}")
        bots = [self._parse(BotRecord, entry, "bots") for entry in data]
        logger.debug(f"Loaded {len(bots)} bot records")
        return bots
