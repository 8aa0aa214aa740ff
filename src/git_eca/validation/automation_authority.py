"""Allow-list and bot registry checks."""

import logging
from typing import Iterable, List, Optional, Sequence

from ..api_clients import APIClientError
from ..config import MailPolicy
from ..models import BotRecord, Project
from .interfaces import AutomationRegistry, Cache

logger = logging.getLogger(__name__)

BOTS_CACHE_KEY = "allBots"


def bot_matches(
    bots: Iterable[BotRecord], mail: str, project_ids: Optional[Sequence[str]]
) -> bool:
    """True if a bot registered to one of project_ids uses mail.

    With no project ids every bot is considered, which keeps untracked
    repositories working for any registered bot.
    """
    if not project_ids:
        return any(bot.matches_mail(mail) for bot in bots)
    bots = list(bots)
    for project_id in project_ids:
        for bot in bots:
            if bot.is_owned_by(project_id) and bot.matches_mail(mail):
                return True
    return False


class AutomationAuthority:
    """Decides whether a mail address belongs to an allowed or automated sender."""

    def __init__(
        self,
        registry: AutomationRegistry,
        cache: Cache,
        mail_policy: MailPolicy,
    ):
        self.registry = registry
        self.cache = cache
        self.mail_policy = mail_policy

    def is_allowed(self, mail: Optional[str]) -> bool:
        return self.mail_policy.is_allowed(mail)

    def is_automation(
        self, mail: Optional[str], projects: Optional[Sequence[Project]]
    ) -> bool:
        if mail is None or not mail.strip():
            return False
        project_ids = [p.project_id for p in projects or []]
        logger.debug(f"Checking bots of projects {project_ids} for mail '{mail}'")
        return bot_matches(self.get_bots(), mail, project_ids)

    def is_trusted(
        self, mail: Optional[str], projects: Optional[Sequence[Project]]
    ) -> bool:
        """Allow-listed or a bot for the matched projects."""
        return self.is_allowed(mail) or self.is_automation(mail, projects)

    def get_bots(self) -> List[BotRecord]:
        try:
            bots = self.cache.get(BOTS_CACHE_KEY, self.registry.get_bots)
        except APIClientError as e:
            logger.error(f"Could not load bots: {e}")
            return []
        return bots or []
