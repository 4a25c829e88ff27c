import logging

from ..models.opportunity import Opportunity

logger = logging.getLogger(__name__)


class NotifierGroup:
    """Fan one opportunity batch out to several notifiers.

    A notifier that raises is logged and skipped; the others still run.
    """

    def __init__(self, notifiers: list):
        self.notifiers = list(notifiers)

    async def notify(self, opportunities: list[Opportunity]) -> None:
        for notifier in self.notifiers:
            try:
                await notifier.notify(opportunities)
            except Exception as e:
                logger.error(f"{type(notifier).__name__} failed: {e}")
