import json
import logging
from typing import Any, Dict

from clubauthz.app.services.notifications import NotificationPublisher

logger = logging.getLogger(__name__)


class LoggingNotificationPublisher(NotificationPublisher):
    """Emits notification events to the log for an external delivery worker"""

    async def publish(self, event_type: str, payload: Dict[str, Any]) -> None:
        logger.info(f"notification {event_type} {json.dumps(payload, default=str, sort_keys=True)}")
