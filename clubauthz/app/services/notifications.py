from abc import ABC, abstractmethod
from typing import Any, Dict

GRANT_CREATED = "grant.created"
GRANT_EXPIRING = "grant.expiring"
GRANT_EXPIRED = "grant.expired"
GRANT_REVOKED = "grant.revoked"


class NotificationPublisher(ABC):
    """
    Outbound notification events. Delivery (email, push) is handled by an
    external worker; publishing must not fail the caller.
    """

    @abstractmethod
    async def publish(self, event_type: str, payload: Dict[str, Any]) -> None:
        pass
