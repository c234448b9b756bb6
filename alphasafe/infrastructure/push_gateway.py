"""Push gateway.

No device registry exists yet, so pushes are only logged.
"""

import structlog

logger = structlog.get_logger(__name__)


class LoggingPushGateway:
    async def send(self, technician_name: str, title: str, body: str) -> dict:
        logger.info(
            "[PUSH SIMULATION] push notification",
            technician=technician_name,
            title=title,
            body=body,
        )
        return {"simulated": True}
