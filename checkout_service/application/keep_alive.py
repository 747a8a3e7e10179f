import logging

from checkout_service.application.interfaces import HealthPinger

logger = logging.getLogger(__name__)


class PingServicesUseCase:
    def __init__(self, pinger: HealthPinger, endpoints: list[str], enabled: bool = True):
        self._pinger = pinger
        self._endpoints = endpoints
        self._enabled = enabled

    async def __call__(self) -> int:
        """Пингует все настроенные endpoints. Возвращает количество успешных."""
        if not self._enabled:
            return 0

        logger.info(f"Keep-alive пинг {len(self._endpoints)} сервис(ов)")
        succeeded = 0
        for url in self._endpoints:
            if await self._pinger.ping(url):
                succeeded += 1
        return succeeded
