import httpx
import logging
from typing import Optional

from checkout_service.application.interfaces import HealthPinger

logger = logging.getLogger(__name__)


class HTTPHealthPinger(HealthPinger):
    def __init__(self, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._timeout = timeout
        self._transport = transport

    async def ping(self, url: str) -> bool:
        """GET на health endpoint. Ошибки логируются и не пробрасываются."""
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                logger.debug(f"Пинг {url}")
                response = await client.get(url, timeout=self._timeout)

                if response.is_success:
                    logger.info(f"Успешный пинг {url} - {response.status_code}")
                    return True
                logger.warning(f"Пинг {url} вернул статус {response.status_code}")
                return False

        except httpx.RequestError as e:
            logger.warning(f"Пинг {url} не удался - таймаут или ошибка соединения: {e}")
            return False
        except Exception as e:
            logger.error(f"Ошибка пинга {url} - {type(e).__name__}: {e}")
            return False
