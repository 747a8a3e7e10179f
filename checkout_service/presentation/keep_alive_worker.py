import asyncio
import logging
import sys

from checkout_service.infrastructure.http_clients import HTTPHealthPinger
from checkout_service.application.keep_alive import PingServicesUseCase
from checkout_service.config import settings

logger = logging.getLogger(__name__)


async def keep_alive_worker(interval: float = settings.KEEPALIVE_INTERVAL_SECONDS):
    """Периодически пингует health endpoints других сервисов"""
    logger.info(f"Keep-alive worker запущен, интервал {interval} c")

    use_case = PingServicesUseCase(
        pinger=HTTPHealthPinger(timeout=settings.KEEPALIVE_TIMEOUT_SECONDS),
        endpoints=settings.KEEPALIVE_ENDPOINTS,
        enabled=settings.KEEPALIVE_ENABLED
    )

    while True:
        try:
            succeeded = await use_case()
            logger.info(f"Keep-alive: успешных пингов {succeeded}")
        except Exception as e:
            logger.error(f"Ошибка в keep-alive worker: {e}", exc_info=True)
        await asyncio.sleep(interval)


async def main():
    await keep_alive_worker()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    asyncio.run(main())
