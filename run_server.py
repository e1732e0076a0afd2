import logging
import threading

import uvicorn

from monit_collector import Collector, CollectorConfig, HandoffQueue, project_any
from monit_collector.api import create_app

logger = logging.getLogger("monit_collector.consumer")


def consume(handoff: HandoffQueue):
    """Example consumer: log every service a notification reports."""
    for document in handoff.drain():
        logger.info(
            "%s uptime=%ss services=%d",
            document.server.local_hostname, document.server.uptime, len(document.services)
        )
        for service in document.services:
            result = project_any(service)
            if result.is_failure:
                logger.warning(result.error.message)
                continue
            view = result.value
            logger.info("  %-12s %-24s status=%d", view.kind.label, view.name, view.status)
        if document.has_event:
            logger.info("  event on %s: %s", document.event.service, document.event.message)


if __name__ == "__main__":
    config = CollectorConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    handoff = HandoffQueue(capacity=config.queue_capacity)
    collector = Collector(handoff, config)

    consumer = threading.Thread(target=consume, args=(handoff,), name="consumer", daemon=True)
    consumer.start()

    logger.info("Starting Monit collector on %s:%d%s", config.host, config.port, config.route_path)
    uvicorn.run(create_app(collector), host=config.host, port=config.port)

    handoff.close()
    consumer.join(timeout=config.publish_timeout_seconds)
