# bridge/factory.py

from typing import Optional

import httpx

from bridge.bridge_interface import IBridgeAdapter
from models.config import AppConfig
from models.enums import BridgeApiVersion
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.BRIDGE)


def create_bridge(
    config: AppConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> IBridgeAdapter:
    """
    Build the adapter for the configured protocol generation.

    This is the only place that looks at api_version.
    """
    if config.api_version is BridgeApiVersion.V2:
        from bridge.resource_graph_bridge import ResourceGraphBridge

        bridge = ResourceGraphBridge(
            host=config.bridge_host,
            application_key=config.bridge_username,
            group_id=config.group_id,
            timeout=config.request_timeout,
            verify=config.verify_tls,
            transport=transport,
        )
    else:
        from bridge.flat_api_bridge import FlatApiBridge

        bridge = FlatApiBridge(
            host=config.bridge_host,
            username=config.bridge_username,
            group_id=int(config.group_id) if config.group_id else None,
            timeout=config.request_timeout,
            transport=transport,
        )

    log.info(
        "Bridge adapter created",
        adapter=bridge.__class__.__name__,
        host=config.bridge_host,
        group=config.group_id,
    )
    return bridge
