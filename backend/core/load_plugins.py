# core/load_plugins.py
from core.logger import get_logger

logger = get_logger(__name__)


def load_plugins():
    # Adapters
    from core.register_adapters import register_adapters

    register_adapters()

    from core.adapter_factory_registry import (
        AdapterFactoryRegistry,
        DirectionsFactoryRegistry,
    )

    logger.info(
        f"matrix adapters: {AdapterFactoryRegistry.list_adapters()}; "
        f"directions providers: {DirectionsFactoryRegistry.list_providers()}"
    )
