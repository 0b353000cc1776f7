# adapters/adapter_factory.py
from core.adapter_factory_registry import AdapterFactoryRegistry, DirectionsFactoryRegistry
from core.interfaces import DirectionsAdapter, DistanceMatrixAdapter


def create_adapter(name: str) -> DistanceMatrixAdapter:
    return AdapterFactoryRegistry.get(name)


def create_directions_adapter(name: str) -> DirectionsAdapter:
    return DirectionsFactoryRegistry.get(name)
