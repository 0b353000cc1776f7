from fastapi import APIRouter
from core.adapter_factory_registry import AdapterFactoryRegistry, DirectionsFactoryRegistry

router = APIRouter(prefix="/status", tags=["status"])


@router.get("/adapters")
def adapters():
    return {
        "adapters": AdapterFactoryRegistry.list_adapters(),
        "directions": DirectionsFactoryRegistry.list_providers(),
    }


@router.get("/health")
def health():
    return {"status": "ok"}
