# app\adapters\api\routers\health.py
from fastapi import APIRouter, Depends, status, Response
from dependency_injector.wiring import inject, Provide
from typing import Dict
import structlog

from app.shared.container import Container
from app.core.ports.key_value_store import IKeyValueStore
from app.core.ports.translator_port import ITranslator

logger = structlog.get_logger()

router = APIRouter(prefix="/health", tags=["System"])

@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe():
    """
    K8s Liveness Probe.
    Returns 200 OK if the service is operational.
    """
    return {"status": "ok", "service": "amigo-api"}

@router.get("/ready", status_code=status.HTTP_200_OK)
@inject
async def readiness_probe(
    response: Response,
    store: IKeyValueStore = Depends(Provide[Container.key_value_store]),
    translator: ITranslator = Depends(Provide[Container.translator]),
) -> Dict[str, str]:
    """
    K8s Readiness Probe.
    Checks the key-value store and the translator configuration.
    Returns 503 Service Unavailable if any critical component is down.
    """
    health_status = {
        "storage": "down",
        "translator": "down",
    }

    # 1. Storage
    try:
        if await store.health_check():
            health_status["storage"] = "up"
    except Exception as e:
        logger.error("health_check_failed", component="storage", error=str(e))

    # 2. Translator (API key present)
    try:
        if await translator.health_check():
            health_status["translator"] = "up"
    except Exception as e:
        logger.error("health_check_failed", component="translator", error=str(e))

    is_healthy = all(state == "up" for state in health_status.values())

    if not is_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("readiness_probe_failed", status=health_status)

    return health_status
