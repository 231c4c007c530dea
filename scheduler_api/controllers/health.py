from fastapi import APIRouter

from scheduler_api import state

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    store_status = "disconnected"
    if state.store is not None:
        store_status = "healthy" if await state.store.ping() else "unhealthy"

    redis_status = "disabled"
    if state.redis_client:
        try:
            await state.redis_client.ping()
            redis_status = "healthy"
        except Exception:
            redis_status = "unhealthy"

    status = "ok" if store_status == "healthy" else "degraded"
    return {"status": status, "store": store_status, "redis": redis_status}
