from fastapi import APIRouter

from scheduler_api.dependencies import Engine
from scheduler_api.models.scheduling import RecommendationsResponse

router = APIRouter(tags=["recommendations"])


@router.get("/events/{event_id}/recommendations", response_model=RecommendationsResponse)
async def get_recommendations(event_id: str, engine: Engine) -> RecommendationsResponse:
    return RecommendationsResponse(recommendations=await engine.recommend(event_id))
