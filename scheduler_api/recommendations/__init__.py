from scheduler_api.recommendations.eligibility import is_eligible, slot_duration_minutes
from scheduler_api.recommendations.engine import RecommendationEngine, build_recommendations
from scheduler_api.recommendations.ranking import rank
from scheduler_api.recommendations.resolver import AvailabilityPartition, AvailabilityResolver, known_users
from scheduler_api.recommendations.scoring import availability_percentage

__all__ = [
    "AvailabilityPartition",
    "AvailabilityResolver",
    "RecommendationEngine",
    "availability_percentage",
    "build_recommendations",
    "is_eligible",
    "known_users",
    "rank",
    "slot_duration_minutes",
]
