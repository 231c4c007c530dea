from scheduler_api.models.scheduling import Recommendation


def _rank_key(rec: Recommendation) -> tuple[float, float, str]:
    # highest percentage first, then earliest start, then slot id
    return (
        -rec.availability_percentage,
        rec.timeslot.start_time.timestamp(),
        rec.timeslot.id,
    )


def rank(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Order recommendations best first.

    Sorted by percentage descending; ties go to the earlier start time and
    then to the smaller slot id, so the order never depends on input order.
    """
    return sorted(recommendations, key=_rank_key)
