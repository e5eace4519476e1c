"""Statistics routes."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from users_api.models.envelope import SuccessResponse
from users_api.models.stats import MemoryUsage, StatsResponse
from users_api.services import get_user_service
from users_api.services.runtime import memory_usage
from users_common.services.user_service import UserService

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=SuccessResponse[StatsResponse])
def get_stats(
    request: Request,
    service: UserService = Depends(get_user_service),
) -> SuccessResponse[StatsResponse]:
    """Report user counts and process figures sampled now.

    Uptime and memory describe this process only and are never stored.
    """
    total_users, active_users = service.count_users()
    stats = StatsResponse(
        total_users=total_users,
        active_users=active_users,
        uptime=request.app.state.clock.uptime(),
        memory_usage=MemoryUsage(**memory_usage()),
        timestamp=datetime.now(UTC),
    )
    return SuccessResponse[StatsResponse](data=stats)
