"""Statistics response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MemoryUsage(BaseModel):
    """Process memory sampled at request time."""

    rss: int = Field(..., description="Resident set size in bytes")


class StatsResponse(BaseModel):
    """Aggregate user counters plus process-level figures."""

    total_users: int = Field(..., alias="totalUsers")
    active_users: int = Field(..., alias="activeUsers")
    uptime: float = Field(..., description="Seconds since the application started")
    memory_usage: MemoryUsage = Field(..., alias="memoryUsage")
    timestamp: datetime

    model_config = ConfigDict(populate_by_name=True)
