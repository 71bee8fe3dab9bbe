"""Pydantic schema for the health endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus store reachability. No gate; carries nothing about users or tokens."""

    status: Literal["ok"] = "ok"
    environment: Literal["dev", "prod"] = Field(description="APP_ENV of the running process")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether a SELECT 1 through the connection pool succeeded",
    )
