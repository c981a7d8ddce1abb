"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field


class SessionServiceConfig(BaseModel):
    """Connection to the session server that owns coworker sessions."""

    base_url: str = "http://127.0.0.1:4096"
    directory: str | None = None  # Project directory sent with each request
    timeout: float | None = None  # None: wait as long as the server does


class CoworkersConfig(BaseModel):
    """Root configuration for the coworkers plugin."""

    storage: Literal["sqlite", "json"] = "sqlite"
    data_dir: str | None = None
    default_agent_type: str = "general"
    session: SessionServiceConfig = Field(default_factory=SessionServiceConfig)
