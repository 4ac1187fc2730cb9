"""
Custom agent API configuration.

Base URL, API key and agent identifiers for the external AI service,
plus the toggle that disables remote project analysis.

Dependencies: pydantic, pydantic_settings
System role: Outbound AI integration configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cigno.configs.base import BaseSettings


class AgentSettings(BaseSettings):
    """External custom agent configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = Field(
        default="https://ai.vave.ch",
        description="Base URL of the custom agent API",
    )
    api_key: str | None = Field(
        default=None,
        description="Static key sent in the X-API-Key header",
    )
    custom_agent_id: str | None = Field(
        default=None,
        description="Agent used to enrich project descriptions",
    )
    insights_agent_id: str | None = Field(
        default=None,
        description="Agent used for insight generation",
    )
    storyline_agent_id: str | None = Field(
        default=None,
        description="Agent used for storyline generation",
    )
    brief_score_agent_id: str | None = Field(
        default=None,
        description="Agent used to score deliverable briefs",
    )
    timeout_seconds: float = Field(
        default=60.0,
        description="Timeout for a single agent call",
    )
    remote_analysis_enabled: bool = Field(
        default=True,
        description="Call the remote agent during project analysis",
    )
