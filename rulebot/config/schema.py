"""Configuration schema using Pydantic."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndexConfig(BaseModel):
    """Similarity index configuration."""
    dimensions: int = Field(default=100, ge=1, le=4096, description="Fingerprint width (hash buckets)")
    min_token_length: int = Field(default=3, ge=1, description="Shortest token that counts toward a fingerprint")


class AgentConfig(BaseModel):
    """Intent engine configuration."""
    top_k: int = Field(default=3, ge=1, le=50, description="Rules retrieved per input")
    min_similarity: float = Field(default=0.0, ge=0.0, lt=1.0, description="Hits at or below this score are ignored")


class ReminderConfig(BaseModel):
    """Reminder scheduler configuration."""
    grace_minutes: float = Field(default=5.0, ge=0.0, description="Late reminders inside this window still fire")
    upcoming_window_hours: float = Field(default=24.0, gt=0.0)


class TaskStoreConfig(BaseModel):
    """In-memory task store configuration."""
    max_tasks: int = Field(default=1000, ge=1, le=100000)


class Config(BaseSettings):
    """Root configuration for rulebot."""
    model_config = SettingsConfigDict(env_prefix="RULEBOT_", env_nested_delimiter="__")

    index: IndexConfig = Field(default_factory=IndexConfig)
    agent: AgentConfig = Field(default_factory=AgentConfig)
    reminders: ReminderConfig = Field(default_factory=ReminderConfig)
    tasks: TaskStoreConfig = Field(default_factory=TaskStoreConfig)
