"""
Configuration loader for Sadhana Coach.
Loads environment variables and exposes typed accessors.

Centralized configuration for the scoring engines and the HTTP service.
"""
import os
from dataclasses import dataclass

from sadhana_coach.exceptions import ConfigurationError

try:
  # Optional: load from .env if present during local dev
  from dotenv import load_dotenv  # type: ignore
  load_dotenv()
except ImportError:
  pass


@dataclass(frozen=True)
class Settings:
  """Application settings loaded from environment variables."""

  # Server Configuration
  port: int = int(os.getenv("PORT", "8080"))
  host: str = os.getenv("HOST", "0.0.0.0")

  # Application Settings
  debug: bool = os.getenv("DEBUG", "true").lower() == "true"
  log_level: str = os.getenv("LOG_LEVEL", "info")

  # Pose Scoring Configuration
  pose_visibility_threshold: float = float(os.getenv("POSE_VISIBILITY_THRESHOLD", "0.5"))
  pose_jitter_spread: float = float(os.getenv("POSE_JITTER_SPREAD", "3.0"))
  pose_jitter_enabled: bool = os.getenv("POSE_JITTER_ENABLED", "true").lower() == "true"

  # Rate Limiting
  analyze_rate_limit: str = os.getenv("ANALYZE_RATE_LIMIT", "120/minute")

  # CORS Configuration
  cors_origins: str = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:5173,http://localhost:8080"
  )

  def validate(self) -> None:
    """Validate configuration values."""
    if not 0.0 <= self.pose_visibility_threshold <= 1.0:
      raise ConfigurationError(
        f"POSE_VISIBILITY_THRESHOLD must be between 0 and 1, got {self.pose_visibility_threshold}"
      )

    if self.pose_jitter_spread < 0:
      raise ConfigurationError(
        f"POSE_JITTER_SPREAD must be non-negative, got {self.pose_jitter_spread}"
      )

    if not 0 < self.port < 65536:
      raise ConfigurationError(f"PORT out of range: {self.port}")

  @property
  def is_production(self) -> bool:
    """Check if running in production mode."""
    return not self.debug

  @property
  def cors_origin_list(self) -> list:
    """CORS origins as a list."""
    return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
