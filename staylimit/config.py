from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="STAYLIMIT_")

    app_name: str = "StayLimit"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/staylimit"

    # When True, a stay only ends at a later departure from the same country.
    # Default: False (the next entry in date order ends the stay)
    require_matching_departure: bool = False


settings = Settings()


# =============================================================================
# RESIDENCY CLASSIFICATION
# =============================================================================

# Fraction of a threshold at which a stay is flagged as approaching the limit
WARNING_RATIO = 0.8

# Threshold used for new custom rules when none is given
DEFAULT_THRESHOLD = 183
