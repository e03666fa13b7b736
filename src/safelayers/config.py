"""Runtime configuration for safety-layer stacks."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from safelayers.errors import ConfigError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")
    log_json: bool | None = Field(alias="LOG_JSON", default=None)

    # Layers wrapped around a zero agent when no explicit count is given
    safety_default_layers: int = Field(alias="SAFETY_DEFAULT_LAYERS", default=1)
    safety_max_layers: int = Field(alias="SAFETY_MAX_LAYERS", default=256)
    # Tries per layer to find a perturbation distinct from the current model
    safety_mutation_attempts: int = Field(alias="SAFETY_MUTATION_ATTEMPTS", default=4)
    safety_log_probes: int = Field(alias="SAFETY_LOG_PROBES", default=0)


def validate_settings_for_env(settings: Settings) -> None:
    invalid: list[str] = []

    if settings.safety_max_layers < 0:
        invalid.append("SAFETY_MAX_LAYERS(must be >= 0)")
    if settings.safety_default_layers < 0:
        invalid.append("SAFETY_DEFAULT_LAYERS(must be >= 0)")
    if settings.safety_default_layers > settings.safety_max_layers:
        invalid.append("SAFETY_DEFAULT_LAYERS(exceeds SAFETY_MAX_LAYERS)")
    if settings.safety_mutation_attempts < 1:
        invalid.append("SAFETY_MUTATION_ATTEMPTS(must be >= 1)")
    if settings.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        invalid.append("LOG_LEVEL")

    if invalid:
        keys = ", ".join(sorted(set(invalid)))
        raise ConfigError(f"invalid configuration: {keys}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
