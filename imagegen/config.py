from functools import lru_cache
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the image generator."""

    #----------------------------------------------------------
    # Provider settings
    #----------------------------------------------------------
    replicate_api_token: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices(
            "replicate_api_token",
            "IMAGEGEN_REPLICATE_API_TOKEN",
            "REPLICATE_API_TOKEN",
        ),
        description="API token for authenticating with Replicate.",
    )

    #----------------------------------------------------------
    # Relay settings
    #----------------------------------------------------------
    default_model: str = Field(
        default="black-forest-labs/flux-schnell",
        description="Model identifier used when a request does not name one.",
    )
    require_model: bool = Field(
        default=False,
        description="If true, requests without a model are rejected instead of using the default.",
    )

    #----------------------------------------------------------
    # Logging
    #----------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Root logging level applied at startup.",
    )

    model_config = SettingsConfigDict(
        env_prefix="IMAGEGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
