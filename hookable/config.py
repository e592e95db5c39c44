from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HookSettings(BaseSettings):
    """
    Runtime settings for hook dispatch.

    Priority (highest to lowest):
    1. Environment variables (``HOOKABLE_`` prefix)
    2. .env file
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="HOOKABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_DISPATCH: bool = Field(
        default=False,
        description="Emit a TRACE line for every callback called during dispatch",
    )
    LOG_CALLBACK_ERRORS: bool = Field(
        default=True,
        description="Log callback exceptions at ERROR before they propagate",
    )


settings = HookSettings()
