from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_base_url: str = "https://api.mclo.gs"
    http_timeout_seconds: float = 30.0
    user_agent: str = "mclogs-uploader/1.4"

    clipboard_engine: Literal["pyperclip", "command", "none"] = "pyperclip"
    clipboard_command: str = ""
