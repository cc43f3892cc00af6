from typing import Any, List, Optional, Union

from pydantic import AnyHttpUrl, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True, env_file="../.env", extra="allow"
    )

    ENVIRONMENT_NAME: str = "Development"

    @property
    def is_production(self):
        return self.ENVIRONMENT_NAME == "Production"

    PROJECT_NAME: str = "Pooled Staking Vault"
    API_V1_STR: str = "/api/v1"
    # BACKEND_CORS_ORIGINS is a JSON-formatted list of origins
    # e.g: '["http://localhost", "http://localhost:4200", "http://localhost:3000"]'
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # 90 days, upper bound for both the unstake cooldown and the reward vesting period
    MAX_COOLDOWN_SECONDS: int = 60 * 60 * 24 * 90
    MAX_VESTING_SECONDS: int = 60 * 60 * 24 * 90

    DEFAULT_UNDERLYING_ASSET: str = "underlying"

    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    SQLALCHEMY_DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: str | None, info: ValidationInfo) -> Any:
        if isinstance(v, str):
            return v
        if not info.data.get("POSTGRES_SERVER"):
            return "sqlite:///./staking_vault.db"
        user = info.data.get("POSTGRES_USER") or ""
        password = info.data.get("POSTGRES_PASSWORD") or ""
        return (
            f"postgresql+psycopg://{user}:{password}"
            f"@{info.data.get('POSTGRES_SERVER')}/{info.data.get('POSTGRES_DB') or ''}"
        )

    LOG_DIR: str = "~/logs"

    # Seq log
    SEQ_SERVER_URL: Optional[str] = None
    SEQ_SERVER_API_KEY: Optional[str] = None


settings = Settings()
