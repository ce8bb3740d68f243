from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Optional provider flags, in the order the SendSms endpoint documents them.
PROVIDER_KEYS = ("UN", "PW", "CR", "RI", "O", "D", "LONGSMS")


class BallouSettings(BaseSettings):
    service_name: str = Field("ballou-gateway")
    log_level: str = Field("INFO")

    token: Optional[str] = None
    un: Optional[str] = None
    pw: Optional[str] = None
    cr: Optional[str] = None
    ri: Optional[str] = None
    o: Optional[str] = None
    d: Optional[str] = None
    longsms: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="BALLOU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if v is None or v == "":
            return "INFO"
        return str(v).strip().upper()

    def as_gateway_config(self) -> Dict[str, str]:
        """Return the upper-case mapping the gateway consumes.

        Unset values are left out so the gateway falls back to its own
        defaults rather than sending the string ``"None"``.
        """
        config: Dict[str, str] = {}
        if self.token is not None:
            config["token"] = self.token
        for key in PROVIDER_KEYS:
            value = getattr(self, key.lower())
            if value is not None:
                config[key] = value
        return config


_settings = None


def get_settings() -> BallouSettings:
    global _settings
    if _settings is None:
        _settings = BallouSettings()
    return _settings
