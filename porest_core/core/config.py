"""Library configuration loaded from environment variables and ``.env`` files."""

from pathlib import Path
from typing import Annotated, List, Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _split_csv(
    value: Union[str, List[str], tuple[str, ...], set[str], None], field_name: str
) -> List[str]:
    """Normalize a comma-separated env value into a list of trimmed strings.

    Args:
        value: Raw env value (None, list/tuple/set, or comma-separated string).
        field_name: Setting name used in the error message.

    Returns:
        List of non-empty strings.

    Raises:
        ValueError: If the input cannot be parsed.
    """
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(item).strip() for item in value if str(item).strip()]
    raise ValueError(f"{field_name} must be a list or comma-separated string")


class Settings(BaseSettings):
    """Typed settings for services built on porest-core."""

    PROJECT_NAME: str = "Porest API"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="local", alias="ENV")
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default_factory=list)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIR: Path = Path("logs")

    # i18n
    DEFAULT_LOCALE: str = "ko"
    SUPPORTED_LOCALES: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["ko", "en"]
    )
    LOCALE_PARAM_NAME: str = "lang"
    MESSAGE_DIRS: Annotated[List[Path], NoDecode] = Field(default_factory=list)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(
        cls, value: Union[str, List[str], tuple[str, ...], set[str], None]
    ) -> List[str]:
        """Normalize CORS origins from env variables."""
        return _split_csv(value, "CORS_ORIGINS")

    @field_validator("SUPPORTED_LOCALES", mode="before")
    @classmethod
    def parse_supported_locales(
        cls, value: Union[str, List[str], tuple[str, ...], set[str], None]
    ) -> List[str]:
        """Normalize supported locales to lower-case tags.

        Args:
            value: Raw env value (None, list/tuple/set, or comma-separated string).

        Returns:
            Lower-cased locale tags in declaration order.

        Raises:
            ValueError: If the input cannot be parsed or is empty.
        """
        locales = [item.lower() for item in _split_csv(value, "SUPPORTED_LOCALES")]
        if not locales:
            raise ValueError("SUPPORTED_LOCALES must contain at least one locale")
        return locales

    @field_validator("MESSAGE_DIRS", mode="before")
    @classmethod
    def parse_message_dirs(
        cls, value: Union[str, List[str], tuple[str, ...], set[str], None]
    ) -> List[str]:
        """Normalize extra message bundle directories."""
        return _split_csv(value, "MESSAGE_DIRS")

    @field_validator("DEFAULT_LOCALE")
    @classmethod
    def normalize_default_locale(cls, value: str) -> str:
        """Lower-case the default locale tag."""
        return value.strip().lower()

    @model_validator(mode="after")
    def check_default_locale_supported(self) -> "Settings":
        """Reject a default locale that is not among the supported locales.

        Raises:
            ValueError: If ``DEFAULT_LOCALE`` is not in ``SUPPORTED_LOCALES``.
        """
        if self.DEFAULT_LOCALE not in self.SUPPORTED_LOCALES:
            raise ValueError(
                f"DEFAULT_LOCALE {self.DEFAULT_LOCALE!r} is not in SUPPORTED_LOCALES"
            )
        return self


settings = Settings()
