"""Application settings loaded from environment variables using pydantic-settings."""

from pydantic_settings import BaseSettings

from clientlink.entity.matcher import MatcherConfig
from clientlink.entity.normalize import DEFAULT_CORPORATE_SUFFIXES, normalize_name


class Settings(BaseSettings):
    """clientlink application configuration.

    All settings can be overridden via environment variables. List settings
    are read as JSON, e.g. EXTRA_CORPORATE_SUFFIXES='["cia", "filial"]'.
    """

    DATABASE_DIR: str = "./data"
    FRONTEND_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"
    EXTRA_CORPORATE_SUFFIXES: list[str] = []
    REPLACE_CORPORATE_SUFFIXES: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def build_matcher_config(settings: Settings) -> MatcherConfig:
    """Translate settings into the matcher's suffix configuration.

    Extra tokens go through the name normalizer so 'S/A' or 'Cia.' match the
    normalized text they will be applied to.
    """
    extra = {normalize_name(token) for token in settings.EXTRA_CORPORATE_SUFFIXES}
    extra.discard("")
    if settings.REPLACE_CORPORATE_SUFFIXES:
        return MatcherConfig(corporate_suffixes=frozenset(extra))
    return MatcherConfig(corporate_suffixes=DEFAULT_CORPORATE_SUFFIXES | extra)
