from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vicipack.wire.grammar import DEFAULT_MAX_DEPTH

DuplicateKeyPolicy = Literal["error", "last"]


class CodecSettings(BaseSettings):
    max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=1, validation_alias="VICIPACK_MAX_DEPTH")
    duplicate_keys: DuplicateKeyPolicy = Field("error", validation_alias="VICIPACK_DUPLICATE_KEYS")
    log_level: str = Field("WARNING", validation_alias="VICIPACK_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> CodecSettings:
    return CodecSettings()
