from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ONTOCHECK_", env_file=".env", extra="ignore")

    app_name: str = "ontocheck"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Input parsing (None means infer from the file extension)
    csv_delimiter: str | None = None
    ontology_format: str | None = None

    # Entity resolution
    resolver_cache_size: int = Field(default=4096, ge=0)

    # Classification: owlrl, hermit, pellet or structural
    reasoner: str = "owlrl"

    # Output: text or json
    output_format: str = "text"


settings = Settings()
