# src/dynamodb_etl/core/config.py
"""
Configuration schema and loading for dynamodb-etl.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction and passed explicitly
to the pipeline; there is no process-wide mutable configuration.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_BIN_PATH = ".projectBinaryData.B"
DEFAULT_TEXT_PATH = ".projectData.S"

ENVVAR_PREFIX = "DYNAMODB_ETL"


class RecodeSettings(BaseModel):
    """Paths of the two recoded fields.

    Example YAML:
        binpath: .projectBinaryData.B
        textpath: .projectData.S

    Path syntax is checked when the pipeline compiles its queries, not
    here: an invalid expression is a fatal startup error of the run.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    binpath: str = Field(
        default=DEFAULT_BIN_PATH,
        description="jq path of the base64+gzip encoded field",
    )
    textpath: str = Field(
        default=DEFAULT_TEXT_PATH,
        description="jq path of the JSON-encoded string field",
    )

    @field_validator("binpath", "textpath")
    @classmethod
    def validate_path_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("path expression must not be empty")
        return v


def load_settings(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> RecodeSettings:
    """Load settings with precedence (highest first):

    1. overrides (command-line options); None values are ignored
    2. Environment variables (DYNAMODB_ETL_BINPATH, DYNAMODB_ETL_TEXTPATH)
    3. Config file (YAML)
    4. Defaults from the Pydantic schema

    Args:
        config_path: Optional path to a YAML settings file
        overrides: Explicit values, typically from CLI options

    Returns:
        Validated RecodeSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
    )

    # Dynaconf returns uppercase keys mixed with its own internal settings;
    # keep only the fields RecodeSettings declares
    known_fields = RecodeSettings.model_fields.keys()
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k.lower() in known_fields}

    if overrides:
        raw_config.update({k: v for k, v in overrides.items() if v is not None})

    return RecodeSettings(**raw_config)
