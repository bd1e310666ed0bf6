"""Project-level configuration and path helpers."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Union

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, field_validator

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "reporting.log"
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"

LISTENER_ENABLED_PROPERTY_NAME = "reporting.listeners.uid.tracking.enabled"
OUTPUT_DIR_PROPERTY_NAME = "reporting.listeners.uid.tracking.output.dir"
OUTPUT_FILE_PROPERTY_NAME = "reporting.listeners.uid.tracking.output.file"

DEFAULT_OUTPUT_DIR = Path("build")
DEFAULT_FILE_NAME = "unique-test-ids.txt"


PathLike = Union[str, Path]


def env_name(key: str) -> str:
    """Map a dotted configuration key to its environment variable name."""
    return key.replace(".", "_").upper()


def resolve_output_dir(value: PathLike | None = None) -> Path:
    """Resolve the tracking output directory (relative to the working directory)."""
    if not value:
        return DEFAULT_OUTPUT_DIR
    return Path(value)


class ReportingConfig(BaseModel):
    """Configuration for one execution session, built once before it starts."""

    model_config = ConfigDict(frozen=True)

    uid_tracking_enabled: bool = False
    uid_tracking_output_dir: Path = DEFAULT_OUTPUT_DIR
    uid_tracking_output_file: str = DEFAULT_FILE_NAME

    @field_validator("uid_tracking_enabled", mode="before")
    @classmethod
    def _parse_switch(cls, value):
        # Only a case-insensitive "true" enables; anything else disables.
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() == "true"

    @field_validator("uid_tracking_output_dir", mode="before")
    @classmethod
    def _resolve_dir(cls, value):
        return resolve_output_dir(value)

    @field_validator("uid_tracking_output_file", mode="before")
    @classmethod
    def _check_file_name(cls, value):
        if not value:
            return DEFAULT_FILE_NAME
        if Path(str(value)).name != str(value):
            raise ValueError(f"Output file must be a plain file name, got {value!r}")
        return value

    @property
    def output_path(self) -> Path:
        return self.uid_tracking_output_dir / self.uid_tracking_output_file

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, str]) -> "ReportingConfig":
        """Build from dotted configuration keys; unknown keys are ignored."""
        return cls(
            uid_tracking_enabled=parameters.get(LISTENER_ENABLED_PROPERTY_NAME),
            uid_tracking_output_dir=parameters.get(OUTPUT_DIR_PROPERTY_NAME),
            uid_tracking_output_file=parameters.get(OUTPUT_FILE_PROPERTY_NAME),
        )

    @classmethod
    def from_env(
        cls,
        env_file: PathLike | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "ReportingConfig":
        """Build from a .env file overlaid by the process environment.

        The environment is read, never modified.
        """
        if environ is None:
            environ = os.environ
        path = Path(env_file) if env_file else DEFAULT_ENV_FILE
        values = {k: v for k, v in dotenv_values(path).items() if v is not None}
        values.update(environ)

        keys = (
            LISTENER_ENABLED_PROPERTY_NAME,
            OUTPUT_DIR_PROPERTY_NAME,
            OUTPUT_FILE_PROPERTY_NAME,
        )
        return cls.from_parameters(
            {key: values[env_name(key)] for key in keys if env_name(key) in values}
        )
