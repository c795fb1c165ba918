"""Service defaults read from the environment."""

import os
from pathlib import Path
from typing import Optional

from .models import TimingDefaults

ENV_PREFIX = "SUBTIMING_"


def load_env_file(env_path: Optional[Path] = None) -> None:
    """Load environment variables from a .env file, without overriding existing ones."""
    env_path = env_path or Path(__file__).parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ.setdefault(key.strip(), value.strip())


def get_timing_defaults() -> TimingDefaults:
    """
    Build TimingDefaults from SUBTIMING_* environment variables.

    Unset variables keep the model defaults. Invalid values raise
    pydantic's ValidationError.
    """
    values = {}
    for name in TimingDefaults.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return TimingDefaults(**values)
