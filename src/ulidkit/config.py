"""Generator configuration.

Environment Variables:
    ULIDKIT_WAIT_INTERVAL_SECONDS: Sleep between clock samples while an exact
        generation waits for the next millisecond (default 0.001)
    ULIDKIT_MAX_BATCH_SIZE: Largest count accepted by a single generate call
        (default 2**32 - 1)
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

from ulidkit.constants import DEFAULT_WAIT_INTERVAL_SECONDS, MAX_BATCH_SIZE

ENV_WAIT_INTERVAL_SECONDS = "ULIDKIT_WAIT_INTERVAL_SECONDS"
ENV_MAX_BATCH_SIZE = "ULIDKIT_MAX_BATCH_SIZE"


class GeneratorConfig(BaseModel):
    """Tunables shared by the generators.

    Frozen and strict, like every other model in the package: unknown
    fields are rejected and instances can be shared between threads.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    wait_interval_seconds: float = Field(default=DEFAULT_WAIT_INTERVAL_SECONDS, gt=0)
    max_batch_size: int = Field(default=MAX_BATCH_SIZE, ge=1, le=MAX_BATCH_SIZE)

    @classmethod
    def from_env(cls) -> GeneratorConfig:
        """Build a config from ULIDKIT_* environment variables, defaulting the rest."""
        values: dict[str, str] = {}
        wait_interval = os.environ.get(ENV_WAIT_INTERVAL_SECONDS)
        if wait_interval:
            values["wait_interval_seconds"] = wait_interval.strip()
        max_batch = os.environ.get(ENV_MAX_BATCH_SIZE)
        if max_batch:
            values["max_batch_size"] = max_batch.strip()
        return cls.model_validate(values)


DEFAULT_CONFIG = GeneratorConfig()
