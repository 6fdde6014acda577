"""Run configuration.

Uses BaseModel (not BaseSettings) with a small explicit environment loader.
"""

import os

from pydantic import BaseModel, field_validator

ENV_DATASET_ID = "APICONFORM_DATASET_ID"
ENV_TIMEOUT_SECONDS = "APICONFORM_TIMEOUT_SECONDS"


class RunConfig(BaseModel):
    """Settings for one run of a test suite.

    dataset_id is handed to every recorder untouched. timeout_seconds bounds the
    whole run; None waits for every test to signal completion.
    """

    dataset_id: str = ""
    timeout_seconds: float | None = None

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout_seconds must be positive")
        return value


def load_config(
    dataset_id: str | None = None, timeout_seconds: float | None = None
) -> RunConfig:
    """Build a RunConfig from the environment, with explicit arguments taking precedence.

    Args:
        dataset_id: Overrides APICONFORM_DATASET_ID
        timeout_seconds: Overrides APICONFORM_TIMEOUT_SECONDS

    Returns:
        Validated RunConfig

    Raises:
        pydantic.ValidationError: If a value is invalid
    """
    values: dict[str, object] = {}

    env_dataset = os.environ.get(ENV_DATASET_ID)
    if env_dataset is not None:
        values["dataset_id"] = env_dataset
    env_timeout = os.environ.get(ENV_TIMEOUT_SECONDS)
    if env_timeout:
        values["timeout_seconds"] = env_timeout

    if dataset_id is not None:
        values["dataset_id"] = dataset_id
    if timeout_seconds is not None:
        values["timeout_seconds"] = timeout_seconds

    return RunConfig.model_validate(values)
