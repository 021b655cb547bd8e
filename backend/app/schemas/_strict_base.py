"""Strict schema baselines with forbidden extras by default."""

from pydantic import BaseModel, ConfigDict


class StrictRequestModel(BaseModel):
    """
    Request DTO base: unexpected fields are rejected.

    Wire names are camelCase (`startTime`); snake_case field names are also
    accepted so Python callers can build requests directly.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True, populate_by_name=True)
