"""
Base schemas with standardized serialization for consistent API responses.
"""

from pydantic import BaseModel, ConfigDict


class StandardizedModel(BaseModel):  # type: ignore[misc]
    """Response base: enum values on the wire, camelCase aliases, snake_case accepted."""

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)
