"""Shared base model for camelCase wire payloads."""

from typing import Any, Dict

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON keys.

    Unknown keys sent by the server are ignored, so new backend fields do
    not break older clients.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    def to_payload(self, *, exclude_none: bool = False) -> Dict[str, Any]:
        """Return a JSON-ready dictionary keyed by the wire names."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=exclude_none)
