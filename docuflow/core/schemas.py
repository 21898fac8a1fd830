"""
Shared pydantic base for persisted entities and API payloads.

Persisted JSON and API payloads use camelCase keys; Python code uses
snake_case attributes.
"""
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_store(self, **kwargs: Any) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys, as written to the store."""
        return self.model_dump(by_alias=True, mode="json", **kwargs)

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly set to a value on a partial update, as attributes (not dumped)."""
        return {
            field: getattr(self, field)
            for field in self.model_fields_set
            if getattr(self, field) is not None
        }
