"""
Base schema classes shared by every service
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model that speaks camelCase on the wire and snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with wire aliases into JSON-safe primitives"""
        return self.model_dump(by_alias=True, mode="json")
