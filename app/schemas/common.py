from typing import Any, Dict

from pydantic import BaseModel


class PatchModel(BaseModel):
    """Request body for partial updates.

    Only fields the client sent with a non-null value end up in the patch, so
    omitted (or null) fields keep their stored value.
    """

    class Config:
        str_strip_whitespace = True
        use_enum_values = True

    def to_patch(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)
