"""Models listing returned by ``GET /models``."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ModelInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    created: Optional[int] = None
    object: Optional[str] = None
    owned_by: Optional[str] = None


class ModelList(BaseModel):
    """Available models advertised by the endpoint."""

    model_config = ConfigDict(extra="ignore")

    object: Optional[str] = None
    data: List[ModelInfo]

    def ids(self) -> List[str]:
        return [m.id for m in self.data]


__all__ = ["ModelInfo", "ModelList"]
