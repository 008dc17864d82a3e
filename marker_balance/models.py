from __future__ import annotations

from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .rules import NO_POSITION


class Verdict(BaseModel):
    """
    Outcome of a balance scan.

    position is NO_POSITION (-1) when balanced, otherwise the index of the
    first offending marker in the source.
    """

    model_config = ConfigDict(frozen=True)

    balanced: bool
    position: int = NO_POSITION

    @model_validator(mode="after")
    def _position_matches_verdict(self) -> "Verdict":
        if self.position < NO_POSITION:
            raise ValueError(f"position must be >= {NO_POSITION}, got {self.position}")
        if self.balanced != (self.position == NO_POSITION):
            raise ValueError(f"balanced={self.balanced} contradicts position={self.position}")
        return self

    @classmethod
    def ok(cls) -> "Verdict":
        return cls(balanced=True, position=NO_POSITION)

    @classmethod
    def unbalanced_at(cls, position: int) -> "Verdict":
        return cls(balanced=False, position=position)


Markers = Union[str, List[str]]


class BalanceRequest(BaseModel):
    source: Optional[str] = None
    opening: Optional[Markers] = Field(default=None, examples=[["(", "["]])
    closing: Optional[Markers] = Field(default=None, examples=[[")", "]"]])


class BalanceResponse(BaseModel):
    balanced: bool
    position: int = NO_POSITION
    pairs: int


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class FileBalanceResponse(BalanceResponse):
    encoding: EncodingReport


class HealthResponse(BaseModel):
    ok: bool = True
