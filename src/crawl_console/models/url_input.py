"""
URL Input Models
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ValidationState = Literal["idle", "valid", "invalid"]


class UrlCheck(BaseModel):
    """Outcome of validating a candidate URL"""

    model_config = ConfigDict(frozen=True)

    state: ValidationState = "idle"
    message: str = ""

    @property
    def is_valid(self) -> bool:
        return self.state == "valid"


class UrlInputState(BaseModel):
    value: str
    check: UrlCheck
    pending: bool = Field(
        ..., description="True while a debounced validation has not run yet"
    )


class UrlInputChange(BaseModel):
    value: str


class HistorySelection(BaseModel):
    url: str
