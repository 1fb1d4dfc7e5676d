"""
Credential and identity models for the Roaming Service.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.config import UINT32_MAX
from .secrets import ANDROID_APPKEY


class Credential(BaseModel):
    """Access key plus the application key it was issued for."""

    model_config = ConfigDict(frozen=True)

    access_key: str
    appkey: str

    @classmethod
    def from_web(cls, access_key: str) -> "Credential":
        """Web requests carry only the access key; they sign as the Android app."""
        return cls(access_key=access_key, appkey=ANDROID_APPKEY)


class Identity(BaseModel):
    """Resolved platform account."""

    model_config = ConfigDict(frozen=True)

    mid: int = Field(ge=0, le=UINT32_MAX)
    name: str


class AccountInfoResponse(BaseModel):
    """Envelope returned by the account-info endpoint."""

    code: int
    message: str = ""
    data: Optional[Identity] = None
