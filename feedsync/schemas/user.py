"""Social profile schemas."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class DappEntry(BaseModel):
    """An application listed in a user's social profile."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    url: str = ""
    public_key: str = Field(..., alias="publicKey")
    img: str = ""


class UserProfile(BaseModel):
    """A user's social profile document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    username: str = ""
    about_me: str = Field("", alias="aboutMe")
    location: str = ""
    avatar: str = ""
    dapps: Dict[str, DappEntry] = Field(default_factory=dict)
