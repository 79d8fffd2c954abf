from pydantic import AliasChoices, BaseModel, Field, model_validator
from typing import Optional, List


class ClubLogo(BaseModel):
    """A logo file as received from the client, not yet uploaded."""
    filename: Optional[str] = None
    content_type: Optional[str] = None
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class AssetUpload(BaseModel):
    path: str
    public_url: str


class ClubResponse(BaseModel):
    id: int
    name: str
    slug: str
    logo_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("logo_url", "club_logo"))
    invite_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("invite_id", "club_invite_id"))


class ClubResult(BaseModel):
    """Either `club` is set, or both `error_kind` and `message` are."""
    club: Optional[ClubResponse] = None
    error_kind: Optional[str] = None
    message: Optional[str] = None

    @model_validator(mode="after")
    def _one_of(self):
        if (self.club is None) == (self.error_kind is None):
            raise ValueError("ClubResult needs exactly one of club or error_kind")
        return self


class MemberResponse(BaseModel):
    id: Optional[int] = None
    club_id: int
    profile_id: str


class MyClubsResponse(BaseModel):
    clubs: List[ClubResponse]
