"""Review page payload models."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from review_feed.core.errors import DecodeError


class ReviewRecord(BaseModel):
    """
    A single review as delivered by the server.

    Field aliases are the wire contract and must not change.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    avatar_url: str | None = Field(default=None, alias="avatar_url")
    first_name: str = Field(..., alias="first_name")
    last_name: str = Field(..., alias="last_name")
    rating: int = Field(..., description="Rating, 1-5 expected but not enforced")
    photo_urls: list[str] | None = Field(default=None, alias="photo_urls")
    text: str
    created: str = Field(..., description="Opaque display string")

    @property
    def has_photos(self) -> bool:
        return bool(self.photo_urls)


class ReviewsPage(BaseModel):
    """One page of reviews plus the server-reported total."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(..., ge=0, description="Total number of reviews on the server")
    items: list[ReviewRecord] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    @classmethod
    def decode(cls, payload: bytes | str) -> "ReviewsPage":
        """
        Decode a JSON page payload.

        Raises:
            DecodeError: The payload is not valid JSON or does not match the schema
        """
        try:
            return cls.model_validate_json(payload)
        except ValidationError as e:
            raise DecodeError(f"Malformed reviews page: {e.error_count()} error(s)") from e
