"""Request models for API endpoints."""
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ClaimRequest(BaseModel):
    """Claim body. `website` is the honeypot and must be present and blank."""
    model_config = ConfigDict(extra="allow")

    website: Optional[str] = Field(None, description="Decoy field, leave empty")

    @field_validator("website", mode="before")
    @classmethod
    def coerce_website(cls, v: Any):
        """Any non-null value is compared as text."""
        if v is None or isinstance(v, str):
            return v
        return str(v)


class AddKeyRequest(BaseModel):
    """Operator request to add a key. Fields are validated by the service so
    that missing values map to missing_fields rather than a schema error."""
    title: Optional[str] = Field(None, description="Display title")
    image_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("imageUrl", "image_url"),
        description="Display image URL"
    )
    secret: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("secret", "steamKey"),
        description="Redemption code"
    )

    @field_validator("title", "image_url", "secret", mode="before")
    @classmethod
    def coerce_text(cls, v: Any):
        if v is None or isinstance(v, str):
            return v
        return str(v)
