"""Request models for API endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class VideoUrlRequest(BaseModel):
    """Request body carrying a YouTube video URL.

    ``url`` is optional at the schema level so that a missing URL is
    answered with the service's own 400 payload instead of a 422.
    """

    url: Optional[str] = Field(
        None,
        description="YouTube video URL",
        examples=["https://www.youtube.com/watch?v=dQw4w9WgXcQ"],
    )

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Optional[str]:
        """Strip whitespace; blank strings count as missing.

        Non-string values (numbers, lists) are kept as text so they are
        rejected later as an invalid URL rather than a schema error.
        """
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"},
                {"url": "https://youtu.be/dQw4w9WgXcQ"},
            ]
        }
    }
