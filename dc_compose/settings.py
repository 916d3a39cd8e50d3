"""Settings for page composition."""

from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from dc_common.config import env_int, env_text
from dc_common.errors import ConfigurationError, wrap_error


class ComposeSettings(BaseModel):
    """Tunables shared by composition and chunk labelling."""

    placeholder_label: str = Field(
        default="Over Time",
        min_length=1,
        description="Tab label for unfiltered nested groups that have no parent item",
    )
    chunk_label_max_length: int = Field(
        default=50, ge=8, description="Maximum length of generated chunk labels"
    )
    chunk_label_default: str = Field(
        default="viz", min_length=1, description="Chunk label used when nothing better exists"
    )

    model_config = {"extra": "ignore", "frozen": True}

    @field_validator("placeholder_label", "chunk_label_default")
    @classmethod
    def _strip(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("value must not be blank")
        return stripped

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ComposeSettings":
        """Build settings from ``DC_*`` environment variables."""
        data: dict[str, object] = {}
        placeholder_label = env_text("DC_PLACEHOLDER_LABEL", environ)
        if placeholder_label is not None:
            data["placeholder_label"] = placeholder_label
        max_length = env_int("DC_CHUNK_LABEL_MAX_LENGTH", environ)
        if max_length is not None:
            data["chunk_label_max_length"] = max_length
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise wrap_error(
                ConfigurationError,
                "Invalid composition settings in environment",
                context={"errors": exc.errors(include_url=False)},
                cause=exc,
            ) from exc
