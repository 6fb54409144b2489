"""Avatar change requests and their validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self, cast

from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator

from parley.domain.ports.storage import UploadedFile

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping


@dataclass(frozen=True, slots=True)
class DefaultAvatar:
    """Switch to one of the protected default avatars."""

    name: str


@dataclass(frozen=True, slots=True)
class UploadedAvatar:
    """Replace the avatar with a freshly uploaded image."""

    file: UploadedFile


type AvatarRequest = DefaultAvatar | UploadedAvatar


class AvatarRequestPayload(BaseModel):
    """Raw request body: exactly one of ``default`` or ``image``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    default: str | None = None
    image: UploadedFile | None = None

    @model_validator(mode="after")
    def _exactly_one(self, info: ValidationInfo) -> Self:
        if (self.default is None) == (self.image is None):
            raise ValueError("exactly one of 'default' or 'image' is required")
        defaults: Collection[str] | None = (info.context or {}).get("defaults")
        if self.default is not None and defaults is not None and self.default not in defaults:
            raise ValueError(f"{self.default!r} is not a default avatar")
        return self

    def to_request(self) -> AvatarRequest:
        if self.default is not None:
            return DefaultAvatar(name=self.default)
        return UploadedAvatar(file=cast("UploadedFile", self.image))


def parse_avatar_request(
    params: Mapping[str, Any], defaults: Collection[str]
) -> AvatarRequest:
    """Validate a raw payload; raises ``pydantic.ValidationError``."""

    payload = AvatarRequestPayload.model_validate(dict(params), context={"defaults": defaults})
    return payload.to_request()
