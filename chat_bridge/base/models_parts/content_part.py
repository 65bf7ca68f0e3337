"""
ContentPart DTO for multimodal message content.

A part is a tagged variant keyed by ``type``. Text parts carry ``text``; image
parts carry an ``image_url`` (either an ``https://`` URL or a ``data:`` URL with
base64 payload); file parts carry a ``file`` mapping with ``filename`` and a
``file_data`` data URL (PDFs, mostly).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional

ContentPartType = Literal["text", "image_url", "file"]


@dataclass
class ContentPart:
    """One element of a structured message body.

    Attributes:
        type: Discriminator (``"text"``, ``"image_url"`` or ``"file"``).
        text: Text payload for ``text`` parts.
        image_url: URL or data URL for ``image_url`` parts.
        file: Mapping with ``filename`` / ``file_data`` for ``file`` parts.
    """

    type: ContentPartType
    text: Optional[str] = None
    image_url: Optional[str] = None
    file: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContentPart":
        image = data.get("image_url")
        if isinstance(image, Mapping):
            image = image.get("url")
        return cls(
            type=data.get("type", "text"),
            text=data.get("text"),
            image_url=image,
            file=dict(data.get("file") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI wire shape of this part."""
        if self.type == "image_url":
            return {"type": "image_url", "image_url": {"url": self.image_url}}
        if self.type == "file":
            return {"type": "file", "file": dict(self.file)}
        return {"type": "text", "text": self.text or ""}


__all__ = ["ContentPart", "ContentPartType"]
