"""
Stream types returned by providers.

Two stream types:
  - file: direct mp4 URL(s) keyed by quality label
  - hls: a single m3u8 playlist URL
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union


@dataclass(frozen=True)
class StreamFile:
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    type: Literal["mp4"] = "mp4"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "url": self.url}
        if self.headers:
            data["headers"] = dict(self.headers)
        return data


@dataclass(frozen=True)
class FileStream:
    qualities: Dict[str, StreamFile]
    flags: List[str] = field(default_factory=list)
    type: Literal["file"] = "file"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "flags": _flag_values(self.flags),
            "qualities": {quality: file.to_dict() for quality, file in self.qualities.items()},
        }


@dataclass(frozen=True)
class HlsStream:
    playlist: str
    flags: List[str] = field(default_factory=list)
    type: Literal["hls"] = "hls"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "flags": _flag_values(self.flags),
            "playlist": self.playlist,
        }


Stream = Union[FileStream, HlsStream]


def is_valid_stream(stream: Optional[Stream]) -> bool:
    """Return True when the stream carries at least one playable locator."""

    if isinstance(stream, FileStream):
        return any(file is not None and bool(file.url) for file in stream.qualities.values())
    if isinstance(stream, HlsStream):
        return bool(stream.playlist)
    return False


def _flag_values(flags: List[str]) -> List[str]:
    return [getattr(flag, "value", flag) for flag in flags]
