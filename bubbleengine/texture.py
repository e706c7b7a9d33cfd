"""Texture descriptions: pixel formats, sampling options and byte sizes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple


class PixelFormat(enum.IntEnum):
    """Pixel formats of texture data, valued as the OpenGL enumerants."""

    DEPTH_COMPONENT = 0x1902
    RED = 0x1903
    RGB = 0x1907
    RGBA = 0x1908
    RGB8 = 0x8051
    RGBA8 = 0x8058
    R8 = 0x8229


_CHANNEL_FORMATS = {
    1: (PixelFormat.R8, PixelFormat.RED),
    3: (PixelFormat.RGB8, PixelFormat.RGB),
    4: (PixelFormat.RGBA8, PixelFormat.RGBA),
}

_CHANNELS = {
    PixelFormat.RGBA: 4,
    PixelFormat.RGB: 3,
    PixelFormat.RED: 1,
}


@dataclass
class Texture2DSpecification:
    """Size, formats and sampling options of a 2D texture.

    ``internal_format`` is how the texture is stored, ``data_format`` the layout
    of the pixel data handed over; ``channel_format`` is ``"unsigned_byte"`` or
    ``"float"``, filters are ``"linear"`` or ``"nearest"`` and wraps are
    ``"repeat"``, ``"clamp"``, ``"clamp_to_border"`` or ``"mirrored_repeat"``.
    """

    width: int = 0
    height: int = 0
    channel_format: str = "unsigned_byte"
    internal_format: PixelFormat = PixelFormat.RGBA8
    data_format: PixelFormat = PixelFormat.RGBA
    min_filter: str = "linear"
    mag_filter: str = "linear"
    wrap_s: str = "repeat"
    wrap_t: str = "repeat"
    border_color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    flip: bool = False
    mipmap: bool = False
    anisotropic_filtering: bool = False

    def set_channels(self, channels: int) -> None:
        """Choose formats for images of 1, 3 or 4 channels."""
        try:
            self.internal_format, self.data_format = _CHANNEL_FORMATS[channels]
        except KeyError:
            raise ValueError(f"unsupported number of channels: {channels}") from None

    def channel_count(self) -> int:
        """Channels per pixel of the data format."""
        try:
            return _CHANNELS[self.data_format]
        except KeyError:
            raise ValueError(
                f"unsupported data format: {self.data_format!r}"
            ) from None


def texture_size(spec: Texture2DSpecification) -> int:
    """Number of bytes the whole texture's pixel data takes, one byte per channel."""
    return spec.width * spec.height * spec.channel_count()