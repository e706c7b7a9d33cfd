"""GLSL data types and vertex buffer layouts."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Iterator


class GLSLDataType(enum.Enum):
    """Data types that can appear in a shader buffer."""

    NONE = 0
    FLOAT = 1
    FLOAT2 = 2
    FLOAT3 = 3
    FLOAT4 = 4
    MAT3 = 5
    MAT4 = 6
    INT = 7
    INT2 = 8
    INT3 = 9
    INT4 = 10
    BOOL = 11


_SIZES = {
    GLSLDataType.FLOAT: 4,
    GLSLDataType.FLOAT2: 4 * 2,
    GLSLDataType.FLOAT3: 4 * 3,
    GLSLDataType.FLOAT4: 4 * 4,
    GLSLDataType.MAT3: 4 * 3 * 3,
    GLSLDataType.MAT4: 4 * 4 * 4,
    GLSLDataType.INT: 4,
    GLSLDataType.INT2: 4 * 2,
    GLSLDataType.INT3: 4 * 3,
    GLSLDataType.INT4: 4 * 4,
    GLSLDataType.BOOL: 1,
}

_COMPONENTS = {
    GLSLDataType.FLOAT: 1,
    GLSLDataType.FLOAT2: 2,
    GLSLDataType.FLOAT3: 3,
    GLSLDataType.FLOAT4: 4,
    GLSLDataType.MAT3: 3,
    GLSLDataType.MAT4: 4,
    GLSLDataType.INT: 1,
    GLSLDataType.INT2: 2,
    GLSLDataType.INT3: 3,
    GLSLDataType.INT4: 4,
    GLSLDataType.BOOL: 1,
}


def glsl_type_size(data_type: GLSLDataType) -> int:
    """Tightly packed size in bytes of one value of ``data_type``."""
    try:
        return _SIZES[data_type]
    except KeyError:
        raise ValueError(f"unknown GLSL data type: {data_type!r}") from None


@dataclass
class BufferElement:
    """One named attribute of a buffer layout."""

    data_type: GLSLDataType
    name: str
    count: int = 1
    normalized: bool = False
    size: int = field(init=False)
    offset: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.size = glsl_type_size(self.data_type)

    def component_count(self) -> int:
        """Number of components (columns for matrices) of the element's type."""
        try:
            return _COMPONENTS[self.data_type]
        except KeyError:
            raise ValueError(f"unknown GLSL data type: {self.data_type!r}") from None


class BufferLayout:
    """An ordered list of buffer elements with computed offsets and stride.

    When the first element has a count above one, attributes are stored one
    block after another rather than interleaved, and the stride is zero.
    """

    def __init__(self, elements: Iterable[BufferElement] = ()) -> None:
        self.elements: list[BufferElement] = list(elements)
        self.stride = 0
        if self.elements:
            self._calculate_offsets_and_stride()

    def _calculate_offsets_and_stride(self) -> None:
        offset = 0
        stride = 0
        for element in self.elements:
            element.offset = offset
            offset += element.size * element.count
            stride += element.size
        self.stride = stride if self.elements[0].count == 1 else 0

    def __iter__(self) -> Iterator[BufferElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, index: int) -> BufferElement:
        return self.elements[index]

    def __repr__(self) -> str:
        return f"BufferLayout(elements={self.elements!r}, stride={self.stride})"