"""Uniform buffers laid out with std140 rules, backed by host memory."""

from __future__ import annotations

import dataclasses
import struct
from typing import Any, Sequence, Union

import numpy as np

from .layout import BufferElement, BufferLayout, GLSLDataType

BytesLike = Union[bytes, bytearray, memoryview]

_STD140_SIZES = {
    GLSLDataType.FLOAT: 4,
    GLSLDataType.FLOAT2: 4 * 2,
    GLSLDataType.FLOAT3: 4 * 4,
    GLSLDataType.FLOAT4: 4 * 4,
    GLSLDataType.MAT3: 4 * 4 * 4,
    GLSLDataType.MAT4: 4 * 4 * 4,
    GLSLDataType.INT: 4,
    GLSLDataType.INT2: 4 * 2,
    GLSLDataType.INT3: 4 * 4,
    GLSLDataType.INT4: 4 * 4,
    GLSLDataType.BOOL: 4,
}

_STD140_ALIGNMENTS = {
    GLSLDataType.FLOAT: 4,
    GLSLDataType.FLOAT2: 8,
    GLSLDataType.FLOAT3: 16,
    GLSLDataType.FLOAT4: 16,
    GLSLDataType.MAT3: 16,
    GLSLDataType.MAT4: 16,
    GLSLDataType.INT: 4,
    GLSLDataType.INT2: 8,
    GLSLDataType.INT3: 16,
    GLSLDataType.INT4: 16,
    GLSLDataType.BOOL: 4,
}


def std140_size(data_type: GLSLDataType) -> int:
    """Size in bytes a value of ``data_type`` occupies under std140."""
    try:
        return _STD140_SIZES[data_type]
    except KeyError:
        raise ValueError(f"unknown GLSL data type: {data_type!r}") from None


def std140_alignment(data_type: GLSLDataType) -> int:
    """Base alignment in bytes of ``data_type`` under std140."""
    try:
        return _STD140_ALIGNMENTS[data_type]
    except KeyError:
        raise ValueError(f"unknown GLSL data type: {data_type!r}") from None


def _pad_to(offset: int, alignment: int) -> int:
    remainder = offset % alignment
    return alignment - remainder if remainder else 0


def _std140_layout(layout: BufferLayout) -> BufferLayout:
    """Copy ``layout`` with std140 sizes, offsets and a vec4-aligned stride."""
    elements = [dataclasses.replace(element) for element in layout]
    result = BufferLayout(elements)
    offset = 0
    for element in result:
        element.size = std140_size(element.data_type)
        pad = _pad_to(offset, std140_alignment(element.data_type))
        element.offset = offset + pad
        offset += element.size + pad
    offset += _pad_to(offset, std140_size(GLSLDataType.FLOAT4))
    result.stride = offset
    return result


class UniformBuffer:
    """An array of ``size`` std140 structs plus ``additional_size`` reserved bytes.

    The layout given is copied; the buffer's own layout holds std140 offsets.
    """

    def __init__(
        self,
        binding: int,
        layout: BufferLayout,
        size: int = 1,
        additional_size: int = 0,
    ) -> None:
        if size < 0 or additional_size < 0:
            raise ValueError("buffer sizes must not be negative")
        self.binding = binding
        self.layout = _std140_layout(layout)
        self.size = size
        self.buffer_size = self.layout.stride * size + additional_size
        self._memory = bytearray(self.buffer_size)

    @property
    def data(self) -> bytes:
        """A copy of the buffer's contents."""
        return bytes(self._memory)

    def set_data(self, data: BytesLike, offset: int = 0) -> None:
        """Write raw bytes at ``offset``; std140 padding is the caller's concern."""
        raw = bytes(memoryview(data))
        if offset < 0 or offset + len(raw) > self.buffer_size:
            raise ValueError(
                f"write of {len(raw)} bytes at offset {offset} exceeds "
                f"buffer of {self.buffer_size} bytes"
            )
        self._memory[offset:offset + len(raw)] = raw

    def __getitem__(self, index: int) -> "UniformArrayElement":
        if not 0 <= index < self.size:
            raise IndexError(f"uniform buffer index {index} out of range")
        return UniformArrayElement(self, index)

    def __len__(self) -> int:
        return self.size


class UniformArrayElement:
    """A view of one struct in a uniform buffer's array, written field by field."""

    def __init__(self, buffer: UniformBuffer, index: int) -> None:
        self._buffer = buffer
        self.index = index

    @property
    def _base(self) -> int:
        return self._buffer.layout.stride * self.index

    def set_data(self, data: BytesLike, offset: int = 0) -> None:
        """Write raw bytes at ``offset`` from the start of this struct."""
        self._buffer.set_data(data, self._base + offset)

    def _find(self, name: str, data_type: GLSLDataType) -> BufferElement:
        for element in self._buffer.layout:
            if element.name == name and element.data_type is data_type:
                return element
        raise KeyError(f"uniform buffer element not found: {name} ({data_type.name})")

    def _write(self, element: BufferElement, raw: bytes) -> None:
        self._buffer.set_data(raw.ljust(element.size, b"\0"), self._base + element.offset)

    def _write_vector(self, name: str, data_type: GLSLDataType, value: Sequence[float], length: int) -> None:
        element = self._find(name, data_type)
        array = np.asarray(value, dtype="<f4")
        if array.shape != (length,):
            raise ValueError(f"{name} expects {length} floats, got shape {array.shape}")
        self._write(element, array.tobytes())

    def set_int(self, name: str, value: int) -> None:
        element = self._find(name, GLSLDataType.INT)
        self._write(element, struct.pack("<i", int(value)))

    def set_float(self, name: str, value: float) -> None:
        element = self._find(name, GLSLDataType.FLOAT)
        self._write(element, struct.pack("<f", float(value)))

    def set_float2(self, name: str, value: Sequence[float]) -> None:
        self._write_vector(name, GLSLDataType.FLOAT2, value, 2)

    def set_float3(self, name: str, value: Sequence[float]) -> None:
        self._write_vector(name, GLSLDataType.FLOAT3, value, 3)

    def set_float4(self, name: str, value: Sequence[float]) -> None:
        self._write_vector(name, GLSLDataType.FLOAT4, value, 4)

    def set_mat4(self, name: str, value: Any) -> None:
        """Write a 4x4 matrix given as ``m[row][col]``, or 16 floats already column-major."""
        element = self._find(name, GLSLDataType.MAT4)
        array = np.asarray(value, dtype="<f4")
        if array.shape == (4, 4):
            raw = array.tobytes(order="F")
        elif array.shape == (16,):
            raw = array.tobytes()
        else:
            raise ValueError(f"{name} expects a 4x4 matrix, got shape {array.shape}")
        self._write(element, raw)