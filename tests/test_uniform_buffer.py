import struct

import pytest

from bubbleengine.layout import BufferElement, BufferLayout, GLSLDataType, glsl_type_size
from bubbleengine.uniform_buffer import (
    UniformBuffer,
    std140_alignment,
    std140_size,
)


def light_layout():
    return BufferLayout(
        [
            BufferElement(GLSLDataType.INT, "Type"),
            BufferElement(GLSLDataType.FLOAT, "Brightness"),
            BufferElement(GLSLDataType.FLOAT, "Constant"),
            BufferElement(GLSLDataType.FLOAT, "Linear"),
            BufferElement(GLSLDataType.FLOAT, "Quadratic"),
            BufferElement(GLSLDataType.FLOAT, "CutOff"),
            BufferElement(GLSLDataType.FLOAT, "OuterCutOff"),
            BufferElement(GLSLDataType.FLOAT3, "Color"),
            BufferElement(GLSLDataType.FLOAT3, "Direction"),
            BufferElement(GLSLDataType.FLOAT3, "Position"),
        ]
    )


def projection_view_layout():
    return BufferLayout(
        [
            BufferElement(GLSLDataType.MAT4, "Projection"),
            BufferElement(GLSLDataType.MAT4, "View"),
        ]
    )


def element(buffer, name):
    return next(e for e in buffer.layout if e.name == name)


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        std140_size(GLSLDataType.NONE)
    with pytest.raises(ValueError):
        std140_alignment(GLSLDataType.NONE)


def test_vec3_is_padded_like_vec4():
    assert std140_size(GLSLDataType.FLOAT3) == std140_size(GLSLDataType.FLOAT4)
    assert std140_alignment(GLSLDataType.FLOAT3) == std140_alignment(GLSLDataType.FLOAT4)
    assert std140_size(GLSLDataType.MAT3) == std140_size(GLSLDataType.MAT4)


def test_light_layout_matches_light_struct():
    buffer = UniformBuffer(1, light_layout(), 30, 16)
    assert element(buffer, "Color").offset == 32
    assert buffer.layout.stride == 80


def test_light_layout_invariants():
    buffer = UniformBuffer(1, light_layout())
    previous_end = 0
    for e in buffer.layout:
        assert e.offset % std140_alignment(e.data_type) == 0
        assert e.offset >= previous_end
        previous_end = e.offset + e.size
    assert buffer.layout.stride % std140_size(GLSLDataType.FLOAT4) == 0
    assert buffer.layout.stride >= previous_end


def test_projection_view_layout():
    buffer = UniformBuffer(0, projection_view_layout())
    mat4 = std140_size(GLSLDataType.MAT4)
    assert element(buffer, "View").offset == mat4
    assert buffer.layout.stride == 2 * mat4
    assert buffer.buffer_size == buffer.layout.stride


def test_buffer_size_counts_array_and_reserved_bytes():
    reserved = 16
    count = 30
    buffer = UniformBuffer(1, light_layout(), count, reserved)
    assert buffer.buffer_size == buffer.layout.stride * count + reserved
    assert len(buffer.data) == buffer.buffer_size
    assert len(buffer) == count


def test_source_layout_is_not_modified():
    layout = light_layout()
    UniformBuffer(1, layout)
    color = next(e for e in layout if e.name == "Color")
    assert color.size == glsl_type_size(GLSLDataType.FLOAT3)


def test_index_out_of_range():
    buffer = UniformBuffer(1, light_layout(), 2)
    buffer[1].set_int("Type", 3)
    offset = buffer.layout.stride + element(buffer, "Type").offset
    assert struct.unpack_from("<i", buffer.data, offset)[0] == 3
    with pytest.raises(IndexError):
        buffer[2]
    with pytest.raises(IndexError):
        buffer[-1]


def test_set_int_writes_at_element_offset():
    buffer = UniformBuffer(1, light_layout(), 3)
    buffer[1].set_int("Type", 7)
    offset = buffer.layout.stride + element(buffer, "Type").offset
    assert struct.unpack_from("<i", buffer.data, offset)[0] == 7


def test_set_float_and_float3():
    buffer = UniformBuffer(1, light_layout(), 3)
    buffer[2].set_float("Brightness", 0.5)
    buffer[2].set_float3("Position", [1.5, -2.0, 0.25])
    base = buffer.layout.stride * 2
    brightness = struct.unpack_from("<f", buffer.data, base + element(buffer, "Brightness").offset)
    position = struct.unpack_from("<3f", buffer.data, base + element(buffer, "Position").offset)
    assert brightness == (0.5,)
    assert position == (1.5, -2.0, 0.25)


def test_set_float3_leaves_other_structs_untouched():
    buffer = UniformBuffer(1, light_layout(), 2)
    buffer[1].set_float3("Color", [1.0, 1.0, 1.0])
    stride = buffer.layout.stride
    assert buffer.data[:stride] == bytes(stride)


def test_set_mat4_stores_column_major():
    buffer = UniformBuffer(0, projection_view_layout())
    matrix = [[float(4 * r + c) for c in range(4)] for r in range(4)]
    buffer[0].set_mat4("View", matrix)
    stored = struct.unpack_from("<16f", buffer.data, element(buffer, "View").offset)
    for r in range(4):
        for c in range(4):
            assert stored[4 * c + r] == matrix[r][c]


def test_set_float2_and_float4():
    layout = BufferLayout(
        [
            BufferElement(GLSLDataType.FLOAT2, "UV"),
            BufferElement(GLSLDataType.FLOAT4, "Tint"),
        ]
    )
    buffer = UniformBuffer(3, layout)
    buffer[0].set_float2("UV", (0.5, 0.75))
    buffer[0].set_float4("Tint", (1.0, 0.5, 0.25, 0.0))
    assert struct.unpack_from("<2f", buffer.data, element(buffer, "UV").offset) == (0.5, 0.75)
    assert struct.unpack_from("<4f", buffer.data, element(buffer, "Tint").offset) == (1.0, 0.5, 0.25, 0.0)


def test_missing_or_mistyped_element_raises_key_error():
    buffer = UniformBuffer(1, light_layout())
    with pytest.raises(KeyError):
        buffer[0].set_float("Missing", 1.0)
    with pytest.raises(KeyError):
        buffer[0].set_int("Brightness", 1)


def test_wrong_vector_length_raises():
    buffer = UniformBuffer(1, light_layout())
    with pytest.raises(ValueError):
        buffer[0].set_float3("Color", [1.0, 2.0])
    with pytest.raises(ValueError):
        UniformBuffer(0, projection_view_layout())[0].set_mat4("View", [1.0] * 9)


def test_raw_set_data_and_bounds():
    buffer = UniformBuffer(1, light_layout(), 1, 16)
    payload = struct.pack("<i", 5)
    buffer.set_data(payload)
    assert buffer.data[: len(payload)] == payload
    with pytest.raises(ValueError):
        buffer.set_data(b"\x01", buffer.buffer_size)


def test_element_set_data_is_relative_to_struct():
    buffer = UniformBuffer(1, light_layout(), 2)
    payload = b"\xab\xcd"
    buffer[1].set_data(payload, 4)
    start = buffer.layout.stride + 4
    assert buffer.data[start:start + len(payload)] == payload