import pytest

from bubbleengine.layout import (
    BufferElement,
    BufferLayout,
    GLSLDataType,
    glsl_type_size,
)

VECTOR_TYPES = [
    GLSLDataType.FLOAT,
    GLSLDataType.FLOAT2,
    GLSLDataType.FLOAT3,
    GLSLDataType.FLOAT4,
    GLSLDataType.INT,
    GLSLDataType.INT2,
    GLSLDataType.INT3,
    GLSLDataType.INT4,
]


def test_unknown_type_size_raises():
    with pytest.raises(ValueError):
        glsl_type_size(GLSLDataType.NONE)


def test_unknown_type_component_count_raises():
    with pytest.raises(ValueError):
        BufferElement(GLSLDataType.NONE, "bad")


@pytest.mark.parametrize("data_type", VECTOR_TYPES)
def test_vector_size_is_components_times_scalar(data_type):
    element = BufferElement(data_type, "v")
    scalar = glsl_type_size(GLSLDataType.FLOAT)
    assert glsl_type_size(data_type) == element.component_count() * scalar


def test_matrix_sizes_are_column_multiples():
    assert glsl_type_size(GLSLDataType.MAT4) == 4 * glsl_type_size(GLSLDataType.FLOAT4)
    assert glsl_type_size(GLSLDataType.MAT3) == 3 * glsl_type_size(GLSLDataType.FLOAT3)


def test_element_defaults():
    element = BufferElement(GLSLDataType.FLOAT3, "Position")
    assert element.size == glsl_type_size(GLSLDataType.FLOAT3)
    assert element.count == 1
    assert element.normalized is False
    assert element.offset == 0


def test_interleaved_layout_offsets_and_stride():
    layout = BufferLayout(
        [
            BufferElement(GLSLDataType.FLOAT3, "Position"),
            BufferElement(GLSLDataType.FLOAT3, "Normal"),
            BufferElement(GLSLDataType.FLOAT2, "TexCoords"),
        ]
    )
    sizes = [element.size for element in layout]
    offsets = [element.offset for element in layout]
    assert offsets == [0, sizes[0], sizes[0] + sizes[1]]
    assert layout.stride == sum(sizes)


def test_block_layout_uses_counts_and_zero_stride():
    positions, normals = 5, 5
    layout = BufferLayout(
        [
            BufferElement(GLSLDataType.FLOAT3, "Position", positions),
            BufferElement(GLSLDataType.FLOAT3, "Normal", normals),
            BufferElement(GLSLDataType.FLOAT2, "TexCoords", positions),
        ]
    )
    first, second, third = layout
    assert second.offset == first.size * positions
    assert third.offset == second.offset + second.size * normals
    assert layout.stride == 0


def test_empty_layout():
    layout = BufferLayout()
    assert len(layout) == 0
    assert layout.stride == 0
    assert list(layout) == []


def test_iteration_keeps_order():
    names = ["a", "b", "c"]
    layout = BufferLayout(BufferElement(GLSLDataType.INT, name) for name in names)
    assert [element.name for element in layout] == names
    assert layout[1].name == names[1]