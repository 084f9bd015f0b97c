import numpy as np
import pytest

from pypointcloud import (
    CURVATURE, FPFH, INHERIT, NONE, NORMALS, RGBS, XYZS,
    BaseField, DescriptorType, Fields, InvalidArgumentError,
)


def test_union_and_containment():
    fields = XYZS | NORMALS | FPFH
    assert fields.contains(XYZS)
    assert fields.contains(XYZS | NORMALS)
    assert FPFH in fields
    assert RGBS not in fields
    assert not fields.contains(XYZS | RGBS)
    assert fields.contains(NONE)


def test_equality_ignores_descriptor_order():
    assert XYZS | FPFH | CURVATURE == CURVATURE | XYZS | FPFH
    assert hash(XYZS | FPFH | CURVATURE) == hash(CURVATURE | FPFH | XYZS)
    assert XYZS != XYZS | NORMALS
    assert XYZS | FPFH != XYZS | CURVATURE


def test_duplicate_descriptors_collapse():
    fields = FPFH | FPFH | XYZS
    assert fields.descriptor_types == (FPFH,)


def test_descriptor_order_is_insertion_order():
    fields = XYZS | FPFH | CURVATURE
    assert fields.descriptor_types == (FPFH, CURVATURE)
    assert fields.has_descriptor()
    assert fields.has_descriptor(CURVATURE)
    assert not XYZS.has_descriptor()


def test_sentinels():
    assert NONE.is_none()
    assert not NONE
    assert INHERIT.is_inherit()
    assert not XYZS.is_inherit()
    with pytest.raises(InvalidArgumentError):
        INHERIT | XYZS
    with pytest.raises(InvalidArgumentError):
        Fields(BaseField.INHERIT, descriptors=(FPFH,))


def test_descriptor_type_validation():
    assert DescriptorType(3, "curv") == DescriptorType(3, "curv")
    assert DescriptorType(3, "curv") != DescriptorType(4, "curv")
    with pytest.raises(InvalidArgumentError):
        DescriptorType(0, "bad")
    with pytest.raises(InvalidArgumentError):
        DescriptorType(3, "")


def test_coerce_rejects_other_types():
    with pytest.raises(TypeError):
        Fields.coerce("xyzs")
    assert Fields.coerce(FPFH) == Fields(descriptors=(FPFH,))


def test_str():
    assert str(XYZS | NORMALS | FPFH) == "XYZS | NORMALS | fpfh[33]"
    assert str(NONE) == "NONE"


def test_descriptor_type_acts_as_field_set():
    assert FPFH.contains(FPFH)
    assert FPFH in FPFH
    assert FPFH.contains(NONE)
    assert not FPFH.contains(XYZS)
    assert not FPFH.contains(CURVATURE)


def test_base_field_coercion():
    assert XYZS.contains(BaseField.XYZS)
    assert not XYZS.contains(BaseField.NORMALS)
    assert Fields.coerce(BaseField.RGBS) == RGBS
    assert XYZS | BaseField.NORMALS == XYZS | NORMALS


def test_descriptor_size_accepts_numpy_integers():
    kind = DescriptorType(np.int64(7), "seven")
    assert kind.size == 7
    assert isinstance(kind.size, int)
    assert kind == DescriptorType(7, "seven")
    with pytest.raises(InvalidArgumentError):
        DescriptorType(np.int64(0), "zero")
    with pytest.raises(InvalidArgumentError):
        DescriptorType(2.0, "float")
