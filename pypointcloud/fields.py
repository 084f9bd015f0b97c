"""
Field sets: which per-point channels a PointCloud carries.

A field set is a bitmask of the built-in channels (positions, normals, colors)
plus an ordered set of named descriptor kinds, each with a fixed dimension.
"""
import enum
import numbers
from typing import Iterable, Tuple, Union

from .exceptions import InvalidArgumentError


class BaseField(enum.IntFlag):
    """Bit flags for the built-in channels."""
    NONE = 0
    INHERIT = 1 << 0
    XYZS = 1 << 1
    NORMALS = 1 << 2
    RGBS = 1 << 3


class DescriptorType:
    """A named descriptor kind with a fixed vector dimension."""
    __slots__ = ('_size', '_name')

    def __init__(self, size: int, name: str):
        if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size <= 0:
            raise InvalidArgumentError(f"Descriptor size must be a positive integer, got {size!r}")
        if not name:
            raise InvalidArgumentError("Descriptor name must not be empty")
        self._size = int(size)
        self._name = str(name)

    @property
    def size(self) -> int:
        return self._size

    @property
    def name(self) -> str:
        return self._name

    def __eq__(self, other):
        if not isinstance(other, DescriptorType):
            return NotImplemented
        return self._size == other._size and self._name == other._name

    def __hash__(self):
        return hash((self._size, self._name))

    def __repr__(self):
        return f"DescriptorType({self._size}, {self._name!r})"

    def __str__(self):
        return f"{self._name}[{self._size}]"

    def contains(self, other) -> bool:
        """True if ``other`` names no field besides this descriptor kind."""
        return Fields.coerce(self).contains(other)

    def __contains__(self, other):
        return self.contains(other)

    def __or__(self, other):
        return Fields.coerce(self) | other

    __ror__ = __or__


FieldsLike = Union["Fields", DescriptorType]


class Fields:
    """
    Immutable set of point cloud fields.

    Equality ignores the order in which descriptor kinds were added; iteration
    order of ``descriptor_types`` follows insertion order.
    """
    __slots__ = ('_flags', '_descriptors')

    def __init__(self, flags: BaseField = BaseField.NONE,
                 descriptors: Iterable[DescriptorType] = ()):
        flags = BaseField(flags)
        unique = []
        for descriptor in descriptors:
            if not isinstance(descriptor, DescriptorType):
                raise TypeError(f"Expected DescriptorType, got {type(descriptor).__name__}")
            if descriptor not in unique:
                unique.append(descriptor)
        if BaseField.INHERIT in flags and (flags != BaseField.INHERIT or unique):
            raise InvalidArgumentError("INHERIT cannot be combined with other fields")
        self._flags = flags
        self._descriptors = tuple(unique)

    @classmethod
    def coerce(cls, value) -> "Fields":
        """Return ``value`` as a Fields instance."""
        if isinstance(value, Fields):
            return value
        if isinstance(value, DescriptorType):
            return cls(descriptors=(value,))
        if isinstance(value, BaseField):
            return cls(value)
        raise TypeError(f"Cannot interpret {type(value).__name__} as Fields")

    @property
    def flags(self) -> BaseField:
        return self._flags

    @property
    def descriptor_types(self) -> Tuple[DescriptorType, ...]:
        return self._descriptors

    def is_none(self) -> bool:
        return self._flags == BaseField.NONE and not self._descriptors

    def is_inherit(self) -> bool:
        return self._flags == BaseField.INHERIT

    def has_descriptor(self, kind: DescriptorType = None) -> bool:
        if kind is None:
            return bool(self._descriptors)
        return kind in self._descriptors

    def contains(self, other: FieldsLike) -> bool:
        """True if every field in ``other`` is also in this set."""
        other = Fields.coerce(other)
        if (self._flags & other._flags) != other._flags:
            return False
        return all(d in self._descriptors for d in other._descriptors)

    def __contains__(self, other):
        return self.contains(other)

    def __or__(self, other):
        try:
            other = Fields.coerce(other)
        except TypeError:
            return NotImplemented
        return Fields(self._flags | other._flags, self._descriptors + other._descriptors)

    __ror__ = __or__

    def __eq__(self, other):
        if isinstance(other, DescriptorType):
            other = Fields.coerce(other)
        if not isinstance(other, Fields):
            return NotImplemented
        return self._flags == other._flags and set(self._descriptors) == set(other._descriptors)

    def __hash__(self):
        return hash((int(self._flags), frozenset(self._descriptors)))

    def __bool__(self):
        return not self.is_none()

    def __str__(self):
        names = [flag.name for flag in (BaseField.INHERIT, BaseField.XYZS,
                                        BaseField.NORMALS, BaseField.RGBS)
                 if flag in self._flags]
        names.extend(str(d) for d in self._descriptors)
        return " | ".join(names) if names else "NONE"

    def __repr__(self):
        return f"Fields({self})"


NONE = Fields()
INHERIT = Fields(BaseField.INHERIT)
XYZS = Fields(BaseField.XYZS)
NORMALS = Fields(BaseField.NORMALS)
RGBS = Fields(BaseField.RGBS)

# Well-known descriptor kinds
CURVATURE = DescriptorType(1, "curvature")
FPFH = DescriptorType(33, "fpfh")
SHOT = DescriptorType(352, "shot")
