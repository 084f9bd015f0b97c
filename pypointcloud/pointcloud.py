"""
PointCloud: a point cloud with a per-instance set of fields.

Each present field is a dense (rows, size) numpy array with one column per
point. The field set is fixed when the cloud is constructed.
"""
import numbers

import numpy as np

from .exceptions import (
    EmptyOrReservedFieldSetError,
    FieldSetMismatchError,
    InvalidArgumentError,
    MissingFieldsError,
    SizeMismatchError,
)
from .fields import INHERIT, NORMALS, RGBS, XYZS, BaseField, DescriptorType, Fields
from .logger import LogLevel, get_logger
from .storage import COLOR_DTYPE, DESCRIPTOR_DTYPE, XYZ_DTYPE, Storage, buffer_keys
from .utils import column_mean, estimate_normals_pca, finite_column_mean, finite_columns

DEFAULT_VALUE = 0.0
DEFAULT_COLOR = 0


def _check_count(value, what):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(f"{what} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{what} must be non-negative, got {value}")
    return int(value)


def _as_vector3(value, what):
    vector = np.asarray(value, dtype=np.float64)
    if vector.shape != (3,):
        raise InvalidArgumentError(f"{what} must be a 3-vector, got shape {vector.shape}")
    return vector


def _default_for(key):
    return DEFAULT_COLOR if key == BaseField.RGBS else DEFAULT_VALUE


class PointCloud:
    """
    A set of points, each carrying the channels named by the cloud's fields.

    Positions, normals and descriptors are stored as float32, colors as uint8
    RGB triplets. Accessors without the ``mutable_`` prefix return read-only
    views. Views are invalidated by ``resize``/``expand``.
    """

    def __init__(self, new_size=0, fields=XYZS, skip_initialize=False):
        """
        Create a cloud of ``new_size`` points.

        Args:
            new_size: Number of points
            fields: Fields to allocate; must not be NONE or INHERIT
            skip_initialize: Leave the values uninitialized instead of
                filling them with defaults
        """
        fields = Fields.coerce(fields)
        if fields.is_none():
            raise EmptyOrReservedFieldSetError("Cannot construct a PointCloud without fields")
        if fields.is_inherit():
            raise EmptyOrReservedFieldSetError("Cannot construct a PointCloud with INHERIT")
        new_size = _check_count(new_size, "new_size")
        self._fields = fields
        self._storage = Storage(new_size, fields)
        if not skip_initialize:
            self.set_default(0, new_size)

    # -- construction helpers ------------------------------------------------

    @classmethod
    def copy_of(cls, other, fields=INHERIT):
        """
        Copy-construct from ``other``.

        With ``fields=INHERIT`` the copy carries all of ``other``'s fields;
        otherwise ``other`` must contain ``fields`` and only those are copied.
        """
        fields = Fields.coerce(fields)
        if fields.is_inherit():
            fields = other.fields
        elif not other.fields.contains(fields):
            raise FieldSetMismatchError(fields, other.fields, context="copy_of")
        cloud = cls(other.size, fields, skip_initialize=True)
        cloud.set_from(other, fields)
        return cloud

    def copy(self, fields=INHERIT):
        return type(self).copy_of(self, fields)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    @classmethod
    def moved_from(cls, other):
        """
        Move-construct: take over ``other``'s storage without copying.

        ``other`` is left as a valid, empty cloud with its original fields.
        """
        cloud = cls(0, other.fields, skip_initialize=True)
        cloud._storage, other._storage = other._storage, cloud._storage
        return cloud

    def assign(self, other):
        """Copy-assign; ``other`` must have exactly this cloud's fields."""
        self.set_from(other)
        return self

    def move_assign(self, other):
        """
        Move-assign from ``other``, which must have exactly this cloud's fields.

        ``other`` is left as a valid, empty cloud.
        """
        self.require_exact_fields(other.fields)
        if other is self:
            return self
        self._storage = other._storage
        other._storage = Storage(0, other.fields)
        return self

    # -- size and fields ----------------------------------------------------

    @property
    def size(self) -> int:
        return self._storage.size

    def __len__(self):
        return self._storage.size

    @property
    def fields(self) -> Fields:
        return self._fields

    def __repr__(self):
        return f"PointCloud(size={self.size}, fields={self._fields})"

    def resize(self, new_size, skip_initialize=False):
        """
        Change the number of points, preserving the leading points.

        New points get default values unless ``skip_initialize``.
        """
        new_size = _check_count(new_size, "new_size")
        old_size = self.size
        self._storage.resize(new_size)
        if new_size > old_size and not skip_initialize:
            self.set_default(old_size, new_size - old_size)

    def expand(self, add_size, skip_initialize=False):
        """Append ``add_size`` points."""
        add_size = _check_count(add_size, "add_size")
        self.resize(self.size + add_size, skip_initialize)

    def set_default(self, start, num):
        """Fill points ``[start, start + num)`` of every field with defaults."""
        for key in self._storage.keys():
            self._storage.buffer(key, writeable=True)[:, start:start + num] = _default_for(key)

    def has_fields(self, fields) -> bool:
        fields = Fields.coerce(fields)
        if fields.is_inherit():
            raise InvalidArgumentError("has_fields does not accept INHERIT")
        return self._fields.contains(fields)

    def require_fields(self, fields) -> None:
        if not self.has_fields(fields):
            raise MissingFieldsError(Fields.coerce(fields), self._fields)

    def has_exact_fields(self, fields) -> bool:
        return self._fields == Fields.coerce(fields)

    def require_exact_fields(self, fields) -> None:
        if not self.has_exact_fields(fields):
            raise FieldSetMismatchError(Fields.coerce(fields), self._fields)

    # -- accessors ------------------------------------------------------------

    def _buffer(self, fields, key, writeable):
        self.require_fields(fields)
        return self._storage.buffer(key, writeable)

    def has_xyzs(self) -> bool:
        return self._fields.contains(XYZS)

    def xyzs(self) -> np.ndarray:
        """Positions as a read-only (3, size) array."""
        return self._buffer(XYZS, BaseField.XYZS, False)

    def mutable_xyzs(self) -> np.ndarray:
        return self._buffer(XYZS, BaseField.XYZS, True)

    def xyz(self, i) -> np.ndarray:
        """Position of point ``i``."""
        return self.xyzs()[:, i]

    def has_normals(self) -> bool:
        return self._fields.contains(NORMALS)

    def normals(self) -> np.ndarray:
        return self._buffer(NORMALS, BaseField.NORMALS, False)

    def mutable_normals(self) -> np.ndarray:
        return self._buffer(NORMALS, BaseField.NORMALS, True)

    def normal(self, i) -> np.ndarray:
        return self.normals()[:, i]

    def has_rgbs(self) -> bool:
        return self._fields.contains(RGBS)

    def rgbs(self) -> np.ndarray:
        return self._buffer(RGBS, BaseField.RGBS, False)

    def mutable_rgbs(self) -> np.ndarray:
        return self._buffer(RGBS, BaseField.RGBS, True)

    def rgb(self, i) -> np.ndarray:
        return self.rgbs()[:, i]

    def has_descriptors(self, kind: DescriptorType = None) -> bool:
        return self._fields.has_descriptor(kind)

    def _descriptor_kind(self, kind):
        if kind is not None:
            self.require_fields(kind)
            return kind
        kinds = self._fields.descriptor_types
        if not kinds:
            raise MissingFieldsError("<any descriptor>", self._fields)
        if len(kinds) > 1:
            raise InvalidArgumentError(
                f"PointCloud has several descriptor kinds ({self._fields}); pass kind explicitly"
            )
        return kinds[0]

    def descriptors(self, kind: DescriptorType = None) -> np.ndarray:
        """
        Descriptors of one kind as a read-only (kind.size, size) array.

        ``kind`` may be omitted when the cloud has exactly one descriptor kind.
        """
        return self._storage.buffer(self._descriptor_kind(kind), False)

    def mutable_descriptors(self, kind: DescriptorType = None) -> np.ndarray:
        return self._storage.buffer(self._descriptor_kind(kind), True)

    def descriptor(self, i, kind: DescriptorType = None) -> np.ndarray:
        return self.descriptors(kind)[:, i]

    # -- bulk operations ------------------------------------------------------

    def set_from(self, other, fields=INHERIT, allow_resize=True):
        """
        Copy values from ``other``.

        Args:
            other: Source cloud
            fields: With INHERIT, both clouds must have exactly the same
                fields and all of them are copied. Otherwise both clouds must
                contain ``fields`` and only those are copied.
            allow_resize: Resize this cloud to ``other.size``; if False the
                sizes must already match.

        Raises:
            FieldSetMismatchError, MissingFieldsError, SizeMismatchError
        """
        fields = Fields.coerce(fields)
        if fields.is_inherit():
            self.require_exact_fields(other.fields)
            resolved = self._fields
        else:
            self.require_fields(fields)
            other.require_fields(fields)
            resolved = fields
        if not allow_resize and other.size != self.size:
            raise SizeMismatchError(self.size, other.size, context="set_from")

        if allow_resize:
            self.resize(other.size)
        source = other._storage
        for key in buffer_keys(resolved):
            self._storage.buffer(key, writeable=True)[...] = source.buffer(key)

    def _select(self, indices):
        selected = PointCloud(len(indices), self._fields, skip_initialize=True)
        for key in self._storage.keys():
            selected._storage.buffer(key, writeable=True)[...] = \
                self._storage.buffer(key)[:, indices]
        return selected

    def crop(self, lower_xyz, upper_xyz):
        """
        Return the points whose position lies in the closed box [lower, upper].

        Relative order is preserved and every other field is carried along.
        """
        self.require_fields(XYZS)
        lower = _as_vector3(lower_xyz, "lower_xyz")
        upper = _as_vector3(upper_xyz, "upper_xyz")
        if not np.all(lower <= upper):
            raise InvalidArgumentError(f"crop requires lower <= upper, got {lower} and {upper}")
        xyzs = self.xyzs()
        inside = np.all((xyzs >= lower[:, None]) & (xyzs <= upper[:, None]), axis=0)
        cropped = self._select(np.flatnonzero(inside))
        get_logger().debug(f"crop: kept {cropped.size} of {self.size} points")
        return cropped

    def voxelized_down_sample(self, voxel_size):
        """
        Down-sample by averaging the points that fall in the same voxel.

        Voxels are cubes of edge ``voxel_size`` anchored at the per-axis
        minimum of the finite positions. Points with a non-finite position are
        dropped. Normals and descriptors average only their finite entries.
        The order of the output points is not specified.
        """
        self.require_fields(XYZS)
        if not voxel_size > 0:
            raise InvalidArgumentError(f"voxel_size must be positive, got {voxel_size}")

        xyzs = self.xyzs()
        finite_idx = np.flatnonzero(finite_columns(xyzs))
        if finite_idx.size == 0:
            return PointCloud(0, self._fields)
        points = xyzs[:, finite_idx].astype(np.float64)
        lower = points.min(axis=1)
        spans = (points.max(axis=1) - lower) / voxel_size
        if np.any(spans >= 2**63):
            raise InvalidArgumentError(
                f"voxel_size {voxel_size} is too small for a cloud spanning {spans * voxel_size}"
            )
        coords = np.floor((points - lower[:, None]) / voxel_size).astype(np.int64)

        voxel_map = {}
        for index, key in zip(finite_idx.tolist(), map(tuple, coords.T.tolist())):
            voxel_map.setdefault(key, []).append(index)

        down_sampled = PointCloud(len(voxel_map), self._fields)
        out_xyzs = down_sampled.mutable_xyzs()
        normals = self.normals() if self.has_normals() else None
        out_normals = down_sampled.mutable_normals() if normals is not None else None
        rgbs = self.rgbs() if self.has_rgbs() else None
        out_rgbs = down_sampled.mutable_rgbs() if rgbs is not None else None
        descriptor_pairs = [(self.descriptors(kind), down_sampled.mutable_descriptors(kind))
                            for kind in self._fields.descriptor_types]

        for out_index, indices in enumerate(voxel_map.values()):
            out_xyzs[:, out_index] = column_mean(xyzs[:, indices])
            if normals is not None:
                out_normals[:, out_index] = \
                    finite_column_mean(normals[:, indices])
            if rgbs is not None:
                out_rgbs[:, out_index] = \
                    column_mean(rgbs[:, indices]).astype(COLOR_DTYPE)
            for source, target in descriptor_pairs:
                target[:, out_index] = finite_column_mean(source[:, indices])

        get_logger().debug(
            f"voxelized_down_sample: {self.size} points -> {down_sampled.size} voxels "
            f"(voxel_size={voxel_size})"
        )
        return down_sampled

    def estimate_normals(self, radius, num_closest=30):
        """
        Fill the normals from a PCA of each point's neighborhood.

        Args:
            radius: Neighbors must lie within this distance
            num_closest: Maximum number of neighbors, the point itself included

        Points with fewer than 3 neighbors get NaN normals. Normal orientation
        is arbitrary; see ``flip_normals_toward_point``.
        """
        self.require_fields(XYZS | NORMALS)
        if not radius > 0:
            raise InvalidArgumentError(f"radius must be positive, got {radius}")
        num_closest = _check_count(num_closest, "num_closest")
        if num_closest < 3:
            raise InvalidArgumentError(f"num_closest must be at least 3, got {num_closest}")
        normals = estimate_normals_pca(self.xyzs().T, radius, num_closest)
        self.mutable_normals()[...] = normals.T
        logger = get_logger()
        if logger.isEnabledFor(LogLevel.DEBUG):
            logger.debug(f"estimate_normals: {self.size} points, radius={radius}, "
                         f"num_closest={num_closest}")

    def flip_normals_toward_point(self, p_CP):
        """Flip every normal that points away from ``p_CP``."""
        self.require_fields(XYZS | NORMALS)
        point = _as_vector3(p_CP, "p_CP")
        normals = self.mutable_normals()
        to_point = point[:, None] - self.xyzs().astype(np.float64)
        away = np.einsum('ij,ij->j', normals.astype(np.float64), to_point) < 0
        normals[:, away] *= -1


def concatenate(clouds):
    """
    Concatenate clouds that share exactly the same fields, in order.
    """
    clouds = list(clouds)
    if not clouds:
        raise InvalidArgumentError("concatenate requires at least one cloud")
    fields = clouds[0].fields
    for cloud in clouds[1:]:
        cloud.require_exact_fields(fields)
    total = sum(cloud.size for cloud in clouds)
    new_cloud = PointCloud(total, fields, skip_initialize=True)
    for key in new_cloud._storage.keys():
        out = new_cloud._storage.buffer(key, writeable=True)
        index = 0
        for cloud in clouds:
            out[:, index:index + cloud.size] = cloud._storage.buffer(key)
            index += cloud.size
    get_logger().debug(f"concatenate: {len(clouds)} clouds -> {total} points")
    return new_cloud


__all__ = [
    'PointCloud',
    'concatenate',
    'DEFAULT_VALUE',
    'DEFAULT_COLOR',
    'XYZ_DTYPE',
    'COLOR_DTYPE',
    'DESCRIPTOR_DTYPE',
]
