"""
Dense per-field buffers backing a PointCloud.

Storage only knows which buffers exist and how many columns they have; it
never writes default values into newly grown columns.
"""
import numpy as np

from .fields import BaseField, Fields

XYZ_DTYPE = np.float32
COLOR_DTYPE = np.uint8
DESCRIPTOR_DTYPE = np.float32


def _layout(fields: Fields):
    """Yield (key, rows, dtype) for every buffer named by ``fields``."""
    if BaseField.XYZS in fields.flags:
        yield BaseField.XYZS, 3, XYZ_DTYPE
    if BaseField.NORMALS in fields.flags:
        yield BaseField.NORMALS, 3, XYZ_DTYPE
    if BaseField.RGBS in fields.flags:
        yield BaseField.RGBS, 3, COLOR_DTYPE
    for descriptor in fields.descriptor_types:
        yield descriptor, descriptor.size, DESCRIPTOR_DTYPE


def buffer_keys(fields: Fields):
    """Keys of the buffers a Storage for ``fields`` holds, in layout order."""
    return [key for key, _, _ in _layout(fields)]


class Storage:
    def __init__(self, size: int, fields: Fields):
        self._fields = fields
        self._size = 0
        self._buffers = {key: np.empty((rows, 0), dtype=dtype)
                         for key, rows, dtype in _layout(fields)}
        self.resize(size)

    @property
    def size(self) -> int:
        return self._size

    @property
    def fields(self) -> Fields:
        return self._fields

    def keys(self):
        """Keys of the present buffers: base flags first, then descriptor kinds."""
        return list(self._buffers)

    def resize(self, new_size: int) -> None:
        """
        Change every buffer to ``new_size`` columns.

        The overlapping prefix is preserved; columns past the old size hold
        arbitrary values until the owner fills them.
        """
        keep = min(self._size, new_size)
        for key, old in self._buffers.items():
            new = np.empty((old.shape[0], new_size), dtype=old.dtype)
            new[:, :keep] = old[:, :keep]
            self._buffers[key] = new
        self._size = new_size
        self._check_invariants()

    def buffer(self, key, writeable: bool = False) -> np.ndarray:
        """
        Return a view of one buffer.

        Raises:
            KeyError: if the buffer is not present.
        """
        try:
            data = self._buffers[key]
        except KeyError:
            raise KeyError(f"Storage has no buffer for {key}") from None
        if writeable:
            return data
        view = data.view()
        view.flags.writeable = False
        return view

    def _check_invariants(self) -> None:
        for key, data in self._buffers.items():
            if data.shape[1] != self._size:
                raise RuntimeError(
                    f"Storage buffer {key} has {data.shape[1]} columns, expected {self._size}"
                )
