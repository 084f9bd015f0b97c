"""
Error types raised by pypointcloud.
"""


class PointCloudError(Exception):
    """Base class for point cloud contract violations."""
    code = "point_cloud_error"

    def __init__(self, message: str, code: str = "", context: str = ""):
        super().__init__(message)
        if code:
            self.code = code
        self.context = context


class InvalidArgumentError(PointCloudError, ValueError):
    """Negative sizes, non-positive voxel sizes, inverted crop boxes, empty inputs."""
    code = "invalid_argument"


class EmptyOrReservedFieldSetError(InvalidArgumentError):
    """A cloud was constructed with the NONE or INHERIT field set."""
    code = "empty_or_reserved_fields"


class MissingFieldsError(PointCloudError):
    """The cloud does not contain every requested field."""
    code = "missing_fields"

    def __init__(self, expected, actual, context: str = ""):
        super().__init__(
            f"PointCloud does not have expected fields.\n"
            f"Expected {expected}, got {actual}",
            context=context,
        )
        self.expected = expected
        self.actual = actual


class FieldSetMismatchError(PointCloudError):
    """The cloud's field set is not exactly the required one."""
    code = "field_set_mismatch"

    def __init__(self, expected, actual, context: str = ""):
        super().__init__(
            f"PointCloud does not have the exact expected fields.\n"
            f"Expected {expected}, got {actual}",
            context=context,
        )
        self.expected = expected
        self.actual = actual


FieldMismatchError = FieldSetMismatchError


class SizeMismatchError(PointCloudError, ValueError):
    """Two clouds were required to have the same number of points."""
    code = "size_mismatch"

    def __init__(self, expected: int, actual: int, context: str = ""):
        super().__init__(f"Size mismatch: expected {expected}, got {actual}", context=context)
        self.expected = expected
        self.actual = actual
