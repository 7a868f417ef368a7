"""
Errors that abort a generation run

Overlap rejections are routine and never raised.
"""


class InvalidRangeError(ValueError):
    """A sampling range was configured with high <= low"""


class MalformedGeometryError(ValueError):
    """A centerline could not produce a point or tangent where one was required"""
