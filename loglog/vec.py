"""Small fixed-size vector types used for board and world coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterator, Union

Number = Union[int, float]


def _truncate(value: float) -> int:
    """Convert a float to int towards zero, mapping NaN to 0."""
    if value != value:  # NaN
        return 0
    return int(value)


@dataclass(frozen=True)
class Vec3:
    """A three-component floating point vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    ZERO: ClassVar["Vec3"]
    ONE: ClassVar["Vec3"]
    Y: ClassVar["Vec3"]

    @classmethod
    def splat(cls, value: Number) -> "Vec3":
        """Return a vector with every component set to ``value``."""
        return cls(float(value), float(value), float(value))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Vec3") -> "Vec3":
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union[Number, "Vec3"]) -> "Vec3":
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Number, "Vec3"]) -> "Vec3":
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def abs(self) -> "Vec3":
        """Return the component-wise absolute value."""
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def lerp(self, other: "Vec3", t: float) -> "Vec3":
        """Linearly interpolate towards ``other`` by ``t``."""
        return self + (other - self) * t

    def as_ivec3(self) -> "IVec3":
        """Convert to an integer vector, truncating each component towards zero."""
        return IVec3(_truncate(self.x), _truncate(self.y), _truncate(self.z))


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)
Vec3.ONE = Vec3(1.0, 1.0, 1.0)
Vec3.Y = Vec3(0.0, 1.0, 0.0)


@dataclass(frozen=True)
class IVec3:
    """A three-component integer vector, usable as a dictionary key."""

    x: int = 0
    y: int = 0
    z: int = 0

    ZERO: ClassVar["IVec3"]

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "IVec3") -> "IVec3":
        if not isinstance(other, IVec3):
            return NotImplemented
        return IVec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "IVec3") -> "IVec3":
        if not isinstance(other, IVec3):
            return NotImplemented
        return IVec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: int) -> "IVec3":
        if isinstance(other, int):
            return IVec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> "IVec3":
        return IVec3(-self.x, -self.y, -self.z)

    def as_vec3(self) -> Vec3:
        """Convert to a floating point vector."""
        return Vec3(float(self.x), float(self.y), float(self.z))


IVec3.ZERO = IVec3(0, 0, 0)