"""
Vector3 - 3-component value type with 4-lane storage
=====================================================

STORAGE:
    Vector3 keeps its components in a float64 numpy array of length 4:
        lanes = [x, y, z, w]
    w is a padding lane (alignment with 4-wide vector units). It is never
    observable through equality, indexing, iteration, repr or conversion.

PADDING RULES:
    v * s, v *= s        scale all 4 lanes (w included)
    v + s, v - s         touch lanes 0..2 only (w stays inert)
    v + u, v - u, v * u  lane-wise on all 4 lanes
    to_fit / from_fit    w is dropped, and reset to 0 on the way back

VALUE SEMANTICS:
    Binary operators return new instances. Only the in-place operators
    (+=, -=, *=) and the *_assign functions mutate their left operand.
    Because of that, Vector3 is unhashable.

FitVector3:
    Strict 3-component immutable form (NamedTuple). This is what the mesh
    stores; Vector3 is what the builders compute with.
"""

import math
import numpy as np
from numbers import Integral, Real
from typing import NamedTuple, Union

Scalar = Union[int, float]


class FitVector3(NamedTuple):
    """Packed (x, y, z) with no padding lane."""
    x: float
    y: float
    z: float


class Vector3:
    """3-component float vector backed by 4 lanes; only x, y, z are public."""

    __slots__ = ('_lanes',)
    __hash__ = None

    def __init__(self, x: Scalar = 0.0, y: Scalar = 0.0, z: Scalar = 0.0):
        self._lanes = np.array([x, y, z, 0.0], dtype=np.float64)

    @classmethod
    def _from_lanes(cls, lanes: np.ndarray) -> 'Vector3':
        v = cls.__new__(cls)
        v._lanes = np.array(lanes, dtype=np.float64)
        if v._lanes.shape != (4,):
            raise ValueError(f"Expected 4 lanes, got shape {v._lanes.shape}")
        return v

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> 'Vector3':
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def unit_x(cls) -> 'Vector3':
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def unit_y(cls) -> 'Vector3':
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def unit_z(cls) -> 'Vector3':
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def from_fit(cls, fit: FitVector3) -> 'Vector3':
        """Inverse of to_fit(). The padding lane always comes back as 0."""
        return cls(fit[0], fit[1], fit[2])

    def to_fit(self) -> FitVector3:
        return FitVector3(float(self._lanes[0]),
                          float(self._lanes[1]),
                          float(self._lanes[2]))

    def to_array(self) -> np.ndarray:
        """Copy of (x, y, z) as a length-3 array."""
        return self._lanes[:3].copy()

    # -------------------------------------------------------------------------
    # Component access
    # -------------------------------------------------------------------------

    @property
    def x(self) -> float:
        return float(self._lanes[0])

    @property
    def y(self) -> float:
        return float(self._lanes[1])

    @property
    def z(self) -> float:
        return float(self._lanes[2])

    def __getitem__(self, index) -> float:
        # No negative indexing: v[-1] would land on the padding lane
        if isinstance(index, bool) or not isinstance(index, Integral) or not 0 <= index < 3:
            raise IndexError(f"Vector3 index must be 0, 1 or 2, got {index!r}")
        return float(self._lanes[index])

    def __len__(self) -> int:
        return 3

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return bool(np.array_equal(self._lanes[:3], other._lanes[:3]))

    def __repr__(self) -> str:
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other):
        if isinstance(other, Vector3):
            return Vector3._from_lanes(self._lanes + other._lanes)
        if isinstance(other, Real):
            lanes = self._lanes.copy()
            lanes[:3] += other
            return Vector3._from_lanes(lanes)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Vector3):
            return Vector3._from_lanes(self._lanes - other._lanes)
        if isinstance(other, Real):
            lanes = self._lanes.copy()
            lanes[:3] -= other
            return Vector3._from_lanes(lanes)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Vector3):
            return Vector3._from_lanes(self._lanes * other._lanes)
        if isinstance(other, Real):
            return Vector3._from_lanes(self._lanes * other)
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> 'Vector3':
        return self * -1.0

    def __iadd__(self, other):
        if isinstance(other, Vector3):
            self._lanes += other._lanes
        elif isinstance(other, Real):
            self._lanes[:3] += other
        else:
            return NotImplemented
        return self

    def __isub__(self, other):
        if isinstance(other, Vector3):
            self._lanes -= other._lanes
        elif isinstance(other, Real):
            self._lanes[:3] -= other
        else:
            return NotImplemented
        return self

    def __imul__(self, other):
        if isinstance(other, Vector3):
            self._lanes *= other._lanes
        elif isinstance(other, Real):
            self._lanes *= other
        else:
            return NotImplemented
        return self

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def dot(self, other: 'Vector3') -> float:
        return float(np.dot(self._lanes[:3], other._lanes[:3]))

    def cross(self, other: 'Vector3') -> 'Vector3':
        c = np.cross(self._lanes[:3], other._lanes[:3])
        return Vector3(c[0], c[1], c[2])

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> 'Vector3':
        """
        Unit vector in the direction of self.

        Raises:
            ValueError: for the zero vector (no direction to keep)
        """
        n = self.norm()
        if n == 0.0:
            raise ValueError("Cannot normalize the zero vector")
        return Vector3(self.x / n, self.y / n, self.z / n)


# =============================================================================
# NAMED FUNCTIONS
# =============================================================================
#
# Same operations as the operators above, spelled out. Pure functions return
# a new Vector3; *_assign functions accumulate into `target` and return it.

def add(a: Vector3, b: Union[Vector3, Scalar]) -> Vector3:
    return a + b


def subtract(a: Vector3, b: Union[Vector3, Scalar]) -> Vector3:
    return a - b


def multiply_componentwise(a: Vector3, b: Vector3) -> Vector3:
    """Hadamard product (x1*x2, y1*y2, z1*z2)."""
    if not isinstance(b, Vector3):
        raise TypeError(f"multiply_componentwise needs two Vector3, got {type(b).__name__}")
    return a * b


def scale(a: Vector3, s: Scalar) -> Vector3:
    if not isinstance(s, Real):
        raise TypeError(f"scale needs a real scalar, got {type(s).__name__}")
    return a * s


def add_assign(target: Vector3, b: Union[Vector3, Scalar]) -> Vector3:
    target += b
    return target


def subtract_assign(target: Vector3, b: Union[Vector3, Scalar]) -> Vector3:
    target -= b
    return target


def multiply_assign(target: Vector3, b: Vector3) -> Vector3:
    if not isinstance(b, Vector3):
        raise TypeError(f"multiply_assign needs two Vector3, got {type(b).__name__}")
    target *= b
    return target


def scale_assign(target: Vector3, s: Scalar) -> Vector3:
    if not isinstance(s, Real):
        raise TypeError(f"scale_assign needs a real scalar, got {type(s).__name__}")
    target *= s
    return target


def dot(a: Vector3, b: Vector3) -> float:
    return a.dot(b)


def cross(a: Vector3, b: Vector3) -> Vector3:
    return a.cross(b)


def norm(a: Vector3) -> float:
    return a.norm()


def normalized(a: Vector3) -> Vector3:
    return a.normalized()


# Self-test when run directly
if __name__ == "__main__":
    print("=" * 60)
    print("VECTOR3 - SELF-TEST")
    print("=" * 60)

    for name, v, expected in [("unit_x", Vector3.unit_x(), (1.0, 0.0, 0.0)),
                              ("unit_y", Vector3.unit_y(), (0.0, 1.0, 0.0)),
                              ("unit_z", Vector3.unit_z(), (0.0, 0.0, 1.0))]:
        ok = tuple(v) == expected
        print(f"  {name}() = {tuple(v)} {'✓' if ok else '✗'}")

    v = Vector3(1.0, 2.0, 3.0) * 2.0 + 1.0
    back = Vector3.from_fit(v.to_fit())
    print(f"  fit round trip: {v} -> {back} {'✓' if back == v else '✗'}")
    print(f"  padding after round trip: {back._lanes[3]}")
