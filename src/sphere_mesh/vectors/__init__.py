"""Vector3 value type (4-lane storage, 3-lane contract) and its packed FitVector3 form."""

from .vec3 import (
    Vector3,
    FitVector3,
    add,
    subtract,
    multiply_componentwise,
    scale,
    add_assign,
    subtract_assign,
    multiply_assign,
    scale_assign,
    dot,
    cross,
    norm,
    normalized,
)
