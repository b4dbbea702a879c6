"""Constants and the mesh contract."""

from .constants import *
from .structures import (
    InvalidParameters,
    VertexRef,
    Face,
    Mesh,
    canonical_face,
    validate_mesh,
    create_mesh,
)
