"""Affine point arithmetic on a short Weierstrass curve y^2 = x^3 + alpha*x + beta.

Coordinates are galois FieldArray scalars of the curve's base field. Only the
operations the Pedersen accumulator needs are provided: addition of two
points with distinct x-coordinates and on-curve checks.
"""

from dataclasses import dataclass

import galois
import numpy as np


@dataclass(frozen=True, eq=False)
class EcPoint:
    """Affine curve point (never the point at infinity).

    Attributes:
        x: x-coordinate as a 0-d FieldArray
        y: y-coordinate as a 0-d FieldArray
    """
    x: galois.FieldArray
    y: galois.FieldArray

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EcPoint):
            return NotImplemented
        return bool(self.x == other.x) and bool(self.y == other.y)

    def __hash__(self) -> int:
        return hash((int(self.x), int(self.y)))

    def __repr__(self) -> str:
        return f"EcPoint(x={int(self.x):#x}, y={int(self.y):#x})"


def ec_add(p: EcPoint, q: EcPoint) -> EcPoint:
    """Add two points with distinct x-coordinates.

    The chord formula is undefined when p.x == q.x (doubling or p == -q);
    callers must rule that case out.

    Raises:
        ValueError: If the points share an x-coordinate
    """
    if p.x == q.x:
        raise ValueError("ec_add: points share an x-coordinate")
    slope = (q.y - p.y) / (q.x - p.x)
    x = slope ** 2 - p.x - q.x
    y = slope * (p.x - x) - p.y
    return EcPoint(x, y)


def is_on_curve(
    xs: galois.FieldArray,
    ys: galois.FieldArray,
    alpha: galois.FieldArray,
    beta: galois.FieldArray,
) -> np.ndarray:
    """Vectorized check of y^2 == x^3 + alpha*x + beta for each (x, y) pair."""
    return ys ** 2 == xs ** 3 + alpha * xs + beta


def is_singular(alpha: galois.FieldArray, beta: galois.FieldArray) -> bool:
    """Return True if 4*alpha^3 + 27*beta^2 == 0, i.e. the curve is not elliptic."""
    field = type(alpha)
    p = field.characteristic
    return bool(field(4 % p) * alpha ** 3 + field(27 % p) * beta ** 2 == 0)
