"""Pedersen constant point table and curve configuration.

The table is an explicit, immutable context object rather than module-level
state. The first entry is the shift point, entry 1 is unused by the hash (it
is the curve generator in the StarkWare dataset), and entries 2.. are grouped
in blocks of `n_element_bits` points per input position.

Two sources are supported:
- A published dataset loaded with `PedersenParams.from_json`, either the
  StarkWare `pedersen_params.json` layout or a bare list of hex point pairs.
- A nothing-up-my-sleeve table derived from a seed with `PedersenParams.derive`.

`default_params()` picks the dataset named by the PAYOUT_MERKLE_PEDERSEN_PARAMS
environment variable, or loads the STARK-curve table shipped with the package
(pedersen_params_v1.json). Deriving that table takes tens of seconds, so it is
stored pre-computed. To regenerate it:
    python -c "from payout_merkle.primitives.pedersen_params import _regenerate_default_params; _regenerate_default_params()"
"""

import hashlib
import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

import galois
import numpy as np

from payout_merkle.errors import InvalidParamsError
from payout_merkle.primitives.curve import EcPoint, is_on_curve, is_singular
from payout_merkle.primitives.field import (
    STARK_ALPHA,
    STARK_BETA,
    STARK_FIELD_GEN,
    STARK_PRIME,
    make_field,
)

logger = logging.getLogger(__name__)

# --- Constants ---

PARAMS_ENV_VAR = "PAYOUT_MERKLE_PEDERSEN_PARAMS"
DEFAULT_SEED = b"payout-merkle/pedersen/v1"
DEFAULT_PARAMS_PATH = Path(__file__).parent / "pedersen_params_v1.json"
"""STARK-curve table derived from DEFAULT_SEED."""

DEFAULT_MAX_INPUTS = 2
MIN_INPUTS = 2
"""Every table must support pairwise hashing."""

N_RESERVED_POINTS = 2

# --- Type Aliases ---

PointPair = Tuple[int, int]


# --- Configuration ---

@dataclass(frozen=True, eq=False)
class PedersenParams:
    """Curve parameters and constant point table for the Pedersen hash.

    Attributes:
        field: galois field type GF(prime)
        alpha: Curve coefficient a (0-d FieldArray)
        beta: Curve coefficient b (0-d FieldArray)
        constant_xs: Read-only x-coordinates of the constant points
        constant_ys: Read-only y-coordinates of the constant points
        source: Human-readable origin of the table (file path or seed)
    """
    field: Type[galois.FieldArray]
    alpha: galois.FieldArray
    beta: galois.FieldArray
    constant_xs: galois.FieldArray
    constant_ys: galois.FieldArray
    source: str = "custom"

    def __post_init__(self) -> None:
        _validate_table(self)
        self.constant_xs.setflags(write=False)
        self.constant_ys.setflags(write=False)

    # --- Derived Properties ---

    @property
    def prime(self) -> int:
        return self.field.characteristic

    @property
    def n_element_bits(self) -> int:
        """Bits consumed per hash input."""
        return self.prime.bit_length()

    @property
    def n_points(self) -> int:
        return len(self.constant_xs)

    @property
    def max_inputs(self) -> int:
        """Largest number of inputs a single hash call can absorb."""
        return (self.n_points - N_RESERVED_POINTS) // self.n_element_bits

    @property
    def shift_point(self) -> EcPoint:
        return self.constant_point(0)

    def constant_point(self, index: int) -> EcPoint:
        return EcPoint(self.constant_xs[index], self.constant_ys[index])

    def to_dict(self) -> Dict[str, Any]:
        """StarkWare-layout document with 0x-prefixed hex numbers (inverse of `from_dict`)."""
        return {
            "FIELD_PRIME": hex(self.prime),
            "FIELD_GEN": int(self.field.primitive_element),
            "ALPHA": hex(int(self.alpha)),
            "BETA": hex(int(self.beta)),
            "CONSTANT_POINTS": [
                [hex(int(x)), hex(int(y))] for x, y in zip(self.constant_xs, self.constant_ys)
            ],
        }

    # --- Factory Methods ---

    @classmethod
    def create(
        cls,
        prime: int,
        alpha: int,
        beta: int,
        points: Sequence[PointPair],
        field_gen: Optional[int] = None,
        source: str = "custom",
    ) -> "PedersenParams":
        """Build params from plain integers.

        Raises:
            InvalidParamsError: If any value is outside the field or the
                table fails validation
        """
        for name, value in (("ALPHA", alpha), ("BETA", beta)):
            _check_coordinate(value, prime, name)
        for i, (x, y) in enumerate(points):
            _check_coordinate(x, prime, f"CONSTANT_POINTS[{i}].x")
            _check_coordinate(y, prime, f"CONSTANT_POINTS[{i}].y")

        field = make_field(prime, field_gen)
        return cls(
            field=field,
            alpha=field(alpha),
            beta=field(beta),
            constant_xs=field([x for x, _ in points]),
            constant_ys=field([y for _, y in points]),
            source=source,
        )

    @classmethod
    def from_dict(cls, data: Union[Dict[str, Any], List[Any]], source: str = "custom") -> "PedersenParams":
        """Build params from a decoded JSON dataset.

        Accepts the StarkWare layout
            {"FIELD_PRIME": ..., "FIELD_GEN": ..., "ALPHA": ..., "BETA": ...,
             "CONSTANT_POINTS": [[x, y], ...]}
        with numbers as ints or decimal/0x-prefixed strings, or a bare list of
        [x_hex, y_hex] pairs on the STARK curve.
        """
        if isinstance(data, list):
            points = [_parse_hex_pair(pair, i) for i, pair in enumerate(data)]
            return cls.create(STARK_PRIME, STARK_ALPHA, STARK_BETA, points, STARK_FIELD_GEN, source)

        if not isinstance(data, dict):
            raise InvalidParamsError(f"Unsupported params document type: {type(data).__name__}")

        try:
            prime = _parse_int(data["FIELD_PRIME"], "FIELD_PRIME")
            alpha = _parse_int(data["ALPHA"], "ALPHA")
            beta = _parse_int(data["BETA"], "BETA")
            raw_points = data["CONSTANT_POINTS"]
        except KeyError as e:
            raise InvalidParamsError(f"Missing key in params document: {e.args[0]}") from e

        field_gen = data.get("FIELD_GEN")
        if field_gen is not None:
            field_gen = _parse_int(field_gen, "FIELD_GEN")

        if not isinstance(raw_points, list):
            raise InvalidParamsError(
                f"CONSTANT_POINTS must be a list of [x, y] pairs, got {type(raw_points).__name__}"
            )
        points = []
        for i, pair in enumerate(raw_points):
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise InvalidParamsError(f"CONSTANT_POINTS[{i}] is not an [x, y] pair")
            points.append((
                _parse_int(pair[0], f"CONSTANT_POINTS[{i}].x"),
                _parse_int(pair[1], f"CONSTANT_POINTS[{i}].y"),
            ))
        return cls.create(prime, alpha, beta, points, field_gen, source)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "PedersenParams":
        """Load params from a JSON file (see `from_dict` for accepted layouts)."""
        path = Path(path)
        with open(path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidParamsError(f"{path} is not valid JSON: {e}") from e
        params = cls.from_dict(data, source=str(path))
        logger.info("Loaded %d Pedersen constant points from %s", params.n_points, path)
        return params

    @classmethod
    def derive(
        cls,
        prime: int,
        alpha: int,
        beta: int,
        seed: Union[bytes, str],
        max_inputs: int = DEFAULT_MAX_INPUTS,
        field_gen: Optional[int] = None,
    ) -> "PedersenParams":
        """Derive a nothing-up-my-sleeve constant table from a seed.

        Point i starts from x = SHA-256(seed || i) mod prime; x is incremented
        until x^3 + alpha*x + beta is a square, and y is its smaller root.

        Args:
            prime: Field prime
            alpha: Curve coefficient a
            beta: Curve coefficient b
            seed: Public seed; str seeds are UTF-8 encoded
            max_inputs: Hash inputs the table must support (at least 2)
            field_gen: Optional multiplicative generator passed to galois

        Returns:
            Params with 2 + prime.bit_length() * max_inputs points
        """
        if isinstance(seed, str):
            seed = seed.encode("utf-8")
        if max_inputs < MIN_INPUTS:
            raise InvalidParamsError(f"max_inputs must be >= {MIN_INPUTS}, got {max_inputs}")

        field = make_field(prime, field_gen)
        f_alpha, f_beta = field(alpha % prime), field(beta % prime)
        if is_singular(f_alpha, f_beta):
            raise InvalidParamsError("Curve is singular: 4*alpha^3 + 27*beta^2 == 0")

        n_points = N_RESERVED_POINTS + prime.bit_length() * max_inputs
        logger.debug("Deriving %d Pedersen constant points from seed %r", n_points, seed)
        xs, ys = _derive_constant_points(field, f_alpha, f_beta, seed, n_points)
        return cls(
            field=field,
            alpha=f_alpha,
            beta=f_beta,
            constant_xs=xs,
            constant_ys=ys,
            source=f"derived:{seed.decode('utf-8', errors='replace')}",
        )


# --- Process-Wide Default ---

@lru_cache(maxsize=None)
def default_params() -> PedersenParams:
    """Return the process-wide constant table, loaded once and then shared."""
    path = os.environ.get(PARAMS_ENV_VAR) or DEFAULT_PARAMS_PATH
    return PedersenParams.from_json(path)


def _regenerate_default_params():
    """Re-derive the shipped STARK-curve table and rewrite DEFAULT_PARAMS_PATH."""
    params = PedersenParams.derive(
        STARK_PRIME, STARK_ALPHA, STARK_BETA, DEFAULT_SEED, field_gen=STARK_FIELD_GEN
    )
    data = {"SEED": DEFAULT_SEED.decode("utf-8"), **params.to_dict()}
    with open(DEFAULT_PARAMS_PATH, "w") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    print(f"Regenerated {DEFAULT_PARAMS_PATH}")


def resolve_params(params: Optional[PedersenParams]) -> PedersenParams:
    """Return params, or the process-wide default when params is None."""
    return default_params() if params is None else params


# --- Internal Helpers ---

def _validate_table(params: PedersenParams) -> None:
    if is_singular(params.alpha, params.beta):
        raise InvalidParamsError("Curve is singular: 4*alpha^3 + 27*beta^2 == 0")
    if params.constant_xs.shape != params.constant_ys.shape or params.constant_xs.ndim != 1:
        raise InvalidParamsError("Constant point coordinates must be two 1-D arrays of equal length")

    min_points = N_RESERVED_POINTS + params.n_element_bits * MIN_INPUTS
    if params.n_points < min_points:
        raise InvalidParamsError(
            f"Constant table has {params.n_points} points, need at least {min_points}"
        )

    on_curve = is_on_curve(params.constant_xs, params.constant_ys, params.alpha, params.beta)
    bad = np.flatnonzero(~np.asarray(on_curve, dtype=bool))
    if bad.size > 0:
        raise InvalidParamsError(f"Constant point {int(bad[0])} is not on the curve")

    if len(set(params.constant_xs.tolist())) != params.n_points:
        raise InvalidParamsError("Constant points must have distinct x-coordinates")


def _derive_constant_points(
    field: Type[galois.FieldArray],
    alpha: galois.FieldArray,
    beta: galois.FieldArray,
    seed: bytes,
    n_points: int,
) -> Tuple[galois.FieldArray, galois.FieldArray]:
    prime = field.characteristic
    candidates = []
    for i in range(n_points):
        digest = hashlib.sha256(seed + i.to_bytes(4, "big")).digest()
        candidates.append(int.from_bytes(digest, "big") % prime)

    xs = field(candidates)
    ys = field.Zeros(n_points)
    one = field(1)

    # Resolve every candidate that lands on the curve, bump the rest and retry
    pending = np.arange(n_points)
    while pending.size > 0:
        x = xs[pending]
        y_squared = x ** 3 + alpha * x + beta
        square = np.asarray(y_squared.is_square(), dtype=bool).reshape(-1)
        if square.any():
            ys[pending[square]] = np.sqrt(y_squared[square])
        pending = pending[~square]
        if pending.size > 0:
            xs[pending] = xs[pending] + one

    return xs, ys


def _check_coordinate(value: int, prime: int, name: str) -> None:
    if value < 0 or value >= prime:
        raise InvalidParamsError(f"{name} = {value} is outside [0, FIELD_PRIME)")


def _parse_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidParamsError(f"{name} must be a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith("0x"):
                return int(text, 16)
            return int(text, 10)
        except ValueError as e:
            raise InvalidParamsError(f"{name} is not a number: {value!r}") from e
    raise InvalidParamsError(f"{name} must be a number, got {type(value).__name__}")


def _parse_hex_pair(pair: Any, index: int) -> PointPair:
    if not isinstance(pair, (list, tuple)) or len(pair) != 2:
        raise InvalidParamsError(f"Constant point {index} is not an [x, y] pair")
    if not all(isinstance(c, str) for c in pair):
        raise InvalidParamsError(f"Constant point {index} must be a pair of hex strings: {pair!r}")
    try:
        return int(pair[0], 16), int(pair[1], 16)
    except ValueError as e:
        raise InvalidParamsError(f"Constant point {index} is not hex: {pair!r}") from e
