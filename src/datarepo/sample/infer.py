from __future__ import annotations

import re
from typing import Iterable

_BOOL_LITERALS = {"true", "false"}

# Narrowest first; a column takes the first type every non-empty value fits.
_TYPE_ORDER = ("bool", "int64", "float64", "uri/s3", "uri/http", "string")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _is_int(value: str) -> bool:
    # Plain decimal digits only: no "1_000", no values outside int64.
    if not _INT_RE.fullmatch(value):
        return False
    return _INT64_MIN <= int(value) <= _INT64_MAX


def _is_float(value: str) -> bool:
    # Rejects "nan", "inf" and digit separators that float() would accept.
    return _FLOAT_RE.fullmatch(value) is not None


_CHECKS = {
    "bool": lambda v: v.lower() in _BOOL_LITERALS,
    "int64": _is_int,
    "float64": _is_float,
    "uri/s3": lambda v: v.startswith("s3://"),
    "uri/http": lambda v: v.startswith(("http://", "https://")),
    "string": lambda v: True,
}


def infer_type(values: Iterable[str]) -> tuple[str, bool]:
    """Return (type, nullable) for the sampled values of one column."""
    candidates = list(_TYPE_ORDER)
    nullable = False
    seen = False
    for raw in values:
        value = raw.strip()
        if not value:
            nullable = True
            continue
        seen = True
        candidates = [t for t in candidates if _CHECKS[t](value)]
    if not seen:
        return "string", True
    return candidates[0], nullable
