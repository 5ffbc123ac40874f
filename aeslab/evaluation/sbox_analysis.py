"""S-box differential and linear analysis.

Checks the AES substitution tables: bijectivity, that INV_SBOX really
inverts SBOX, the maximum DDT entry and the maximum absolute LAT entry.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence

import numpy as np

from aeslab.cipher.tables import INV_SBOX, SBOX

_PARITY = np.array([bin(i).count("1") & 1 for i in range(256)], dtype=np.int8)


@dataclass
class SBoxAnalysisResult:
    """Structured result of S-box differential/linear analysis."""
    name: str
    sbox_size: int
    ddt_max: int                # max DDT entry, dx != 0 (AES: 4)
    lat_max_abs: int            # max |LAT| as a +-1 sum, a,b != 0 (AES: 32)
    is_bijective: bool
    inverse_matches: bool       # inv[s[x]] == x for all x
    differential_uniformity: str
    linearity: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        bij = "bijective" if self.is_bijective else "NOT bijective"
        inv = "inverse ok" if self.inverse_matches else "inverse MISMATCH"
        return (
            f"{self.name} ({self.sbox_size}-entry): "
            f"DDT_max={self.ddt_max} ({self.differential_uniformity}), "
            f"LAT_max={self.lat_max_abs} ({self.linearity}), {bij}, {inv}"
        )


def sbox_ddt_max(sbox: Sequence[int]) -> int:
    """Max entry of the difference distribution table, excluding dx = 0."""
    s = np.asarray(sbox, dtype=np.int64)
    n = len(s)
    if n != 256:
        raise ValueError("sbox must be 8-bit (256 entries)")
    x = np.arange(n)
    max_v = 0
    for dx in range(1, n):
        counts = np.bincount(s ^ s[x ^ dx], minlength=n)
        max_v = max(max_v, int(counts.max()))
    return max_v


def sbox_lat_max_abs(sbox: Sequence[int]) -> int:
    """Max |sum_x (-1)^(a.x ^ b.S(x))| over non-zero masks a, b."""
    s = np.asarray(sbox, dtype=np.int64)
    n = len(s)
    if n != 256:
        raise ValueError("sbox must be 8-bit (256 entries)")
    masks = np.arange(n)
    # signs_in[a, x] = (-1)^(a.x), signs_out[b, x] = (-1)^(b.S(x))
    signs_in = 1 - 2 * _PARITY[masks[:, None] & masks[None, :]].astype(np.int64)
    signs_out = 1 - 2 * _PARITY[masks[:, None] & s[None, :]].astype(np.int64)
    lat = signs_in @ signs_out.T
    return int(np.abs(lat[1:, 1:]).max())


def _rate_differential_uniformity(ddt_max: int) -> str:
    if ddt_max <= 4:
        return "good"
    elif ddt_max <= 8:
        return "fair"
    return "poor"


def _rate_linearity(lat_max: int) -> str:
    if lat_max <= 32:
        return "good"
    elif lat_max <= 64:
        return "fair"
    return "poor"


def analyze_sbox(
    sbox: Sequence[int] = SBOX,
    inverse: Sequence[int] = INV_SBOX,
    *,
    name: str = "AES",
) -> SBoxAnalysisResult:
    ddt = sbox_ddt_max(sbox)
    lat = sbox_lat_max_abs(sbox)
    return SBoxAnalysisResult(
        name=name,
        sbox_size=len(sbox),
        ddt_max=ddt,
        lat_max_abs=lat,
        is_bijective=len(set(sbox)) == len(sbox),
        inverse_matches=all(inverse[sbox[x]] == x for x in range(len(sbox))),
        differential_uniformity=_rate_differential_uniformity(ddt),
        linearity=_rate_linearity(lat),
    )
