"""AES key expansion (FIPS-197 section 5.2).

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from aeslab.errors import InvalidKeyLength

from .tables import RCON, SBOX

NB = 4  # words per block

# key length in bytes -> number of rounds
ROUNDS_BY_KEY_LENGTH: Dict[int, int] = {16: 10, 24: 12, 32: 14}


@dataclass(frozen=True)
class KeySchedule:
    """Immutable expanded key: ``rounds + 1`` round keys of 16 bytes each."""
    rounds: int
    round_keys: Tuple[bytes, ...]

    def __post_init__(self):
        if len(self.round_keys) != self.rounds + 1:
            raise ValueError(f"expected {self.rounds + 1} round keys, got {len(self.round_keys)}")
        if any(len(rk) != 16 for rk in self.round_keys):
            raise ValueError("every round key must be 16 bytes")

    def __len__(self) -> int:
        return len(self.round_keys)

    def __getitem__(self, index: int) -> bytes:
        return self.round_keys[index]

    @property
    def key_size_bits(self) -> int:
        return {10: 128, 12: 192, 14: 256}[self.rounds]


def rounds_for_key(key: bytes) -> int:
    try:
        return ROUNDS_BY_KEY_LENGTH[len(key)]
    except KeyError:
        raise InvalidKeyLength(len(key)) from None


def _rot_word(word: List[int]) -> List[int]:
    return word[1:] + word[:1]


def _sub_word(word: List[int]) -> List[int]:
    return [SBOX[b] for b in word]


def expand_key(key: bytes) -> KeySchedule:
    """Expand a 16/24/32-byte key into ``Nr + 1`` round keys."""
    nr = rounds_for_key(key)
    nk = len(key) // 4
    total_words = NB * (nr + 1)

    w: List[List[int]] = [list(key[4 * i:4 * i + 4]) for i in range(nk)]

    for i in range(nk, total_words):
        temp = w[i - 1]
        if i % nk == 0:
            temp = _sub_word(_rot_word(temp))
            temp[0] ^= RCON[i // nk]
        elif nk > 6 and i % nk == 4:
            temp = _sub_word(temp)
        w.append([a ^ b for a, b in zip(w[i - nk], temp)])

    round_keys = tuple(
        bytes(b for word in w[NB * r:NB * (r + 1)] for b in word)
        for r in range(nr + 1)
    )
    return KeySchedule(rounds=nr, round_keys=round_keys)


def describe_key_schedule(key: bytes) -> List[Dict[str, object]]:
    """Per-round view of the schedule for display.

    Each entry holds the round index, the round key as hex and the same key
    laid out as a 4x4 column-major matrix of hex pairs.
    """
    schedule = expand_key(key)
    details: List[Dict[str, object]] = []
    for r, rk in enumerate(schedule.round_keys):
        matrix = [[f"{rk[col * 4 + row]:02x}" for col in range(4)] for row in range(4)]
        details.append({"round": r, "key_hex": rk.hex(), "key_matrix": matrix})
    return details
