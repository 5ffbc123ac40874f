"""AES single-block transform.

The State is a 4x4 matrix (list of 4 rows) filled column-major from the
16-byte block: byte ``i`` sits at row ``i % 4``, column ``i // 4``. Every
round primitive returns a new State and leaves its input untouched.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from aeslab.errors import InvalidBlockLength

from .key_schedule import KeySchedule, expand_key
from .tables import INV_SBOX, MUL2, MUL3, MUL9, MUL11, MUL13, MUL14, SBOX

BLOCK_SIZE = 16

State = List[List[int]]
KeyLike = Union[bytes, bytearray, KeySchedule]

# (round_index, step_name, state_as_bytes)
RoundObserver = Callable[[int, str, bytes], None]


# ---------------------------------------------------------------------------
# State conversion
# ---------------------------------------------------------------------------

def bytes_to_state(block: bytes) -> State:
    if len(block) != BLOCK_SIZE:
        raise InvalidBlockLength(len(block))
    return [[block[col * 4 + row] for col in range(4)] for row in range(4)]


def state_to_bytes(state: State) -> bytes:
    return bytes(state[i % 4][i // 4] for i in range(BLOCK_SIZE))


def format_state(state: State) -> List[List[str]]:
    return [[f"{b:02x}" for b in row] for row in state]


# ---------------------------------------------------------------------------
# Round primitives
# ---------------------------------------------------------------------------

def sub_bytes(state: State) -> State:
    return [[SBOX[b] for b in row] for row in state]


def inv_sub_bytes(state: State) -> State:
    return [[INV_SBOX[b] for b in row] for row in state]


def shift_rows(state: State) -> State:
    # row r rotates left by r
    return [row[r:] + row[:r] for r, row in enumerate(state)]


def inv_shift_rows(state: State) -> State:
    # row r rotates right by r
    return [row[4 - r:] + row[:4 - r] for r, row in enumerate(state)]


def mix_columns(state: State) -> State:
    out = [[0] * 4 for _ in range(4)]
    for c in range(4):
        a0, a1, a2, a3 = (state[r][c] for r in range(4))
        out[0][c] = MUL2[a0] ^ MUL3[a1] ^ a2 ^ a3
        out[1][c] = a0 ^ MUL2[a1] ^ MUL3[a2] ^ a3
        out[2][c] = a0 ^ a1 ^ MUL2[a2] ^ MUL3[a3]
        out[3][c] = MUL3[a0] ^ a1 ^ a2 ^ MUL2[a3]
    return out


def inv_mix_columns(state: State) -> State:
    out = [[0] * 4 for _ in range(4)]
    for c in range(4):
        a0, a1, a2, a3 = (state[r][c] for r in range(4))
        out[0][c] = MUL14[a0] ^ MUL11[a1] ^ MUL13[a2] ^ MUL9[a3]
        out[1][c] = MUL9[a0] ^ MUL14[a1] ^ MUL11[a2] ^ MUL13[a3]
        out[2][c] = MUL13[a0] ^ MUL9[a1] ^ MUL14[a2] ^ MUL11[a3]
        out[3][c] = MUL11[a0] ^ MUL13[a1] ^ MUL9[a2] ^ MUL14[a3]
    return out


def add_round_key(state: State, round_key: bytes) -> State:
    if len(round_key) != BLOCK_SIZE:
        raise InvalidBlockLength(len(round_key))
    return [[state[r][c] ^ round_key[c * 4 + r] for c in range(4)] for r in range(4)]


# ---------------------------------------------------------------------------
# Full block
# ---------------------------------------------------------------------------

def _schedule(key: KeyLike) -> KeySchedule:
    if isinstance(key, KeySchedule):
        return key
    return expand_key(bytes(key))


def encrypt_block(block: bytes, key: KeyLike, observer: Optional[RoundObserver] = None) -> bytes:
    """Encrypt one 16-byte block.

    ``key`` is either raw key bytes or an already expanded KeySchedule.
    ``observer``, if given, sees the State after every primitive.
    """
    state = bytes_to_state(block)
    ks = _schedule(key)
    nr = ks.rounds

    state = add_round_key(state, ks[0])
    if observer:
        observer(0, "add_round_key", state_to_bytes(state))

    for rnd in range(1, nr + 1):
        state = sub_bytes(state)
        if observer:
            observer(rnd, "sub_bytes", state_to_bytes(state))
        state = shift_rows(state)
        if observer:
            observer(rnd, "shift_rows", state_to_bytes(state))
        # MixColumns is omitted in the final round.
        if rnd != nr:
            state = mix_columns(state)
            if observer:
                observer(rnd, "mix_columns", state_to_bytes(state))
        state = add_round_key(state, ks[rnd])
        if observer:
            observer(rnd, "add_round_key", state_to_bytes(state))

    return state_to_bytes(state)


def decrypt_block(block: bytes, key: KeyLike, observer: Optional[RoundObserver] = None) -> bytes:
    """Decrypt one 16-byte block (exact inverse of ``encrypt_block``)."""
    state = bytes_to_state(block)
    ks = _schedule(key)
    nr = ks.rounds

    state = add_round_key(state, ks[nr])
    if observer:
        observer(nr, "add_round_key", state_to_bytes(state))

    for rnd in range(nr - 1, -1, -1):
        state = inv_shift_rows(state)
        if observer:
            observer(rnd, "inv_shift_rows", state_to_bytes(state))
        state = inv_sub_bytes(state)
        if observer:
            observer(rnd, "inv_sub_bytes", state_to_bytes(state))
        state = add_round_key(state, ks[rnd])
        if observer:
            observer(rnd, "add_round_key", state_to_bytes(state))
        # InvMixColumns is omitted in the last (round 0) step.
        if rnd != 0:
            state = inv_mix_columns(state)
            if observer:
                observer(rnd, "inv_mix_columns", state_to_bytes(state))

    return state_to_bytes(state)


# ---------------------------------------------------------------------------
# Round-level trace
# ---------------------------------------------------------------------------

@dataclass
class RoundStep:
    round_index: int
    step: str
    state_hex: str


@dataclass
class BlockRoundRecorder:
    """Collects every intermediate State of one block operation."""
    steps: List[RoundStep] = field(default_factory=list)

    def __call__(self, round_index: int, step: str, state: bytes) -> None:
        self.steps.append(RoundStep(round_index=round_index, step=step, state_hex=state.hex()))

    def by_round(self, round_index: int) -> List[RoundStep]:
        return [s for s in self.steps if s.round_index == round_index]


# ---------------------------------------------------------------------------
# BlockCipher adapter used by the evaluation package
# ---------------------------------------------------------------------------

class BlockCipher:
    block_size_bits: int = 128

    def encrypt_block(self, plaintext_block: bytes, key: bytes) -> bytes:  # pragma: no cover
        raise NotImplementedError

    def decrypt_block(self, ciphertext_block: bytes, key: bytes) -> bytes:  # pragma: no cover
        raise NotImplementedError


@dataclass
class AESBlockCipher(BlockCipher):
    key_size_bits: int = 128

    def __post_init__(self):
        if self.key_size_bits not in (128, 192, 256):
            raise ValueError(f"key_size_bits must be 128, 192 or 256, got {self.key_size_bits}")

    @property
    def name(self) -> str:
        return f"AES-{self.key_size_bits}"

    @property
    def rounds(self) -> int:
        return {128: 10, 192: 12, 256: 14}[self.key_size_bits]

    def encrypt_block(self, plaintext_block: bytes, key: bytes) -> bytes:
        return encrypt_block(plaintext_block, key)

    def decrypt_block(self, ciphertext_block: bytes, key: bytes) -> bytes:
        return decrypt_block(ciphertext_block, key)
