"""Step trace of a CBC operation for external visualisation.

A trace carries nothing that is not derivable from the plain encrypt/decrypt
contract. The CBC controller only touches a recorder when one is passed in,
so untraced calls allocate none of this.

Per-block fields:

- encryption: ``input_block`` is the padded plaintext block, ``xor_result``
  is that block XOR the previous ciphertext (or IV), ``output_block`` is the
  ciphertext block.
- decryption: ``input_block`` is the ciphertext block, ``output_block`` is
  the raw block-decrypt output, ``xor_result`` is that output XOR the
  previous ciphertext (or IV), i.e. the padded plaintext block.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Operation = Literal["encrypt", "decrypt"]


class BlockStep(BaseModel):
    index: int = Field(..., ge=0)
    input_block_hex: str
    xor_result_hex: str
    output_block_hex: str


class StepTrace(BaseModel):
    operation: Operation
    iv_hex: str
    padded_length_bytes: int = Field(..., ge=0)
    final_result_hex: str = ""
    blocks: List[BlockStep] = Field(default_factory=list)


class CBCTraceRecorder:
    """Injected into ``encrypt_cbc`` / ``decrypt_cbc`` to capture a StepTrace."""

    def __init__(self) -> None:
        self._trace: Optional[StepTrace] = None
        self.completed = False

    def begin(self, operation: Operation, iv: bytes, padded_length: int) -> None:
        self._trace = StepTrace(operation=operation, iv_hex=iv.hex(), padded_length_bytes=padded_length)
        self.completed = False

    def block(self, index: int, input_block: bytes, xor_result: bytes, output_block: bytes) -> None:
        if self._trace is None:
            raise RuntimeError("block() called before begin()")
        self._trace.blocks.append(BlockStep(
            index=index,
            input_block_hex=input_block.hex(),
            xor_result_hex=xor_result.hex(),
            output_block_hex=output_block.hex(),
        ))

    def finish(self, final_result: bytes) -> None:
        if self._trace is None:
            raise RuntimeError("finish() called before begin()")
        self._trace.final_result_hex = final_result.hex()
        self.completed = True

    @property
    def trace(self) -> StepTrace:
        if self._trace is None or not self.completed:
            raise RuntimeError("trace is not complete")
        return self._trace
