"""Deterministic evaluation of the AES/CBC engine.

Known-answer tests, roundtrip verification, avalanche/SAC measurement and
S-box analysis.

Research / education only. Do NOT use in production.
"""

from .avalanche import SACResult, avalanche_key, avalanche_plaintext, compute_sac
from .kat import KNOWN_ANSWER_VECTORS, KnownAnswerResult, KnownAnswerVector, run_known_answer_tests
from .report import EvaluationReport
from .roundtrip import (
    RoundtripFailure,
    RoundtripResult,
    run_all_key_sizes,
    run_block_roundtrip,
    run_cbc_roundtrip,
)
from .sbox_analysis import SBoxAnalysisResult, analyze_sbox

__all__ = [
    "SACResult",
    "avalanche_key",
    "avalanche_plaintext",
    "compute_sac",
    "KNOWN_ANSWER_VECTORS",
    "KnownAnswerResult",
    "KnownAnswerVector",
    "run_known_answer_tests",
    "EvaluationReport",
    "RoundtripFailure",
    "RoundtripResult",
    "run_all_key_sizes",
    "run_block_roundtrip",
    "run_cbc_roundtrip",
    "SBoxAnalysisResult",
    "analyze_sbox",
]
