"""Structured evaluation report builder.

Aggregates known-answer tests, roundtrip tests, avalanche/SAC results and
S-box analysis into a single serializable report.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .avalanche import SACResult
from .kat import KnownAnswerResult
from .roundtrip import RoundtripResult
from .sbox_analysis import SBoxAnalysisResult


@dataclass
class EvaluationReport:
    """Complete evaluation report aggregating all analysis results."""
    timestamp: str = ""
    known_answer_results: List[KnownAnswerResult] = field(default_factory=list)
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    sac_results: List[SACResult] = field(default_factory=list)
    avalanche: Dict[str, Dict[str, float]] = field(default_factory=dict)
    sbox_result: Optional[SBoxAnalysisResult] = None

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    @property
    def all_pass(self) -> bool:
        return (
            all(k.passed for k in self.known_answer_results)
            and all(r.is_perfect for r in self.roundtrip_results)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "known_answer": [k.to_dict() for k in self.known_answer_results],
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "sac": [s.to_dict() for s in self.sac_results],
            "avalanche": self.avalanche,
            "sbox": self.sbox_result.to_dict() if self.sbox_result else None,
            "summary": {
                "known_answer_all_pass": all(k.passed for k in self.known_answer_results),
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "sac_all_pass": all(s.passes_sac for s in self.sac_results),
                "failing": self.failing(),
            },
        }

    def to_summary(self) -> str:
        lines = [f"Evaluation Report - {self.timestamp}", "=" * 50]

        if self.known_answer_results:
            ok = sum(1 for k in self.known_answer_results if k.passed)
            lines.append(f"\nKnown-answer tests: {ok}/{len(self.known_answer_results)} pass")
            for k in self.known_answer_results:
                lines.append(f"  {k.summary()}")

        if self.roundtrip_results:
            ok = sum(1 for r in self.roundtrip_results if r.is_perfect)
            lines.append(f"\nRoundtrip tests: {ok}/{len(self.roundtrip_results)} configurations pass")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        if self.avalanche:
            lines.append("\nAvalanche:")
            for label, stats in sorted(self.avalanche.items()):
                lines.append(f"  {label}: mean={stats['mean']:.4f}")

        if self.sac_results:
            ok = sum(1 for s in self.sac_results if s.passes_sac)
            lines.append(f"\nSAC analysis: {ok}/{len(self.sac_results)} pass")
            for s in self.sac_results:
                lines.append(f"  {s.summary()}")

        if self.sbox_result:
            lines.append(f"\nS-box: {self.sbox_result.summary()}")

        return "\n".join(lines)

    def failing(self) -> List[str]:
        """Names of known-answer vectors and roundtrip configurations that failed."""
        out = [k.name for k in self.known_answer_results if not k.passed]
        out += [r.algorithm_name for r in self.roundtrip_results if not r.is_perfect]
        return out
