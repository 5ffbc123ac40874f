"""Run the evaluation suite and write a JSON report.

Usage:
    python scripts/run_evaluation.py                          # full suite
    python scripts/run_evaluation.py --vectors 50 --sac-trials 5
    python scripts/run_evaluation.py --skip-sac --output-dir reports

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from aeslab.cipher.block import AESBlockCipher
from aeslab.config import load_settings
from aeslab.evaluation import (
    EvaluationReport,
    analyze_sbox,
    avalanche_key,
    avalanche_plaintext,
    compute_sac,
    run_all_key_sizes,
    run_known_answer_tests,
)
from aeslab.utils.repro import make_report_path, set_global_seed, write_json

logger = logging.getLogger("run_evaluation")


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def main() -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="AES/CBC evaluation suite")
    parser.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Roundtrip vectors per configuration (default: {settings.roundtrip_vectors})",
    )
    parser.add_argument(
        "--sac-trials", type=int, default=settings.sac_trials,
        help=f"SAC trials per input bit (default: {settings.sac_trials})",
    )
    parser.add_argument("--seed", type=int, default=settings.global_seed)
    parser.add_argument("--skip-sac", action="store_true", help="Skip SAC analysis")
    parser.add_argument("--skip-sbox", action="store_true", help="Skip S-box analysis")
    parser.add_argument(
        "--output-dir", type=str, default=settings.reports_dir,
        help=f"Output directory (default: {settings.reports_dir})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    set_global_seed(args.seed)

    report = EvaluationReport()
    report.known_answer_results = run_known_answer_tests()
    report.roundtrip_results = run_all_key_sizes(
        num_vectors=args.vectors, seed=args.seed, progress_callback=_cli_progress,
    )

    for bits in (128, 192, 256):
        cipher = AESBlockCipher(key_size_bits=bits)
        report.avalanche[f"{cipher.name} plaintext"] = avalanche_plaintext(cipher, key_size_bits=bits, seed=args.seed)
        report.avalanche[f"{cipher.name} key"] = avalanche_key(cipher, key_size_bits=bits, seed=args.seed)

    if not args.skip_sac:
        cipher = AESBlockCipher(key_size_bits=128)
        for input_type in ("plaintext", "key"):
            logger.info("SAC (%s), %d trials per bit", input_type, args.sac_trials)
            report.sac_results.append(compute_sac(
                cipher,
                key_size_bits=128,
                input_type=input_type,
                trials=args.sac_trials,
                seed=args.seed,
            ))

    if not args.skip_sbox:
        report.sbox_result = analyze_sbox()

    out_path = make_report_path(Path(settings.project_root) / args.output_dir, "evaluation")
    write_json(out_path, report.to_dict())

    print(report.to_summary())
    print(f"\nReport written to {out_path}")
    return 0 if report.all_pass else 1


if __name__ == "__main__":
    sys.exit(main())
