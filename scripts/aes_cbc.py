"""CLI for AES-CBC encryption, decryption and key/IV generation.

Usage:
    python scripts/aes_cbc.py keygen --bits 256
    python scripts/aes_cbc.py encrypt --key <hex> "HELLO"
    python scripts/aes_cbc.py encrypt --key <hex> --iv <hex> --steps "HELLO"
    python scripts/aes_cbc.py decrypt --key <hex> --iv <hex> <ciphertext-hex>

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from aeslab.api import decrypt, encrypt, generate_iv, generate_key
from aeslab.config import load_settings
from aeslab.errors import AESLabError


def main() -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="AES-CBC with PKCS#7 padding (educational)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_key = sub.add_parser("keygen", help="Generate a random key (hex)")
    p_key.add_argument("--bits", type=int, choices=[128, 192, 256], default=settings.default_key_bits)

    sub.add_parser("ivgen", help="Generate a random IV (hex)")

    p_enc = sub.add_parser("encrypt", help="Encrypt text")
    p_enc.add_argument("plaintext", type=str)
    p_enc.add_argument("--key", required=True, help="Key as hex (16, 24 or 32 bytes)")
    p_enc.add_argument("--iv", default=None, help="IV as hex (16 bytes); random if omitted")
    p_enc.add_argument("--steps", action="store_true", help="Include the per-block step trace")

    p_dec = sub.add_parser("decrypt", help="Decrypt hex ciphertext")
    p_dec.add_argument("ciphertext", type=str)
    p_dec.add_argument("--key", required=True)
    p_dec.add_argument("--iv", required=True)
    p_dec.add_argument("--steps", action="store_true")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        if args.command == "keygen":
            print(generate_key(args.bits))
        elif args.command == "ivgen":
            print(generate_iv())
        elif args.command == "encrypt":
            result = encrypt(args.plaintext, args.key, iv_hex=args.iv, record_steps=args.steps)
            print(json.dumps(result.model_dump(exclude_none=True), indent=2))
        elif args.command == "decrypt":
            result = decrypt(args.ciphertext, args.key, args.iv, record_steps=args.steps)
            print(json.dumps(result.model_dump(exclude_none=True), indent=2))
    except AESLabError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
