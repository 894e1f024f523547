from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace
from getpass import getpass

from . import CredentialHasher, CredentialRecord, HasherConfig, InvalidArgument
from .validation import DEFAULT_PASSWORD_POLICY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="credhash",
        description="Hash and verify passwords with salted PBKDF2-HMAC.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    h = sub.add_parser("hash", help="Hash a password into a storable record")
    h.add_argument("--iterations", type=int, help="PBKDF2 iteration count (default: config)")
    h.add_argument("--salt-len", type=int, help="Salt length in bytes (default: config)")
    h.add_argument("--no-policy", action="store_true", help="Skip the default password policy check")

    v = sub.add_parser("verify", help="Verify a password against a stored record")
    v.add_argument("record", help="Record string printed by 'hash'")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = HasherConfig.from_env()
        if args.cmd == "hash":
            overrides = {}
            if args.iterations is not None:
                overrides["iterations"] = args.iterations
            if args.salt_len is not None:
                overrides["salt_len"] = args.salt_len
            config = replace(config, **overrides)
            hasher = CredentialHasher(config, policy=None if args.no_policy else DEFAULT_PASSWORD_POLICY)

            password = getpass("Password: ")
            confirm = getpass("Confirm password: ")
            if password != confirm:
                print("Error: passwords do not match.", file=sys.stderr)
                return 2
            print(hasher.hash_credential(password).to_string())
            return 0

        record = CredentialRecord.from_string(args.record)
        hasher = CredentialHasher(config)
        if hasher.verify_record(getpass("Password: "), record):
            print("OK")
            if hasher.needs_rehash(record):
                print("Note: record uses outdated parameters; rehash on next login.", file=sys.stderr)
            return 0
        print("MISMATCH")
        return 1
    except InvalidArgument as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
