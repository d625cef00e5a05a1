#!/usr/bin/env python3
"""
AllowMint command line tool

Usage:
    allowmint build allowlist.csv -o allowlist.json
    allowmint verify --root 0x.. --address 0x.. --ticket 42 --proof 0x.. 0x..
    allowmint info --config contract.json

allowlist.csv holds one "address,ticket" pair per row; a header row whose
first cell is "address" is skipped.
"""

import argparse
import csv
import json
import logging
import sys
from typing import List, Optional, Tuple

from allowmint import __version__
from allowmint.config import ContractConfig, LogConfig, setup_logging
from allowmint.constants import MAX_TICKETS, SUPPORTED_INTERFACES, TICKET_WORDS, WORD_BITS
from allowmint.core.types import Address, Hash
from allowmint.crypto.merkle import MembershipVerifier, MerkleTree, hash_leaf
from allowmint.errors import AllowMintError, InvalidParameterError, TicketRangeError

logger = logging.getLogger("allowmint.cli")


def read_allowlist(path: str) -> List[Tuple[Address, int]]:
    """Read (address, ticket) rows from a CSV file."""
    entries = []
    seen_tickets = set()

    with open(path, newline='') as f:
        for line_no, row in enumerate(csv.reader(f), start=1):
            if not row or not row[0].strip():
                continue
            if line_no == 1 and row[0].strip().lower() == "address":
                continue
            if len(row) < 2:
                raise InvalidParameterError("allowlist", f"line {line_no}: expected address,ticket")

            address = Address.from_hex(row[0])
            try:
                ticket = int(row[1].strip())
            except ValueError:
                raise InvalidParameterError("allowlist", f"line {line_no}: bad ticket {row[1]!r}")

            if ticket < 0 or ticket >= MAX_TICKETS:
                raise TicketRangeError(ticket, MAX_TICKETS)
            if ticket in seen_tickets:
                raise InvalidParameterError("allowlist", f"line {line_no}: ticket {ticket} listed twice")
            seen_tickets.add(ticket)

            entries.append((address, ticket))

    logger.info(f"Read {len(entries)} allowlist entries from {path}")
    return entries


def cmd_build(args: argparse.Namespace) -> int:
    entries = read_allowlist(args.allowlist)
    if not entries:
        raise InvalidParameterError("allowlist", "no entries")

    tree = MerkleTree.from_entries(entries)
    result = {
        "root": str(tree.root),
        "entries": [
            {
                "address": str(address),
                "ticket": ticket,
                "leaf": str(hash_leaf(address, ticket)),
                "proof": [str(h) for h in tree.proof_for(address, ticket)],
            }
            for address, ticket in entries
        ],
    }

    text = json.dumps(result, indent=2)
    if args.output:
        with open(args.output, 'w') as f:
            f.write(text + "\n")
        logger.info(f"Wrote {len(entries)} proofs to {args.output}")
    else:
        print(text)

    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    verifier = MembershipVerifier(Hash.from_hex(args.root))
    address = Address.from_hex(args.address)
    proof = [Hash.from_hex(h) for h in args.proof]

    valid = verifier.verify(address, args.ticket, proof)
    print(json.dumps({
        "address": str(address),
        "ticket": args.ticket,
        "valid": valid,
    }))
    return 0 if valid else 1


def cmd_info(args: argparse.Namespace) -> int:
    config = ContractConfig.load(args.config) if args.config else ContractConfig()
    info = config.to_dict()
    info["problems"] = config.validate()
    info["tickets"] = {
        "max_tickets": MAX_TICKETS,
        "word_bits": WORD_BITS,
        "words": TICKET_WORDS,
    }
    info["interfaces"] = [f"0x{i:08x}" for i in SUPPORTED_INTERFACES]
    print(json.dumps(info, indent=2))
    return 0 if not info["problems"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="allowmint",
        description="AllowMint allowlist and contract tooling",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build Merkle root and proofs from a CSV allowlist")
    build.add_argument("allowlist", help="CSV file of address,ticket rows")
    build.add_argument("-o", "--output", help="Write JSON here instead of stdout")
    build.set_defaults(func=cmd_build)

    verify = sub.add_parser("verify", help="Check one allowlist proof against a root")
    verify.add_argument("--root", required=True, help="Merkle root (hex)")
    verify.add_argument("--address", required=True, help="Claimant address (hex)")
    verify.add_argument("--ticket", required=True, type=int, help="Ticket number")
    verify.add_argument("--proof", nargs="*", default=[], help="Sibling hashes (hex)")
    verify.set_defaults(func=cmd_verify)

    info = sub.add_parser("info", help="Show contract configuration")
    info.add_argument("--config", help="JSON configuration file")
    info.set_defaults(func=cmd_info)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(LogConfig(level=args.log_level))

    try:
        return args.func(args)
    except AllowMintError as e:
        print(json.dumps({"error": e.to_dict()}), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
