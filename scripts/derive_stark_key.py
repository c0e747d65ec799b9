#!/usr/bin/env python3
"""Derive a stark public key from a seed phrase.

Usage:
    python scripts/derive_stark_key.py --layer starkex --application starkexdvf --index 0
    python scripts/derive_stark_key.py --path "m/2645'/..."

The seed phrase is read from WALLET_SEED_PHRASE or prompted for.
"""

import argparse
import asyncio
import os
import sys
from getpass import getpass

from starkex_controller.controller import StarkwareController
from starkex_controller.storage.memory import MemoryStore


async def derive(mnemonic: str, params: dict) -> dict:
    controller = StarkwareController(mnemonic, MemoryStore())
    return await controller.resolve({"id": 1, "method": "stark_account", "params": params})


def main():
    parser = argparse.ArgumentParser(description="Derive a stark public key")
    parser.add_argument("--path", help="Explicit derivation path")
    parser.add_argument("--layer", default="starkex", help="Layer name")
    parser.add_argument("--application", default="starkexdvf", help="Application name")
    parser.add_argument("--index", default="0", help="Account index")
    parser.add_argument("--eth-address", help="Owning Ethereum address (default: wallet's first)")
    args = parser.parse_args()

    mnemonic = os.environ.get("WALLET_SEED_PHRASE") or getpass("Seed phrase: ")
    if len(mnemonic.split()) < 12:
        print("Error: seed phrase must have at least 12 words")
        sys.exit(1)

    if args.path:
        params = {"path": args.path}
    else:
        params = {"layer": args.layer, "application": args.application, "index": args.index}
        if args.eth_address:
            params["ethereumAddress"] = args.eth_address

    response = asyncio.run(derive(mnemonic, params))
    if "error" in response:
        print(f"Error: {response['error']['message']}")
        sys.exit(1)

    print(f"Stark public key: {response['result']['starkPublicKey']}")


if __name__ == "__main__":
    main()
