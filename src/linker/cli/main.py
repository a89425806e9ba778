from __future__ import annotations

import argparse
import datetime as dt
import os
import sys
import time
from typing import List, Optional

from linker.config import settings
from linker.core.address import require_valid_address
from linker.core.errors import InvalidAddressError
from linker.core.models import LinkConfig
from linker.services.linker_service import LinkerService
from linker.io.output_writer import format_path, write_result_json, write_summary_md

from linker.adapters.chain.solana_rpc_adapter import SolanaRpcChainAdapter
from linker.adapters.chain.static_chain_adapter import StaticChainAdapter


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="linker", description="Find how two Solana addresses are connected")
    p.add_argument("address1", help="First address")
    p.add_argument("address2", help="Second address")
    p.add_argument("--max-depth", type=int, default=settings.LINK_MAX_PATH_DEPTH, help="Maximum path length in addresses")
    p.add_argument("--ordered", action="store_true", help="Expand neighbors in sorted order (reproducible paths)")
    p.add_argument("--out", help="Write links.json and summary.md to this folder")
    p.add_argument("--fixture", help="Read histories/transactions from a JSON fixture instead of RPC (dev/testing)")
    return p


def _make_progress_reporter():
    start_time = time.time()
    last_print = 0.0
    is_tty = sys.stdout.isatty()

    def _short_addr(addr: str) -> str:
        if not addr:
            return ""
        if len(addr) <= 12:
            return addr
        return f"{addr[:6]}...{addr[-4:]}"

    def _ts() -> str:
        return dt.datetime.now().strftime("%H:%M:%S")

    def _print_line(message: str) -> None:
        if is_tty:
            sys.stdout.write("\r" + message.ljust(88))
            sys.stdout.flush()
        else:
            print(message)

    def _clear_line() -> None:
        if is_tty:
            sys.stdout.write("\r" + (" " * 88) + "\r")
            sys.stdout.flush()

    def progress(event: str, data: dict) -> None:
        nonlocal last_print
        now = time.time()
        if event == "start":
            print("Analyzing connection between addresses:")
            print(f"Address 1: {data['address1']}")
            print(f"Address 2: {data['address2']}")
            return
        if event == "fetch":
            _print_line(f"Fetching signatures for {_short_addr(str(data.get('address', '')))}...")
            last_print = now
            return
        if event == "fetch_done":
            _clear_line()
            print(f"Fetched {data.get('count', 0)} transactions for address {data.get('address', '')}")
            return
        if event == "details":
            print(f"Fetching details for {data['count']} unique transactions")
            return
        if event == "detail_progress":
            if is_tty and now - last_print < 0.2:
                return
            _print_line(f"Processed {data['processed']}/{data['total']} transactions (failed {data['failed']})")
            last_print = now
            return
        if event == "graph":
            _clear_line()
            print(f"Number of nodes in graph: {data['nodes']} ({data['edges']} edges)")
            print("Finding paths between addresses")
            return
        if event == "done":
            _clear_line()
            elapsed = time.time() - start_time
            print(f"[{_ts()}] Done in {elapsed:.1f}s")
            return
        if event == "warning":
            print(f"[{_ts()}] Warning: {data.get('message', '')}", file=sys.stderr)
            return
        if event == "error":
            _clear_line()
            print(f"[{_ts()}] Error: {data.get('message', 'Unknown error')}", file=sys.stderr)

    return progress


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        require_valid_address(args.address1)
        require_valid_address(args.address2)
    except InvalidAddressError as exc:
        print(f"Invalid address provided: {exc}", file=sys.stderr)
        return 2
    if args.max_depth < 1:
        print("--max-depth must be >= 1", file=sys.stderr)
        return 2

    cfg = LinkConfig(
        address1=args.address1,
        address2=args.address2,
        max_depth=args.max_depth,
        ordered=args.ordered,
    )
    progress = _make_progress_reporter()

    # Ports
    if args.fixture:
        chain = StaticChainAdapter.from_json_file(args.fixture)
        adapter_label = f"StaticChainAdapter ({args.fixture})"
    else:
        if not os.getenv("SOLANA_RPC_ENDPOINT"):
            progress("warning", {
                "message": "SOLANA_RPC_ENDPOINT environment variable not set. Using default endpoint.",
            })
        chain = SolanaRpcChainAdapter()
        adapter_label = f"SolanaRpcChainAdapter ({settings.SOLANA_RPC_ENDPOINT})"

    # Service
    svc = LinkerService(chain=chain)
    print(f"Adapter: {adapter_label}")
    try:
        result = svc.link(cfg, on_progress=progress)
    except Exception as exc:
        progress("error", {"message": f"{exc.__class__.__name__}: {exc}"})
        return 1

    print(f"Found {len(result.paths)} path(s) between the addresses:")
    for i, path in enumerate(result.paths, start=1):
        print(f"Path {i}:")
        print(format_path(path))

    # Outputs
    if args.out:
        print("Writing outputs...")
        json_path = write_result_json(result, args.out)
        summary_path = write_summary_md(result, args.out)
        print(f"Wrote: {json_path}")
        print(f"Wrote: {summary_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
