from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

from linker.core.models import LinkResult
from linker.io.schemas import result_to_dict


def format_path(path) -> str:
    return " -> ".join(path)


def write_result_json(result: LinkResult, out_dir: str, filename: str = "links.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(result_to_dict(result), f, indent=2)

    return str(out_path)


def write_summary_md(result: LinkResult, out_dir: str, filename: str = "summary.md") -> str:
    """
    Minimal, investigator-friendly summary.
    """
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename

    def fmt_ts(ts: int) -> str:
        return dt.datetime.fromtimestamp(ts, tz=dt.timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

    def interpretation() -> str:
        if not result.paths:
            return (
                "No connection was found within the path limit. The addresses may still "
                "be linked through transactions outside the fetched history."
            )
        hops = len(result.paths[0]) - 1
        if hops == 0:
            return "Both inputs are the same address."
        if hops == 1:
            return "The addresses appear together directly in at least one transaction."
        return (
            f"The addresses are connected through {hops - 1} intermediate account(s). "
            "Co-occurrence does not imply a transfer between them."
        )

    lines = []
    lines.append("# Link Summary\n")
    lines.append(f"- Address 1: **{result.address1}**\n")
    lines.append(f"- Address 2: **{result.address2}**\n")
    lines.append(f"- Signatures: **{result.signatures1}** + **{result.signatures2}** "
                 f"({result.unique_signatures} unique)\n")
    lines.append(f"- Transactions fetched: **{result.transactions_fetched}** "
                 f"(failed: {result.transactions_failed})\n")
    if result.earliest_block_time is not None:
        lines.append(f"- Activity window: {fmt_ts(result.earliest_block_time)} .. "
                     f"{fmt_ts(result.latest_block_time)} (UTC)\n")
    lines.append(f"- Graph: **{len(result.graph)}** nodes, **{result.graph.edge_count()}** edges\n")
    lines.append("\n")

    lines.append(f"## Paths ({len(result.paths)})\n\n")
    if not result.paths:
        lines.append("_No path found between the addresses._\n\n")
    else:
        for i, path in enumerate(result.paths, start=1):
            lines.append(f"{i}. `{format_path(path)}`\n")
        lines.append("\n")

    lines.append("## Interpretation\n\n")
    lines.append(f"{interpretation()}\n\n")

    lines.append("## Limitations / Next steps\n\n")
    lines.append("- Edges link each transaction's first account key to its other keys only.\n")
    lines.append("- History is capped per address; older activity is not seen.\n")
    lines.append("- At most one (breadth-first) path is reported, not every route.\n")
    lines.append("- No amounts or direction of value flow.\n")

    with out_path.open("w", encoding="utf-8") as f:
        f.writelines(lines)

    return str(out_path)
