from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

import pandas as pd
from rich import print
from rich.console import Console

from tagvec.config import load_config_any, set_settings
from tagvec.display import print_table
from tagvec.errors import VectorContractError
from tagvec.kinds.decimal import DecimalDtype, as_decimal
from tagvec.kinds.percent import as_percent
from tagvec.log import setup_logging
from tagvec.ops import print_vector
from tagvec.version import get_version_info


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tagvec")
    p.add_argument(
        "--log-level",
        default=None,
        help="CRITICAL|ERROR|WARNING|INFO|DEBUG (or env TAGVEC_LOG_LEVEL)",
    )
    p.add_argument("--config", default=None, help="YAML display settings (or env TAGVEC_CONFIG)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="Print package and library versions")

    p_show = sub.add_parser("show", help="Build one vector from the arguments and print it")
    p_show.add_argument("--kind", choices=["percent", "decimal"], default="percent")
    p_show.add_argument("--digits", type=int, default=None, help="Decimals for --kind decimal")
    p_show.add_argument("values", nargs="*", help="Numbers; NA for missing; 12.5%% for percent text")

    p_tab = sub.add_parser("table", help="Read a CSV and print it as a typed table")
    p_tab.add_argument("csv")
    p_tab.add_argument("--percent", action="append", default=[], metavar="COL", help="Parse COL as percent")
    p_tab.add_argument("--decimal", action="append", default=[], metavar="COL", help="Parse COL as decimal")
    p_tab.add_argument("--digits", type=int, default=None, help="Decimals for --decimal columns")
    p_tab.add_argument("--max-rows", type=int, default=None)
    return p


def _show(args: argparse.Namespace, console: Console) -> None:
    if args.kind == "percent":
        vec = as_percent(list(args.values))
    else:
        vec = as_decimal(list(args.values), digits=args.digits)
    print_vector(vec, console=console)


def _table(args: argparse.Namespace, console: Console) -> None:
    log = logging.getLogger("tagvec")
    path = Path(args.csv)
    dtypes: dict[str, object] = {c: "percent" for c in args.percent}
    dtypes.update({c: DecimalDtype(args.digits) for c in args.decimal})
    df = pd.read_csv(path, dtype=dtypes)
    log.info("Read %s: %d rows x %d columns", path.name, len(df), df.shape[1])
    print_table(df, console=console, max_rows=args.max_rows)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = load_config_any(args.config)
    set_settings(settings)
    setup_logging(args.log_level or settings.log_level)
    log = logging.getLogger("tagvec")
    console = Console()

    if args.cmd == "version":
        v = get_version_info()
        print(f"[bold]tagvec[/bold] {v.package_version}")
        print(f"python {v.python} | numpy {v.numpy} | pandas {v.pandas} | {v.platform}")
        return 0

    try:
        if args.cmd == "show":
            _show(args, console)
        elif args.cmd == "table":
            _table(args, console)
    except (VectorContractError, ValueError, OSError) as e:
        log.error("%s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
