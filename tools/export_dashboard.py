#!/usr/bin/env python3
"""Logistics Dashboard workbook exporter (command line).

Writes one synthetic dashboard workbook to disk without running the web
service. Useful for inspecting the layout in a spreadsheet application or for
producing reproducible files with a fixed seed.

Usage examples
--------------
Default export into the current directory:

  python tools/export_dashboard.py

Reproducible 1000-row workbook over the last 12 months:

  python tools/export_dashboard.py --rows 1000 --months 12 --seed 123 \
    --output ./out/Logistics_Dashboard.xlsx
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.config import settings
from app.dashboard.service import DashboardExportConfig, DashboardExporter
from app.dashboard.workbook import WorkbookBuildError

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Generate a synthetic logistics dashboard workbook (.xlsx).",
    )
    p.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Destination file (default: ./<export filename from settings>)",
    )
    p.add_argument("--rows", type=int, default=settings.row_count, help="Number of trips")
    p.add_argument("--months", type=int, default=settings.month_window, help="Months in the window")
    p.add_argument("--seed", type=int, default=settings.random_seed, help="Random seed")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.rows < 1 or args.months < 1:
        logger.error("--rows and --months must be at least 1")
        return 1

    config = DashboardExportConfig.from_settings(settings)
    config.row_count = args.rows
    config.month_window = args.months
    config.seed = args.seed

    output: Path = args.output or Path.cwd() / config.filename

    try:
        result = DashboardExporter(config).export()
    except (ValueError, WorkbookBuildError) as e:
        logger.error("Export failed: %s", e)
        return 1

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.content)
    logger.info(
        "Wrote %s rows=%d months=%s..%s bytes=%d",
        output,
        result.row_count,
        result.months[0],
        result.months[-1],
        len(result.content),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
