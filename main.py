from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from chartbox.adapters.echarts import parse_echarts_options
from chartbox.chart import render
from chartbox.table import render_table, table_option_from_dict

LOGGER = logging.getLogger("chartbox.cli")


def _output_type(out: Path, explicit: str | None) -> str:
    if explicit:
        return explicit
    return "png" if out.suffix.lower() == ".png" else "svg"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="chartbox")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for layout and resource fallback messages.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    chart = sub.add_parser("render", help="Render an ECharts-style JSON option document.")
    chart.add_argument("options", type=Path)
    chart.add_argument("-o", "--out", type=Path, required=True)
    chart.add_argument(
        "--type",
        choices=["svg", "png"],
        default=None,
        help="Output format. Default: taken from the output file suffix.",
    )
    chart.add_argument("--theme", default=None)
    chart.add_argument("--width", type=int, default=None)
    chart.add_argument("--height", type=int, default=None)

    table = sub.add_parser("table", help="Render a table described by a JSON document.")
    table.add_argument("table", type=Path)
    table.add_argument("-o", "--out", type=Path, required=True)
    table.add_argument("--type", choices=["svg", "png"], default=None)
    table.add_argument("--width", type=int, default=None)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        option = parse_echarts_options(args.options.read_text(encoding="utf-8"))
        option.output = _output_type(args.out, args.type)
        if args.theme:
            option.theme = args.theme
        if args.width:
            option.width = args.width
        if args.height:
            option.height = args.height
        data = render(option).bytes()
        args.out.write_bytes(data)
        print(f"wrote {args.out} ({option.output}, {len(data)} bytes)")
        return 0

    if args.command == "table":
        payload = json.loads(args.table.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise SystemExit("table document must be a JSON object")
        option = table_option_from_dict(payload)
        option.output = _output_type(args.out, args.type)
        if args.width:
            option.width = args.width
        data = render_table(option).bytes()
        args.out.write_bytes(data)
        print(f"wrote {args.out} ({option.output}, {len(data)} bytes)")
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
