from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from movingimages_core import MovingImagesError, SmigClient, load_smig_config, serialize_commands
from movingimages_core import meta
from movingimages_library import (
    ScaleOptions,
    TransitionOptions,
    build_lanczos_scale_commands,
    build_quartz_scale_commands,
    dotransition,
    scale_files_uselanczos,
    scale_files_usequartz,
    transition_json,
)
from movingimages_library.scaling import INTERPOLATION_BY_NAME

LOGGER = logging.getLogger("movingimages")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="movingimages")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [smig] table.")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    perform = sub.add_parser("perform", help="Send a JSON command list file to smig.")
    perform.add_argument("json_file", type=Path)
    perform.add_argument("--nothrow", action="store_true", help="Report a failing exit status instead of raising.")

    scale = sub.add_parser("scale-images", help="Scale image files into an output directory.")
    scale.add_argument("files", nargs="+")
    scale.add_argument("--outputdir", required=True)
    scale.add_argument("--scalex", type=float, default=1.0)
    scale.add_argument("--scaley", type=float, default=None, help="Default: same as --scalex.")
    scale.add_argument("--method", choices=["lanczos", "quartz"], default="quartz")
    scale.add_argument("--interpqual", choices=sorted(INTERPOLATION_BY_NAME), default="default")
    scale.add_argument("--copymetadata", action="store_true")
    scale.add_argument("--quality", type=float, default=None)
    scale.add_argument("--async", dest="run_async", action="store_true")
    scale.add_argument("--print-json", action="store_true", help="Print the command list instead of running it.")

    transition = sub.add_parser("transition", help="Render a CoreImage transition between two images.")
    transition.add_argument("--source", required=True)
    transition.add_argument("--target", required=True)
    transition.add_argument("--outputdir", required=True)
    transition.add_argument("--filter", default="CIBarsSwipeTransition")
    transition.add_argument("--exportfiletype", default="public.tiff")
    transition.add_argument("--basename", default="image")
    transition.add_argument("--count", type=int, default=5)
    transition.add_argument(
        "--input",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Numeric filter input, e.g. inputAngle=2.0. Repeatable.",
    )
    transition.add_argument("--print-json", action="store_true")

    filters = sub.add_parser("list-filters", help="List CoreImage filters known to the renderer.")
    filters.add_argument("--category", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        return _run(args)
    except (MovingImagesError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1


def _run(args: argparse.Namespace) -> int:
    if args.command == "scale-images":
        options = ScaleOptions(
            outputdir=args.outputdir,
            scalex=args.scalex,
            scaley=args.scalex if args.scaley is None else args.scaley,
            interpqual=args.interpqual,
            copymetadata=args.copymetadata,
            quality=args.quality,
            run_async=args.run_async,
        )
        if args.print_json:
            build = build_lanczos_scale_commands if args.method == "lanczos" else build_quartz_scale_commands
            print(serialize_commands(build(options, args.files).to_document()))
            return 0
        scale = scale_files_uselanczos if args.method == "lanczos" else scale_files_usequartz
        print(scale(_client(args), options, args.files).output)
        return 0

    if args.command == "transition":
        options = TransitionOptions(
            sourceimage=args.source,
            targetimage=args.target,
            outputdir=args.outputdir,
            transitionfilter=args.filter,
            exportfiletype=args.exportfiletype,
            basename=args.basename,
            count=args.count,
            filter_inputs=_parse_filter_inputs(args.input),
        )
        if args.print_json:
            print(transition_json(options))
            return 0
        print(dotransition(_client(args), options).output)
        return 0

    client = _client(args)
    if args.command == "perform":
        with args.json_file.open("r", encoding="utf-8") as f:
            document = json.load(f)
        if args.nothrow:
            result = client.perform_commands_nothrow(document)
        else:
            result = client.perform_commands(document)
        print(result.output)
        return result.exit_status

    if args.command == "list-filters":
        print(meta.get_listoffilters(client, category=args.category))
        return 0
    raise ValueError(f"unknown command: {args.command}")


def _client(args: argparse.Namespace) -> SmigClient:
    return SmigClient(load_smig_config(args.config))


def _parse_filter_inputs(items: list[str]) -> dict[str, float]:
    inputs: dict[str, float] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"filter input must use KEY=VALUE format: {item}")
        try:
            inputs[key] = float(value)
        except ValueError as exc:
            raise ValueError(f"filter input {key} must be numeric: {value}") from exc
    return inputs


if __name__ == "__main__":
    sys.exit(main())
