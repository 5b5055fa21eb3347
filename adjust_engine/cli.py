"""Command line entry point: adjust one image file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .config import (
    IDENTITY_PARAMS,
    INTEGER_PARAMS,
    PARAM_ORDER,
    PARAM_RANGES,
    AdjustmentParameters,
    load_params_json,
)
from .errors import AdjustError
from .log import get_logger
from .pipeline import adjust_image_bytes, plan_stages


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="adjust-image",
        description="Apply tone and color adjustments, keeping the input's format.",
    )
    parser.add_argument("input", type=str, help="Source image path")
    parser.add_argument("output", type=str, help="Destination image path")
    parser.add_argument("--params", type=str, default=None,
                        help="JSON file with adjustment parameters; flags override it")
    for key in PARAM_ORDER:
        low, high = PARAM_RANGES[key]
        parser.add_argument(
            f"--{key}",
            type=int if key in INTEGER_PARAMS else float,
            default=None,
            help=f"{key} in [{low:g}, {high:g}] (identity {IDENTITY_PARAMS[key]:g})",
        )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every applied stage")
    return parser.parse_args(argv)


def build_params(args: argparse.Namespace) -> AdjustmentParameters:
    values: Dict[str, float] = {}
    if args.params:
        values.update(load_params_json(args.params).to_dict())
    for key in PARAM_ORDER:
        value = getattr(args, key)
        if value is not None:
            values[key] = value
    return AdjustmentParameters.from_mapping(values)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = get_logger()
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    params = build_params(args)
    logger.debug("Stages: %s", ", ".join(s.value for s in plan_stages(params)) or "none")

    try:
        data = Path(args.input).read_bytes()
        output = adjust_image_bytes(data, params)
    except AdjustError as exc:
        logger.error("%s: %s", args.input, exc.cause)
        return 1
    except OSError as exc:
        logger.error("%s: %s", args.input, exc)
        return 1

    try:
        Path(args.output).write_bytes(output)
    except OSError as exc:
        logger.error("%s: %s", args.output, exc)
        return 1
    logger.info("Saved: %s", args.output)
    return 0
