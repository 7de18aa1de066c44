"""Command line entry point: ``python -m smartwatch_segmentation survey.xlsx``."""
import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .data_processing import segmentation_params as params
from .data_processing.segmentation_pipeline import run_segmentation
from .exceptions import SegmentationError

_LOG = logging.getLogger("smartwatch_segmentation")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="smartwatch_segmentation",
        description="Hierarchical market segmentation of smartwatch survey data.",
    )
    ap.add_argument(
        "input",
        nargs="?",
        default=None,
        help=f"Survey workbook (.xlsx/.xlsm) or .csv. Defaults to ${params.ENV_INPUT_PATH}.",
    )
    ap.add_argument(
        "--output-dir",
        default=None,
        help=f"Where the profile workbook (and figures) go. Defaults to ${params.ENV_OUTPUT_DIR} or '.'.",
    )
    ap.add_argument("--clusters", type=int, default=params.N_CLUSTERS,
                    help="Number of segments to cut the dendrogram into.")
    ap.add_argument("--no-show", action="store_true", help="Do not display charts.")
    ap.add_argument("--save-figures", action="store_true", help="Write charts as PNG files to the output dir.")
    ap.add_argument("--skip-diagnostics", action="store_true",
                    help="Skip the elbow/silhouette/gap evaluation (faster).")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    input_path = args.input or os.getenv(params.ENV_INPUT_PATH)
    if not input_path:
        _LOG.error("No input file given (pass a path or set %s)", params.ENV_INPUT_PATH)
        return 2
    output_dir = args.output_dir or os.getenv(params.ENV_OUTPUT_DIR) or "."

    try:
        run_segmentation(
            input_path,
            output_dir=output_dir,
            n_clusters=args.clusters,
            show_plots=not args.no_show,
            save_figures=args.save_figures,
            run_diagnostics=not args.skip_diagnostics,
        )
    except (SegmentationError, OSError, ValueError) as e:
        _LOG.error("Segmentation failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
