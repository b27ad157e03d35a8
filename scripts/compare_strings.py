#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Compare candidate strings against a reference by how they look.

The reference is rendered once and every candidate is compared against that
pre-rendered buffer. Results are printed as a table ranked by visual
distance, next to the plain character edit distance for contrast.

Usage:
    python scripts/compare_strings.py example test
    python scripts/compare_strings.py paypal paypa1 pаypal --font_family "DejaVu Sans Mono"
    python scripts/compare_strings.py rn --candidates_file candidates.txt --debug
"""

# =============================================================================
# Path Patching
# =============================================================================
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# =============================================================================
# Imports
# =============================================================================
import argparse
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import Levenshtein
from tqdm import tqdm

from visdist.alignment.edit_core import count_steps
from visdist.comparer import StringComparer
from visdist.config import (
    DEFAULT_BOUNDARY_COST,
    DEFAULT_DEBUG_DIR,
    DEFAULT_FONT_SIZE,
    DEFAULT_THRESHOLD,
)
from visdist.rasterizer import RenderConfig, resolve_font_path

# Logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Comparison
# =============================================================================


def load_candidates(path: Path) -> List[str]:
    """Read one candidate per line, skipping blank lines."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f if line.strip()]


def rank_candidates(
    comparer: StringComparer,
    reference: str,
    candidates: List[str],
) -> List[Dict[str, Any]]:
    """Compare every candidate against the reference.

    Args:
        comparer: Configured comparer.
        reference: Reference string, rendered once.
        candidates: Strings to compare with the reference.

    Returns:
        One dict per candidate, sorted by visual distance (stable for ties),
        with keys: candidate, visual_distance, edit_distance, debug_image,
        plus steps and path when the comparer is in debug mode.
    """
    reference_buffer = comparer.render(reference)
    logger.info(
        f"Reference '{reference}' rendered at "
        f"{reference_buffer.width}x{reference_buffer.height}"
    )

    rows = []
    for candidate in tqdm(candidates, desc="Comparing", disable=len(candidates) < 2):
        result = comparer.compare_detailed(reference_buffer, candidate)
        rows.append(
            {
                "candidate": candidate,
                "visual_distance": result.distance,
                "edit_distance": Levenshtein.distance(reference, candidate),
                "debug_image": str(result.debug_path) if result.debug_path else None,
            }
        )
        if result.path:
            rows[-1]["steps"] = count_steps(result.path)
            rows[-1]["path"] = comparer.aligner.to_dict_list(result.path)

    rows.sort(key=lambda row: row["visual_distance"])
    return rows


def print_results(reference: str, rows: List[Dict[str, Any]]) -> None:
    print()
    print("=" * 70)
    print(f"  Reference: '{reference}'")
    print("=" * 70)
    print(f"  {'Rank':<6}{'Visual':>10}{'Edit':>8}  Candidate")
    print("-" * 70)
    for rank, row in enumerate(rows, start=1):
        print(
            f"  {rank:<6}{row['visual_distance']:>10.4f}"
            f"{row['edit_distance']:>8}  '{row['candidate']}'"
        )
    print("=" * 70)
    print()


# =============================================================================
# Main
# =============================================================================


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rank strings by visual distance to a reference string",
    )
    parser.add_argument("reference", help="Reference string")
    parser.add_argument("candidates", nargs="*", help="Strings to compare")
    parser.add_argument(
        "--candidates_file",
        type=Path,
        default=None,
        help="File with one candidate string per line",
    )
    parser.add_argument(
        "--font",
        type=str,
        default=None,
        help="Font file (default: Pillow's bundled font)",
    )
    parser.add_argument(
        "--font_family",
        type=str,
        default=None,
        help="Font family resolved through fontconfig, e.g. 'DejaVu Sans Mono'",
    )
    parser.add_argument(
        "--font_size",
        type=int,
        default=DEFAULT_FONT_SIZE,
        help=f"Font size in pixels (default: {DEFAULT_FONT_SIZE})",
    )
    parser.add_argument(
        "--no_antialias",
        action="store_true",
        help="Render 1-bit glyphs without antialiasing",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help=f"Insert/delete cost per column (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "--boundary_cost",
        type=float,
        default=DEFAULT_BOUNDARY_COST,
        help=f"Cost per leading column (default: {DEFAULT_BOUNDARY_COST})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Write an alignment image per candidate",
    )
    parser.add_argument(
        "--debug_dir",
        type=Path,
        default=DEFAULT_DEBUG_DIR,
        help=f"Directory for alignment images (default: {DEFAULT_DEBUG_DIR})",
    )
    parser.add_argument(
        "--output_json",
        type=Path,
        default=None,
        help="Save the ranked results as JSON",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    candidates = list(args.candidates)
    if args.candidates_file is not None:
        if not args.candidates_file.exists():
            logger.error(f"Candidates file not found: {args.candidates_file}")
            return 1
        candidates.extend(load_candidates(args.candidates_file))

    if not candidates:
        logger.error("No candidate strings given")
        return 1

    font_path = args.font
    if font_path is None and args.font_family:
        font_path = resolve_font_path(args.font_family)
        if font_path is None:
            logger.warning("Falling back to Pillow's bundled font")

    config = RenderConfig(
        font_path=font_path,
        font_size=args.font_size,
        antialias=not args.no_antialias,
    )
    comparer = StringComparer(
        config,
        threshold=args.threshold,
        boundary_cost=args.boundary_cost,
        debug=args.debug,
        debug_dir=args.debug_dir,
    )

    rows = rank_candidates(comparer, args.reference, candidates)
    print_results(args.reference, rows)

    if args.output_json is not None:
        report = {
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "reference": args.reference,
                "font": font_path,
                "font_size": args.font_size,
                "antialias": not args.no_antialias,
                "threshold": args.threshold,
                "boundary_cost": args.boundary_cost,
            },
            "results": rows,
        }
        args.output_json.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output_json, "w", encoding="utf-8") as f:
            json.dump(report, f, ensure_ascii=False, indent=2)
        print(f"  Results saved: {args.output_json}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
