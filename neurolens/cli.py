# neurolens/cli.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .io import feature_streams, read_tsv, scored_frame, write_tsv
from .parallel import score_subjects
from .scoring.summary import summarize

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """
    CLI parser for replaying recorded feature streams.

    Only parsing and option descriptions, no scoring logic.
    """
    parser = argparse.ArgumentParser(
        description=(
            "Replay a recorded feature TSV through the cognitive scorer and "
            "hysteresis alerts, one independent stream per subject."
        ),
    )
    parser.add_argument(
        "--input",
        required=True,
        help=(
            "Input TSV with timestamp, yaw, pitch, roll, ear, blink_rate, "
            "neutral, happy, angry, fearful, surprised, interaction_level. "
            "A subject column is optional."
        ),
    )
    parser.add_argument(
        "--output",
        required=False,
        help="Optional output TSV path for the scored points.",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of parallel workers, -1 for all cores (default: 1).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    df = read_tsv(args.input)
    streams = feature_streams(df)
    results = score_subjects(streams, n_jobs=args.jobs)

    for subject, scores in results.items():
        for event in scores.alerts:
            logger.info(
                "%s: %s alert %s at t=%.2f (%.2f)",
                subject,
                event.signal,
                event.kind.value,
                event.timestamp,
                event.value,
            )
        if scores.points:
            last = scores.points[-1]
            logger.info(
                "%s: %d points, final state %s", subject, len(scores.points), summarize(last).value
            )

    if args.output:
        out = scored_frame({s: r.points for s, r in results.items()})
        write_tsv(out, args.output)
        logger.info("Wrote %d scored rows to %s", len(out), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
