"""Command line entry point.

Usage:
    python -m lab_normalizer --input report.jpg [--dry-run]
    python -m lab_normalizer --batch scans/ --format summary
    python -m lab_normalizer --text "HGB 134 g/dL"
    python -m lab_normalizer --batch scans/ --expected annotations.json
    cat ocr.txt | python -m lab_normalizer --text -
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

from lab_normalizer.schemas.config import NormalizerConfig

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".pdf")
EXIT_OK, EXIT_FAILED, EXIT_BAD_INPUT = 0, 1, 2


def build_parser() -> argparse.ArgumentParser:
    defaults = NormalizerConfig()
    parser = argparse.ArgumentParser(
        prog="lab_normalizer",
        description="Map OCR-read lab values onto canonical tests, fix lost decimal points and flag them",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", metavar="PATH", help="one report image or PDF")
    source.add_argument("--batch", metavar="DIR", help="a directory of report images and PDFs")
    source.add_argument(
        "--text", metavar="TEXT", help="OCR text to normalize as is ('-' reads stdin)"
    )

    parser.add_argument("--output", metavar="PATH", help="write the result here instead of stdout")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="skip the OCR service and use a canned CBC report",
    )
    parser.add_argument(
        "--ocr-url",
        metavar="URL",
        default=defaults.ocr_url,
        help="OCR service endpoint (default: %(default)s)",
    )
    parser.add_argument(
        "--borderline-pct",
        type=float,
        default=defaults.borderline_pct,
        metavar="PCT",
        help="borderline band width, percent of the reference range (default: %(default)s)",
    )
    parser.add_argument(
        "--expected",
        metavar="PATH",
        help="JSON file of hand-annotated values; adds extraction scores to the output",
    )
    parser.add_argument("--verbose", action="store_true", help="log each stage to stderr")
    parser.add_argument(
        "--format",
        choices=["json", "summary"],
        default="json",
        help="json for machines, summary for a readable table",
    )
    return parser


def format_summary(result) -> str:
    """Render one PipelineResult as a plain text table."""
    record = result.record
    title = "text input" if result.source == "<text>" else Path(result.source).name
    out = [f"Lab values: {title}"]
    out.append("-" * len(out[0]))
    if record.name:
        out.append(f"Looks like: {record.name}" + (f" ({record.category})" if record.category else ""))

    widths = (34, 10, 10, 14, 15)
    headings = ("Test", "Value", "Unit", "Range", "Status")
    out.append("")
    out.append("| " + " | ".join(h.ljust(w) for h, w in zip(headings, widths)) + " |")
    out.append("|" + "|".join("-" * (w + 2) for w in widths) + "|")
    for row in record.results:
        ref = row.reference_range
        cells = (
            f"{row.display_name} [{row.key}]",
            record.extracted_values.get(row.key, row.raw_value),
            row.unit,
            f"{ref.low:g}-{ref.high:g}" if ref else "",
            row.status,
        )
        out.append("| " + " | ".join(c.ljust(w) for c, w in zip(cells, widths)) + " |")

    noted = [row for row in record.results if row.note]
    if noted:
        out.append("")
        out.append("Notes:")
        out.extend(f"  {row.key}: {row.note}" for row in noted)

    flags = next((s.output for s in result.stages if s.stage_name == "flag"), {})
    out.append("")
    out.append(
        f"{flags.get('abnormal_count', 0)} out of range, "
        f"{flags.get('borderline_count', 0)} borderline; "
        f"{len(result.stages)} stages in {result.total_time_seconds:.2f}s"
    )
    if result.error:
        out.append(f"Error: {result.error}")
    return "\n".join(out)


def format_evaluation(evaluation: dict) -> str:
    """Render the scores from --expected as plain text."""
    out = ["Evaluation", "----------"]
    for entry in evaluation["per_report"]:
        name = "text input" if entry["source"] == "<text>" else Path(entry["source"]).name
        out.append(
            f"{name}: f1 {entry['keys']['f1']:.2f}, value accuracy {entry['value_accuracy']:.2f}"
            + (f", missing {', '.join(entry['missing'])}" if entry["missing"] else "")
        )
    out.append(
        f"{evaluation['scored']} scored: mean f1 {evaluation['mean_f1']:.2f}, "
        f"mean value accuracy {evaluation['mean_value_accuracy']:.2f}"
    )
    return "\n".join(out)


def _echo_stages(result, verbose: bool) -> None:
    if verbose:
        for stage in result.stages:
            print(f"[{stage.stage_name}] {stage.reasoning}", file=sys.stderr)


def _batch_files(directory: Path) -> list[Path]:
    return sorted(p for p in directory.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)


def main() -> int:
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    from lab_normalizer.evaluation.evaluate import evaluate, load_expected
    from lab_normalizer.pipeline.runner import run_lines, run_pipeline

    expected = None
    if args.expected:
        try:
            expected = load_expected(args.expected)
        except (OSError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_BAD_INPUT

    config = NormalizerConfig(
        ocr_url=args.ocr_url,
        borderline_pct=args.borderline_pct,
        dry_run=args.dry_run,
    )

    if args.text is not None:
        text = sys.stdin.read() if args.text == "-" else args.text
        results = [run_lines(text, config)]
    elif args.input:
        # Dry-run never opens the file, so it need not exist.
        if not args.dry_run and not Path(args.input).exists():
            print(f"Error: input file not found: {args.input}", file=sys.stderr)
            return EXIT_BAD_INPUT
        results = [run_pipeline(args.input, config)]
    else:
        batch_dir = Path(args.batch)
        if not batch_dir.is_dir():
            print(f"Error: batch directory not found: {args.batch}", file=sys.stderr)
            return EXIT_BAD_INPUT
        files = _batch_files(batch_dir)
        if not files:
            print(f"Error: no report images in {args.batch}", file=sys.stderr)
            return EXIT_BAD_INPUT
        results = [run_pipeline(str(path), config) for path in files]

    for result in results:
        _echo_stages(result, args.verbose)

    evaluation = evaluate(results, expected) if expected is not None else None

    if args.format == "summary":
        rendered = "\n\n".join(format_summary(r) for r in results)
        if evaluation is not None:
            rendered += "\n\n" + format_evaluation(evaluation)
    else:
        payload = results[0].model_dump() if len(results) == 1 else [r.model_dump() for r in results]
        if evaluation is not None:
            payload = {"results": payload, "evaluation": evaluation}
        rendered = json.dumps(payload, indent=2, default=str)

    if args.output:
        Path(args.output).write_text(rendered)
    else:
        print(rendered)

    return EXIT_FAILED if any(not r.success for r in results) else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
