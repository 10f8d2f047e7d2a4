"""Thin CLI entry point — builds a Manifest and calls the engine."""

import argparse
import logging
import sys
from pathlib import Path

from subsync.engine import LowConfidenceError, analyze, convert
from subsync.manifest import Manifest, load_manifest
from subsync.timecode import format_timestamp

FRAMERATE_INFO = [
    (23.976, "Film (24fps slowed down for NTSC)"),
    (24.0, "Cinema standard"),
    (25.0, "PAL standard (Europe, Australia)"),
    (29.97, "NTSC standard (North America, Japan)"),
    (30.0, "Some digital video"),
    (50.0, "PAL high framerate"),
    (59.94, "NTSC high framerate"),
    (60.0, "High framerate digital"),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subsync",
        description="SubSync — detect subtitle framerates and convert between them.",
    )
    sub = parser.add_subparsers(dest="command")

    conv = sub.add_parser("convert", help="Convert subtitle timestamps between framerates")
    conv.add_argument("--input", "-i", type=Path, help="Input subtitle file (.srt)")
    conv.add_argument("--output", "-o", type=Path,
                      help="Output file (defaults to <input>_<from>fps_to_<to>fps.srt)")
    conv.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")
    conv.add_argument("--from-fps", type=float, metavar="FPS",
                      help="Source framerate (detected if not given)")
    conv.add_argument("--to-fps", type=float, metavar="FPS", help="Target framerate")
    conv.add_argument("--force", action="store_true",
                      help="Convert even when detection confidence is low")
    conv.add_argument("--verbose", "-v", action="store_true", help="Show detailed analysis")

    an = sub.add_parser("analyze", help="Analyze a subtitle file and detect its framerate")
    an.add_argument("--input", "-i", type=Path, required=True, help="Input subtitle file (.srt)")
    an.add_argument("--verbose", "-v", action="store_true", help="Show detailed statistics")

    sub.add_parser("info", help="Show information about common framerates")

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument("--port", type=int, default=8322, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    return parser


def _print_info() -> None:
    print("Common Video Framerates:")
    for fps, label in FRAMERATE_INFO:
        print(f"  {fps:6.3f} fps - {label}")
    print()
    print("Note: The most common conversion is between 23.976/24fps (film) and 29.97fps (TV)")


def _run_analyze(args: argparse.Namespace) -> None:
    report = analyze(args.input)
    best = report.detection.best

    print(f"Analyzing subtitle file: {args.input}")
    print()
    print("File Information:")
    print(f"  Subtitle entries: {report.entry_count}")
    print(f"  First subtitle: {format_timestamp(report.first_start_ms)}")
    print(f"  Last subtitle:  {format_timestamp(report.last_end_ms)}")
    print(f"  Total duration: {report.duration_minutes:.1f} minutes")
    print()
    print("Framerate Analysis:")
    print(f"  Detected framerate: {best.framerate:g} fps")
    print(f"  Confidence: {best.confidence:.1%}")
    print(f"  Detection method: {best.method.value}")
    if report.low_confidence:
        print("  Warning: low confidence detection - consider passing --from-fps")

    if args.verbose and report.detection.proposals:
        print()
        print("Method proposals:")
        for d in report.detection.proposals:
            print(f"  {d.method.value}: {d.framerate:g} fps ({d.confidence:.1%})")

    print()
    if report.warnings:
        print("Validation Issues:")
        for w in report.warnings:
            print(f"  {w}")
    else:
        print("No validation issues found")

    if args.verbose:
        print()
        print("Detailed Statistics:")
        for key, value in report.statistics.items():
            print(f"  {key}: {value:.2f}")


def _run_convert(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    if args.manifest:
        m = load_manifest(args.manifest)
    elif args.input and args.to_fps is not None:
        m = Manifest(
            input=args.input,
            output=args.output,
            from_fps=args.from_fps,
            to_fps=args.to_fps,
            force=args.force,
        )
    else:
        parser.error("convert needs --input and --to-fps, or --manifest")

    def on_progress(stage: str, frac: float) -> None:
        if args.verbose:
            print(f"  [{frac:3.0%}] {stage}")

    result = convert(m, on_progress=on_progress)

    if result.detection is not None:
        d = result.detection
        print(f"Detected source framerate: {d.framerate:g} fps ({d.confidence:.1%} confidence)")

    if not result.converted:
        print("Source and target framerates are the same. No conversion needed.")
        return

    print("Conversion complete!")
    print(f"  Input:  {result.input_path} ({result.source_fps:g} fps)")
    print(f"  Output: {result.output_path} ({result.target_fps:g} fps)")
    if args.verbose and result.post_warnings:
        print()
        print("Post-conversion validation:")
        for w in result.post_warnings:
            print(f"  {w}")


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "info":
        _print_info()
        return

    if args.command == "serve":
        from subsync.web import create_app
        app = create_app()
        print(f"SubSync web UI: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        if args.command == "analyze":
            _run_analyze(args)
        else:
            _run_convert(args, parser)
    except (OSError, ValueError, LowConfidenceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

