"""Command-line entrypoint: narrate a story text into a narration resource JSON file."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from small_tales.core.config import Settings, settings
from small_tales.core.logging_config import get_logger, setup_logging
from small_tales.services.narration_engine import NarrationEngine, estimate_cost
from small_tales.services.voices import get_voice_preset, resolve_voice_id
from small_tales.utils.error_handler import NarrationError, format_error_message, get_fallback_suggestion


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Small Tales - generate narration with word timings and word recordings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("text", nargs="?", help="Text to narrate (or use --text-file)")
    parser.add_argument("--text-file", type=Path, help="Read the text to narrate from a file")
    parser.add_argument("--voice", type=str, help="Voice catalog name (e.g. clara) or ElevenLabs voice ID")
    parser.add_argument("--model", type=str, help="ElevenLabs model ID")
    parser.add_argument(
        "--preset",
        type=str,
        help="Voice settings preset (storytelling, dramatic, calm, energetic, children)",
    )
    parser.add_argument(
        "--no-word-recordings",
        action="store_true",
        help="Skip individual word recordings",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("narration.json"),
        help="Where to write the narration resource (default: narration.json)",
    )
    parser.add_argument(
        "--estimate-only",
        action="store_true",
        help="Print the cost estimate and exit without calling ElevenLabs",
    )
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: from settings)")
    return parser


def main(argv: Optional[list[str]] = None, app_settings: Optional[Settings] = None) -> int:
    """Main entrypoint for the narration CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    app_settings = app_settings or settings

    setup_logging(log_level=args.log_level or app_settings.log_level, log_format=app_settings.log_format)
    logger = get_logger(__name__)

    if args.text_file:
        text = args.text_file.read_text(encoding="utf-8")
    elif args.text is not None:
        text = args.text
    else:
        parser.error("provide text or --text-file")

    include_word_recordings = not args.no_word_recordings

    if args.estimate_only:
        estimate = estimate_cost(text, include_word_recordings)
        print(estimate.model_dump_json(indent=2))
        return 0

    voice_settings = None
    if args.preset:
        try:
            voice_settings = get_voice_preset(args.preset)
        except KeyError as e:
            parser.error(str(e.args[0]))

    engine = NarrationEngine(app_settings, logger)
    try:
        narration = asyncio.run(
            engine.generate_narration(
                text,
                voice_id=resolve_voice_id(args.voice),
                model_id=args.model,
                voice_settings=voice_settings,
                include_word_recordings=include_word_recordings,
            )
        )
    except NarrationError as e:
        logger.error(
            format_error_message(
                "Generating narration",
                e,
                context={"characters": len(text)},
                suggestion=get_fallback_suggestion("Narration", e),
            )
        )
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(narration.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
    logger.info(
        f"Narration {narration.id} written to {args.output} "
        f"({len(narration.word_timestamps)} words, {len(narration.word_recordings)} recordings)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
