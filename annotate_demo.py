"""
Example: load a model through a backend and run the boundary operations on a
piece of text, printing spans in UTF-16 code units the way a Java or
JavaScript caller would see them.

Usage:
    python3 annotate_demo.py --backend my_backend:Backend --model /path/to/model.fb \
        --text "Call me at 555 0100 tomorrow" --begin 11 --end 14
"""

import argparse
import logging
import time
from pathlib import Path

from annotator_bridge.annotator import AnnotatorBridge, BridgeConfig, PathSource


def setup_logging(level: str) -> None:
    log_dir = Path("./logs")
    log_dir.mkdir(exist_ok=True)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_dir / "annotate_demo.log", encoding="utf-8"),
        ],
        force=True,
    )


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--backend", required=True, help="Backend import path, 'module:attribute'")
    parser.add_argument("--model", required=True, type=Path, help="Path to the model file")
    parser.add_argument("--text", required=True, help="Text to annotate")
    parser.add_argument("--begin", type=int, default=0, help="Selection begin (UTF-16 code units)")
    parser.add_argument("--end", type=int, default=0, help="Selection end (UTF-16 code units)")
    parser.add_argument("--locales", default="en", help="Locales passed in the options")
    parser.add_argument("--timezone", default="UTC", help="Reference timezone passed in the options")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args()

    setup_logging(args.log_level.upper())

    if not args.model.exists():
        raise FileNotFoundError(f"Model not found: {args.model}")

    bridge = AnnotatorBridge.from_config(BridgeConfig(backend=args.backend))
    source = PathSource(str(args.model))
    print(f"Model: name={bridge.get_name(source)!r} version={bridge.get_version(source)} locales={bridge.get_locales(source)!r}")

    handle = bridge.new_annotator(source)
    if not handle:
        raise RuntimeError(f"Could not load annotator from {args.model}")
    try:
        options = {
            "locales": args.locales,
            "reference_timezone": args.timezone,
            "reference_time_ms_utc": int(time.time() * 1000),
        }
        print("Selection:", bridge.suggest_selection(handle, args.text, args.begin, args.end, options))
        for result in bridge.classify_text(handle, args.text, args.begin, args.end, options) or []:
            print("Classification:", result)
        for span in bridge.annotate(handle, args.text, options) or []:
            print(f"Annotation [{span['begin']}, {span['end']}):", span["classification"])
    finally:
        bridge.close_annotator(handle)


if __name__ == "__main__":
    main()
