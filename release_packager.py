from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from releaser.config import load_config
from releaser.errors import ReleaserError
from releaser.logging_utils import get_logger, setup_logging
from releaser.pipeline import ReleasePipeline
from releaser.release_loader import load_release

log = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for processing one release."""
    parser = argparse.ArgumentParser(
        description="Encode a release to MP3 and FLAC and write its playlist, SFV and NFO")
    parser.add_argument("--config", type=str, required=True, help="Path to the JSON configuration")
    parser.add_argument("--release", type=str, required=True, help="Path to the JSON release description")
    parser.add_argument("--workers", type=int, default=None,
                        help="Override the configured number of encoder threads")
    parser.add_argument("--log_level", type=str, default=None, help="Log level (e.g., INFO, DEBUG)")
    parser.add_argument("--log_file", type=str, default=None,
                        help="Also append warnings and errors to this file")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Example:
      python3 release_packager.py --config releaser.json --release album/release.json --workers 8
    """
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        config = load_config(args.config).with_overrides(worker_count=args.workers)
        release = load_release(args.release)
        result = ReleasePipeline(config).process_release(release)
    except ReleaserError as e:
        log.error("release failed: %s", e)
        return 1

    log.info("release written", extra={"mp3_dir": result.mp3_dir, "flac_dir": result.flac_dir,
                                       "tracks": len(result.hashes)})
    return 0


if __name__ == "__main__":
    sys.exit(main())
