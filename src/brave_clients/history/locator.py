"""Discover Brave history databases across install variants and profiles."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

BRAVE_SUPPORT_DIR = Path(
    os.environ.get(
        "BRAVE_CLIENTS_SUPPORT_DIR",
        str(Path.home() / "Library" / "Application Support" / "BraveSoftware"),
    )
)

# Stable, Beta and Nightly channels install side by side.
INSTALL_VARIANTS = ("Brave-Browser", "Brave-Browser-Beta", "Brave-Browser-Nightly")
PROFILE_NAMES = ("Default", "Profile 1", "Profile 2", "Profile 3", "Profile 4", "Profile 5")
HISTORY_FILENAME = "History"


def find_history_paths(support_dir: Path | None = None) -> list[Path]:
    """Return every existing History file, variant-major then profile order."""
    base = Path(support_dir) if support_dir is not None else BRAVE_SUPPORT_DIR
    paths: list[Path] = []

    for variant in INSTALL_VARIANTS:
        for profile in PROFILE_NAMES:
            candidate = base / variant / profile / HISTORY_FILENAME
            try:
                if candidate.is_file():
                    logger.debug("Found history DB at %s", candidate)
                    paths.append(candidate)
            except OSError as e:
                logger.warning("Could not stat %s: %s", candidate, e)

    if not paths:
        logger.warning("No Brave history database found under %s", base)
    return paths
