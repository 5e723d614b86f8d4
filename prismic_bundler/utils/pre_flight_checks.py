from __future__ import annotations

import glob
import os
import shlex
import shutil
from typing import Any, Dict

from ..models.prismic import ContentType
from .errors import PreFlightCheckError


def run_pre_flight_checks(config: Dict[str, Any], content_type: ContentType) -> None:
    """
    Verifies that the local environment is ready for a bundle run.

    Args:
        config: The application configuration dictionary.
        content_type: The content type about to be bundled.

    Raises:
        PreFlightCheckError: If any check fails.
    """
    print("[INFO] Running pre-flight checks...")

    # Check 1: media root
    static_dir = config.get("bundle", {}).get("static_dir", "")
    if not static_dir or not os.path.isdir(static_dir):
        raise PreFlightCheckError(f"Static assets directory not found: {static_dir!r}")

    # Check 2: there is something to bundle
    if not glob.glob(content_type.source_glob):
        raise PreFlightCheckError(f"No source files match {content_type.source_glob!r}")

    # Check 3: external converter is installed
    rich_text = config.get("rich_text", {})
    if rich_text.get("converter", "subprocess") == "subprocess":
        argv = shlex.split(rich_text.get("command", ""))
        if not argv:
            raise PreFlightCheckError("No rich text converter command configured.")
        if shutil.which(argv[0]) is None:
            raise PreFlightCheckError(
                f"Rich text converter {argv[0]!r} is not on PATH; "
                "install it or use the local converter (--converter local)."
            )

    print("[INFO] Pre-flight checks passed successfully.")
