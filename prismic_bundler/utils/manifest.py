"""
Generation of bundle manifest CSV files.

The :func:`generate_manifest_csv` helper writes a CSV file listing, for
every source file of a run, the archive entry it was written to and whether
Prismic will treat it as a new document or as an update of an existing one.
The file is meant to be reviewed before the archive is imported.
"""

from __future__ import annotations

import csv
import os
from typing import Dict, Iterable


def generate_manifest_csv(rows: Iterable[Dict[str, str]], *, out_path: str) -> str:
    """Write the manifest of a bundle run.

    Parameters
    ----------
    rows:
        Iterable of dictionaries with ``source`` and ``entry`` keys.  The
        action column is derived from the entry name: entries prefixed with
        ``new_`` are creations, everything else updates a known document.
    out_path:
        Location of the CSV file to be written.  The parent directory is
        created automatically.

    Returns
    -------
    str
        The path of the generated CSV file.
    """
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["SourceFile", "Entry", "Action"])
        for row in rows:
            entry = row.get("entry", "")
            action = "create" if entry.startswith("new_") else "update"
            writer.writerow([row.get("source", ""), entry, action])
    return out_path
