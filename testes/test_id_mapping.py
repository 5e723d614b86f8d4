import json
import os
import sys
import zipfile

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from prismic_bundler.bundlers.id_mapping import build_uid_mapping, get_filename_in_zip, get_id_from_filename
from prismic_bundler.utils.errors import ArchiveError


def make_export(path, entries):
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content if isinstance(content, (str, bytes)) else json.dumps(content))
    return str(path)


def test_no_export_gives_empty_mapping():
    assert build_uid_mapping(None, "post") == {}


def test_mapping_from_export(tmp_path):
    export = make_export(
        tmp_path / "export.zip",
        {
            "42$something.json": {"type": "post", "uid": "my-slug"},
            "43$other.json": {"type": "event", "uid": "an-event"},
            "44$no-uid.json": {"type": "post"},
            "uploads/cat.jpg": b"\xff\xd8\xff\xe0 not json",
            "broken.json": "{not valid",
            "list.json": [1, 2, 3],
        },
    )
    assert build_uid_mapping(export, "post") == {"my-slug": "42"}


def test_unreadable_export_is_an_error(tmp_path):
    bogus = tmp_path / "export.zip"
    bogus.write_text("this is not a zip", encoding="utf-8")
    with pytest.raises(ArchiveError):
        build_uid_mapping(str(bogus), "post")


def test_id_is_taken_before_the_dollar():
    assert get_id_from_filename("XyZ123$7a9f-en-us.json") == "XyZ123"
    assert get_id_from_filename("folder/42$x.json") == "42"


def test_entry_name_for_known_uid_is_the_id():
    assert get_filename_in_zip("/content/my-slug.md", {"my-slug": "42"}) == "42.json"


def test_entry_name_for_unknown_uid_is_new_slug():
    assert get_filename_in_zip("/content/Café Opening Night.md", {}) == "new_cafe-opening-night.json"


def test_file_name_is_slugified_before_lookup():
    assert get_filename_in_zip("/content/My Slug.md", {"my-slug": "42"}) == "42.json"
