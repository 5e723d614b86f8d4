import os
import shlex
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from prismic_bundler.parsers.rich_text import (
    LocalRichTextConverter,
    SubprocessRichTextConverter,
    get_converter,
)
from prismic_bundler.utils.errors import RichTextConversionError

PYTHON = shlex.quote(sys.executable)


def python_command(code):
    return f"{PYTHON} -c {shlex.quote(code)}"


def test_subprocess_output_is_parsed_as_json():
    code = "import json, sys; print(json.dumps([{'type': 'paragraph', 'text': sys.argv[1]}]))"
    converter = SubprocessRichTextConverter(python_command(code))
    text = "It's *quoted* \"text\"; $(echo nope)"
    assert converter.convert(text) == [{"type": "paragraph", "text": text}]


def test_empty_output_becomes_none():
    converter = SubprocessRichTextConverter(python_command("pass"))
    assert converter.convert("hello") is None


def test_invalid_json_becomes_none():
    converter = SubprocessRichTextConverter(python_command("print('not json')"))
    assert converter.convert("hello") is None


def test_non_zero_exit_is_an_error():
    converter = SubprocessRichTextConverter(python_command("import sys; sys.exit(3)"))
    with pytest.raises(RichTextConversionError, match="code 3"):
        converter.convert("hello")


def test_missing_executable_is_an_error():
    converter = SubprocessRichTextConverter("definitely-not-a-real-converter-binary")
    with pytest.raises(RichTextConversionError):
        converter.convert("hello")


def test_get_converter_selects_implementation():
    assert isinstance(get_converter({"converter": "local"}), LocalRichTextConverter)
    sub = get_converter({"converter": "subprocess", "command": "ruby kramdown-to-prismic.rb"})
    assert isinstance(sub, SubprocessRichTextConverter)
    assert sub.argv == ["ruby", "kramdown-to-prismic.rb"]
    with pytest.raises(ValueError):
        get_converter({"converter": "telepathy"})
