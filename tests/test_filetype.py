"""Test file type detection."""

from kestrel.filetype import DEFAULT_FILE_TYPE, file_type_for


def test_known_extensions():
    assert file_type_for("main.c").name == "C"
    assert file_type_for("main.cpp").name == "C++"
    assert file_type_for("main.C").name == "C++"
    assert file_type_for("lib.rs").name == "Rust"
    assert file_type_for("app.js").name == "Javascript"
    assert file_type_for("/tmp/x/script.py").name == "Python"
    assert file_type_for("run.sh").name == "Bash"
    assert file_type_for("Main.hs").name == "Haskell"
    assert file_type_for("data.json").name == "JSON"


def test_unknown_or_missing_path():
    assert file_type_for(None) is DEFAULT_FILE_TYPE
    assert file_type_for("README") is DEFAULT_FILE_TYPE
    assert file_type_for("notes.txt") is DEFAULT_FILE_TYPE
    assert str(DEFAULT_FILE_TYPE) == "No filetype"


def test_default_rules_highlight_nothing():
    options = DEFAULT_FILE_TYPE.options
    assert not (options.numbers or options.strings or options.characters)
    assert not options.comments
    assert not options.multiline_comments
