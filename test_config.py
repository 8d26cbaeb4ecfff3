from pathlib import Path

import pytest

from api.linker_api.errors import AuxiliaryFileError
from core.linker_platform.config import parse_pipeline, read_pipeline, split_arguments


def test_split_arguments_handles_quotes():
    assert split_arguments('remove_nodes "my names.txt" exact') == ["remove_nodes", "my names.txt", "exact"]
    assert split_arguments('x "a \\"b\\""') == ["x", 'a "b"']
    assert split_arguments("cut_deg +3   -2") == ["cut_deg", "+3", "-2"]


def test_parse_pipeline_skips_blank_and_comment_lines():
    text = "# pipeline\n\nlink\n   \nremove_nodes drop.txt\n  # trailing comment\nreverse\n"
    descriptors = parse_pipeline(text, source="p.cfg")

    assert [d.name for d in descriptors] == ["link", "remove_nodes", "reverse"]
    assert [d.index for d in descriptors] == [0, 1, 2]
    assert [d.line_number for d in descriptors] == [3, 5, 7]
    assert descriptors[1].arguments == ("drop.txt",)
    assert descriptors[1].line == "remove_nodes drop.txt"
    assert all(d.source == "p.cfg" for d in descriptors)


def test_empty_pipeline():
    assert parse_pipeline("") == []
    assert parse_pipeline("# nothing\n\n") == []


def test_read_pipeline_sets_base_dir(write_file):
    path = write_file("pipeline.cfg", "unique_edges\n")
    descriptors = read_pipeline(path)
    assert descriptors[0].base_dir == Path(path).parent
    assert descriptors[0].source == str(path)


def test_read_missing_pipeline_raises(tmp_path):
    with pytest.raises(AuxiliaryFileError) as info:
        read_pipeline(tmp_path / "missing.cfg")
    assert "missing.cfg" in str(info.value)
