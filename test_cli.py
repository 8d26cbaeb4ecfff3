import pytest

from core.linker_platform.cli import EXIT_CONFIG, EXIT_OK, build_parser, main


@pytest.fixture
def project(write_file):
    write_file("calls.dot", "digraph calls { main -> parse; main -> parse; parse -> lex }")
    write_file("pipeline.cfg", "# dedup then flip\nunique_edges\nreverse\n")
    return write_file


def test_parser_requires_config():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["in.dot"])


def test_writes_result_to_stdout(project, tmp_path, capsys):
    code = main([str(tmp_path / "calls.dot"), "-c", str(tmp_path / "pipeline.cfg"), "-q"])
    assert code == EXIT_OK
    assert capsys.readouterr().out == (
        'digraph "calls" {\n'
        '    "main";\n'
        '    "parse";\n'
        '    "parse" -> "main";\n'
        '    "lex";\n'
        '    "lex" -> "parse";\n'
        '}\n'
    )


def test_writes_result_to_file_and_renames(project, tmp_path, capsys):
    output = tmp_path / "out.dot"
    code = main([
        str(tmp_path / "calls.dot"), "-c", str(tmp_path / "pipeline.cfg"),
        "-o", str(output), "--name", "linked",
    ])
    assert code == EXIT_OK
    assert capsys.readouterr().out == ""
    assert output.read_text(encoding="utf-8").startswith('digraph "linked" {\n')


def test_link_flag_merges_inputs(project, tmp_path, capsys):
    project("more.json", '{"edges": [["lex", "io"]]}')
    project("empty.cfg", "")
    code = main([
        str(tmp_path / "calls.dot"), str(tmp_path / "more.json"),
        "-c", str(tmp_path / "empty.cfg"), "--link",
    ])
    assert code == EXIT_OK
    assert '"lex" -> "io";' in capsys.readouterr().out


def test_configuration_error_exits_with_message(project, tmp_path, capsys):
    project("bad.cfg", "unique_edges\nfrobnicate\n")
    code = main([str(tmp_path / "calls.dot"), "-c", str(tmp_path / "bad.cfg")])
    captured = capsys.readouterr()
    assert code == EXIT_CONFIG
    assert captured.out == ""
    assert "frobnicate" in captured.err
    assert "bad.cfg:2" in captured.err


def test_multiple_inputs_without_link_is_an_error(project, tmp_path, capsys):
    code = main([
        str(tmp_path / "calls.dot"), str(tmp_path / "calls.dot"),
        "-c", str(tmp_path / "pipeline.cfg"),
    ])
    assert code == EXIT_CONFIG
    assert "link" in capsys.readouterr().err


def test_missing_input_file(project, tmp_path, capsys):
    code = main([str(tmp_path / "nope.dot"), "-c", str(tmp_path / "pipeline.cfg")])
    assert code == EXIT_CONFIG
    assert "nope.dot" in capsys.readouterr().err


def test_non_ascii_degree_bound_is_a_configuration_error(project, tmp_path, capsys):
    project("deg.cfg", "cut_deg -²\n")
    code = main([str(tmp_path / "calls.dot"), "-c", str(tmp_path / "deg.cfg")])
    captured = capsys.readouterr()
    assert code == EXIT_CONFIG
    assert "cut_deg" in captured.err
    assert "deg.cfg:1" in captured.err
