import pytest

from libobj.errors import MalformedRecordError
from libobj.reader import is_vertex_line, match_vertex, match_vertices, read_obj_lines, split_lines


@pytest.mark.parametrize("line", ["vn 0 0 1", "vt 0.5 0.5", "vp 1 2", "f 1 2 3", "# v 1 2 3", "", "v", "v ", "g v"])
def test_non_vertex_lines_are_skipped(line):
    assert match_vertex(line, 0) is None


def test_fast_check_needs_whitespace_after_marker():
    assert is_vertex_line("v 1 2 3")
    assert is_vertex_line("v\t1 2 3")
    assert not is_vertex_line("vn 1 2 3")
    assert not is_vertex_line("V 1 2 3")


def test_three_fields():
    v = match_vertex("v 1.0 -2.5 3e2", 7)
    assert v.position == (1.0, -2.5, 300.0, 1.0)
    assert v.line_index == 7


def test_w_field_is_replaced():
    v = match_vertex("v 1 2 3 0.25", 0)
    assert v.position == (1.0, 2.0, 3.0, 1.0)


@pytest.mark.parametrize(
    "text,value",
    [("+0.5", 0.5), (".5", 0.5), ("-2.", -2.0), ("1E3", 1000.0), ("-4.2e-07", -4.2e-07), ("1e+2", 100.0)],
)
def test_number_notations(text, value):
    v = match_vertex(f"v {text} 0 0", 0)
    assert v.position[0] == value


def test_tabs_and_extra_fields():
    v = match_vertex("v\t1\t2\t3 1 0.5 0.5 0.5", 0)
    assert v.position == (1.0, 2.0, 3.0, 1.0)


@pytest.mark.parametrize(
    "line",
    ["v 1 2", "v a b c", "v 1 2 three", "v 1 2 3abc", "v 1 2 3 w", "v   ", "v 1e400 0 0", "v 1..2 0 0"],
)
def test_malformed_vertex(line):
    with pytest.raises(MalformedRecordError) as ei:
        match_vertex(line, 4)
    assert ei.value.line_number == 5
    assert ei.value.line == line
    assert "line 5" in str(ei.value)


def test_match_vertices_indexes_every_line():
    lines = ["# comment", "v 1 2 3", "vn 0 0 1", "", "v 4 5 6", "f 1 2"]
    vs = match_vertices(lines)
    assert [v.line_index for v in vs] == [1, 4]


def test_match_vertices_reports_first_malformed_line():
    with pytest.raises(MalformedRecordError) as ei:
        match_vertices(["v 1 2 3", "vt 0 0", "v x 2 3", "v y 2 3"])
    assert ei.value.line_number == 3


def test_split_lines():
    assert split_lines("") == []
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("a\r\nb\r\n") == ["a", "b"]
    assert split_lines("a\rb\n\nc") == ["a", "b", "", "c"]
    assert split_lines("a\fb") == ["a\fb"]


def test_read_obj_lines_drops_bom(tmp_path):
    p = tmp_path / "m.obj"
    p.write_bytes(b"\xef\xbb\xbfv 1 2 3\r\nf 1 1 1\r\n")
    assert read_obj_lines(str(p)) == ["v 1 2 3", "f 1 1 1"]


def test_read_obj_lines_keeps_undecodable_bytes(tmp_path):
    p = tmp_path / "m.obj"
    p.write_bytes(b"# caf\xe9\nv 1 2 3\n")
    lines = read_obj_lines(str(p))
    assert lines[0].encode("utf-8", errors="surrogateescape") == b"# caf\xe9"
