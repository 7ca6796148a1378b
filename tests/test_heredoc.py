import io

from pipekit.heredoc import is_heredoc, iter_lines, read_heredoc


def test_is_heredoc_exact_match_only():
    assert is_heredoc("here_doc") is True
    assert is_heredoc("here_doc2") is False
    assert is_heredoc("here") is False
    assert is_heredoc("infile") is False


def test_iter_lines_keeps_newlines_and_tail():
    assert list(iter_lines(io.StringIO("x\ny\nz"))) == ["x\n", "y\n", "z"]


def test_iter_lines_empty_stream():
    assert list(iter_lines(io.StringIO(""))) == []


def test_iter_lines_roundtrip():
    text = "one\n\nthree\nfour"
    assert "".join(iter_lines(io.StringIO(text))) == text


def test_read_heredoc_stops_at_limiter():
    source = io.StringIO("a\nb\nEOF\nc\n")
    prompt = io.StringIO()
    assert read_heredoc("EOF", source, prompt) == "a\nb\n"
    assert prompt.getvalue() == "> " * 3
    assert source.read() == "c\n"


def test_read_heredoc_limiter_must_match_whole_line():
    source = io.StringIO("EOFX\n EOF\nEOF \nEOF\n")
    assert read_heredoc("EOF", source) == "EOFX\n EOF\nEOF \n"


def test_read_heredoc_end_of_input_without_limiter():
    prompt = io.StringIO()
    assert read_heredoc("EOF", io.StringIO("a\nlast"), prompt) == "a\nlast\n"
    assert prompt.getvalue() == "> > > \n"


def test_read_heredoc_empty_input():
    prompt = io.StringIO()
    assert read_heredoc("EOF", io.StringIO(""), prompt) == ""
    assert prompt.getvalue() == "> \n"


def test_read_heredoc_limiter_on_last_line_without_newline():
    assert read_heredoc("STOP", io.StringIO("x\nSTOP")) == "x\n"


def test_read_heredoc_keeps_blank_lines():
    assert read_heredoc("END", io.StringIO("\n\nEND\n")) == "\n\n"