import pytest

from product_ingest.tokenizer import parse_rows


def test_quoted_field_keeps_embedded_comma():
    assert parse_rows('a,"b,c",d\n') == [["a", "b,c", "d"]]


def test_doubled_quotes_unescape():
    assert parse_rows('"He said ""hi""",x') == [['He said "hi"', "x"]]


def test_quoted_field_keeps_embedded_newlines():
    text = 'a,"line1\nline2\r\nline3"\r\nb,c'
    assert parse_rows(text) == [["a", "line1\nline2\r\nline3"], ["b", "c"]]


@pytest.mark.parametrize("sep", ["\n", "\r\n", "\r"])
def test_line_ending_variants(sep):
    text = sep.join(["h1,h2", "a,b", "c,d"]) + sep
    assert parse_rows(text) == [["h1", "h2"], ["a", "b"], ["c", "d"]]


def test_blank_rows_dropped_but_sparse_rows_kept():
    text = "a,b\n\n , \n,x\n\r\n"
    assert parse_rows(text) == [["a", "b"], ["", "x"]]


def test_trailing_comma_yields_empty_last_field():
    assert parse_rows("a,b,") == [["a", "b", ""]]


def test_unterminated_quote_consumes_rest_without_error():
    assert parse_rows('x,"abc,def\nghi') == [["x", "abc,def\nghi"]]


def test_stray_quote_mid_field_does_not_raise():
    assert parse_rows('ab"c,d\ne,f') == [["abc,d\ne,f"]]


def test_empty_input():
    assert parse_rows("") == []
    assert parse_rows("\n\r\n") == []


def test_reserialize_is_stable():
    rows = [["Name", "Image"], ["Cargo, Tan", "a.jpg"], ["Multi\nline", ""]]
    text = "\r\n".join(",".join(f'"{f}"' for f in row) for row in rows)

    first = parse_rows(text)
    again = parse_rows("\n".join(",".join(f'"{f}"' for f in row) for row in first))
    assert first == rows
    assert again == first
