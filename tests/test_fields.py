import pytest

from product_ingest.fields import extract_size, parse_timestamp


@pytest.mark.parametrize("title,size", [
    ("Relaxed Trouser 32W", "32W"),
    ("relaxed trouser 34w", "34W"),
    ("Slim Jean 30", "30"),
    ("Classic Tee XL", "XL"),
    ("Oversized hoodie xxl", "XXL"),
    ("Boxy Tee 2XL", "2XL"),
    ("Trousers 50", ""),
    ("Cargo Pant", ""),
    ("", ""),
])
def test_extract_size(title, size):
    assert extract_size(title) == size


def test_extract_size_takes_in_range_numbers_at_face_value():
    # known heuristic: pack counts look like waist sizes
    assert extract_size("Crew Socks Pack of 30") == "30"


@pytest.mark.parametrize("raw,expected", [
    ("2024-01-15", 1705276800000),
    ("2024-01-15T10:00:00Z", 1705312800000),
    ("2024-01-15T10:00:00+02:00", 1705305600000),
    ("January 15, 2024", 1705276800000),
])
def test_parse_timestamp(raw, expected):
    assert parse_timestamp(raw) == expected


@pytest.mark.parametrize("raw", [
    "", "   ", "soon", None,
    # offsets of 24h or more parse but cannot be applied
    "2024-01-15 10:00 +9999", "2024-01-15 10:00 +99:00", "2024-01-15 10:00 -2500",
])
def test_parse_timestamp_unparseable(raw):
    assert parse_timestamp(raw) is None
