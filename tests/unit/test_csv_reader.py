from __future__ import annotations

import pytest

from planner_import.csvdata.reader import CsvImportError, decode_csv_bytes, read_csv_text


def test_decode_strips_bom_and_normalizes_line_endings():
    text = decode_csv_bytes("\ufeffusername,password\r\nabc,secret1\rdef,secret2\n".encode("utf-8"))
    assert text == "username,password\nabc,secret1\ndef,secret2\n"


def test_decode_rejects_invalid_utf8():
    with pytest.raises(CsvImportError, match="UTF-8"):
        decode_csv_bytes(b"username,password\n\xff\xfe,secret1\n")


def test_read_basic_rows_as_strings():
    data = read_csv_text("username,password\nabc,007007\n")
    assert data.columns == ["username", "password"]
    # leading zeros preserved: no numeric inference
    assert data.rows == [{"username": "abc", "password": "007007"}]
    assert data.malformed_lines == []


def test_read_keeps_na_like_strings_verbatim():
    data = read_csv_text("username,password,email\nNA,null,N/A\n")
    assert data.rows == [{"username": "NA", "password": "null", "email": "N/A"}]


def test_read_header_untrimmed():
    data = read_csv_text(" User ,PWD\nabc,secret1\n")
    assert data.columns == [" User ", "PWD"]


def test_read_skips_line_with_too_many_fields():
    data = read_csv_text("username,password\nabc,secret1,extra,more\ndef,secret2\n")
    assert [r["username"] for r in data.rows] == ["def"]
    assert data.malformed_lines == [4]


def test_read_keeps_short_lines_with_missing_cells():
    data = read_csv_text("username,password,email\nabc,secret1\n")
    assert len(data.rows) == 1
    row = data.rows[0]
    assert row["username"] == "abc"
    assert row["password"] == "secret1"
    assert row["email"] is None or row["email"] != row["email"]  # None or NaN


def test_read_drops_blank_and_all_empty_lines():
    data = read_csv_text("username,password\n\nabc,secret1\n,\n\ndef,secret2\n")
    assert [r["username"] for r in data.rows] == ["abc", "def"]


def test_read_quoted_fields():
    data = read_csv_text('username,full name\nabc,"Mensah, Ama"\n')
    assert data.rows == [{"username": "abc", "full name": "Mensah, Ama"}]


def test_read_header_only():
    data = read_csv_text("username,password\n")
    assert data.columns == ["username", "password"]
    assert data.rows == []


def test_read_repeated_header_keeps_first_column():
    data = read_csv_text("username,username\nfirst,second\n")
    assert data.rows == [{"username": "first"}]


def test_unterminated_quote_is_fatal():
    with pytest.raises(CsvImportError, match="CSV parsing error"):
        read_csv_text('username,password\nabc,secret1\n"unterminated,x\ndef,secret2\n')


def test_closed_quote_spanning_lines_is_kept():
    data = read_csv_text('username,full name\nabc,"Mensah\nAma"\n')
    assert data.rows == [{"username": "abc", "full name": "Mensah\nAma"}]


def test_leading_all_empty_lines_skipped_before_header():
    data = read_csv_text(",,\n \n,\nusername,password\nabc,secret1\n")
    assert data.columns == ["username", "password"]
    assert data.rows == [{"username": "abc", "password": "secret1"}]


def test_wide_all_empty_line_not_recorded_as_malformed():
    data = read_csv_text("username,password\nabc,secret1\n,,,\n")
    assert [r["username"] for r in data.rows] == ["abc"]
    assert data.malformed_lines == []


def test_only_empty_cells_returns_empty():
    data = read_csv_text(",,\n,\n")
    assert data.columns == []
    assert data.rows == []


def test_no_data_at_all_returns_empty():
    data = read_csv_text("\n")
    assert data.columns == []
    assert data.rows == []
