"""
Unit tests for HeaderList.
"""

import pytest

from httppeer.errors import InvalidArgument
from httppeer.http.headers import HeaderList


class TestParsing:
    """Tests for parsing header blocks."""

    def test_from_string(self):
        """Test a CRLF separated block."""
        headers = HeaderList.from_string("Binford: 6100\r\nX-Power: More power!\r\n")

        assert headers.get("Binford") == "6100"
        assert headers.get("X-Power") == "More power!"
        assert len(headers) == 2

    def test_value_may_contain_colons(self):
        """Test that only the first colon separates name and value."""
        headers = HeaderList.from_string("Location: http://example.com:8080/\r\n")

        assert headers.get("Location") == "http://example.com:8080/"

    def test_whitespace_around_value_is_trimmed(self):
        """Test that blanks around the value are dropped."""
        headers = HeaderList.from_string("X-Foo:   bar  \nX-Empty:\n")

        assert headers.get("X-Foo") == "bar"
        assert headers.get("X-Empty") == ""

    def test_lines_without_colon_are_ignored(self):
        """Test that garbage lines do not become headers."""
        headers = HeaderList.from_string("garbage\r\nX-Foo: bar\r\n")

        assert list(headers) == [("X-Foo", "bar")]

    def test_later_duplicate_wins(self):
        """Test that a repeated name keeps the last value."""
        headers = HeaderList.from_string("X-Foo: 1\r\nX-Foo: 2\r\n")

        assert headers.get("X-Foo") == "2"


class TestManipulation:
    """Tests for changing header lists."""

    def test_put_replaces_in_place(self):
        """Test that replacing keeps the original position."""
        headers = HeaderList({"A": "1", "B": "2"})

        headers.put("A", "3")

        assert list(headers) == [("A", "3"), ("B", "2")]

    def test_put_converts_scalars(self):
        """Test that numbers are stored as strings."""
        headers = HeaderList().put("Content-Length", 20).put("X-Ratio", 1.5)

        assert headers.get("Content-Length") == "20"
        assert headers.get("X-Ratio") == "1.5"

    def test_put_booleans(self):
        """Test that True and False are stored as 1 and 0."""
        headers = HeaderList().put("X-Enabled", True).append({"X-Disabled": False})

        assert headers.get("X-Enabled") == "1"
        assert headers.get("X-Disabled") == "0"

    def test_put_rejects_non_scalars(self):
        """Test that lists and objects are rejected."""
        with pytest.raises(InvalidArgument):
            HeaderList().put("X-List", ["a"])

        with pytest.raises(InvalidArgument):
            HeaderList({"X-Dict": {}})

    def test_append_sources(self):
        """Test appending strings, mappings and other lists."""
        headers = HeaderList("A: 1")
        headers.append({"B": 2}).append(HeaderList({"C": "3"}))

        assert str(headers) == "A: 1\r\nB: 2\r\nC: 3"

    def test_append_rejects_other_types(self):
        """Test that only known sources are accepted."""
        with pytest.raises(InvalidArgument):
            HeaderList().append(303)

    def test_copy_is_independent(self):
        """Test that a list created from another list does not share state."""
        original = HeaderList({"A": "1"})
        copied = HeaderList(original)

        copied.put("B", "2")

        assert "B" not in original
        assert copied.contains_key("A")

    def test_remove_and_clear(self):
        """Test removing one and all headers."""
        headers = HeaderList({"A": "1", "B": "2"})

        headers.remove("A").remove("missing")
        assert list(headers) == [("B", "2")]

        headers.clear()
        assert len(headers) == 0

    def test_get_default(self):
        """Test the default for missing headers."""
        assert HeaderList().get("X-Missing", "none") == "none"

    def test_names_are_case_sensitive(self):
        """Test that names are stored as supplied."""
        headers = HeaderList({"X-Foo": "bar"})

        assert "X-Foo" in headers
        assert "x-foo" not in headers


class TestConvenienceSetters:
    """Tests for the put_* helpers."""

    def test_user_agent_and_referer(self):
        """Test the simple named headers."""
        headers = HeaderList().put_user_agent("Binford 6100").put_referer("http://example.com/")

        assert headers.get("User-Agent") == "Binford 6100"
        assert headers.get("Referer") == "http://example.com/"

    def test_cookie(self):
        """Test cookie values are encoded and terminated by ";"."""
        headers = HeaderList().put_cookie({"foo": "bar baz", "n": 1})

        assert headers.get("Cookie") == "foo=bar+baz;n=1;"

    def test_authorization(self):
        """Test basic credentials."""
        headers = HeaderList().put_authorization("user", "pass")

        assert headers.get("Authorization") == "BASIC dXNlcjpwYXNz"

    def test_date(self):
        """Test the RFC 1123 date format."""
        headers = HeaderList().put_date(0)

        assert headers.get("Date") == "Thu, 01 Jan 1970 00:00:00 GMT"

    def test_date_defaults_to_now(self):
        """Test that a date is set without timestamp."""
        assert HeaderList().put_date().get("Date").endswith(" GMT")


class TestProtocols:
    """Tests for str(), iteration and equality."""

    def test_str_has_no_trailing_line_break(self):
        """Test headers are joined by CRLF."""
        headers = HeaderList({"Binford": 6100, "X-Power": "More power!"})

        assert str(headers) == "Binford: 6100\r\nX-Power: More power!"

    def test_empty_list(self):
        """Test an empty list renders to an empty string."""
        assert str(HeaderList()) == ""

    def test_equality(self):
        """Test equal names and values in the same order."""
        assert HeaderList({"A": "1"}) == HeaderList("A: 1")
        assert HeaderList({"A": "1"}) != HeaderList({"A": "2"})

    def test_iteration_allows_changes(self):
        """Test that changing the list while iterating is safe."""
        headers = HeaderList({"A": "1", "B": "2"})

        for name, _ in headers:
            headers.remove(name)

        assert len(headers) == 0
