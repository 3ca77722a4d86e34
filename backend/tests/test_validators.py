import pytest

from linkpulse.utils.validators import MAX_URL_LENGTH, is_valid_url, last_path_segment


@pytest.mark.parametrize("url", [
    "https://example.com/x",
    "http://example.com",
    "HTTPS://Example.com/Path?q=1",
])
def test_accepts_http_and_https(url):
    assert is_valid_url(url) == (True, "")


@pytest.mark.parametrize("url", [
    " https://example.com/x",
    "\thttps://example.com/x",
    "\x00https://example.com/x",
    "example.com",
    "ftp://example.com",
    "https://",
])
def test_rejects_urls_not_starting_with_scheme(url):
    is_valid, message = is_valid_url(url)

    assert is_valid is False
    assert message


def test_rejects_overlong_url():
    url = "https://example.com/" + "a" * MAX_URL_LENGTH

    is_valid, message = is_valid_url(url)

    assert is_valid is False
    assert "too long" in message


def test_last_path_segment():
    assert last_path_segment("https://example.com/foo/bar") == "bar"
    assert last_path_segment("https://example.com/") == ""
