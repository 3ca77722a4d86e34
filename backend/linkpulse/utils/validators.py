from urllib.parse import urlparse


MAX_URL_LENGTH = 2048


def is_valid_url(url: str) -> tuple[bool, str]:
    """
    Validate a URL submitted for shortening.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not url.strip():
        return False, "URL cannot be empty"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    result = urlparse(url)

    # Only http and https, and the raw string itself must begin with the scheme
    # (urlparse silently skips leading whitespace and control characters)
    if (result.scheme.lower() not in ('http', 'https')
            or not url[:8].lower().startswith(('http://', 'https://'))):
        return False, "Please enter a valid URL starting with http:// or https://"

    if not result.netloc:
        return False, "Invalid URL format"

    return True, ""


def last_path_segment(url: str) -> str:
    """
    Return the final '/'-separated segment of a URL, or '' if it ends with '/'.

    'https://example.com/foo/bar' -> 'bar'
    'https://example.com/' -> ''
    'https://example.com' -> 'example.com'
    """
    return url.split('/')[-1]
