from typing import Mapping
from urllib.parse import quote


# Characters left untouched when the full URL is encoded: reserved URL
# delimiters plus the unreserved set. Everything else is percent-encoded.
URL_SAFE_CHARACTERS = "!#$&'()*+,/:;=?@~"


def build_query_parameters(parameters: Mapping[str, str] | None) -> str:
    """
    Converts a mapping of {param: value} into a query string,
    e.g. "?param1=foo&param2=bar". Keys and values are not encoded here.
    """
    if not parameters:
        return ""

    return "?" + "&".join(f"{param}={value}" for param, value in parameters.items())


def encode_full(url: str) -> str:
    return quote(url, safe=URL_SAFE_CHARACTERS)


def build_url(
    base_url: str,
    endpoint: str,
    query_parameters: Mapping[str, str] | None = None,
) -> str:
    """
    Concatenates base_url, endpoint and the query string, then encodes
    the result as a single unit.
    """
    return encode_full(base_url + endpoint + build_query_parameters(query_parameters))
