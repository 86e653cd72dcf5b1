"""Reversible encoding for notation payloads crossing the renderer boundary."""

from urllib.parse import quote, unquote


def encode_payload(document: str) -> str:
    """
    Percent-encodes a document so it holds only unreserved URI characters.

    The result is safe inside JSON, JavaScript string literals, template
    literals and HTML, whatever delimiters the document itself contains.
    """
    return quote(document, safe="", errors="surrogatepass")


def decode_payload(payload: str) -> str:
    """Inverse of encode_payload."""
    return unquote(payload, errors="surrogatepass")
