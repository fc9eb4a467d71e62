# -*- coding: utf-8 -*-

import re

import six
from future.backports.urllib.parse import quote

from cgi_gateway.exceptions.exceptions import InvalidHeaderName, InvalidHeaderValue

#RFC 7230 token
header_name_re = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+\Z")
#visible characters, space, horizontal tab and obs-text
header_value_re = re.compile(r"^[\t\x20-\x7e\x80-\xff]*\Z")

def force_str(s, encoding='utf-8', errors='strict'):
    """
    Return a str version of `s`, decoding bytes with `encoding`.
    """
    if isinstance(s, str):
        return s
    if isinstance(s, bytes):
        return six.ensure_str(s, encoding, errors)
    return str(s)

def force_bytes(s, encoding='utf-8', errors='strict'):
    """
    Return a bytes version of `s`, encoding str with `encoding`.
    bytearray, memoryview and sequences of ints are copied into bytes.
    """
    if isinstance(s, (bytearray, memoryview, list, tuple)):
        return bytes(s)
    return six.ensure_binary(s, encoding, errors)

def check_header_name(name):
    """
    Return `name` if it's a valid header field name, raise InvalidHeaderName otherwise.
    """
    if not isinstance(name, str) or not header_name_re.match(name):
        raise InvalidHeaderName("Invalid header name: {!r}".format(name))
    return name

def check_header_value(value):
    """
    Return `value` as a str that can be written on a header line.

    ints are accepted (Content-Length) and converted. Control characters
    other than horizontal tab, and characters outside of Latin-1, raise
    InvalidHeaderValue.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, bytes):
        value = value.decode('iso-8859-1')
    if not isinstance(value, str) or not header_value_re.match(value):
        raise InvalidHeaderValue("Invalid header value: {!r}".format(value))
    return value

def meta_header_value(value, encoding='utf-8'):
    """
    Return the raw bytes behind a meta-variable value as a Latin-1 str.

    os.environ decodes the bytes the server set with the filesystem encoding
    and surrogateescape; they're encoded back the same way so that a header
    such as a UTF-8 Referer or Cookie keeps its bytes, one character per byte.
    """
    try:
        raw = force_bytes(value, encoding, 'surrogateescape')
    except UnicodeEncodeError:
        raise InvalidHeaderValue("Invalid header value: {!r}".format(value))
    return check_header_value(raw)

def iri_to_uri(iri):
    """
    Convert an Internationalized Resource Identifier (IRI) portion to a URI
    portion that is suitable for inclusion in a URL.

    Take an IRI (string or UTF-8 bytes, e.g. '/I ♥ CGI/' or
    b'/I \xe2\x99\xa5 CGI/') and return a string containing the encoded
    result with ASCII chars only (e.g. '/I%20%E2%99%A5%20CGI/').
    """
    # The list of safe characters here is constructed from the "reserved" and
    # "unreserved" characters specified in sections 2.2 and 2.3 of RFC 3986:
    #     reserved    = gen-delims / sub-delims
    #     gen-delims  = ":" / "/" / "?" / "#" / "[" / "]" / "@"
    #     sub-delims  = "!" / "$" / "&" / "'" / "(" / ")"
    #                   / "*" / "+" / "," / ";" / "="
    #     unreserved  = ALPHA / DIGIT / "-" / "." / "_" / "~"
    # The % character is also safe, section 3.1 of RFC 3987 specifically
    # mentions that % must not be converted.
    if iri is None:
        return iri
    return str(quote(iri, safe="/#%[]=:;$&()+,!?*@'~"))

def escape_uri_path(path):
    """
    Escape the unsafe characters from the path portion of a Uniform Resource
    Identifier (URI).
    """
    # These are the "reserved" and "unreserved" characters specified in
    # sections 2.2 and 2.3 of RFC 2396, minus ";", "=" and "?" per section 3.3.
    # "%" is kept so that already escaped paths aren't escaped twice.
    return str(quote(path, safe="/:@&+$,-_.!~*'()%"))
