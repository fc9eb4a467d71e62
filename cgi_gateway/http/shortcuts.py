"""
Shortcut constructors for the common kinds of response.

Each one sets Content-Length from the encoded body; the text ones encode
their body as UTF-8.
"""
from cgi_gateway.utils.encoding import force_bytes
from .constants import TEXT_HTML_UTF8, TEXT_PLAIN_UTF8, Header
from .response import HttpResponse

def empty_response(status_code):
    """
    A response with no headers and no body, e.g. ``empty_response(404)``.
    """
    return HttpResponse(status_code)

def _encoded_response(status_code, body, content_type=None):
    body = force_bytes(body, 'utf-8')
    response = HttpResponse(status_code, body=body)
    if content_type is not None:
        response[Header.CONTENT_TYPE] = content_type
    response[Header.CONTENT_LENGTH] = len(body)
    return response

def html_response(status_code, body):
    return _encoded_response(status_code, body, TEXT_HTML_UTF8)

def text_response(status_code, body):
    return _encoded_response(status_code, body, TEXT_PLAIN_UTF8)

def string_response(status_code, body):
    """Only Content-Length is set."""
    return _encoded_response(status_code, body)

def binary_response(status_code, content_type, body):
    """
    Send ``body`` bytes with that status code. ``content_type`` is written as
    Content-Type unless it's None::

        binary_response(200, None, b'\\x01\\x02')
        binary_response(200, 'image/png', png_bytes)
    """
    response = HttpResponse(status_code, body=force_bytes(body))
    response[Header.CONTENT_LENGTH] = len(response.body)
    if content_type is not None:
        response[Header.CONTENT_TYPE] = content_type
    return response
