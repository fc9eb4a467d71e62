"""
Run a function as a CGI programme.

Typically the CGI script is nothing but::

    #!/usr/bin/env python3
    from cgi_gateway.http.dispatch import dispatch, catch_errors
    from cgi_gateway.http.shortcuts import text_response

    def hello(request):
        return text_response(200, "Hello World")

    dispatch(catch_errors(hello))
"""
import functools
import logging
import sys

from cgi_gateway.conf.settings import Settings
from cgi_gateway.exceptions.exceptions import InvalidCgiRequest, InvalidHeader, SuspiciousOperation
from .request import CgiRequest, UnreadableBodyError
from .response import HttpResponse
from .shortcuts import empty_response

logger = logging.getLogger(__name__)

#raised while building the request, before the handler runs
INVOCATION_ERRORS = (InvalidCgiRequest, InvalidHeader, UnreadableBodyError, SuspiciousOperation)

def err_to_500(result):
    """
    Pass a response through; turn a failure value (an exception) into an
    empty HTTP 500 response after logging it.
    """
    if isinstance(result, BaseException):
        logger.error("Handler failed: %s", result, exc_info=result)
        return empty_response(500)
    return result

def catch_errors(func):
    """
    Wrap a handler so that an exception raised by it is logged and answered
    with an empty HTTP 500 response instead of reaching the client.
    """
    @functools.wraps(func)
    def wrapper(request):
        try:
            result = func(request)
        except Exception as e:
            result = e
        return err_to_500(result)
    return wrapper

def dispatch(func, environ=None, stdin=None, stdout=None, settings=None, error_handler=None):
    """
    Call func as a CGI programme and return the bytes written to stdout.

    Builds the request from environ (os.environ by default) and stdin
    (sys.stdin.buffer by default), calls func(request) once, serializes the
    response and writes it to stdout (sys.stdout.buffer by default).

    Invocation errors (not invoked as CGI, bad protocol or header, short body)
    propagate unless error_handler is given: it's then called with the
    exception and its response is sent instead.
    """
    if settings is None:
        settings = Settings.default()

    try:
        request = CgiRequest.from_environ(environ, stdin, settings)
    except INVOCATION_ERRORS as e:
        if error_handler is None:
            raise
        logger.error("Couldn't build the CGI request: %s", e)
        response = error_handler(e)
    else:
        response = func(request)

    if not isinstance(response, HttpResponse):
        raise TypeError(
            "Expected an HttpResponse from the handler, got {}".format(type(response).__name__)
        )

    output = response.serialize()

    if stdout is None:
        stdout = sys.stdout.buffer
    stdout.write(output)
    stdout.flush()
    return output
