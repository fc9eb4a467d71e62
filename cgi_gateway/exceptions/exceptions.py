"""
Global cgi_gateway exception classes.
"""

class InvalidCgiRequest(Exception):
    """
    The process environment does not describe a CGI request.
    """

    def __init__(self, message, code=None, params=None):
        super(InvalidCgiRequest, self).__init__(message, code, params)

class MissingMetaVariable(InvalidCgiRequest):
    """A meta-variable required by RFC 3875 is not set"""
    pass

class UnsupportedProtocol(InvalidCgiRequest):
    """SERVER_PROTOCOL names a protocol that can't be mapped to an HTTP version"""
    pass

class InvalidHeader(ValueError):
    pass

class InvalidHeaderName(InvalidHeader):
    """Header name is not an RFC 7230 token"""
    pass

class InvalidHeaderValue(InvalidHeader):
    """
    Header value contains characters that can't be written
    on a header line.
    """
    pass

class InvalidStatusCode(ValueError):
    """Status code outside of 100-599"""
    pass

class SuspiciousOperation(Exception):
    """The request did something suspicious"""

class TooManyFieldsSent(SuspiciousOperation):
    """
    The number of fields in the query string exceeded
    settings.DATA_UPLOAD_MAX_NUMBER_FIELDS.
    """
    pass

class RequestDataTooBig(SuspiciousOperation):
    """
    The CONTENT_LENGTH of the request exceeded
    settings.DATA_UPLOAD_MAX_MEMORY_SIZE.
    """
    pass
