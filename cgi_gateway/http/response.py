from cgi_gateway.exceptions.exceptions import InvalidStatusCode
from cgi_gateway.utils.datastructures import HeaderDict
from cgi_gateway.utils.encoding import force_bytes
from .constants import REASON_PHRASES

class HttpResponse(object):
    """
    A response to be written back to the CGI server.

    The body is independent of the headers: whoever builds the response is
    responsible for Content-Length/Content-Type describing it.
    """

    def __init__(self, status_code=200, headers=None, body=b''):
        self.status_code = status_code
        self.headers = HeaderDict(headers or ())
        self.body = body

    @property
    def status_code(self):
        return self._status_code

    @status_code.setter
    def status_code(self, value):
        if isinstance(value, bool) or not isinstance(value, int):
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise InvalidStatusCode("Invalid status code: {!r}".format(value))
        if not 100 <= value <= 599:
            raise InvalidStatusCode("Status code {} is outside of 100-599".format(value))
        self._status_code = value

    @property
    def body(self):
        return self._body

    @body.setter
    def body(self, value):
        self._body = force_bytes(value)

    @property
    def reason_phrase(self):
        """The canonical reason phrase of the status code, None if there's none."""
        return REASON_PHRASES.get(self.status_code)

    def __repr__(self):
        return '<%s status_code=%d, %r>' % (
            self.__class__.__name__, self.status_code, self.headers.get('Content-Type'),
        )

    def __getitem__(self, header):
        return self.headers[header]

    def __setitem__(self, header, value):
        self.headers[header] = value

    def __delitem__(self, header):
        del self.headers[header]

    def has_header(self, header):
        return header in self.headers

    def serialize(self):
        return serialize_response(self)

def serialize_status_line(response):
    status_line = 'Status: %d' % response.status_code
    reason = response.reason_phrase
    if reason is not None:
        status_line += ' ' + reason
    return status_line + '\n'

def serialize_response(response):
    """
    Convert the response into the bytes a CGI server expects on stdout.

    Status line, then one "name: value" line per header value with names
    lower-cased and sorted, a blank line and the raw body. Nothing is added
    to the headers.
    """
    output = [serialize_status_line(response)]

    for name, values in sorted(response.headers.lists()):
        for value in values:
            output.append('%s: %s\n' % (name, value))

    output.append('\n')

    #header values are validated as Latin-1 text by HeaderDict
    return ''.join(output).encode('iso-8859-1') + response.body
