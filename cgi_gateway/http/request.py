import copy
import logging
import os
import re
import sys

from future.backports.urllib.parse import parse_qsl, quote, urlencode

from cgi_gateway.conf.settings import Settings
from cgi_gateway.exceptions.exceptions import (
    InvalidCgiRequest, MissingMetaVariable, RequestDataTooBig, TooManyFieldsSent,
    UnsupportedProtocol,
)
from cgi_gateway.utils.datastructures import Extensions, HeaderDict, MultiValueDict
from cgi_gateway.utils.encoding import (
    escape_uri_path, force_str, header_name_re, iri_to_uri, meta_header_value,
)
from .constants import CGI_HEADERS, PROTOCOL_VERSIONS, MetaVar

logger = logging.getLogger(__name__)

#CONTENT_LENGTH is 1*digit per RFC 3875 section 4.1.2, a leading + is tolerated
content_length_re = re.compile(r"^\+?[0-9]+\Z")
#separators understood by parse_qsl
query_field_separator_re = re.compile(r"[&;]")

class UnreadableBodyError(IOError):
    pass

class PathInfo:
    """
    PATH_INFO of the request, the part of the path following the script name.

    Retrieved with ``request.extensions.get(PathInfo)``.
    """
    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return self.value

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.value)

    def __eq__(self, other):
        if isinstance(other, PathInfo):
            return self.value == other.value
        return NotImplemented

    def __hash__(self):
        return hash((PathInfo, self.value))

class CgiRequest(object):
    """A request handed over by a CGI server."""

    def __init__(self, settings=None):
        if settings:
            self.settings = settings
        else:
            self.settings = Settings.default()

        #the meta-variable snapshot the request was built from
        self.META = {}
        self._get = None

        self.method = None
        #SCRIPT_NAME + PATH_INFO
        self.path = None
        #QUERY_STRING, None when absent or empty
        self.query = None
        self.version = None
        self.headers = HeaderDict(mutable=False)
        self.extensions = Extensions()
        self.body = b''

    @classmethod
    def from_environ(cls, environ=None, stdin=None, settings=None):
        """
        Build the request of the running CGI process.

        Reads the environment (os.environ by default) and exactly
        CONTENT_LENGTH bytes of stdin (sys.stdin.buffer by default).
        """
        if settings is None:
            settings = Settings.default()
        meta = capture_environ(environ)
        content_length = parse_content_length(meta.get(MetaVar.CONTENT_LENGTH))
        if stdin is None:
            stdin = sys.stdin.buffer
        body = read_body(stdin, content_length, settings)
        return parse_request(meta, body, settings)

    def __repr__(self):
        if self.method is None or not self.get_full_path():
            return '<%s>' % self.__class__.__name__
        return '<%s: %s %r>' % (self.__class__.__name__, self.method, self.get_full_path())

    @property
    def GET(self):
        """
        The query string as a QueryDict, parsed on first access.

        Raises TooManyFieldsSent when the query string holds more than
        settings.DATA_UPLOAD_MAX_NUMBER_FIELDS fields.
        """
        if self._get is None:
            self._get = QueryDict(self.settings, self.query)
        return self._get

    @GET.setter
    def GET(self, value):
        self._get = value

    def get_method(self):
        return self.method

    def get_path(self):
        if self.path:
            return self.path
        else:
            return ''

    def get_path_info(self):
        """
        Return PATH_INFO as a string, None if the server didn't set it.
        """
        path_info = self.extensions.get(PathInfo)
        if path_info is None:
            return None
        return path_info.value

    def get_full_path(self, raw=True):
        """
        Return the path with the query string appended.

        With raw=False the result is percent-encoded so that it's safe to put
        in a URL.
        """
        path = self.get_path()
        query = self.query
        if not raw:
            path = escape_uri_path(iri_to_uri(path))
            query = iri_to_uri(query)
        if query:
            return '%s?%s' % (path, query)
        return path

    @property
    def uri(self):
        return self.get_full_path()

    def get_protocol_info(self):
        return self.META.get(MetaVar.SERVER_PROTOCOL)

    @property
    def content_type(self):
        return self.META.get(MetaVar.CONTENT_TYPE)

    @property
    def content_length(self):
        return parse_content_length(self.META.get(MetaVar.CONTENT_LENGTH))

    @property
    def encoding(self):
        return self.settings.DEFAULT_CHARSET

    def is_secure(self):
        return self.META.get('HTTPS', 'off').lower() in ('on', '1')

    def is_ajax(self):
        return self.headers.get('X-Requested-With') == 'XMLHttpRequest'

class QueryDict(MultiValueDict):
    """
    A specialized MultiValueDict which represents a query string.

    Keys can be repeated, for instance in the data from a form with a
    <select multiple> field.

    By default QueryDicts are immutable, though the copy() method
    will always return a mutable copy.

    Percent-escapes are decoded with the given encoding
    (settings.DEFAULT_CHARSET by default).
    """

    def __init__(self, settings, query_string=None, mutable=False, encoding=None):
        super(QueryDict, self).__init__()
        self.settings = settings
        self.encoding = encoding or self.settings.DEFAULT_CHARSET
        query_string = query_string or ''
        if isinstance(query_string, bytes):
            # query_string normally contains URL-encoded data, a subset of ASCII.
            try:
                query_string = query_string.decode(self.encoding)
            except UnicodeDecodeError:
                query_string = query_string.decode('iso-8859-1')

        fields_limit = self.settings.DATA_UPLOAD_MAX_NUMBER_FIELDS
        if fields_limit is not None and query_string and \
                len(query_field_separator_re.split(query_string)) > fields_limit:
            raise TooManyFieldsSent(
                'The number of GET parameters exceeded '
                'settings.DATA_UPLOAD_MAX_NUMBER_FIELDS.'
            )
        for key, value in parse_qsl(query_string, keep_blank_values=True,
                                    encoding=self.encoding, errors='replace'):
            self.appendlist(str(key), str(value))
        self._mutable = mutable

    def __copy__(self):
        result = self.__class__(self.settings, mutable=True, encoding=self.encoding)
        for key, list_ in self.lists():
            result.setlist(key, list_)
        return result

    def __deepcopy__(self, memo):
        result = self.__class__(self.settings, mutable=True, encoding=self.encoding)
        memo[id(self)] = result
        for key, list_ in self.lists():
            result.setlist(copy.deepcopy(key, memo), copy.deepcopy(list_, memo))
        return result

    def copy(self):
        """Return a mutable copy of this object."""
        return self.__deepcopy__({})

    def urlencode(self, safe=None):
        """
        Return an encoded string of all query string arguments.

        `safe` specifies characters which don't require quoting, for example::

            >>> q = QueryDict(Settings.default(), mutable=True)
            >>> q['next'] = '/a&b/'
            >>> q.urlencode()
            'next=%2Fa%26b%2F'
            >>> q.urlencode(safe='/')
            'next=/a%26b/'
        """
        output = []
        if safe:
            def encode(k, v):
                return '%s=%s' % (quote(k, safe), quote(v, safe))
        else:
            def encode(k, v):
                return str(urlencode({k: v}))
        for k, list_ in self.lists():
            output.extend(
                encode(k.encode(self.encoding), str(v).encode(self.encoding))
                for v in list_
            )
        return '&'.join(output)

def capture_environ(environ=None):
    """
    Return a snapshot of the meta-variables, os.environ when environ is None.

    Byte names and values (os.environb) are decoded the way os.environ
    decodes them.
    """
    if environ is None:
        environ = os.environ
    return {
        force_str(key, errors='surrogateescape'): force_str(value, errors='surrogateescape')
        for key, value in environ.items()
    }

def parse_content_length(value):
    """
    Return CONTENT_LENGTH as an int; 0 when it's absent or not a
    non-negative integer.
    """
    if value is None:
        return 0
    value = str(value)
    if not content_length_re.match(value):
        return 0
    return int(value)

def read_body(stream, content_length, settings=None):
    """
    Read exactly content_length bytes from the binary stream.

    Never asks the stream for more than what's left to read: the server might
    keep stdin open past the end of the body, and reading to EOF would block.
    """
    if settings is None:
        settings = Settings.default()

    max_size = settings.DATA_UPLOAD_MAX_MEMORY_SIZE
    if max_size is not None and content_length > max_size:
        raise RequestDataTooBig('Request body exceeded settings.DATA_UPLOAD_MAX_MEMORY_SIZE.')

    chunks = []
    remaining = content_length
    while remaining > 0:
        try:
            chunk = stream.read(remaining)
        except IOError as e:
            raise UnreadableBodyError(*e.args) from e
        if not chunk:
            raise UnreadableBodyError(
                "stdin closed after {} of {} body bytes.".format(content_length - remaining, content_length)
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b''.join(chunks)

def parse_protocol(server_protocol, settings):
    """
    Map SERVER_PROTOCOL to an HTTP version, settings.DEFAULT_PROTOCOL when unset.
    """
    if server_protocol is None:
        return settings.DEFAULT_PROTOCOL
    try:
        return PROTOCOL_VERSIONS[server_protocol]
    except KeyError:
        raise UnsupportedProtocol("Unsupported SERVER_PROTOCOL {!r}".format(server_protocol), 505)

def parse_request_headers(meta, settings):
    """
    Yield (name, value) header pairs out of the meta-variables.

    HTTP_* variables come first, in meta order, followed by the X-CGI-*
    copies of the CGI meta-variables when settings.CGI_HEADERS is set.
    """
    prefix = MetaVar.HTTP_PREFIX
    for key, value in meta.items():
        if key.startswith(prefix):
            yield key[len(prefix):].replace('_', '-'), meta_header_value(value.strip())

    if settings.CGI_HEADERS:
        for meta_var, header in CGI_HEADERS:
            if meta_var in meta:
                yield header, meta_header_value(meta[meta_var])

def parse_request(meta, body=b'', settings=None):
    """
    Build a CgiRequest out of the meta-variables and the request body.

    Raises MissingMetaVariable when REQUEST_METHOD isn't set, i.e. the
    process wasn't invoked as CGI, and UnsupportedProtocol for an unknown
    SERVER_PROTOCOL. Headers that can't be represented raise
    InvalidHeaderName/InvalidHeaderValue.
    """
    if settings is None:
        settings = Settings.default()

    method = meta.get(MetaVar.REQUEST_METHOD)
    if method is None:
        raise MissingMetaVariable("No REQUEST_METHOD set, process not invoked as CGI.", 500)
    if not header_name_re.match(method):
        raise InvalidCgiRequest("Invalid REQUEST_METHOD {!r}".format(method), 400)

    request = CgiRequest(settings)
    request.META = dict(meta)
    request.method = method

    path_info = meta.get(MetaVar.PATH_INFO)
    request.path = meta.get(MetaVar.SCRIPT_NAME, '') + (path_info or '')
    request.query = meta.get(MetaVar.QUERY_STRING) or None
    request.version = parse_protocol(meta.get(MetaVar.SERVER_PROTOCOL), settings)
    request.headers = HeaderDict(parse_request_headers(meta, settings), mutable=False)

    if path_info is not None:
        request.extensions.insert(PathInfo(path_info))

    request.body = bytes(body)

    logger.debug("Parsed CGI request %r", request)
    return request
