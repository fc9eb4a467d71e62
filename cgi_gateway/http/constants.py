class MetaVar:
    """RFC 3875 meta-variable names."""
    AUTH_TYPE           = "AUTH_TYPE"
    CONTENT_LENGTH      = "CONTENT_LENGTH"
    CONTENT_TYPE        = "CONTENT_TYPE"
    GATEWAY_INTERFACE   = "GATEWAY_INTERFACE"
    PATH_INFO           = "PATH_INFO"
    PATH_TRANSLATED     = "PATH_TRANSLATED"
    QUERY_STRING        = "QUERY_STRING"
    REMOTE_ADDR         = "REMOTE_ADDR"
    REMOTE_HOST         = "REMOTE_HOST"
    REMOTE_IDENT        = "REMOTE_IDENT"
    REMOTE_USER         = "REMOTE_USER"
    REQUEST_METHOD      = "REQUEST_METHOD"
    SCRIPT_NAME         = "SCRIPT_NAME"
    SERVER_PORT         = "SERVER_PORT"
    SERVER_PROTOCOL     = "SERVER_PROTOCOL"
    SERVER_SOFTWARE     = "SERVER_SOFTWARE"

    #prefix of the protocol-specific variables carrying the request headers
    HTTP_PREFIX         = "HTTP_"

class Version:
    HTTP_09 = (0, 9)
    HTTP_10 = (1, 0)
    HTTP_11 = (1, 1)
    HTTP_2  = (2, 0)

#SERVER_PROTOCOL value to HTTP version, matched exactly
PROTOCOL_VERSIONS = {
    "HTTP/0.9": Version.HTTP_09,
    "HTTP/1.0": Version.HTTP_10,
    "HTTP/1.1": Version.HTTP_11,
    "HTTP/2.0": Version.HTTP_2,
}

#meta-variables copied verbatim into X-CGI- headers, in emission order
CGI_HEADERS = (
    (MetaVar.AUTH_TYPE,         "X-CGI-Auth-Type"),
    (MetaVar.CONTENT_LENGTH,    "X-CGI-Content-Length"),
    (MetaVar.CONTENT_TYPE,      "X-CGI-Content-Type"),
    (MetaVar.GATEWAY_INTERFACE, "X-CGI-Gateway-Interface"),
    (MetaVar.PATH_INFO,         "X-CGI-Path-Info"),
    (MetaVar.PATH_TRANSLATED,   "X-CGI-Path-Translated"),
    (MetaVar.QUERY_STRING,      "X-CGI-Query-String"),
    (MetaVar.REMOTE_ADDR,       "X-CGI-Remote-Addr"),
    (MetaVar.REMOTE_HOST,       "X-CGI-Remote-Host"),
    (MetaVar.REMOTE_IDENT,      "X-CGI-Remote-Ident"),
    (MetaVar.REMOTE_USER,       "X-CGI-Remote-User"),
    (MetaVar.REQUEST_METHOD,    "X-CGI-Request-Method"),
    (MetaVar.SCRIPT_NAME,       "X-CGI-Script-Name"),
    (MetaVar.SERVER_PORT,       "X-CGI-Server-Port"),
    (MetaVar.SERVER_PROTOCOL,   "X-CGI-Server-Protocol"),
    (MetaVar.SERVER_SOFTWARE,   "X-CGI-Server-Software"),
)

class Header:
    CONTENT_LENGTH  = "Content-Length"
    CONTENT_TYPE    = "Content-Type"

TEXT_PLAIN_UTF8 = "text/plain; charset=utf-8"
TEXT_HTML_UTF8  = "text/html; charset=utf-8"

#canonical reason phrases written on the Status line
REASON_PHRASES = {
    100: "Continue",
    101: "Switching Protocols",
    102: "Processing",
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    207: "Multi-Status",
    208: "Already Reported",
    226: "IM Used",
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    307: "Temporary Redirect",
    308: "Permanent Redirect",
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Payload Too Large",
    414: "URI Too Long",
    415: "Unsupported Media Type",
    416: "Range Not Satisfiable",
    417: "Expectation Failed",
    418: "I'm a teapot",
    421: "Misdirected Request",
    422: "Unprocessable Entity",
    423: "Locked",
    424: "Failed Dependency",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    451: "Unavailable For Legal Reasons",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
    505: "HTTP Version Not Supported",
    506: "Variant Also Negotiates",
    507: "Insufficient Storage",
    508: "Loop Detected",
    510: "Not Extended",
    511: "Network Authentication Required",
}
