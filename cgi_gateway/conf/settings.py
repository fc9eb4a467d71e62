from cgi_gateway.http.constants import Version

class Settings:
    """Setting used to configure the gateway"""

    class Key:
        """
        Key to settings name mapping.
        """
        DEFAULT_CHARSET = "DEFAULT_CHARSET"
        DATA_UPLOAD_MAX_MEMORY = "DATA_UPLOAD_MAX_MEMORY"
        DATA_UPLOAD_MAX_FIELDS = "DATA_UPLOAD_MAX_FIELDS"
        CGI_HEADERS = "CGI_HEADERS"
        DEFAULT_PROTOCOL = "DEFAULT_PROTOCOL"

    #settings key to attribute name
    _ATTRIBUTES = {
        Key.DEFAULT_CHARSET: "DEFAULT_CHARSET",
        Key.DATA_UPLOAD_MAX_MEMORY: "DATA_UPLOAD_MAX_MEMORY_SIZE",
        Key.DATA_UPLOAD_MAX_FIELDS: "DATA_UPLOAD_MAX_NUMBER_FIELDS",
        Key.CGI_HEADERS: "CGI_HEADERS",
        Key.DEFAULT_PROTOCOL: "DEFAULT_PROTOCOL",
    }

    def __init__(self, settings_dict=None):
        #anything but a dict gives the defaults
        if type(settings_dict) != dict:
            settings_dict = {}

        default_settings = Settings.default()

        for key, attribute in Settings._ATTRIBUTES.items():
            if key in settings_dict:
                setattr(self, attribute, settings_dict[key])
            else:
                setattr(self, attribute, getattr(default_settings, attribute))

    @classmethod
    def default(cls):
        settings = cls.__new__(cls)

        #charset used to decode the query string into the GET QueryDict
        settings.DEFAULT_CHARSET = 'utf-8'

        # Maximum CONTENT_LENGTH, in bytes, that will be read from stdin before
        # a SuspiciousOperation (RequestDataTooBig) is raised.
        #None disables the check; the hosting server usually enforces its own limit
        settings.DATA_UPLOAD_MAX_MEMORY_SIZE = None

        # Maximum number of GET parameters that will be read before a
        # SuspiciousOperation (TooManyFieldsSent) is raised.
        settings.DATA_UPLOAD_MAX_NUMBER_FIELDS = 4096

        #copy the CGI meta-variables into X-CGI-* request headers
        settings.CGI_HEADERS = True

        #version used when SERVER_PROTOCOL isn't set
        settings.DEFAULT_PROTOCOL = Version.HTTP_11

        return settings
