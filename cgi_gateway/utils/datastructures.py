import copy

from cgi_gateway.utils.encoding import check_header_name, check_header_value

class MultiValueDictKeyError(KeyError):
    pass

class MultiValueDict(dict):
    """
    A subclass of dictionary customized to handle multiple values for the
    same key.

    >>> d = MultiValueDict({'name': ['Adrian', 'Simon'], 'position': ['Developer']})
    >>> d['name']
    'Simon'
    >>> d.getlist('name')
    ['Adrian', 'Simon']
    >>> d.getlist('doesnotexist')
    []
    >>> d.get('lastname', 'nonexistent')
    'nonexistent'

    Mutation goes through _assert_mutable() so that subclasses can be frozen
    once built.
    """
    _mutable = True

    def __init__(self, key_to_list_mapping=()):
        super(MultiValueDict, self).__init__(key_to_list_mapping)

    def __repr__(self):
        return "<%s: %s>" % (self.__class__.__name__, super(MultiValueDict, self).__repr__())

    def _assert_mutable(self):
        if not self._mutable:
            raise AttributeError("This %s instance is immutable" % self.__class__.__name__)

    def _pick(self, list_):
        #the value returned by self[key] out of a key's list
        return list_[-1]

    def __getitem__(self, key):
        """
        Return the data value for this key, or [] if it's an empty list;
        raise KeyError if not found.
        """
        try:
            list_ = super(MultiValueDict, self).__getitem__(key)
        except KeyError:
            raise MultiValueDictKeyError(key)
        try:
            return self._pick(list_)
        except IndexError:
            return []

    def __setitem__(self, key, value):
        self._assert_mutable()
        super(MultiValueDict, self).__setitem__(key, [value])

    def __delitem__(self, key):
        self._assert_mutable()
        super(MultiValueDict, self).__delitem__(key)

    def __copy__(self):
        result = self.__class__()
        for key, list_ in self.lists():
            dict.__setitem__(result, key, list_[:])
        return result

    def __deepcopy__(self, memo):
        result = self.__class__()
        memo[id(self)] = result
        for key, list_ in dict.items(self):
            dict.__setitem__(result, copy.deepcopy(key, memo),
                            copy.deepcopy(list_, memo))
        return result

    def get(self, key, default=None):
        """
        Return the data value for the passed key. If key doesn't exist
        or value is an empty list, return `default`.
        """
        try:
            val = self[key]
        except KeyError:
            return default
        if val == []:
            return default
        return val

    def _getlist(self, key, default=None, force_list=False):
        """
        Return a list of values for the key.

        Used internally to manipulate values list. If force_list is True,
        return a new copy of values.
        """
        try:
            values = super(MultiValueDict, self).__getitem__(key)
        except KeyError:
            if default is None:
                return []
            return default
        else:
            if force_list:
                values = list(values) if values is not None else None
            return values

    def getlist(self, key, default=None):
        """
        Return the list of values for the key. If key doesn't exist, return a
        default value.
        """
        return self._getlist(key, default, force_list=True)

    def setlist(self, key, list_):
        self._assert_mutable()
        super(MultiValueDict, self).__setitem__(key, list(list_))

    def setlistdefault(self, key, default_list=None):
        """
        Set a default list for a key if key not in the dict
        """
        self._assert_mutable()
        if key not in self:
            if default_list is None:
                default_list = []
            self.setlist(key, default_list)
            # Do not return default_list here because setlist() may store
            # another value. Look it up.
        return self._getlist(key)

    def appendlist(self, key, value):
        """Append an item to the internal list associated with key."""
        self.setlistdefault(key).append(value)

    def pop(self, key, *args):
        self._assert_mutable()
        return super(MultiValueDict, self).pop(key, *args)

    def clear(self):
        self._assert_mutable()
        super(MultiValueDict, self).clear()

    def items(self):
        """
        Yield (key, value) pairs, where value is self[key].
        """
        for key in self:
            yield key, self[key]

    def lists(self):
        """Yield (key, list) pairs."""
        return iter(list(super(MultiValueDict, self).items()))

    def values(self):
        """Yield self[key] for every key."""
        for key in self:
            yield self[key]

    def copy(self):
        """Return a shallow, mutable copy of this object."""
        return copy.copy(self)

    def dict(self):
        """Return current object as a dict with singular values."""
        return {key: self[key] for key in self}

class HeaderDict(MultiValueDict):
    """
    Multi-valued mapping of HTTP header fields.

    Names are case-insensitive and stored lower-cased, in the order they
    were first added. Every name and value is validated on the way in:
    InvalidHeaderName and InvalidHeaderValue are raised for anything that
    can't be written on a header line. self[name] returns the first value,
    getlist(name) returns all of them.

    >>> h = HeaderDict([('Accept', 'text/html'), ('accept', 'image/png')])
    >>> h['ACCEPT']
    'text/html'
    >>> h.getlist('Accept')
    ['text/html', 'image/png']
    """

    def __init__(self, headers=(), mutable=True):
        super(HeaderDict, self).__init__()
        if hasattr(headers, 'keys'):
            headers = HeaderDict._pairs(headers)
        for name, value in headers:
            self.appendlist(name, value)
        self._mutable = mutable

    @staticmethod
    def _pairs(mapping):
        if isinstance(mapping, MultiValueDict):
            for key, list_ in mapping.lists():
                for value in list_:
                    yield key, value
        else:
            for key in mapping:
                yield key, mapping[key]

    @staticmethod
    def _key(name):
        return check_header_name(name).lower()

    def _pick(self, list_):
        return list_[0]

    def __contains__(self, name):
        return isinstance(name, str) and super(HeaderDict, self).__contains__(name.lower())

    def __getitem__(self, name):
        if not isinstance(name, str):
            raise MultiValueDictKeyError(name)
        return super(HeaderDict, self).__getitem__(name.lower())

    def __setitem__(self, name, value):
        self._assert_mutable()
        dict.__setitem__(self, self._key(name), [check_header_value(value)])

    def __delitem__(self, name):
        super(HeaderDict, self).__delitem__(self._key(name))

    def __copy__(self):
        return HeaderDict(self)

    def __deepcopy__(self, memo):
        result = HeaderDict(self)
        memo[id(self)] = result
        return result

    def _getlist(self, name, default=None, force_list=False):
        if not isinstance(name, str):
            return [] if default is None else default
        return super(HeaderDict, self)._getlist(name.lower(), default, force_list)

    def setlist(self, name, list_):
        super(HeaderDict, self).setlist(
            self._key(name), [check_header_value(value) for value in list_]
        )

    def setlistdefault(self, name, default_list=None):
        return super(HeaderDict, self).setlistdefault(self._key(name), default_list)

    def appendlist(self, name, value):
        value = check_header_value(value)
        self.setlistdefault(name).append(value)

    def pop(self, name, *args):
        return super(HeaderDict, self).pop(name.lower(), *args)

    def allitems(self):
        """Yield a (name, value) pair for every value of every header."""
        return HeaderDict._pairs(self)

class Extensions(dict):
    """
    Side-channel values attached to a request, keyed by their type.

    >>> ext = Extensions()
    >>> ext.insert(Decimal('1.5'))
    >>> ext.get(Decimal)
    Decimal('1.5')
    """

    def insert(self, value):
        """
        Store `value` under its type and return the value it replaced, if any.
        """
        previous = self.get(type(value))
        self[type(value)] = value
        return previous
