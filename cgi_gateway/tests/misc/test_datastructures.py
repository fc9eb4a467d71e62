import copy
import unittest

from cgi_gateway.exceptions.exceptions import InvalidHeaderName, InvalidHeaderValue
from cgi_gateway.utils.datastructures import Extensions, HeaderDict, MultiValueDict, MultiValueDictKeyError

class MultiValueDictTests(unittest.TestCase):

    def setUp(self):
        self.multi_value_dict = MultiValueDict({'name': ['Adrian', 'Simon'], 'position': ['Developer']})

    def test_get(self):
        self.assertEqual('Simon', self.multi_value_dict['name'])
        self.assertEqual('Simon', self.multi_value_dict.get('name'))
        self.assertEqual('position', self.multi_value_dict.get('lastname', 'position'))
        self.assertListEqual(['Adrian', 'Simon'], self.multi_value_dict.getlist('name'))
        self.assertListEqual([], self.multi_value_dict.getlist('doesnotexist'))
        with self.assertRaises(MultiValueDictKeyError):
            self.multi_value_dict['doesnotexist']

    def test_setlist_and_appendlist(self):
        self.multi_value_dict.setlist('name', ['Holovaty', 'Willison'])
        self.multi_value_dict.appendlist('name', 'Kaplan-Moss')
        self.assertListEqual(['Holovaty', 'Willison', 'Kaplan-Moss'], self.multi_value_dict.getlist('name'))
        self.multi_value_dict.appendlist('new_key', 'value')
        self.assertEqual('value', self.multi_value_dict['new_key'])
        self.assertDictEqual({'name': 'Kaplan-Moss', 'position': 'Developer', 'new_key': 'value'},
                             self.multi_value_dict.dict())

    def test_copy(self):
        copied = copy.copy(self.multi_value_dict)
        copied.appendlist('name', 'Jacob')
        self.assertListEqual(['Adrian', 'Simon'], self.multi_value_dict.getlist('name'))

        deep_copied = copy.deepcopy(self.multi_value_dict)
        self.assertListEqual(['Adrian', 'Simon'], deep_copied.getlist('name'))

class HeaderDictTests(unittest.TestCase):

    def test_case_insensitive(self):
        headers = HeaderDict([('Accept', 'text/html'), ('ACCEPT', 'image/png'), ('Host', 'example.com')])
        self.assertEqual('text/html', headers['accept'])
        self.assertListEqual(['text/html', 'image/png'], headers.getlist('Accept'))
        self.assertIn('HOST', headers)
        self.assertNotIn('Content-Type', headers)
        self.assertNotIn(42, headers)
        self.assertListEqual(['accept', 'host'], list(headers))
        self.assertListEqual(
            [('accept', 'text/html'), ('accept', 'image/png'), ('host', 'example.com')],
            list(headers.allitems())
        )

    def test_from_mapping(self):
        headers = HeaderDict({'Content-Length': 3, 'Content-Type': 'text/plain'})
        self.assertEqual('3', headers['content-length'])
        self.assertEqual('text/plain', headers.get('CONTENT-TYPE'))
        self.assertIsNone(headers.get('X-Missing'))

    def test_immutable(self):
        headers = HeaderDict([('Host', 'example.com')], mutable=False)
        with self.assertRaises(AttributeError):
            headers['Host'] = 'other.com'
        with self.assertRaises(AttributeError):
            headers.appendlist('Accept', '*/*')
        with self.assertRaises(AttributeError):
            del headers['Host']

        mutable_copy = headers.copy()
        mutable_copy['Host'] = 'other.com'
        self.assertEqual('other.com', mutable_copy['host'])
        self.assertEqual('example.com', headers['host'])

    def test_validation(self):
        headers = HeaderDict()
        with self.assertRaises(InvalidHeaderName):
            headers['Bad:Name'] = 'value'
        with self.assertRaises(InvalidHeaderName):
            headers[''] = 'value'
        with self.assertRaises(InvalidHeaderValue):
            headers.appendlist('X-Header', 'line\nbreak')
        with self.assertRaises(InvalidHeaderValue):
            headers.appendlist('X-Header', 'trailing\n')
        with self.assertRaises(InvalidHeaderValue):
            headers.setlist('X-Header', ['ok', '\x7f'])
        self.assertListEqual([], list(headers))

        headers['X-Tab'] = 'a\tb'
        self.assertEqual('a\tb', headers['x-tab'])

class ExtensionsTests(unittest.TestCase):

    def test_insert(self):
        class Marker(str):
            pass

        extensions = Extensions()
        self.assertIsNone(extensions.insert(Marker('first')))
        self.assertEqual('first', extensions.insert(Marker('second')))
        self.assertEqual('second', extensions.get(Marker))
        self.assertIsNone(extensions.get(int))

if __name__ == '__main__':
    unittest.main()
