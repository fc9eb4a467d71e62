from io import BytesIO
import unittest

from cgi_gateway.exceptions.exceptions import MissingMetaVariable, UnsupportedProtocol
from cgi_gateway.http.dispatch import catch_errors, dispatch, err_to_500
from cgi_gateway.http.request import PathInfo, UnreadableBodyError
from cgi_gateway.http.shortcuts import empty_response, html_response, text_response
from cgi_gateway.tests import testutils

class DispatchTests(unittest.TestCase):

    def setUp(self):
        self.stdout = BytesIO()
        self.calls = []

    def echo(self, request):
        self.calls.append(request)
        return text_response(200, request.body.decode('utf-8'))

    def test_dispatch(self):
        environ = testutils.cgi_environ(
            REQUEST_METHOD='POST',
            PATH_INFO='/echo',
            CONTENT_LENGTH='5',
        )
        output = dispatch(self.echo, environ, BytesIO(b'hello, is it me'), self.stdout)

        expected = b"Status: 200 OK\ncontent-length: 5\ncontent-type: text/plain; charset=utf-8\n\nhello"
        self.assertEqual(expected, output)
        self.assertEqual(expected, self.stdout.getvalue())

        self.assertEqual(1, len(self.calls))
        request = self.calls[0]
        self.assertEqual('POST', request.method)
        self.assertEqual('/cgi-bin/script/echo', request.path)
        self.assertEqual(PathInfo('/echo'), request.extensions.get(PathInfo))

    def test_handler_sees_headers(self):
        def handler(request):
            return html_response(200, request.headers['User-Agent'])

        environ = testutils.cgi_environ(HTTP_USER_AGENT='MyBrowser/1.0')
        output = dispatch(handler, environ, BytesIO(), self.stdout)
        self.assertTrue(output.endswith(b'\n\nMyBrowser/1.0'))

    def test_not_invoked_as_cgi(self):
        environ = testutils.cgi_environ(REQUEST_METHOD=None)
        with self.assertRaises(MissingMetaVariable):
            dispatch(self.echo, environ, BytesIO(), self.stdout)
        self.assertEqual([], self.calls)
        self.assertEqual(b'', self.stdout.getvalue())

    def test_unsupported_protocol(self):
        environ = testutils.cgi_environ(SERVER_PROTOCOL='SPDY/3')
        with self.assertRaises(UnsupportedProtocol):
            dispatch(self.echo, environ, BytesIO(), self.stdout)
        self.assertEqual([], self.calls)

    def test_short_body(self):
        environ = testutils.cgi_environ(REQUEST_METHOD='POST', CONTENT_LENGTH='100')
        with self.assertRaises(UnreadableBodyError):
            dispatch(self.echo, environ, BytesIO(b'too short'), self.stdout)
        self.assertEqual(b'', self.stdout.getvalue())

    def test_error_handler(self):
        environ = testutils.cgi_environ(REQUEST_METHOD=None)
        errors = []

        def error_page(error):
            errors.append(error)
            return text_response(400, "Bad Request")

        with self.assertLogs('cgi_gateway.http.dispatch', level='ERROR'):
            output = dispatch(self.echo, environ, BytesIO(), self.stdout, error_handler=error_page)

        self.assertEqual(1, len(errors))
        self.assertIsInstance(errors[0], MissingMetaVariable)
        self.assertEqual([], self.calls)
        self.assertTrue(output.startswith(b'Status: 400 Bad Request\n'))
        self.assertEqual(output, self.stdout.getvalue())

    def test_handler_must_return_response(self):
        with self.assertRaises(TypeError):
            dispatch(lambda request: "Hello", testutils.cgi_environ(), BytesIO(), self.stdout)
        self.assertEqual(b'', self.stdout.getvalue())

    def test_uncaught_handler_error_propagates(self):
        def failing(request):
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            dispatch(failing, testutils.cgi_environ(), BytesIO(), self.stdout)

class CatchErrorsTests(unittest.TestCase):

    def test_failing_handler_becomes_500(self):
        @catch_errors
        def failing(request):
            raise IOError("Couldn't open greeting.txt")

        stdout = BytesIO()
        with self.assertLogs('cgi_gateway.http.dispatch', level='ERROR') as logs:
            output = dispatch(failing, testutils.cgi_environ(), BytesIO(), stdout)

        self.assertEqual(b"Status: 500 Internal Server Error\n\n", output)
        self.assertEqual(output, stdout.getvalue())
        self.assertIn("Couldn't open greeting.txt", logs.output[0])

    def test_successful_handler_passes_through(self):
        def greeting(request):
            return text_response(200, "Hello World")

        wrapped = catch_errors(greeting)
        self.assertEqual(greeting.__name__, wrapped.__name__)
        stdout = BytesIO()
        output = dispatch(wrapped, testutils.cgi_environ(), BytesIO(), stdout)
        self.assertTrue(output.startswith(b"Status: 200 OK\n"))
        self.assertTrue(output.endswith(b"\n\nHello World"))

    def test_err_to_500(self):
        response = empty_response(204)
        self.assertIs(response, err_to_500(response))

        with self.assertLogs('cgi_gateway.http.dispatch', level='ERROR') as logs:
            response = err_to_500(ValueError("no greeting"))
        self.assertEqual(500, response.status_code)
        self.assertEqual(b'', response.body)
        self.assertEqual([], list(response.headers))
        self.assertIn("no greeting", logs.output[0])

if __name__ == '__main__':
    unittest.main()
