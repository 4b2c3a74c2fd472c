"""
Unit tests for the response envelope: memoized decoding, pagination and
classification of failed responses.
"""

import pickle
import threading
import unittest
from concurrent.futures import Future

from jobserv_api.client.response import APIResponse, create_response
from jobserv_api.exceptions import DecodeError, ErrorKind, HTTPError, STATUS_KINDS, classify_status
from .fakes import FakeResponse, json_response


class TestEnvelopeBasics(unittest.TestCase):

    def test_ok_range(self):
        for status, expected in [(199, False), (200, True), (204, True), (299, True), (300, False), (404, False)]:
            with self.subTest(status=status):
                self.assertEqual(APIResponse(FakeResponse(status=status)).ok, expected)

    def test_status_code_attribute(self):
        class RequestsLike:
            status_code = 201
            headers = {'Content-Type': 'text/plain'}
            content = b'created'
            reason = 'Created'

        response = APIResponse(RequestsLike())
        self.assertEqual(response.status, 201)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.reason, 'Created')
        self.assertEqual(response.text(), 'created')

    def test_headers_are_case_insensitive(self):
        response = APIResponse(FakeResponse(headers={'content-type': 'application/json', 'Content-Length': '2'}))
        self.assertEqual(response.content_type, 'application/json')
        self.assertEqual(response.headers['CONTENT-TYPE'], 'application/json')
        self.assertEqual(response.length, '2')
        self.assertIsNone(response.content_encoding)

    def test_content_type_predicates(self):
        cases = [
            ('application/json', True, True),
            ('Application/JSON; charset=utf-8', True, True),
            ('text/html', False, True),
            ('application/octet-stream', False, False),
            (None, False, False),
        ]
        for content_type, is_json, is_text in cases:
            with self.subTest(content_type=content_type):
                headers = {'Content-Type': content_type} if content_type else {}
                response = APIResponse(FakeResponse(headers=headers))
                self.assertEqual(response.is_json(), is_json)
                self.assertEqual(response.is_text(), is_text)


class TestMemoizedDecoding(unittest.TestCase):

    def test_buffer_reads_once(self):
        raw = FakeResponse(body=b'\x00\x01payload')
        response = APIResponse(raw)

        first = response.buffer()
        second = response.buffer()

        self.assertEqual(first, b'\x00\x01payload')
        self.assertIs(first, second)
        self.assertEqual(raw.body.reads, 1)
        self.assertEqual(raw.closed, 1)

    def test_text_and_json_are_cached(self):
        raw = json_response({'name': 'gw-1'})
        response = APIResponse(raw)

        self.assertIs(response.json(), response.json())
        self.assertIs(response.text(), response.text())
        self.assertEqual(response.json(), {'name': 'gw-1'})
        self.assertEqual(raw.body.reads, 1)

    def test_text_for_text_content(self):
        response = APIResponse(FakeResponse(headers={'Content-Type': 'text/plain; charset=latin-1'}, body='caf\xe9'.encode('latin-1')))
        self.assertEqual(response.text(), 'caf\xe9')
        self.assertIsNone(response.json())

    def test_wrong_content_type_yields_none(self):
        response = APIResponse(FakeResponse(headers={'Content-Type': 'application/octet-stream'}, body=b'{"a": 1}'))
        self.assertIsNone(response.json())
        self.assertIsNone(response.text())
        self.assertEqual(response.buffer(), b'{"a": 1}')

    def test_invalid_json_is_an_error(self):
        raw = FakeResponse(headers={'Content-Type': 'application/json'}, body=b'{not json')
        response = APIResponse(raw)

        with self.assertRaises(DecodeError) as first:
            response.json()
        # The failure is remembered, not retried against a drained stream
        with self.assertRaises(DecodeError) as second:
            response.json()

        self.assertIs(first.exception, second.exception)
        self.assertEqual(first.exception.content_type, 'application/json')
        self.assertEqual(raw.body.reads, 1)

    def test_empty_json_body_is_an_error(self):
        response = APIResponse(FakeResponse(headers={'Content-Type': 'application/json'}, body=b''))
        with self.assertRaises(DecodeError):
            response.json()

    def test_iterable_body(self):
        class Chunked:
            status = 200
            headers = {'Content-Type': 'text/plain'}
            body = iter([b'one ', 'two'])

        self.assertEqual(APIResponse(Chunked()).text(), 'one two')

    def test_concurrent_reads_drain_once(self):
        raw = json_response({'total': 3}, delay=0.05)
        response = APIResponse(raw)
        barrier = threading.Barrier(8)
        results = []
        results_lock = threading.Lock()

        def reader(index):
            barrier.wait()
            value = response.json() if index % 2 else response.text()
            with results_lock:
                results.append((index % 2, value))

        threads = [threading.Thread(target=reader, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(raw.body.reads, 1)
        json_values = [value for kind, value in results if kind == 1]
        text_values = [value for kind, value in results if kind == 0]
        self.assertEqual(len(json_values), 4)
        self.assertTrue(all(value is json_values[0] for value in json_values))
        self.assertTrue(all(value is text_values[0] for value in text_values))

    def test_concurrent_decode_failure_reaches_every_caller(self):
        response = APIResponse(FakeResponse(headers={'Content-Type': 'application/json'}, body=b'[1,', delay=0.05))
        barrier = threading.Barrier(4)
        errors = []

        def reader():
            barrier.wait()
            try:
                response.json()
            except DecodeError as e:
                errors.append(e)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(errors), 4)


class TestPagination(unittest.TestCase):

    PAGE = {'page': 2, 'pages': 5, 'total': 50, 'limit': 10}

    def test_flat_payload(self):
        response = APIResponse(json_response(self.PAGE))
        self.assertEqual(response.pagination(), {'current': 2, 'next': 3, 'pages': 5, 'total': 50, 'limit': 10})

    def test_nested_payload_matches_flat(self):
        flat = APIResponse(json_response(self.PAGE)).pagination()
        nested = APIResponse(json_response({'data': self.PAGE})).pagination()
        self.assertEqual(nested, flat)

    def test_last_page_has_no_next(self):
        response = APIResponse(json_response({'page': 5, 'pages': 5, 'total': 50, 'limit': 10}))
        self.assertIsNone(response.pagination()['next'])

    def test_null_data_falls_back_to_payload(self):
        response = APIResponse(json_response({'data': None, **self.PAGE}))
        self.assertEqual(response.pagination()['current'], 2)

    def test_no_json_payload(self):
        response = APIResponse(FakeResponse(status=204))
        self.assertTrue(response.ok)
        self.assertIsNone(response.json())
        self.assertEqual(response.pagination(), {})

    def test_missing_fields(self):
        response = APIResponse(json_response({'devices': []}))
        self.assertEqual(response.pagination(),
                         {'total': None, 'limit': None, 'pages': None, 'current': None, 'next': None})


class TestCreateResponse(unittest.TestCase):

    def test_success_returns_envelope(self):
        response = create_response(json_response({'a': 1}, status=201))
        self.assertIsInstance(response, APIResponse)
        self.assertEqual(response.json(), {'a': 1})

    def test_resolves_futures(self):
        pending = Future()
        pending.set_result(json_response({'a': 1}))
        self.assertEqual(create_response(pending).json(), {'a': 1})

    def test_not_found_is_classified(self):
        raw = json_response({'message': 'No such device'}, status=404, reason='Not Found')

        with self.assertRaises(HTTPError) as ctx:
            create_response(raw)

        error = ctx.exception
        self.assertEqual(error.status_code, 404)
        self.assertEqual(error.kind, ErrorKind.NOT_FOUND)
        self.assertEqual(error.kind, 'not_found')
        self.assertEqual(str(error), 'Not Found')
        self.assertEqual(error.json, {'message': 'No such device'})
        self.assertEqual(error.text, '{"message": "No such device"}')
        self.assertEqual(raw.body.reads, 1)

    def test_unmapped_status_is_unknown(self):
        with self.assertRaises(HTTPError) as ctx:
            create_response(FakeResponse(status=418))
        self.assertEqual(ctx.exception.status_code, 418)
        self.assertEqual(ctx.exception.kind, ErrorKind.UNKNOWN)
        self.assertEqual(str(ctx.exception), 'HTTP Error')

    def test_text_error_body(self):
        with self.assertRaises(HTTPError) as ctx:
            create_response(FakeResponse(status=503, headers={'Content-Type': 'text/html'}, body='<h1>down</h1>'))
        self.assertEqual(ctx.exception.kind, ErrorKind.SERVICE_UNAVAILABLE)
        self.assertEqual(ctx.exception.text, '<h1>down</h1>')
        self.assertIsNone(ctx.exception.json)

    def test_undecodable_error_body_is_best_effort(self):
        with self.assertRaises(HTTPError) as ctx:
            create_response(FakeResponse(status=502, headers={'Content-Type': 'application/json'}, body='<html>'))
        self.assertEqual(ctx.exception.text, '<html>')
        self.assertIsNone(ctx.exception.json)

    def test_binary_error_body(self):
        raw = FakeResponse(status=500, body=b'\x00\x01')
        with self.assertRaises(HTTPError) as ctx:
            create_response(raw)
        self.assertIsNone(ctx.exception.text)
        self.assertIsNone(ctx.exception.json)
        # Drained and closed even though nothing could decode it
        self.assertEqual(raw.body.reads, 1)
        self.assertEqual(raw.closed, 1)

    def test_success_body_is_not_read_until_asked(self):
        raw = json_response({'a': 1})
        response = create_response(raw)
        self.assertEqual(raw.body.reads, 0)
        self.assertEqual(raw.closed, 0)
        response.json()
        self.assertEqual(raw.closed, 1)


class TestHTTPError(unittest.TestCase):

    def test_status_table(self):
        expected = {
            400: 'bad_request', 401: 'unauthorized', 403: 'forbidden', 404: 'not_found',
            405: 'not_allowed', 406: 'not_acceptable', 408: 'request_timeout', 410: 'gone',
            500: 'server_error', 501: 'not_implemented', 503: 'service_unavailable', 504: 'timeout',
        }
        self.assertEqual({status: kind.value for status, kind in STATUS_KINDS.items()}, expected)
        for status in [300, 402, 409, 418, 429, 502, 599]:
            with self.subTest(status=status):
                self.assertEqual(classify_status(status), ErrorKind.UNKNOWN)

    def test_immutable(self):
        error = HTTPError('Forbidden', status_code=403)
        with self.assertRaises(AttributeError):
            error.status_code = 200
        with self.assertRaises(AttributeError):
            del error.kind
        self.assertEqual(error.kind, ErrorKind.FORBIDDEN)

    def test_can_be_raised_and_chained(self):
        try:
            try:
                raise KeyError('inner')
            except KeyError as inner:
                raise HTTPError('Gone', status_code=410) from inner
        except HTTPError as e:
            self.assertIsInstance(e.__cause__, KeyError)
            self.assertEqual(e.kind, ErrorKind.GONE)

    def test_guidance(self):
        error = HTTPError('Unauthorized', status_code=401)
        self.assertIn('401', error.guidance)
        self.assertIn('credentials', error.guidance)

    def test_pickle(self):
        error = pickle.loads(pickle.dumps(HTTPError('Bad', status_code=400, text='t', json={'a': 1})))
        self.assertEqual((error.status_code, error.kind, error.text, error.json), (400, ErrorKind.BAD_REQUEST, 't', {'a': 1}))


if __name__ == '__main__':
    unittest.main()
