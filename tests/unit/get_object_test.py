# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage,
# (C) 2015,2016 MinIO, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from datetime import datetime, timezone
from unittest import TestCase, mock

from megas4 import S4
from megas4.datatypes import GetObjectResult, NotModified, ObjectStat
from megas4.error import S3Error
from megas4.helpers import _DEFAULT_USER_AGENT

from .s4_mocks import MockConnection, MockResponse, generate_error

OBJECT_HEADERS = {
    "Content-Length": "11",
    "Content-Type": "text/plain",
    "ETag": '"5eb63bbbe01eeed093cb22bb8f5acdc3"',
    "Last-Modified": "Mon, 02 Mar 2015 07:28:00 GMT",
    "x-amz-meta-owner": "alice",
}


class GetObjectTest(TestCase):
    def test_object_is_string(self):
        client = S4("localhost:9000", "minio", "minio123")
        with self.assertRaises(TypeError):
            client.get_object('hello', 1234)

    def test_object_is_not_empty_string(self):
        client = S4("localhost:9000", "minio", "minio123")
        with self.assertRaises(ValueError):
            client.get_object('hello', ' \t \n ')

    @mock.patch('urllib3.PoolManager')
    def test_get_object_throws_fail(self, mock_connection):
        error_xml = generate_error('NoSuchKey', 'message', 'request_id',
                                   'host_id', '/hello/key', 'hello', 'key')
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse('GET',
                         'https://localhost:9000/hello/key',
                         {'User-Agent': _DEFAULT_USER_AGENT},
                         404,
                         response_headers={"Content-Type": "application/xml"},
                         content=error_xml)
        )
        client = S4("localhost:9000", "minio", "minio123")
        with self.assertRaises(S3Error) as ctx:
            client.get_object('hello', 'key')
        self.assertEqual(ctx.exception.code, "NoSuchKey")
        self.assertEqual(ctx.exception.object_name, "key")

    @mock.patch('urllib3.PoolManager')
    def test_get_object_works(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse('GET',
                         'https://localhost:9000/hello/folder/key.txt',
                         {'User-Agent': _DEFAULT_USER_AGENT},
                         200,
                         response_headers=OBJECT_HEADERS,
                         content=b'hello world')
        )
        client = S4("localhost:9000", "minio", "minio123")
        result = client.get_object('hello', 'folder/key.txt')
        self.assertIsInstance(result, GetObjectResult)
        self.assertEqual(result.data, b'hello world')
        self.assertEqual(result.stat.size, 11)
        self.assertEqual(result.stat.etag, "5eb63bbbe01eeed093cb22bb8f5acdc3")
        self.assertEqual(result.stat.content_type, "text/plain")
        self.assertEqual(result.stat.metadata, {"owner": "alice"})
        self.assertEqual(
            result.stat.last_modified,
            datetime(2015, 3, 2, 7, 28, tzinfo=timezone.utc),
        )

    @mock.patch('urllib3.PoolManager')
    def test_get_partial_object(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse('GET',
                         'https://localhost:9000/hello/key?versionId=v1',
                         {'Range': 'bytes=2-4'},
                         206,
                         content=b'llo')
        )
        client = S4("localhost:9000", "minio", "minio123")
        result = client.get_object(
            'hello', 'key', offset=2, length=3, version_id='v1',
        )
        self.assertEqual(result.data, b'llo')

    @mock.patch('urllib3.PoolManager')
    def test_get_object_not_modified(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse('GET',
                         'https://localhost:9000/hello/key',
                         {'If-None-Match': 'abc',
                          'If-Modified-Since': 'Mon, 02 Mar 2015 07:28:00 GMT'},
                         304,
                         response_headers={"ETag": '"abc"'})
        )
        client = S4("localhost:9000", "minio", "minio123")
        result = client.get_object(
            'hello', 'key', not_match_etag='abc',
            modified_since=datetime(2015, 3, 2, 7, 28, tzinfo=timezone.utc),
        )
        self.assertEqual(result, NotModified('hello', 'key', 'abc'))

    @mock.patch('urllib3.PoolManager')
    def test_get_object_precondition_failed(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse('GET', 'https://localhost:9000/hello/key',
                         {'If-Match': 'abc'}, 412)
        )
        client = S4("localhost:9000", "minio", "minio123")
        with self.assertRaises(S3Error) as ctx:
            client.get_object('hello', 'key', match_etag='abc')
        self.assertEqual(ctx.exception.code, "PreconditionFailed")
        self.assertEqual(ctx.exception.status_code, 412)


class StatObjectTest(TestCase):
    @mock.patch('urllib3.PoolManager')
    def test_stat_object_works(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse('HEAD', 'https://localhost:9000/hello/world',
                         {'User-Agent': _DEFAULT_USER_AGENT}, 200,
                         response_headers=OBJECT_HEADERS)
        )
        client = S4("localhost:9000", "minio", "minio123")
        stat = client.stat_object('hello', 'world')
        self.assertIsInstance(stat, ObjectStat)
        self.assertEqual(stat.bucket_name, 'hello')
        self.assertEqual(stat.object_name, 'world')
        self.assertEqual(stat.size, 11)

    @mock.patch('urllib3.PoolManager')
    def test_stat_object_not_found(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse('HEAD', 'https://localhost:9000/hello/world', {},
                         404)
        )
        client = S4("localhost:9000", "minio", "minio123")
        with self.assertRaises(S3Error) as ctx:
            client.stat_object('hello', 'world', item_index=7)
        self.assertEqual(ctx.exception.code, "NoSuchKey")
        self.assertEqual(ctx.exception.message, "HTTP 404")
        self.assertEqual(ctx.exception.item_index, 7)
