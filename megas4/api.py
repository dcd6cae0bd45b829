# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage, (C)
# 2015, 2016, 2017 MinIO, Inc.
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

# pylint: disable=too-many-arguments
# pylint: disable=too-many-lines
# pylint: disable=too-many-public-methods
# pylint: disable=too-many-positional-arguments

"""
Mega S4 object storage client to perform bucket and object operations.
"""

from __future__ import absolute_import, annotations

import json
import os
import re
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any, Optional, TextIO, Union
from urllib.parse import urlunsplit

import certifi
import urllib3
from urllib3._collections import HTTPHeaderDict

try:
    from urllib3.response import BaseHTTPResponse  # type: ignore[attr-defined]
except ImportError:
    from urllib3.response import HTTPResponse as BaseHTTPResponse

from urllib3.util import Timeout

from . import time
from .credentials import Provider, StaticProvider
from .datatypes import (AccessControlPolicy, CompleteMultipartUploadResult,
                        GetObjectResult, ListAllMyBucketsResult,
                        ListMultipartUploadsResult, ListObjectsResult,
                        ListPartsResult, NotModified, ObjectStat,
                        ObjectWriteResult, Part, RemoveObjectResult)
from .deleteobjects import DeleteObject, DeleteRequest, DeleteResult
from .error import S3Error, TransportError
from .helpers import (_DEFAULT_USER_AGENT, BaseURL, DictType,
                      check_bucket_name, check_expiry, check_object_name,
                      encode_copy_source, get_s3_endpoint, headers_to_strings,
                      md5sum_hash, safe_str)
from .request import Request, build_s3_request, check_response
from .signer import presign_v4
from .time import from_iso8601utc, to_http_header
from .xml import build_xml, findtext, findvalue, parse_xml, unmarshal

MAX_DELETE_OBJECTS = 1000
MAX_PART_NUMBER = 10000
_METADATA_DIRECTIVES = ("COPY", "REPLACE")
_COPY_SOURCE_RANGE_REGEX = re.compile(r"^bytes=\d+-\d+$")


class S4:
    """
    Mega S4 client to perform bucket and object operations.

    Every request is signed with AWS Signature Version 4 for service ``s3``
    and sent through a ``urllib3.PoolManager``. Operations taking an
    ``item_index`` keyword attach it to the raised :class:`S3Error` so that
    callers processing a batch can correlate failures.
    """
    _base_url: BaseURL
    _user_agent: str
    _trace_stream: Optional[TextIO]
    _provider: Provider
    _http: urllib3.PoolManager

    def __init__(
            self,
            endpoint: Optional[str] = None,
            access_key: Optional[str] = None,
            secret_key: Optional[str] = None,
            region: Optional[str] = None,
            secure: bool = True,
            force_path_style: bool = True,
            http_client: Optional[urllib3.PoolManager] = None,
            credentials: Optional[Provider] = None,
            cert_check: bool = True,
    ):
        """
        Initializes a new S4 client object.

        Args:
            endpoint (Optional[str], default=None):
                Endpoint of S4 service, with or without scheme. Defaults to
                the custom endpoint of the credentials, else to the S3
                endpoint of the region.

            access_key (Optional[str], default=None):
                Access key of your account.

            secret_key (Optional[str], default=None):
                Secret key of your account.

            region (Optional[str], default=None):
                Region used for signing; defaults to ``eu-central-1``.

            secure (bool, default=True):
                Flag to indicate whether to use HTTPS for an endpoint
                without scheme.

            force_path_style (bool, default=True):
                Keep bucket name in the path instead of the host name. Used
                together with ``access_key``; a credentials provider carries
                its own flag.

            http_client (Optional[urllib3.PoolManager], default=None):
                Customized HTTP client, e.g. with a retry policy.

            credentials (Optional[Provider], default=None):
                Credentials provider of your account.

            cert_check (bool, default=True):
                Flag to enable/disable server certificate validation
                for HTTPS connections.

        Example:
            >>> from megas4 import S4
            >>>
            >>> client = S4(
            ...     access_key="ACCESS-KEY",
            ...     secret_key="SECRET-KEY",
            ...     region="eu-central-2",
            ... )
            >>>
            >>> # Create client with retrying HTTP client
            >>> import urllib3
            >>> client = S4(
            ...     access_key="ACCESS-KEY",
            ...     secret_key="SECRET-KEY",
            ...     http_client=urllib3.PoolManager(
            ...         retries=urllib3.Retry(
            ...             total=5,
            ...             backoff_factor=0.2,
            ...             status_forcelist=[500, 502, 503, 504],
            ...         ),
            ...     ),
            ... )
        """
        # Validate http client has correct base class.
        if http_client and not isinstance(http_client, urllib3.PoolManager):
            raise TypeError(
                "HTTP client should be urllib3.PoolManager like object, "
                f"got {type(http_client).__name__}",
            )

        if access_key:
            if not secret_key:
                raise ValueError("secret key must be provided with access key")
            credentials = StaticProvider(
                access_key,
                secret_key,
                region or "",
                endpoint,
                force_path_style,
            )
        if credentials is None:
            raise ValueError(
                "access key and secret key or credentials provider must be "
                "provided",
            )
        self._provider = credentials

        creds = credentials.retrieve()
        self._base_url = BaseURL(
            endpoint or creds.custom_endpoint or get_s3_endpoint(creds.region),
            secure,
            creds.force_path_style,
        )
        self._user_agent = _DEFAULT_USER_AGENT
        self._trace_stream = None

        # Load CA certificates from SSL_CERT_FILE file if set
        timeout = timedelta(minutes=5).seconds
        self._http = http_client or urllib3.PoolManager(
            timeout=Timeout(connect=timeout, read=timeout),
            maxsize=10,
            cert_reqs='CERT_REQUIRED' if cert_check else 'CERT_NONE',
            ca_certs=os.environ.get('SSL_CERT_FILE') or certifi.where(),
            retries=False,
        )

    def __del__(self):
        if hasattr(self, "_http"):  # Only required for unit test run
            self._http.clear()

    @staticmethod
    def _gen_read_headers(
            offset: int = 0,
            length: Optional[int] = None,
            match_etag: Optional[str] = None,
            not_match_etag: Optional[str] = None,
            modified_since: Optional[datetime] = None,
            unmodified_since: Optional[datetime] = None,
    ) -> HTTPHeaderDict:
        """Generates conditional headers for get/head object."""
        headers = HTTPHeaderDict()
        if offset or length:
            end = (offset + length - 1) if length else ""
            headers['Range'] = f"bytes={offset}-{end}"
        if match_etag:
            headers["if-match"] = match_etag
        if not_match_etag:
            headers["if-none-match"] = not_match_etag
        if modified_since:
            headers["if-modified-since"] = to_http_header(modified_since)
        if unmodified_since:
            headers["if-unmodified-since"] = to_http_header(unmodified_since)
        return headers

    def _trace_request(self, request: Request, no_body_trace: bool):
        """Write request to trace stream."""
        if not self._trace_stream:
            return
        url = urllib3.util.parse_url(request.url)
        query = ("?" + url.query) if url.query else ""
        self._trace_stream.write("---------START-HTTP---------\n")
        self._trace_stream.write(
            f"{request.method} {url.path or '/'}{query} HTTP/1.1\n",
        )
        self._trace_stream.write(
            headers_to_strings(request.headers, titled_key=True),
        )
        self._trace_stream.write("\n")
        if not no_body_trace and request.body is not None:
            self._trace_stream.write("\n")
            self._trace_stream.write(safe_str(request.body))
            self._trace_stream.write("\n")
        self._trace_stream.write("\n")

    def _trace_response(self, response: BaseHTTPResponse, no_body_trace: bool):
        """Write response to trace stream."""
        if not self._trace_stream:
            return
        self._trace_stream.write(f"HTTP/1.1 {response.status}\n")
        self._trace_stream.write(headers_to_strings(response.headers))
        self._trace_stream.write("\n")
        if response.data and not no_body_trace:
            self._trace_stream.write("\n")
            self._trace_stream.write(safe_str(response.data))
            self._trace_stream.write("\n")
        self._trace_stream.write("----------END-HTTP----------\n")

    def _url_open(
            self,
            method: str,
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
            body: Optional[bytes] = None,
            headers: Optional[HTTPHeaderDict] = None,
            query_params: Optional[DictType] = None,
            no_body_trace: bool = False,
            item_index: Optional[int] = None,
    ) -> BaseHTTPResponse:
        """Execute HTTP request."""
        headers = headers.copy() if headers else HTTPHeaderDict()
        headers["User-Agent"] = self._user_agent

        request = build_s3_request(
            self._base_url,
            self._provider.retrieve(),
            method,
            bucket_name=bucket_name,
            object_name=object_name,
            query_params=query_params,
            headers=headers,
            body=body,
        )
        self._trace_request(request, no_body_trace)

        try:
            response = self._http.urlopen(
                request.method,
                request.url,
                body=request.body,
                headers=request.headers,
                preload_content=True,
            )
        except urllib3.exceptions.HTTPError as exc:
            if self._trace_stream:
                self._trace_stream.write("----------END-HTTP----------\n")
            raise TransportError(method, request.url, str(exc)) from exc

        self._trace_response(
            response, no_body_trace and 200 <= response.status < 300,
        )
        check_response(
            request,
            response.status,
            response.headers,
            response.data,
            bucket_name=bucket_name,
            object_name=object_name,
            item_index=item_index,
        )
        return response

    def set_app_info(self, app_name: str, app_version: str):
        """
        Set your application name and version to user agent header.

        Args:
            app_name (str):
                Application name.

            app_version (str):
                Application version.

        Example:
            >>> client.set_app_info("my_app", "1.0.2")
        """
        if not (app_name and app_version):
            raise ValueError("Application name/version cannot be empty.")
        self._user_agent = f"{_DEFAULT_USER_AGENT} {app_name}/{app_version}"

    def trace_on(self, stream: TextIO):
        """
        Enable http trace.

        Args:
            stream (TextIO):
                Stream for writing HTTP call tracing.

        Example:
            >>> client.trace_on(sys.stdout)
        """
        if not stream:
            raise ValueError('Input stream for trace output is invalid.')
        # Save new output stream.
        self._trace_stream = stream

    def trace_off(self):
        """Disable HTTP trace."""
        self._trace_stream = None

    def list_buckets(
            self,
            *,
            item_index: Optional[int] = None,
    ) -> ListAllMyBucketsResult:
        """
        List information of all accessible buckets.

        Returns:
            ListAllMyBucketsResult:
                Buckets and their owner.

        Example:
            >>> result = client.list_buckets()
            >>> for bucket in result.buckets:
            ...     print(bucket.name, bucket.creation_date)
        """
        response = self._url_open("GET", item_index=item_index)
        return unmarshal(ListAllMyBucketsResult, response.data)

    def make_bucket(
            self,
            bucket_name: str,
            *,
            item_index: Optional[int] = None,
    ):
        """
        Create a bucket.

        Args:
            bucket_name (str):
                Name of the bucket.

        Example:
            >>> client.make_bucket("my-bucket")
        """
        check_bucket_name(bucket_name)
        self._url_open(
            "PUT", bucket_name=bucket_name, item_index=item_index,
        )

    def remove_bucket(
            self,
            bucket_name: str,
            *,
            item_index: Optional[int] = None,
    ):
        """
        Remove an empty bucket.

        Args:
            bucket_name (str):
                Name of the bucket.

        Example:
            >>> client.remove_bucket("my-bucket")
        """
        check_bucket_name(bucket_name)
        self._url_open(
            "DELETE", bucket_name=bucket_name, item_index=item_index,
        )

    def bucket_exists(
            self,
            bucket_name: str,
            *,
            item_index: Optional[int] = None,
    ) -> bool:
        """
        Check if a bucket exists.

        Args:
            bucket_name (str):
                Name of the bucket.

        Returns:
            bool:
                True if the bucket exists, False otherwise.

        Example:
            >>> if client.bucket_exists("my-bucket"):
            ...     print("my-bucket exists")
        """
        check_bucket_name(bucket_name)
        try:
            self._url_open(
                "HEAD", bucket_name=bucket_name, item_index=item_index,
            )
            return True
        except S3Error as exc:
            if exc.code != "NoSuchBucket":
                raise
        return False

    def get_bucket_location(
            self,
            bucket_name: str,
            *,
            item_index: Optional[int] = None,
    ) -> str:
        """Get region of a bucket; empty location means us-east-1."""
        check_bucket_name(bucket_name)
        response = self._url_open(
            "GET",
            bucket_name=bucket_name,
            query_params={"location": ""},
            item_index=item_index,
        )
        return findtext(
            parse_xml(response.data), "LocationConstraint",
        ) or "us-east-1"

    def list_objects(
            self,
            bucket_name: str,
            prefix: Optional[str] = None,
            delimiter: Optional[str] = None,
            start_after: Optional[str] = None,
            max_keys: Optional[int] = None,
            continuation_token: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> ListObjectsResult:
        """
        List one page of objects of a bucket with ListObjectsV2 API.

        Args:
            bucket_name (str):
                Name of the bucket.

            prefix (Optional[str], default=None):
                List objects whose names start with the prefix.

            delimiter (Optional[str], default=None):
                Group names sharing a prefix up to the delimiter into
                ``prefixes``.

            start_after (Optional[str], default=None):
                List objects after this object name.

            max_keys (Optional[int], default=None):
                Maximum number of objects in the page.

            continuation_token (Optional[str], default=None):
                Token of the page to fetch, taken from the
                ``continuation_token`` of the previous result.

        Returns:
            ListObjectsResult:
                Objects and common prefixes of the page.

        Example:
            >>> token = None
            >>> while True:
            ...     result = client.list_objects(
            ...         "my-bucket", continuation_token=token,
            ...     )
            ...     for obj in result.objects:
            ...         print(obj.object_name, obj.size)
            ...     if not result.is_truncated:
            ...         break
            ...     token = result.continuation_token
        """
        check_bucket_name(bucket_name)
        if max_keys is not None and max_keys < 1:
            raise ValueError("max keys must be a positive number")

        query_params: DictType = {"list-type": "2"}
        if prefix:
            query_params["prefix"] = prefix
        if delimiter:
            query_params["delimiter"] = delimiter
        if start_after:
            query_params["start-after"] = start_after
        if max_keys:
            query_params["max-keys"] = str(max_keys)
        if continuation_token:
            query_params["continuation-token"] = continuation_token

        response = self._url_open(
            "GET",
            bucket_name=bucket_name,
            query_params=query_params,
            item_index=item_index,
        )
        return ListObjectsResult.fromdict(
            parse_xml(response.data), bucket_name,
        )

    def put_object(
            self,
            bucket_name: str,
            object_name: str,
            data: bytes,
            content_type: str = "application/octet-stream",
            metadata: Optional[dict[str, str]] = None,
            *,
            item_index: Optional[int] = None,
    ) -> ObjectWriteResult:
        """
        Upload data to an object in a bucket.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            data (bytes):
                Object data.

            content_type (str, default="application/octet-stream"):
                Content type of the object.

            metadata (Optional[dict[str, str]], default=None):
                User metadata sent as ``x-amz-meta-*`` headers.

        Returns:
            ObjectWriteResult:
                ETag and version ID of the created object.

        Example:
            >>> result = client.put_object(
            ...     "my-bucket", "my-object", b"hello",
            ...     content_type="text/plain",
            ... )
            >>> print(result.etag)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("data must be bytes type")

        headers = HTTPHeaderDict({"Content-Type": content_type})
        for key, value in (metadata or {}).items():
            headers[f"x-amz-meta-{key}"] = value

        response = self._url_open(
            "PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            body=bytes(data),
            headers=headers,
            no_body_trace=True,
            item_index=item_index,
        )
        return ObjectWriteResult(
            bucket_name,
            object_name,
            etag=(response.headers.get("etag") or "").replace('"', "") or None,
            version_id=response.headers.get("x-amz-version-id"),
        )

    def get_object(
            self,
            bucket_name: str,
            object_name: str,
            offset: int = 0,
            length: Optional[int] = None,
            version_id: Optional[str] = None,
            match_etag: Optional[str] = None,
            not_match_etag: Optional[str] = None,
            modified_since: Optional[datetime] = None,
            unmodified_since: Optional[datetime] = None,
            *,
            item_index: Optional[int] = None,
    ) -> Union[GetObjectResult, NotModified]:
        """
        Get data of an object.

        Conditional arguments are sent as ``If-*`` headers. When the server
        answers ``304 Not Modified`` a :class:`NotModified` is returned; a
        failed precondition raises :class:`S3Error` with code
        ``PreconditionFailed``.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            offset (int, default=0):
                Start byte position of object data.

            length (Optional[int], default=None):
                Number of bytes of object data from offset.

            version_id (Optional[str], default=None):
                Version ID of the object.

            match_etag (Optional[str], default=None):
                Return data only if object ETag matches.

            not_match_etag (Optional[str], default=None):
                Return data only if object ETag does not match.

            modified_since (Optional[datetime], default=None):
                Return data only if object is modified since this time.

            unmodified_since (Optional[datetime], default=None):
                Return data only if object is unmodified since this time.

        Returns:
            Union[GetObjectResult, NotModified]:
                Object data with its metadata, or the not-modified marker.

        Example:
            >>> result = client.get_object("my-bucket", "my-object")
            >>> print(result.data)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._url_open(
            "GET",
            bucket_name=bucket_name,
            object_name=object_name,
            headers=self._gen_read_headers(
                offset=offset,
                length=length,
                match_etag=match_etag,
                not_match_etag=not_match_etag,
                modified_since=modified_since,
                unmodified_since=unmodified_since,
            ),
            query_params={"versionId": version_id} if version_id else None,
            no_body_trace=True,
            item_index=item_index,
        )
        if response.status == 304:
            return NotModified(
                bucket_name,
                object_name,
                (response.headers.get("etag") or "").replace('"', "") or None,
            )
        return GetObjectResult(
            ObjectStat.fromheaders(bucket_name, object_name, response.headers),
            response.data or b"",
        )

    def stat_object(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            match_etag: Optional[str] = None,
            not_match_etag: Optional[str] = None,
            modified_since: Optional[datetime] = None,
            unmodified_since: Optional[datetime] = None,
            *,
            item_index: Optional[int] = None,
    ) -> Union[ObjectStat, NotModified]:
        """
        Get object information and metadata of an object.

        Conditional arguments behave as in :meth:`get_object`.

        Example:
            >>> stat = client.stat_object("my-bucket", "my-object")
            >>> print(stat.size, stat.etag, stat.last_modified)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._url_open(
            "HEAD",
            bucket_name=bucket_name,
            object_name=object_name,
            headers=self._gen_read_headers(
                match_etag=match_etag,
                not_match_etag=not_match_etag,
                modified_since=modified_since,
                unmodified_since=unmodified_since,
            ),
            query_params={"versionId": version_id} if version_id else None,
            item_index=item_index,
        )
        if response.status == 304:
            return NotModified(
                bucket_name,
                object_name,
                (response.headers.get("etag") or "").replace('"', "") or None,
            )
        return ObjectStat.fromheaders(
            bucket_name, object_name, response.headers,
        )

    def remove_object(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> RemoveObjectResult:
        """
        Remove an object.

        Example:
            >>> client.remove_object("my-bucket", "my-object")
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._url_open(
            "DELETE",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params={"versionId": version_id} if version_id else None,
            item_index=item_index,
        )
        return RemoveObjectResult(
            bucket_name,
            object_name,
            delete_marker=(
                response.headers.get("x-amz-delete-marker") == "true"
            ),
            version_id=response.headers.get("x-amz-version-id"),
        )

    def remove_objects(
            self,
            bucket_name: str,
            delete_object_list: Iterable[Union[DeleteObject, str]],
            quiet: bool = False,
            *,
            item_index: Optional[int] = None,
    ) -> DeleteResult:
        """
        Remove multiple objects with one DeleteObjects API call.

        Args:
            bucket_name (str):
                Name of the bucket.

            delete_object_list (Iterable[Union[DeleteObject, str]]):
                Objects to remove, at most 1000.

            quiet (bool, default=False):
                Report only failed objects.

        Returns:
            DeleteResult:
                Removed objects and per-object errors.

        Example:
            >>> result = client.remove_objects(
            ...     "my-bucket",
            ...     [
            ...         DeleteObject("my-object1"),
            ...         DeleteObject("my-object2", "13f88b18-8dcd-4c83"),
            ...         "my-object3",
            ...     ],
            ... )
            >>> for error in result.error_list:
            ...     print("error occurred when deleting", error.name)
        """
        check_bucket_name(bucket_name)
        objects = [
            obj if isinstance(obj, DeleteObject) else DeleteObject(obj)
            for obj in delete_object_list
        ]
        if not objects:
            raise ValueError("no objects given to remove")
        if len(objects) > MAX_DELETE_OBJECTS:
            raise ValueError(
                f"at most {MAX_DELETE_OBJECTS} objects can be removed at once",
            )
        for obj in objects:
            check_object_name(obj.name)

        body = DeleteRequest(objects, quiet).toxml()
        response = self._url_open(
            "POST",
            bucket_name=bucket_name,
            query_params={"delete": ""},
            body=body,
            headers=HTTPHeaderDict({
                "Content-Type": "application/xml",
                "Content-MD5": md5sum_hash(body),
            }),
            item_index=item_index,
        )
        return unmarshal(DeleteResult, response.data)

    def copy_object(
            self,
            bucket_name: str,
            object_name: str,
            source_bucket_name: str,
            source_object_name: str,
            metadata_directive: Optional[str] = None,
            metadata: Optional[dict[str, str]] = None,
            *,
            item_index: Optional[int] = None,
    ) -> ObjectWriteResult:
        """
        Create an object by server-side copying data from another object.

        Args:
            bucket_name (str):
                Name of the destination bucket.

            object_name (str):
                Object name in the destination bucket.

            source_bucket_name (str):
                Name of the source bucket.

            source_object_name (str):
                Object name in the source bucket.

            metadata_directive (Optional[str], default=None):
                ``COPY`` to keep source metadata or ``REPLACE`` to use
                ``metadata``.

            metadata (Optional[dict[str, str]], default=None):
                User metadata of the destination object.

        Returns:
            ObjectWriteResult:
                ETag and last modified time of the new object.

        Example:
            >>> result = client.copy_object(
            ...     "my-bucket", "my-object",
            ...     "my-sourcebucket", "my-sourceobject",
            ... )
            >>> print(result.etag, result.last_modified)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        check_bucket_name(source_bucket_name)
        check_object_name(source_object_name)
        if (
                metadata_directive is not None and
                metadata_directive not in _METADATA_DIRECTIVES
        ):
            raise ValueError(
                f"metadata directive must be one of {_METADATA_DIRECTIVES}",
            )
        if metadata and metadata_directive != "REPLACE":
            raise ValueError(
                "metadata can only be set with metadata directive REPLACE",
            )

        headers = HTTPHeaderDict({
            "x-amz-copy-source": encode_copy_source(
                source_bucket_name, source_object_name,
            ),
        })
        if metadata_directive:
            headers["x-amz-metadata-directive"] = metadata_directive
        for key, value in (metadata or {}).items():
            headers[f"x-amz-meta-{key}"] = value

        response = self._url_open(
            "PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            headers=headers,
            item_index=item_index,
        )
        node = self._check_embedded_error(
            parse_xml(response.data), response.status, bucket_name,
            object_name, item_index,
        )
        etag = findtext(node, "CopyObjectResult/ETag")
        return ObjectWriteResult(
            bucket_name,
            object_name,
            etag=etag.replace('"', "") if etag else None,
            version_id=response.headers.get("x-amz-version-id"),
            last_modified=from_iso8601utc(
                findtext(node, "CopyObjectResult/LastModified"),
            ),
        )

    @staticmethod
    def _check_embedded_error(
            node: Any,
            status: int,
            bucket_name: str,
            object_name: str,
            item_index: Optional[int],
    ) -> Any:
        """
        Raise S3Error for <Error> body sent with 200 OK; CopyObject,
        UploadPartCopy and CompleteMultipartUpload may fail after the
        response status is sent.
        """
        error = findvalue(node, "Error")
        if isinstance(error, dict):
            raise S3Error.fromdict(
                error,
                status_code=status,
                bucket_name=bucket_name,
                object_name=object_name,
                item_index=item_index,
            )
        return node

    def create_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            content_type: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> str:
        """
        Start a multipart upload and return its upload ID.

        Example:
            >>> upload_id = client.create_multipart_upload(
            ...     "my-bucket", "my-object",
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        headers = HTTPHeaderDict()
        if content_type:
            headers["Content-Type"] = content_type
        response = self._url_open(
            "POST",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params={"uploads": ""},
            headers=headers,
            item_index=item_index,
        )
        return findtext(
            parse_xml(response.data),
            "InitiateMultipartUploadResult/UploadId",
            True,
        ) or ""

    def upload_part(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            part_number: int,
            data: bytes,
            *,
            item_index: Optional[int] = None,
    ) -> Part:
        """
        Upload one part of a multipart upload.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            upload_id (str):
                Upload ID returned by :meth:`create_multipart_upload`.

            part_number (int):
                Part number between 1 and 10000.

            data (bytes):
                Part data.

        Returns:
            Part:
                Part number and ETag to pass to
                :meth:`complete_multipart_upload`.
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not upload_id:
            raise ValueError("upload ID cannot be empty")
        if part_number < 1 or part_number > MAX_PART_NUMBER:
            raise ValueError(
                f"part number must be between 1 and {MAX_PART_NUMBER}",
            )
        response = self._url_open(
            "PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params={
                "partNumber": str(part_number),
                "uploadId": upload_id,
            },
            body=bytes(data),
            no_body_trace=True,
            item_index=item_index,
        )
        return Part(
            part_number,
            (response.headers.get("etag") or "").replace('"', ""),
            size=len(data),
        )

    def complete_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            parts: list[Part],
            *,
            item_index: Optional[int] = None,
    ) -> CompleteMultipartUploadResult:
        """
        Complete a multipart upload from its uploaded parts.

        Example:
            >>> part = client.upload_part(
            ...     "my-bucket", "my-object", upload_id, 1, data,
            ... )
            >>> result = client.complete_multipart_upload(
            ...     "my-bucket", "my-object", upload_id, [part],
            ... )
            >>> print(result.location)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not upload_id:
            raise ValueError("upload ID cannot be empty")
        if not parts:
            raise ValueError("at least one part is required")
        for part in parts:
            if not part.part_number or not part.etag:
                raise ValueError("each part must have part number and ETag")

        body = build_xml(
            "CompleteMultipartUpload",
            {"Part": [part.todict() for part in parts]},
        )
        response = self._url_open(
            "POST",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params={"uploadId": upload_id},
            body=body,
            headers=HTTPHeaderDict({"Content-Type": "application/xml"}),
            item_index=item_index,
        )
        node = self._check_embedded_error(
            parse_xml(response.data), response.status, bucket_name,
            object_name, item_index,
        )
        return CompleteMultipartUploadResult.fromdict(
            node, response.headers.get("x-amz-version-id"),
        )

    def abort_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            *,
            item_index: Optional[int] = None,
    ):
        """Abort a multipart upload and remove its uploaded parts."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not upload_id:
            raise ValueError("upload ID cannot be empty")
        self._url_open(
            "DELETE",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params={"uploadId": upload_id},
            item_index=item_index,
        )

    def list_parts(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            max_parts: Optional[int] = None,
            part_number_marker: Optional[int] = None,
            *,
            item_index: Optional[int] = None,
    ) -> ListPartsResult:
        """List uploaded parts of a multipart upload."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not upload_id:
            raise ValueError("upload ID cannot be empty")
        query_params: DictType = {"uploadId": upload_id}
        if max_parts:
            query_params["max-parts"] = str(max_parts)
        if part_number_marker:
            query_params["part-number-marker"] = str(part_number_marker)
        response = self._url_open(
            "GET",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params=query_params,
            item_index=item_index,
        )
        return unmarshal(ListPartsResult, response.data)

    def upload_part_copy(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            part_number: int,
            source_bucket_name: str,
            source_object_name: str,
            copy_source_range: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> Part:
        """
        Upload one part of a multipart upload by server-side copying data
        from an existing object.

        Args:
            bucket_name (str):
                Name of the destination bucket.

            object_name (str):
                Object name in the destination bucket.

            upload_id (str):
                Upload ID returned by :meth:`create_multipart_upload`.

            part_number (int):
                Part number between 1 and 10000.

            source_bucket_name (str):
                Name of the source bucket.

            source_object_name (str):
                Object name in the source bucket.

            copy_source_range (Optional[str], default=None):
                Byte range of the source object in ``bytes=first-last``
                form; the whole object is copied if not set.

        Returns:
            Part:
                Part number, ETag and last modified time to pass to
                :meth:`complete_multipart_upload`.

        Example:
            >>> part = client.upload_part_copy(
            ...     "my-bucket", "my-object", upload_id, 1,
            ...     "my-sourcebucket", "my-sourceobject",
            ...     copy_source_range="bytes=0-5242879",
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        check_bucket_name(source_bucket_name)
        check_object_name(source_object_name)
        if not upload_id:
            raise ValueError("upload ID cannot be empty")
        if part_number < 1 or part_number > MAX_PART_NUMBER:
            raise ValueError(
                f"part number must be between 1 and {MAX_PART_NUMBER}",
            )
        if (
                copy_source_range is not None and
                not _COPY_SOURCE_RANGE_REGEX.match(copy_source_range)
        ):
            raise ValueError(
                "copy source range must be in bytes=first-last form",
            )

        headers = HTTPHeaderDict({
            "x-amz-copy-source": encode_copy_source(
                source_bucket_name, source_object_name,
            ),
        })
        if copy_source_range:
            headers["x-amz-copy-source-range"] = copy_source_range
        response = self._url_open(
            "PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params={
                "partNumber": str(part_number),
                "uploadId": upload_id,
            },
            headers=headers,
            item_index=item_index,
        )
        node = self._check_embedded_error(
            parse_xml(response.data), response.status, bucket_name,
            object_name, item_index,
        )
        return Part(
            part_number,
            (findtext(node, "CopyPartResult/ETag") or "").replace('"', ""),
            last_modified=from_iso8601utc(
                findtext(node, "CopyPartResult/LastModified"),
            ),
        )

    def list_multipart_uploads(
            self,
            bucket_name: str,
            prefix: Optional[str] = None,
            max_uploads: Optional[int] = None,
            key_marker: Optional[str] = None,
            upload_id_marker: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> ListMultipartUploadsResult:
        """
        List one page of in-progress multipart uploads of a bucket.

        Pass ``next_key_marker`` and ``next_upload_id_marker`` of a truncated
        result as ``key_marker`` and ``upload_id_marker`` to fetch the next
        page.
        """
        check_bucket_name(bucket_name)
        query_params: DictType = {"uploads": ""}
        if prefix:
            query_params["prefix"] = prefix
        if max_uploads:
            query_params["max-uploads"] = str(max_uploads)
        if key_marker:
            query_params["key-marker"] = key_marker
        if upload_id_marker:
            query_params["upload-id-marker"] = upload_id_marker
        response = self._url_open(
            "GET",
            bucket_name=bucket_name,
            query_params=query_params,
            item_index=item_index,
        )
        return unmarshal(ListMultipartUploadsResult, response.data)

    def get_bucket_acl(
            self,
            bucket_name: str,
            *,
            item_index: Optional[int] = None,
    ) -> AccessControlPolicy:
        """
        Get access control list of a bucket.

        Example:
            >>> acl = client.get_bucket_acl("my-bucket")
            >>> for grant in acl.grants:
            ...     print(grant.grantee_id, grant.permission)
        """
        check_bucket_name(bucket_name)
        response = self._url_open(
            "GET",
            bucket_name=bucket_name,
            query_params={"acl": ""},
            item_index=item_index,
        )
        return AccessControlPolicy.fromdict(
            parse_xml(response.data), bucket_name,
        )

    def get_object_acl(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> AccessControlPolicy:
        """Get access control list of an object."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        query_params: DictType = {"acl": ""}
        if version_id:
            query_params["versionId"] = version_id
        response = self._url_open(
            "GET",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params=query_params,
            item_index=item_index,
        )
        return AccessControlPolicy.fromdict(
            parse_xml(response.data), bucket_name, object_name,
        )

    def get_bucket_policy(
            self,
            bucket_name: str,
            *,
            item_index: Optional[int] = None,
    ) -> str:
        """
        Get bucket policy configuration of a bucket.

        Args:
            bucket_name (str):
                Name of the bucket.

        Returns:
            str:
                Bucket policy configuration as JSON string.

        Example:
            >>> policy = client.get_bucket_policy("my-bucket")
        """
        check_bucket_name(bucket_name)
        response = self._url_open(
            "GET",
            bucket_name=bucket_name,
            query_params={"policy": ""},
            item_index=item_index,
        )
        return response.data.decode()

    def set_bucket_policy(
            self,
            bucket_name: str,
            policy: Union[str, bytes, dict[str, Any]],
            *,
            item_index: Optional[int] = None,
    ):
        """
        Set bucket policy configuration to a bucket.

        The policy document is sent verbatim as JSON; a dictionary is
        serialized first. Text that is not valid JSON raises ValueError.

        Example:
            >>> policy = {
            ...     "Version": "2012-10-17",
            ...     "Statement": [
            ...         {
            ...             "Effect": "Allow",
            ...             "Principal": "*",
            ...             "Action": "s3:GetObject",
            ...             "Resource": "arn:aws:s3:::my-bucket/*",
            ...         },
            ...     ],
            ... }
            >>> client.set_bucket_policy("my-bucket", policy)
        """
        check_bucket_name(bucket_name)
        if isinstance(policy, dict):
            body = json.dumps(policy).encode()
        else:
            body = policy.encode() if isinstance(policy, str) else policy
            try:
                json.loads(body)
            except ValueError as exc:
                raise ValueError(
                    f"policy is not a valid JSON document; {exc}",
                ) from exc
        self._url_open(
            "PUT",
            bucket_name=bucket_name,
            query_params={"policy": ""},
            body=body,
            headers=HTTPHeaderDict({"Content-Type": "application/json"}),
            item_index=item_index,
        )

    def delete_bucket_policy(
            self,
            bucket_name: str,
            *,
            item_index: Optional[int] = None,
    ):
        """
        Delete bucket policy configuration of a bucket; a bucket without
        policy is not an error.

        Example:
            >>> client.delete_bucket_policy("my-bucket")
        """
        check_bucket_name(bucket_name)
        try:
            self._url_open(
                "DELETE",
                bucket_name=bucket_name,
                query_params={"policy": ""},
                item_index=item_index,
            )
        except S3Error as exc:
            if exc.code != "NoSuchBucketPolicy":
                raise

    def get_presigned_url(
            self,
            method: str,
            bucket_name: str,
            object_name: str,
            expires: timedelta = timedelta(days=7),
            request_date: Optional[datetime] = None,
            version_id: Optional[str] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> str:
        """
        Get a presigned URL for an object.

        Args:
            method (str):
                HTTP method to allow (e.g., "GET", "PUT", "DELETE").

            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            expires (timedelta, default=timedelta(days=7)):
                Expiry duration for the presigned URL, between 1 second
                and 7 days.

            request_date (Optional[datetime], default=None):
                Request time to base the URL on, instead of the current
                time.

            version_id (Optional[str], default=None):
                Version ID of the object.

            extra_query_params (Optional[DictType], default=None):
                Extra query parameters covered by the signature.

        Returns:
            str:
                A presigned URL string.

        Example:
            >>> url = client.get_presigned_url(
            ...     method="DELETE",
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     expires=timedelta(days=1),
            ... )
            >>> print(url)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        check_expiry(int(expires.total_seconds()))

        query_params: DictType = dict(extra_query_params or {})
        if version_id:
            query_params["versionId"] = version_id
        creds = self._provider.retrieve()
        url = presign_v4(
            method=method,
            url=self._base_url.build(
                bucket_name=bucket_name,
                object_name=object_name,
                query_params=query_params,
            ),
            region=creds.region,
            credentials=creds,
            date=request_date or time.utcnow(),
            expires=int(expires.total_seconds()),
        )
        return urlunsplit(url)

    def presigned_get_object(
            self,
            bucket_name: str,
            object_name: str,
            expires: timedelta = timedelta(days=7),
            response_headers: Optional[DictType] = None,
            request_date: Optional[datetime] = None,
            version_id: Optional[str] = None,
    ) -> str:
        """
        Get a presigned URL to download an object.

        ``response_headers`` are response overrides such as
        ``response-content-type`` sent as query parameters.

        Example:
            >>> url = client.presigned_get_object(
            ...     "my-bucket", "my-object", expires=timedelta(hours=2),
            ... )
        """
        return self.get_presigned_url(
            "GET",
            bucket_name,
            object_name,
            expires,
            request_date=request_date,
            version_id=version_id,
            extra_query_params=response_headers,
        )

    def presigned_put_object(
            self,
            bucket_name: str,
            object_name: str,
            expires: timedelta = timedelta(days=7),
            request_date: Optional[datetime] = None,
    ) -> str:
        """
        Get a presigned URL to upload an object.

        Example:
            >>> url = client.presigned_put_object(
            ...     "my-bucket", "my-object", expires=timedelta(hours=2),
            ... )
        """
        return self.get_presigned_url(
            "PUT",
            bucket_name,
            object_name,
            expires,
            request_date=request_date,
        )
