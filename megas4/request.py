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

"""
megas4.request
~~~~~~~~~~~~~~~

Signed request descriptors for the S3 and IAM endpoints, and classification
of the responses received for them.

Building a request never touches the network; the descriptor carries the
method, absolute URL, signed headers and body the transport has to send.
"""

from __future__ import absolute_import, annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Type
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from urllib3._collections import HTTPHeaderDict

from . import time
from .credentials import Credentials
from .error import IAMError, S3Error
from .helpers import IAM_API_VERSION, BaseURL, DictType, sha256_hash
from .signer import sign_v4_iam, sign_v4_s3
from .xml import findvalue, parse_xml

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"

_STATUS_CODES = {
    301: "PermanentRedirect",
    307: "Redirect",
    400: "BadRequest",
    403: "AccessDenied",
    405: "MethodNotAllowed",
    409: "ResourceConflict",
    412: "PreconditionFailed",
    501: "MethodNotAllowed",
}


@dataclass(frozen=True)
class Request:
    """Signed HTTP request ready to be sent."""
    method: str
    url: str
    headers: HTTPHeaderDict
    body: Optional[bytes] = None

    @property
    def path(self) -> str:
        """Get path of request URL."""
        return urlsplit(self.url).path or "/"


def build_s3_request(  # pylint: disable=too-many-positional-arguments
        base_url: BaseURL,
        credentials: Credentials,
        method: str,
        bucket_name: Optional[str] = None,
        object_name: Optional[str] = None,
        query_params: Optional[DictType] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        date: Optional[datetime] = None,
) -> Request:
    """Build signed request to S3 endpoint."""
    url = base_url.build(
        bucket_name=bucket_name,
        object_name=object_name,
        query_params=query_params,
    )

    headers = HTTPHeaderDict(headers or {})
    if method in ["PUT", "POST"]:
        headers["Content-Length"] = str(len(body or b""))
        if not headers.get("Content-Type"):
            headers["Content-Type"] = "application/octet-stream"

    headers = sign_v4_s3(
        method=method,
        url=url,
        region=credentials.region,
        headers=headers,
        credentials=credentials,
        content_sha256=sha256_hash(body),
        date=date or time.utcnow(),
    )
    return Request(method, urlunsplit(url), headers, body)


def build_iam_request(  # pylint: disable=too-many-positional-arguments
        base_url: BaseURL,
        credentials: Credentials,
        action: str,
        params: Optional[Mapping[str, Optional[str]]] = None,
        version: str = IAM_API_VERSION,
        headers: Optional[Mapping[str, str]] = None,
        date: Optional[datetime] = None,
) -> Request:
    """Build signed form POST request to IAM endpoint."""
    fields = [("Action", action), ("Version", version)]
    fields += [
        (name, value) for name, value in (params or {}).items()
        if value is not None
    ]
    body = urlencode(fields, quote_via=quote).encode()

    url = base_url.build()
    headers = HTTPHeaderDict(headers or {})
    headers["Content-Type"] = _FORM_CONTENT_TYPE
    headers["Content-Length"] = str(len(body))

    headers = sign_v4_iam(
        method="POST",
        url=url,
        region=credentials.region,
        headers=headers,
        credentials=credentials,
        content_sha256=sha256_hash(body),
        date=date or time.utcnow(),
    )
    return Request("POST", urlunsplit(url), headers, body)


def _generic_code(
        status: int,
        bucket_name: Optional[str],
        object_name: Optional[str],
) -> str:
    """Get error code derived from HTTP status."""
    if status == 404:
        if object_name:
            return "NoSuchKey"
        return "NoSuchBucket" if bucket_name else "ResourceNotFound"
    return _STATUS_CODES.get(status, "UnknownError")


def is_success(status: int) -> bool:
    """Check whether HTTP status is a successful outcome."""
    return 200 <= status < 300 or status == 304


def check_response(  # pylint: disable=too-many-positional-arguments
        request: Request,
        status: int,
        headers: Mapping[str, str],
        data: Optional[bytes],
        bucket_name: Optional[str] = None,
        object_name: Optional[str] = None,
        item_index: Optional[int] = None,
        error_class: Type[S3Error] = S3Error,
):
    """
    Raise S3Error (or given error class) if response is not a success.

    A 304 is a valid "not modified" outcome. For other statuses the code and
    message are taken from the XML error element of the body when present,
    otherwise a code is derived from the status and the raw body (or
    ``HTTP <status>``) becomes the message.
    """
    if is_success(status):
        return

    text = data.decode(errors="replace") if data else ""
    node = parse_xml(text)
    if error_class is IAMError:
        error = findvalue(node, "ErrorResponse/Error")
        request_id = (
            findvalue(node, "ErrorResponse/RequestId") or
            headers.get("x-amzn-requestid")
        )
    else:
        error = findvalue(node, "Error")
        request_id = headers.get("x-amz-request-id")

    generic_code = _generic_code(status, bucket_name, object_name)
    if isinstance(error, dict):
        exc = error_class.fromdict(
            error,
            status_code=status,
            bucket_name=bucket_name,
            object_name=object_name,
            item_index=item_index,
        )
        if not error.get("Code"):
            exc = exc.copy(generic_code, exc.message or f"HTTP {status}")
        if exc.request_id is None and request_id:
            exc = error_class(
                code=exc.code,
                message=exc.message,
                status_code=status,
                resource=exc.resource or request.path,
                request_id=request_id,
                host_id=exc.host_id or headers.get("x-amz-id-2"),
                bucket_name=exc.bucket_name,
                object_name=exc.object_name,
                item_index=item_index,
            )
        raise exc

    raise error_class(
        code=generic_code,
        message=text.strip() or f"HTTP {status}",
        status_code=status,
        resource=request.path,
        request_id=request_id,
        host_id=headers.get("x-amz-id-2"),
        bucket_name=bucket_name,
        object_name=object_name,
        item_index=item_index,
    )
