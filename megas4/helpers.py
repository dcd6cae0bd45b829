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

"""Helper functions."""

from __future__ import absolute_import, annotations, division, unicode_literals

import base64
import hashlib
import platform
import re
import urllib.parse
from typing import Any, Dict, List, Mapping, Tuple, Union

from . import __title__, __version__

_DEFAULT_USER_AGENT = (
    f"MegaS4 ({platform.system()}; {platform.machine()}) "
    f"{__title__}/{__version__}"
)

DEFAULT_REGION = "eu-central-1"
IAM_API_VERSION = "2010-05-08"
MIN_EXPIRY_SECONDS = 1
MAX_EXPIRY_SECONDS = 604800  # 7 days
MAX_OBJECT_NAME_LENGTH = 1024

ZERO_SHA256_HASH = (
    "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
)
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"

_S3_ENDPOINTS = {
    "eu-central-1": "s3.eu-central-1.s4.mega.io",
    "eu-central-2": "s3.eu-central-2.s4.mega.io",
    "ca-central-1": "s3.ca-central-1.s4.mega.io",
    "ca-west-1": "s3.ca-west-1.s4.mega.io",
}
_IAM_ENDPOINTS = {
    "eu-central-1": "iam.eu-central-1.s4.mega.io",
    "eu-central-2": "iam.eu-central-2.s4.mega.io",
    "ca-central-1": "iam.ca-central-1.s4.mega.io",
    "ca-west-1": "iam.ca-west-1.s4.mega.io",
}

_BUCKET_NAME_REGEX = re.compile(
    r'^[a-z0-9]([a-z0-9-]*[a-z0-9])?(\.[a-z0-9]([a-z0-9-]*[a-z0-9])?)*$')
_IPV4_REGEX = re.compile(r'^(\d{1,3}\.){3}\d{1,3}$')
_POLICY_ARN_REGEX = re.compile(
    r'^arn:aws:iam::(\d{12}|aws):policy/[\w+=,.@-]+(/[\w+=,.@-]+)*$')
_IAM_NAME_REGEX = re.compile(r'^[\w+=,.@-]+$')
_REGION_REGEX = re.compile(r'^((?!_)(?!-)[a-z_\d-]{1,63}(?<!-)(?<!_))$',
                           re.IGNORECASE)

DictType = Dict[str, Union[str, List[str], Tuple[str]]]


def quote(
        resource: str,
        safe: str = "/",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """
    Wrapper to urllib.parse.quote() replacing back to '~' for older python
    versions.
    """
    return urllib.parse.quote(
        resource,
        safe=safe,
        encoding=encoding,
        errors=errors,
    ).replace("%7E", "~")


def queryencode(
        query: str,
        safe: str = "",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """Encode query parameter value."""
    return quote(query, safe, encoding, errors)


def encode_copy_source(bucket_name: str, object_name: str) -> str:
    """
    Build value of x-amz-copy-source header; every key segment is encoded
    on its own and rejoined with '/'.
    """
    segments = [queryencode(segment) for segment in object_name.split("/")]
    return f"/{bucket_name}/{'/'.join(segments)}"


def headers_to_strings(
        headers: Mapping[str, str | list[str] | tuple[str]],
        titled_key: bool = False,
) -> str:
    """Convert HTTP headers to multi-line string."""
    values = []
    for key, value in headers.items():
        key = key.title() if titled_key else key
        for item in value if isinstance(value, (list, tuple)) else [value]:
            item = re.sub(
                r"Credential=([^/]+)",
                "Credential=*REDACTED*",
                re.sub(r"Signature=([0-9a-f]+)", "Signature=*REDACTED*", item),
            ) if titled_key else item
            values.append(f"{key}: {item}")
    return "\n".join(values)


def safe_str(value: Any) -> str:
    """Convert to string safely"""
    try:
        return value.decode() if isinstance(value, bytes) else str(value)
    except UnicodeDecodeError:
        return value.hex()


def md5sum_hash(data: bytes) -> str:
    """Compute MD5 of data and return hash as base64 encoded value."""
    return base64.b64encode(hashlib.md5(data).digest()).decode()


def sha256_hash(data: str | bytes | None) -> str:
    """Compute SHA-256 of data and return hash as hex encoded value."""
    if not data:
        return ZERO_SHA256_HASH
    hasher = hashlib.sha256()
    hasher.update(data.encode() if isinstance(data, str) else data)
    return hasher.hexdigest()


def check_bucket_name(bucket_name: str):
    """Check whether bucket name is valid."""
    if not isinstance(bucket_name, str):
        raise TypeError("bucket name must be str type")

    if not bucket_name:
        raise ValueError("bucket name cannot be empty")

    if len(bucket_name) < 3 or len(bucket_name) > 63:
        raise ValueError(
            f"bucket name {bucket_name} must be between 3 and 63 characters "
            "long"
        )

    if not _BUCKET_NAME_REGEX.match(bucket_name):
        raise ValueError(
            f"invalid bucket name {bucket_name}; only lowercase letters, "
            "numbers, hyphens and dots are allowed and it must start and end "
            "with a letter or number"
        )

    if _IPV4_REGEX.match(bucket_name):
        raise ValueError(f'bucket name {bucket_name} must not be formatted '
                         'as an IP address')


def check_object_name(object_name: str):
    """Check whether object name is valid."""
    if not isinstance(object_name, str):
        raise TypeError("object name must be str type")

    if not object_name.strip():
        raise ValueError("object name cannot be empty")

    if len(object_name) > MAX_OBJECT_NAME_LENGTH:
        raise ValueError(
            f"object name cannot exceed {MAX_OBJECT_NAME_LENGTH} characters"
        )

    if "//" in object_name:
        raise ValueError(
            "object name cannot contain consecutive slashes (//)"
        )


def check_policy_arn(policy_arn: str):
    """Check whether IAM policy ARN is valid."""
    if not policy_arn:
        raise ValueError("policy ARN cannot be empty")

    if not _POLICY_ARN_REGEX.match(policy_arn):
        raise ValueError(
            f"invalid policy ARN {policy_arn}; expected format: "
            "arn:aws:iam::account-id:policy/policy-name"
        )


def check_iam_name(name: str, kind: str = "user"):
    """Check whether IAM user or group name is valid."""
    if not name:
        raise ValueError(f"{kind} name cannot be empty")

    if len(name) > 128:
        raise ValueError(
            f"{kind} name must be between 1 and 128 characters long",
        )

    if not _IAM_NAME_REGEX.match(name):
        raise ValueError(
            f"invalid {kind} name {name}; allowed characters: alphanumeric, "
            "plus (+), equals (=), comma (,), period (.), at (@), "
            "underscore (_), hyphen (-)"
        )


def check_expiry(expires: int):
    """Check whether presigned URL expiry in seconds is in allowed range."""
    if expires < MIN_EXPIRY_SECONDS or expires > MAX_EXPIRY_SECONDS:
        raise ValueError("expires must be between 1 second to 7 days")


def format_bytes(size: int) -> str:
    """Format size in bytes to human readable string."""
    if size == 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB", "TB"]
    index = 0
    value = float(size)
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


def get_s3_endpoint(region: str | None) -> str:
    """Get S3 endpoint host of given region."""
    return _S3_ENDPOINTS.get(region or "", _S3_ENDPOINTS[DEFAULT_REGION])


def get_iam_endpoint(region: str | None) -> str:
    """Get IAM endpoint host of given region."""
    return _IAM_ENDPOINTS.get(region or "", _IAM_ENDPOINTS[DEFAULT_REGION])


def url_replace(
        url: urllib.parse.SplitResult,
        scheme: str | None = None,
        netloc: str | None = None,
        path: str | None = None,
        query: str | None = None,
        fragment: str | None = None,
) -> urllib.parse.SplitResult:
    """Return new URL with replaced properties in given URL."""
    return urllib.parse.SplitResult(
        scheme if scheme is not None else url.scheme,
        netloc if netloc is not None else url.netloc,
        path if path is not None else url.path,
        query if query is not None else url.query,
        fragment if fragment is not None else url.fragment,
    )


def _parse_url(endpoint: str) -> urllib.parse.SplitResult:
    """Parse url string."""

    url = urllib.parse.urlsplit(endpoint)
    host = url.hostname

    if url.scheme.lower() not in ["http", "https"]:
        raise ValueError("scheme in endpoint must be http or https")

    url = url_replace(url, scheme=url.scheme.lower())

    if url.path and url.path != "/":
        raise ValueError("path in endpoint is not allowed")

    url = url_replace(url, path="")

    if url.query:
        raise ValueError("query in endpoint is not allowed")

    if url.fragment:
        raise ValueError("fragment in endpoint is not allowed")

    try:
        url.port
    except ValueError as exc:
        raise ValueError("invalid port") from exc

    if url.username:
        raise ValueError("username in endpoint is not allowed")

    if url.password:
        raise ValueError("password in endpoint is not allowed")

    if (
            (url.scheme == "http" and url.port == 80) or
            (url.scheme == "https" and url.port == 443)
    ):
        url = url_replace(url, netloc=host)

    return url


def encode_query(query_params: DictType | None) -> str:
    """Encode query parameters sorted by name and value."""
    query = []
    for key, values in sorted((query_params or {}).items()):
        values = values if isinstance(values, (list, tuple)) else [values]
        query += [
            f"{queryencode(key)}={queryencode(value)}"
            for value in sorted(values)
        ]
    return "&".join(query)


class BaseURL:
    """Base URL of S4 endpoint."""
    _url: urllib.parse.SplitResult
    _force_path_style: bool

    def __init__(
            self,
            endpoint: str,
            secure: bool = True,
            force_path_style: bool = True,
    ):
        if "://" not in endpoint:
            endpoint = ("https://" if secure else "http://") + endpoint
        self._url = _parse_url(endpoint)
        self._force_path_style = force_path_style

    @property
    def is_https(self) -> bool:
        """Check if scheme is HTTPS."""
        return self._url.scheme == "https"

    def build(
            self,
            bucket_name: str | None = None,
            object_name: str | None = None,
            query_params: DictType | None = None,
    ) -> urllib.parse.SplitResult:
        """Build URL for given information."""
        if not bucket_name and object_name:
            raise ValueError(
                f"empty bucket name for object name {object_name}",
            )

        url = url_replace(
            self._url, path="/", query=encode_query(query_params),
        )
        if not bucket_name:
            return url

        netloc = url.netloc
        # Bucket name containing '.' breaks TLS wildcard certificates.
        if (
                self._force_path_style or
                ("." in bucket_name and self.is_https)
        ):
            path = f"/{bucket_name}"
        else:
            netloc = f"{bucket_name}.{netloc}"
            path = ""
        if object_name:
            path += "/" + quote(object_name)

        return url_replace(url, netloc=netloc, path=path or "/")


def check_region(region: str):
    """Check whether region name is well-formed."""
    if not _REGION_REGEX.match(region):
        raise ValueError(f"invalid region {region}")
