# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage,
# (C) 2015-2020 MinIO, Inc.
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
megas4.signer
~~~~~~~~~~~~~~~

This module implements all helpers for AWS Signature version '4' support,
both the Authorization header flavour used by regular API calls and the
query string flavour used by presigned URLs.

Every function here is pure: the request date, region, service name and
credentials are passed in explicitly and nothing is cached, so a signing
key never outlives the UTC day it was derived for.

"""

from __future__ import absolute_import, annotations

import hashlib
import hmac
import re
from datetime import datetime
from typing import Iterable, Mapping, Union, cast
from urllib.parse import SplitResult, parse_qsl

from . import time
from .credentials import Credentials
from .error import SigningError
from .helpers import (UNSIGNED_PAYLOAD, DictType, check_expiry, queryencode,
                      sha256_hash, url_replace)

SIGN_V4_ALGORITHM = "AWS4-HMAC-SHA256"
_MULTI_SPACE_REGEX = re.compile(r"( +)")
_UNSIGNED_HEADERS = ("authorization", "user-agent")

QueryType = Union[str, Mapping[str, Union[str, Iterable[str]]], None]


def _hmac_hash(
        key: bytes,
        data: bytes,
        hexdigest: bool = False,
) -> bytes | str:
    """Return HMacSHA256 digest of given key and data."""

    hasher = hmac.new(key, data, hashlib.sha256)
    return hasher.hexdigest() if hexdigest else hasher.digest()


def _check_preconditions(credentials: Credentials | None, region: str):
    """
    Fail before canonicalization when signing inputs are missing.

    Empty access or secret keys are already rejected by
    :class:`Credentials`, and clients always pass a region; this guards
    direct callers of the signing functions.
    """
    if credentials is None:
        raise SigningError("credentials are required to sign a request")
    if not region:
        raise SigningError("region is required to sign a request")


def get_scope(date: datetime, region: str, service_name: str) -> str:
    """Get scope string."""
    return f"{time.to_signer_date(date)}/{region}/{service_name}/aws4_request"


def get_canonical_headers(
        headers: Mapping[str, str | list[str] | tuple[str]],
) -> tuple[str, str]:
    """
    Get canonical headers block and signed headers.

    The block carries one ``name:value`` line per header, each terminated
    by a newline, with lower-cased names in lexicographic order.
    """

    ordered_headers = {}
    for key, values in headers.items():
        key = key.lower()
        if key in _UNSIGNED_HEADERS:
            continue
        values = values if isinstance(values, (list, tuple)) else [values]
        ordered_headers[key] = ",".join([
            _MULTI_SPACE_REGEX.sub(" ", str(value).strip())
            for value in values
        ])

    names = sorted(ordered_headers)
    signed_headers = ";".join(names)
    canonical_headers = "".join(
        [f"{name}:{ordered_headers[name]}\n" for name in names],
    )
    return canonical_headers, signed_headers


def _query_pairs(query: QueryType) -> list[tuple[str, str]]:
    """Flatten query string or mapping into name/value pairs."""
    if query is None:
        return []
    if isinstance(query, str):
        return parse_qsl(query, keep_blank_values=True)
    pairs = []
    for key, values in query.items():
        values = [values] if isinstance(values, str) else values
        pairs += [(key, value) for value in values]
    return pairs


def get_canonical_query_string(query: QueryType) -> str:
    """
    Get canonical query string. Names and values are encoded independently
    and a parameter without value is kept as ``name=``.
    """

    return "&".join(
        [
            f"{name}={value}" for name, value in sorted(
                (queryencode(name), queryencode(value))
                for name, value in _query_pairs(query)
            )
        ],
    )


def get_canonical_request(
        method: str,
        path: str,
        query: QueryType,
        headers: Mapping[str, str | list[str] | tuple[str]],
        content_sha256: str,
) -> tuple[str, str]:
    """Get canonical request and signed headers."""
    canonical_headers, signed_headers = get_canonical_headers(headers)
    canonical_query_string = get_canonical_query_string(query)

    # CanonicalRequest =
    #   HTTPRequestMethod + '\n' +
    #   CanonicalURI + '\n' +
    #   CanonicalQueryString + '\n' +
    #   CanonicalHeaders + '\n' +
    #   SignedHeaders + '\n' +
    #   HexEncode(Hash(RequestPayload))
    canonical_request = (
        f"{method}\n"
        f"{path or '/'}\n"
        f"{canonical_query_string}\n"
        f"{canonical_headers}\n"
        f"{signed_headers}\n"
        f"{content_sha256}"
    )
    return canonical_request, signed_headers


def get_string_to_sign(
        date: datetime,
        scope: str,
        canonical_request_hash: str,
) -> str:
    """Get string-to-sign."""
    return (
        f"{SIGN_V4_ALGORITHM}\n{time.to_amz_date(date)}\n{scope}\n"
        f"{canonical_request_hash}"
    )


def get_signing_key(
        secret_key: str,
        date: datetime,
        region: str,
        service_name: str,
) -> bytes:
    """Get signing key."""

    date_key = cast(
        bytes,
        _hmac_hash(
            ("AWS4" + secret_key).encode(),
            time.to_signer_date(date).encode(),
        ),
    )
    date_region_key = cast(bytes, _hmac_hash(date_key, region.encode()))
    date_region_service_key = cast(
        bytes,
        _hmac_hash(date_region_key, service_name.encode()),
    )
    return cast(
        bytes,
        _hmac_hash(date_region_service_key, b"aws4_request"),
    )


def get_signature(signing_key: bytes, string_to_sign: str) -> str:
    """Get signature."""

    return cast(
        str,
        _hmac_hash(signing_key, string_to_sign.encode(), hexdigest=True),
    )


def get_authorization(
        access_key: str,
        scope: str,
        signed_headers: str,
        signature: str,
) -> str:
    """Get authorization."""
    return (
        f"{SIGN_V4_ALGORITHM} Credential={access_key}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )


def sign_v4(  # pylint: disable=too-many-positional-arguments
        service_name: str,
        method: str,
        url: SplitResult,
        region: str,
        headers: DictType,
        credentials: Credentials,
        content_sha256: str,
        date: datetime,
) -> DictType:
    """Do signature V4 of given request for given service name."""

    _check_preconditions(credentials, region)

    headers["host"] = url.netloc
    headers["x-amz-date"] = time.to_amz_date(date)
    headers["x-amz-content-sha256"] = content_sha256

    scope = get_scope(date, region, service_name)
    canonical_request, signed_headers = get_canonical_request(
        method, url.path, url.query, headers, content_sha256,
    )
    string_to_sign = get_string_to_sign(
        date, scope, sha256_hash(canonical_request),
    )
    signing_key = get_signing_key(
        credentials.secret_key, date, region, service_name,
    )
    signature = get_signature(signing_key, string_to_sign)
    headers["Authorization"] = get_authorization(
        credentials.access_key, scope, signed_headers, signature,
    )
    return headers


def sign_v4_s3(  # pylint: disable=too-many-positional-arguments
        method: str,
        url: SplitResult,
        region: str,
        headers: DictType,
        credentials: Credentials,
        content_sha256: str,
        date: datetime,
) -> DictType:
    """Do signature V4 of given request for S3 service."""
    return sign_v4(
        "s3",
        method,
        url,
        region,
        headers,
        credentials,
        content_sha256,
        date,
    )


def sign_v4_iam(  # pylint: disable=too-many-positional-arguments
        method: str,
        url: SplitResult,
        region: str,
        headers: DictType,
        credentials: Credentials,
        content_sha256: str,
        date: datetime,
) -> DictType:
    """Do signature V4 of given request for IAM service."""
    return sign_v4(
        "iam",
        method,
        url,
        region,
        headers,
        credentials,
        content_sha256,
        date,
    )


def presign_v4(  # pylint: disable=too-many-positional-arguments
        method: str,
        url: SplitResult,
        region: str,
        credentials: Credentials,
        date: datetime,
        expires: int,
) -> SplitResult:
    """Do signature V4 of given presign request."""

    check_expiry(expires)
    _check_preconditions(credentials, region)

    scope = get_scope(date, region, "s3")
    x_amz_credential = queryencode(credentials.access_key + "/" + scope)
    query = url.query + "&" if url.query else ""
    query += (
        f"X-Amz-Algorithm={SIGN_V4_ALGORITHM}"
        f"&X-Amz-Credential={x_amz_credential}"
        f"&X-Amz-Date={time.to_amz_date(date)}"
        f"&X-Amz-Expires={expires}"
        f"&X-Amz-SignedHeaders=host"
    )

    canonical_request, _ = get_canonical_request(
        method,
        url.path,
        query,
        {"host": url.netloc},
        UNSIGNED_PAYLOAD,
    )
    string_to_sign = get_string_to_sign(
        date, scope, sha256_hash(canonical_request),
    )
    signing_key = get_signing_key(credentials.secret_key, date, region, "s3")
    signature = get_signature(signing_key, string_to_sign)

    return url_replace(
        url, query=query + "&X-Amz-Signature=" + queryencode(signature),
    )
