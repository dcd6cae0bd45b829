# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage,
# (C) 2015-2019 MinIO, Inc.
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
megas4.error
~~~~~~~~~~~~~~~~~~~

This module provides custom exception classes for S4 library
and API specific errors.

"""

from __future__ import absolute_import, annotations

from typing import Any, Optional, Type, TypeVar


class S4Exception(Exception):
    """Base S4 exception."""


class SigningError(S4Exception):
    """Raised when a request cannot be signed for missing inputs."""


class TransportError(S4Exception):
    """
    Raised to indicate that HTTP request failed before any response was
    received, for example on connection refused, DNS failure or timeout.
    The underlying exception is available as ``__cause__``.
    """

    def __init__(self, method: str, url: str, reason: str):
        self._method = method
        self._url = url
        self._reason = reason
        super().__init__(
            f"S4 operation failed; {method} {url}: {reason}",
        )

    @property
    def status_code(self) -> None:
        """Transport errors never carry an HTTP status code."""
        return None

    @property
    def reason(self) -> str:
        """Get failure reason."""
        return self._reason

    def __reduce__(self):
        return type(self), (self._method, self._url, self._reason)


A = TypeVar("A", bound="S3Error")


class S3Error(S4Exception):
    """
    Raised to indicate that error response is received
    when executing S3 operation.
    """
    code: Optional[str]
    message: Optional[str]
    status_code: Optional[int]
    resource: Optional[str]
    request_id: Optional[str]
    host_id: Optional[str]
    bucket_name: Optional[str]
    object_name: Optional[str]
    item_index: Optional[int]

    _EXC_MUTABLES = {"__traceback__", "__context__", "__cause__"}
    _PREFIX = "S3 operation failed"

    def __init__(  # pylint: disable=too-many-positional-arguments
        self,
        code: Optional[str],
        message: Optional[str],
        status_code: Optional[int] = None,
        resource: Optional[str] = None,
        request_id: Optional[str] = None,
        host_id: Optional[str] = None,
        bucket_name: Optional[str] = None,
        object_name: Optional[str] = None,
        item_index: Optional[int] = None,
    ):
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "status_code", status_code)
        object.__setattr__(self, "resource", resource)
        object.__setattr__(self, "request_id", request_id)
        object.__setattr__(self, "host_id", host_id)
        object.__setattr__(self, "bucket_name", bucket_name)
        object.__setattr__(self, "object_name", object_name)
        object.__setattr__(self, "item_index", item_index)

        bucket_message = f", bucket_name: {bucket_name}" if bucket_name else ""
        object_message = f", object_name: {object_name}" if object_name else ""
        item_message = (
            f", item_index: {item_index}" if item_index is not None else ""
        )

        super().__init__(
            f"{self._PREFIX}; code: {code}, message: {message}, "
            f"status_code: {status_code}, resource: {resource}, "
            f"request_id: {request_id}, host_id: {host_id}"
            f"{bucket_message}{object_message}{item_message}"
        )

        # freeze after init
        object.__setattr__(self, "_is_frozen", True)

    def __setattr__(self, name, value):
        if name in self._EXC_MUTABLES:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_is_frozen", False):
            raise AttributeError(
                f"{self.__class__.__name__} is frozen and "
                "does not allow attribute assignment"
            )
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        if name in self._EXC_MUTABLES:
            object.__delattr__(self, name)
            return
        if getattr(self, "_is_frozen", False):
            raise AttributeError(
                f"{self.__class__.__name__} is frozen and "
                "does not allow attribute deletion"
            )
        object.__delattr__(self, name)

    def __reduce__(self):
        return type(self), (
            self.code,
            self.message,
            self.status_code,
            self.resource,
            self.request_id,
            self.host_id,
            self.bucket_name,
            self.object_name,
            self.item_index,
        )

    @classmethod
    def fromdict(  # pylint: disable=too-many-positional-arguments
            cls: Type[A],
            node: dict[str, Any],
            status_code: Optional[int] = None,
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
            item_index: Optional[int] = None,
    ) -> A:
        """Create new object with values from decoded <Error> element."""
        def _text(name: str) -> Optional[str]:
            value = node.get(name)
            return value if isinstance(value, str) else None

        return cls(
            code=_text("Code") or "UnknownError",
            message=_text("Message"),
            status_code=status_code,
            resource=_text("Resource"),
            request_id=_text("RequestId"),
            host_id=_text("HostId"),
            bucket_name=_text("BucketName") or bucket_name,
            object_name=_text("Key") or object_name,
            item_index=item_index,
        )

    def copy(self, code: str, message: str) -> S3Error:
        """Make a copy with replaced code and message."""
        return type(self)(
            code=code,
            message=message,
            status_code=self.status_code,
            resource=self.resource,
            request_id=self.request_id,
            host_id=self.host_id,
            bucket_name=self.bucket_name,
            object_name=self.object_name,
            item_index=self.item_index,
        )

    def with_item_index(self, item_index: int) -> S3Error:
        """Make a copy bound to given caller item index."""
        return type(self)(
            code=self.code,
            message=self.message,
            status_code=self.status_code,
            resource=self.resource,
            request_id=self.request_id,
            host_id=self.host_id,
            bucket_name=self.bucket_name,
            object_name=self.object_name,
            item_index=item_index,
        )

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(code={self.code!r}, "
            f"message={self.message!r}, status_code={self.status_code!r}, "
            f"resource={self.resource!r}, request_id={self.request_id!r}, "
            f"host_id={self.host_id!r}, bucket_name={self.bucket_name!r}, "
            f"object_name={self.object_name!r}, "
            f"item_index={self.item_index!r})"
        )

    def __eq__(self, other):
        if not isinstance(other, S3Error):
            return NotImplemented
        return (
            self.code == other.code
            and self.message == other.message
            and self.status_code == other.status_code
            and self.resource == other.resource
            and self.request_id == other.request_id
            and self.host_id == other.host_id
            and self.bucket_name == other.bucket_name
            and self.object_name == other.object_name
        )

    def __hash__(self):
        return hash(
            (
                self.code,
                self.message,
                self.status_code,
                self.resource,
                self.request_id,
                self.host_id,
                self.bucket_name,
                self.object_name,
            )
        )


class IAMError(S3Error):
    """
    Raised to indicate that error response is received
    when executing IAM operation.
    """
    _PREFIX = "IAM operation failed"
