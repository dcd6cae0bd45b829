# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage, (C)
# 2020 MinIO, Inc.
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

"""Request/response of DeleteObjects API."""

from __future__ import absolute_import, annotations

from dataclasses import dataclass
from typing import Any, Optional, Type, TypeVar

from .xml import XmlNode, as_list, build_xml, findtext, findvalue


@dataclass(frozen=True)
class DeleteObject:
    """Delete object request information."""

    name: str
    version_id: Optional[str] = None

    def todict(self) -> dict[str, Any]:
        """Convert to XML encodable dictionary."""
        value = {"Key": self.name}
        if self.version_id is not None:
            value["VersionId"] = self.version_id
        return value


@dataclass(frozen=True)
class DeleteRequest:
    """Delete object request."""

    object_list: list[DeleteObject]
    quiet: bool = False

    def toxml(self) -> bytes:
        """Convert to XML."""
        return build_xml(
            "Delete",
            {
                "Object": [obj.todict() for obj in self.object_list],
                "Quiet": self.quiet,
            },
        )


A = TypeVar("A", bound="DeletedObject")


@dataclass(frozen=True)
class DeletedObject:
    """Deleted object information."""

    name: str
    version_id: Optional[str]
    delete_marker: bool
    delete_marker_version_id: Optional[str]

    @classmethod
    def fromdict(cls: Type[A], node: XmlNode) -> A:
        """Create new object with values from decoded XML node."""
        delete_marker = findtext(node, "DeleteMarker")
        return cls(
            name=findtext(node, "Key", True) or "",
            version_id=findtext(node, "VersionId"),
            delete_marker=(
                delete_marker is not None and delete_marker.lower() == "true"
            ),
            delete_marker_version_id=findtext(node, "DeleteMarkerVersionId"),
        )


B = TypeVar("B", bound="DeleteError")


@dataclass(frozen=True)
class DeleteError:
    """Delete error information."""

    code: str
    message: Optional[str]
    name: Optional[str]
    version_id: Optional[str]

    @classmethod
    def fromdict(cls: Type[B], node: XmlNode) -> B:
        """Create new object with values from decoded XML node."""
        return cls(
            code=findtext(node, "Code") or "UnknownError",
            message=findtext(node, "Message"),
            name=findtext(node, "Key"),
            version_id=findtext(node, "VersionId"),
        )


C = TypeVar("C", bound="DeleteResult")


@dataclass(frozen=True)
class DeleteResult:
    """Delete object result."""

    object_list: list[DeletedObject]
    error_list: list[DeleteError]

    @classmethod
    def fromdict(cls: Type[C], node: XmlNode) -> C:
        """Create new object with values from decoded XML node."""
        node = findvalue(node, "DeleteResult")
        if not isinstance(node, dict):
            node = {}
        # Both <Deleted> and <Error> repeat once per object.
        object_list = [
            DeletedObject.fromdict(tag)
            for tag in as_list(node.get("Deleted")) if isinstance(tag, dict)
        ]
        error_list = [
            DeleteError.fromdict(tag)
            for tag in as_list(node.get("Error")) if isinstance(tag, dict)
        ]
        return cls(object_list=object_list, error_list=error_list)
