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

"""
Results of S3 and IAM operations.

Every operation returns its own result type. Decoded XML cannot tell a
single occurrence of a repeatable element from a required single element,
so each ``fromdict`` normalizes the fields it knows to be repeatable with
:func:`megas4.xml.as_list`.
"""

from __future__ import absolute_import, annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Type, TypeVar
from urllib.parse import unquote

from .helpers import format_bytes
from .time import from_http_header, from_iso8601utc
from .xml import XmlNode, as_list, findtext, findvalue


def _node(node: Any, path: str) -> XmlNode:
    """Get child node at path or empty node."""
    value = findvalue(node, path)
    return value if isinstance(value, dict) else {}


def _nodes(node: Any, path: str) -> list[XmlNode]:
    """Get repeatable child nodes at path."""
    return [
        value for value in as_list(findvalue(node, path))
        if isinstance(value, dict)
    ]


def _etag(value: Optional[str]) -> Optional[str]:
    return value.replace('"', "") if value else value


def _int(value: Optional[str]) -> Optional[int]:
    return int(value) if value else None


def _bool(value: Optional[str]) -> bool:
    return value is not None and value.lower() == "true"


@dataclass(frozen=True)
class Bucket:
    """Bucket information."""
    name: str
    creation_date: Optional[datetime]


A = TypeVar("A", bound="ListAllMyBucketsResult")


@dataclass(frozen=True)
class ListAllMyBucketsResult:
    """ListBuckets API result."""
    buckets: list[Bucket]
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None

    @classmethod
    def fromdict(cls: Type[A], node: XmlNode) -> A:
        """Create new object with values from decoded XML node."""
        node = _node(node, "ListAllMyBucketsResult")
        buckets = [
            Bucket(
                findtext(bucket, "Name", True) or "",
                from_iso8601utc(findtext(bucket, "CreationDate")),
            )
            for bucket in _nodes(node, "Buckets/Bucket")
        ]
        return cls(
            buckets=buckets,
            owner_id=findtext(node, "Owner/ID"),
            owner_name=findtext(node, "Owner/DisplayName"),
        )


B = TypeVar("B", bound="Object")


@dataclass(frozen=True)
class Object:
    """Object information."""
    bucket_name: str
    object_name: Optional[str]
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    size: Optional[int] = None
    storage_class: Optional[str] = None
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    is_dir: bool = field(default=False, init=False)

    def __post_init__(self):
        object.__setattr__(
            self,
            "is_dir",
            bool(self.object_name and self.object_name.endswith("/")),
        )

    @property
    def size_formatted(self) -> str:
        """Human readable size, e.g. 1.5 KB."""
        return format_bytes(self.size or 0)

    @classmethod
    def fromdict(cls: Type[B], node: XmlNode, bucket_name: str) -> B:
        """Create new object with values from decoded <Contents> node."""
        return cls(
            bucket_name=bucket_name,
            object_name=findtext(node, "Key", True),
            last_modified=from_iso8601utc(findtext(node, "LastModified")),
            etag=_etag(findtext(node, "ETag")),
            size=_int(findtext(node, "Size")),
            storage_class=findtext(node, "StorageClass"),
            owner_id=findtext(node, "Owner/ID"),
            owner_name=findtext(node, "Owner/DisplayName"),
        )


C = TypeVar("C", bound="ListObjectsResult")


@dataclass(frozen=True)
class ListObjectsResult:
    """ListObjectsV2 API result of one page."""
    bucket_name: str
    objects: list[Object]
    prefixes: list[str]
    is_truncated: bool = False
    continuation_token: Optional[str] = None
    key_count: Optional[int] = None

    @classmethod
    def fromdict(cls: Type[C], node: XmlNode, bucket_name: str) -> C:
        """Create new object with values from decoded XML node."""
        node = _node(node, "ListBucketResult")
        bucket_name = findtext(node, "Name") or bucket_name
        objects = [
            Object.fromdict(tag, bucket_name)
            for tag in _nodes(node, "Contents")
        ]
        prefixes = [
            findtext(tag, "Prefix") or ""
            for tag in _nodes(node, "CommonPrefixes")
        ]
        return cls(
            bucket_name=bucket_name,
            objects=objects,
            prefixes=prefixes,
            is_truncated=_bool(findtext(node, "IsTruncated")),
            continuation_token=findtext(node, "NextContinuationToken"),
            key_count=_int(findtext(node, "KeyCount")),
        )


D = TypeVar("D", bound="ObjectStat")


@dataclass(frozen=True)
class ObjectStat:
    """Object metadata returned by HeadObject and GetObject."""
    bucket_name: str
    object_name: str
    size: Optional[int] = None
    etag: Optional[str] = None
    content_type: Optional[str] = None
    last_modified: Optional[datetime] = None
    version_id: Optional[str] = None
    storage_class: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def size_formatted(self) -> str:
        """Human readable size, e.g. 1.5 KB."""
        return format_bytes(self.size or 0)

    @classmethod
    def fromheaders(
            cls: Type[D],
            bucket_name: str,
            object_name: str,
            headers: Mapping[str, str],
    ) -> D:
        """Create new object with values from HTTP response headers."""
        last_modified = headers.get("last-modified")
        metadata = {
            key.lower()[len("x-amz-meta-"):]: value
            for key, value in headers.items()
            if key.lower().startswith("x-amz-meta-")
        }
        return cls(
            bucket_name=bucket_name,
            object_name=object_name,
            size=_int(headers.get("content-length")),
            etag=_etag(headers.get("etag")),
            content_type=headers.get("content-type"),
            last_modified=(
                from_http_header(last_modified) if last_modified else None
            ),
            version_id=headers.get("x-amz-version-id"),
            storage_class=headers.get("x-amz-storage-class"),
            metadata=metadata,
        )


@dataclass(frozen=True)
class GetObjectResult:
    """GetObject API result."""
    stat: ObjectStat
    data: bytes


@dataclass(frozen=True)
class NotModified:
    """Conditional read answered with 304 Not Modified."""
    bucket_name: str
    object_name: str
    etag: Optional[str] = None


@dataclass(frozen=True)
class ObjectWriteResult:
    """Result of any API creating an object or a part."""
    bucket_name: str
    object_name: str
    etag: Optional[str] = None
    version_id: Optional[str] = None
    last_modified: Optional[datetime] = None


@dataclass(frozen=True)
class RemoveObjectResult:
    """DeleteObject API result."""
    bucket_name: str
    object_name: str
    delete_marker: bool = False
    version_id: Optional[str] = None


E = TypeVar("E", bound="Part")


@dataclass(frozen=True)
class Part:
    """Part information of a multipart upload."""
    part_number: int
    etag: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None

    @classmethod
    def fromdict(cls: Type[E], node: XmlNode) -> E:
        """Create new object with values from decoded XML node."""
        return cls(
            part_number=int(findtext(node, "PartNumber", True) or 0),
            etag=_etag(findtext(node, "ETag", True)) or "",
            last_modified=from_iso8601utc(findtext(node, "LastModified")),
            size=_int(findtext(node, "Size")),
        )

    @property
    def size_formatted(self) -> str:
        """Human readable size, e.g. 1.5 KB."""
        return format_bytes(self.size or 0)

    def todict(self) -> dict[str, Any]:
        """Convert to <Part> of CompleteMultipartUpload request."""
        return {"PartNumber": self.part_number, "ETag": self.etag}


F = TypeVar("F", bound="ListPartsResult")


@dataclass(frozen=True)
class ListPartsResult:
    """ListParts API result."""
    bucket_name: Optional[str] = None
    object_name: Optional[str] = None
    upload_id: Optional[str] = None
    storage_class: Optional[str] = None
    part_number_marker: Optional[str] = None
    next_part_number_marker: Optional[str] = None
    max_parts: Optional[int] = None
    is_truncated: bool = False
    parts: list[Part] = field(default_factory=list)

    @classmethod
    def fromdict(cls: Type[F], node: XmlNode) -> F:
        """Create new object with values from decoded XML node."""
        node = _node(node, "ListPartsResult")
        return cls(
            bucket_name=findtext(node, "Bucket"),
            object_name=findtext(node, "Key"),
            upload_id=findtext(node, "UploadId"),
            storage_class=findtext(node, "StorageClass"),
            part_number_marker=findtext(node, "PartNumberMarker"),
            next_part_number_marker=findtext(node, "NextPartNumberMarker"),
            max_parts=_int(findtext(node, "MaxParts")),
            is_truncated=_bool(findtext(node, "IsTruncated")),
            parts=[Part.fromdict(tag) for tag in _nodes(node, "Part")],
        )


G = TypeVar("G", bound="CompleteMultipartUploadResult")


@dataclass(frozen=True)
class CompleteMultipartUploadResult:
    """CompleteMultipartUpload API result."""
    bucket_name: Optional[str] = None
    object_name: Optional[str] = None
    location: Optional[str] = None
    etag: Optional[str] = None
    version_id: Optional[str] = None

    @classmethod
    def fromdict(
            cls: Type[G],
            node: XmlNode,
            version_id: Optional[str] = None,
    ) -> G:
        """Create new object with values from decoded XML node."""
        node = _node(node, "CompleteMultipartUploadResult")
        return cls(
            bucket_name=findtext(node, "Bucket"),
            object_name=findtext(node, "Key"),
            location=findtext(node, "Location"),
            etag=_etag(findtext(node, "ETag")),
            version_id=version_id,
        )


L = TypeVar("L", bound="Upload")


@dataclass(frozen=True)
class Upload:
    """Information of an in-progress multipart upload."""
    object_name: str
    upload_id: Optional[str] = None
    initiated_time: Optional[datetime] = None
    storage_class: Optional[str] = None
    initiator_id: Optional[str] = None
    initiator_name: Optional[str] = None
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None

    @classmethod
    def fromdict(cls: Type[L], node: XmlNode) -> L:
        """Create new object with values from decoded <Upload> node."""
        return cls(
            object_name=findtext(node, "Key", True) or "",
            upload_id=findtext(node, "UploadId"),
            initiated_time=from_iso8601utc(findtext(node, "Initiated")),
            storage_class=findtext(node, "StorageClass"),
            initiator_id=findtext(node, "Initiator/ID"),
            initiator_name=findtext(node, "Initiator/DisplayName"),
            owner_id=findtext(node, "Owner/ID"),
            owner_name=findtext(node, "Owner/DisplayName"),
        )


M = TypeVar("M", bound="ListMultipartUploadsResult")


@dataclass(frozen=True)
class ListMultipartUploadsResult:
    """ListMultipartUploads API result of one page."""
    bucket_name: Optional[str] = None
    key_marker: Optional[str] = None
    upload_id_marker: Optional[str] = None
    next_key_marker: Optional[str] = None
    next_upload_id_marker: Optional[str] = None
    max_uploads: Optional[int] = None
    is_truncated: bool = False
    uploads: list[Upload] = field(default_factory=list)

    @classmethod
    def fromdict(cls: Type[M], node: XmlNode) -> M:
        """Create new object with values from decoded XML node."""
        node = _node(node, "ListMultipartUploadsResult")
        return cls(
            bucket_name=findtext(node, "Bucket"),
            key_marker=findtext(node, "KeyMarker"),
            upload_id_marker=findtext(node, "UploadIdMarker"),
            next_key_marker=findtext(node, "NextKeyMarker"),
            next_upload_id_marker=findtext(node, "NextUploadIdMarker"),
            max_uploads=_int(findtext(node, "MaxUploads")),
            is_truncated=_bool(findtext(node, "IsTruncated")),
            uploads=[Upload.fromdict(tag) for tag in _nodes(node, "Upload")],
        )


N = TypeVar("N", bound="Grant")


@dataclass(frozen=True)
class Grant:
    """
    Grant of an access control list.

    Exactly one of grantee ID, URI or email address is usually set,
    depending on whether the grantee is a canonical user, a group or an
    email identified account.
    """
    permission: Optional[str]
    grantee_id: Optional[str] = None
    grantee_name: Optional[str] = None
    grantee_uri: Optional[str] = None
    grantee_email: Optional[str] = None

    @classmethod
    def fromdict(cls: Type[N], node: XmlNode) -> N:
        """Create new object with values from decoded <Grant> node."""
        return cls(
            permission=findtext(node, "Permission"),
            grantee_id=findtext(node, "Grantee/ID"),
            grantee_name=findtext(node, "Grantee/DisplayName"),
            grantee_uri=findtext(node, "Grantee/URI"),
            grantee_email=findtext(node, "Grantee/EmailAddress"),
        )


P = TypeVar("P", bound="AccessControlPolicy")


@dataclass(frozen=True)
class AccessControlPolicy:
    """GetBucketAcl and GetObjectAcl API result."""
    bucket_name: str
    object_name: Optional[str] = None
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    grants: list[Grant] = field(default_factory=list)

    @classmethod
    def fromdict(
            cls: Type[P],
            node: XmlNode,
            bucket_name: str,
            object_name: Optional[str] = None,
    ) -> P:
        """Create new object with values from decoded XML node."""
        node = _node(node, "AccessControlPolicy")
        return cls(
            bucket_name=bucket_name,
            object_name=object_name,
            owner_id=findtext(node, "Owner/ID"),
            owner_name=findtext(node, "Owner/DisplayName"),
            grants=[
                Grant.fromdict(tag)
                for tag in _nodes(node, "AccessControlList/Grant")
            ],
        )


H = TypeVar("H", bound="Policy")


@dataclass(frozen=True)
class Policy:
    """IAM managed policy information."""
    policy_name: Optional[str]
    arn: Optional[str]
    policy_id: Optional[str] = None
    path: Optional[str] = None
    default_version_id: Optional[str] = None
    attachment_count: int = 0
    is_attachable: bool = False
    description: Optional[str] = None
    create_date: Optional[datetime] = None
    update_date: Optional[datetime] = None

    @classmethod
    def fromdict(cls: Type[H], node: XmlNode) -> H:
        """Create new object with values from decoded <Policy> node."""
        return cls(
            policy_name=findtext(node, "PolicyName"),
            arn=findtext(node, "Arn"),
            policy_id=findtext(node, "PolicyId"),
            path=findtext(node, "Path"),
            default_version_id=findtext(node, "DefaultVersionId"),
            attachment_count=_int(findtext(node, "AttachmentCount")) or 0,
            is_attachable=_bool(findtext(node, "IsAttachable")),
            description=findtext(node, "Description"),
            create_date=from_iso8601utc(findtext(node, "CreateDate")),
            update_date=from_iso8601utc(findtext(node, "UpdateDate")),
        )


I = TypeVar("I", bound="PolicyVersion")


@dataclass(frozen=True)
class PolicyVersion:
    """IAM policy version; the document is URL decoded JSON text."""
    version_id: Optional[str]
    document: Optional[str] = None
    is_default_version: bool = False
    create_date: Optional[datetime] = None

    @classmethod
    def fromdict(cls: Type[I], node: XmlNode) -> I:
        """Create new object with values from decoded XML node."""
        node = _node(
            node, "GetPolicyVersionResponse/GetPolicyVersionResult/"
            "PolicyVersion",
        )
        document = findtext(node, "Document")
        return cls(
            version_id=findtext(node, "VersionId"),
            document=unquote(document) if document else document,
            is_default_version=_bool(findtext(node, "IsDefaultVersion")),
            create_date=from_iso8601utc(findtext(node, "CreateDate")),
        )


J = TypeVar("J", bound="ListPoliciesResult")


@dataclass(frozen=True)
class ListPoliciesResult:
    """ListPolicies API result."""
    policies: list[Policy]
    is_truncated: bool = False
    marker: Optional[str] = None

    @classmethod
    def fromdict(cls: Type[J], node: XmlNode) -> J:
        """Create new object with values from decoded XML node."""
        node = _node(node, "ListPoliciesResponse/ListPoliciesResult")
        return cls(
            policies=[
                Policy.fromdict(tag)
                for tag in _nodes(node, "Policies/member")
            ],
            is_truncated=_bool(findtext(node, "IsTruncated")),
            marker=findtext(node, "Marker"),
        )


@dataclass(frozen=True)
class AttachedPolicy:
    """Policy attached to an IAM user or group."""
    policy_name: Optional[str]
    policy_arn: Optional[str]


K = TypeVar("K", bound="ListAttachedPoliciesResult")


@dataclass(frozen=True)
class ListAttachedPoliciesResult:
    """ListAttachedUserPolicies/ListAttachedGroupPolicies API result."""
    attached_policies: list[AttachedPolicy]
    is_truncated: bool = False
    marker: Optional[str] = None

    @classmethod
    def fromdict(cls: Type[K], node: XmlNode) -> K:
        """Create new object with values from decoded XML node."""
        # Root element is named after the action; there is only one.
        response = next(iter(node.values()), {}) if node else {}
        result = next(
            (
                value for key, value in (
                    response.items() if isinstance(response, dict) else []
                )
                if key.endswith("Result") and isinstance(value, dict)
            ),
            {},
        )
        return cls(
            attached_policies=[
                AttachedPolicy(
                    findtext(tag, "PolicyName"), findtext(tag, "PolicyArn"),
                )
                for tag in _nodes(result, "AttachedPolicies/member")
            ],
            is_truncated=_bool(findtext(result, "IsTruncated")),
            marker=findtext(result, "Marker"),
        )
