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
from unittest import TestCase

from urllib3._collections import HTTPHeaderDict

from megas4.datatypes import (CompleteMultipartUploadResult,
                              ListAllMyBucketsResult,
                              ListAttachedPoliciesResult, ListObjectsResult,
                              ListPartsResult, ListPoliciesResult,
                              ObjectStat, Policy, PolicyVersion)
from megas4.deleteobjects import DeleteObject, DeleteRequest, DeleteResult
from megas4.xml import parse_xml


class ListObjectsResultTest(TestCase):
    def test_single_object_is_list(self):
        result = ListObjectsResult.fromdict(parse_xml("""
<ListBucketResult xmlns="http://s3.amazonaws.com/doc/2006-03-01/">
  <Name>bucket</Name>
  <KeyCount>1</KeyCount>
  <IsTruncated>true</IsTruncated>
  <NextContinuationToken>token</NextContinuationToken>
  <Contents>
    <Key>a/b.txt</Key>
    <LastModified>2016-11-27T07:55:53.000Z</LastModified>
    <ETag>&quot;5d5512301b6b6e247b8aec334b2cf7ea&quot;</ETag>
    <Size>493</Size>
    <StorageClass>STANDARD</StorageClass>
  </Contents>
  <CommonPrefixes><Prefix>c/</Prefix></CommonPrefixes>
</ListBucketResult>"""), "bucket")
        self.assertEqual(len(result.objects), 1)
        obj = result.objects[0]
        self.assertEqual(obj.bucket_name, "bucket")
        self.assertEqual(obj.object_name, "a/b.txt")
        self.assertEqual(obj.etag, "5d5512301b6b6e247b8aec334b2cf7ea")
        self.assertEqual(obj.size, 493)
        self.assertEqual(obj.size_formatted, "493 Bytes")
        self.assertEqual(
            obj.last_modified,
            datetime(2016, 11, 27, 7, 55, 53, tzinfo=timezone.utc),
        )
        self.assertFalse(obj.is_dir)
        self.assertEqual(result.prefixes, ["c/"])
        self.assertTrue(result.is_truncated)
        self.assertEqual(result.continuation_token, "token")
        self.assertEqual(result.key_count, 1)

    def test_empty(self):
        result = ListObjectsResult.fromdict(parse_xml(
            "<ListBucketResult><Name>bucket</Name><KeyCount>0</KeyCount>"
            "<IsTruncated>false</IsTruncated></ListBucketResult>",
        ), "bucket")
        self.assertEqual(result.objects, [])
        self.assertEqual(result.prefixes, [])
        self.assertFalse(result.is_truncated)
        self.assertIsNone(result.continuation_token)


class ListAllMyBucketsResultTest(TestCase):
    def test_buckets(self):
        result = ListAllMyBucketsResult.fromdict(parse_xml(
            "<ListAllMyBucketsResult><Owner><ID>owner</ID>"
            "<DisplayName>name</DisplayName></Owner><Buckets>"
            "<Bucket><Name>a</Name>"
            "<CreationDate>2024-01-02T03:04:05.000Z</CreationDate></Bucket>"
            "<Bucket><Name>b</Name></Bucket>"
            "</Buckets></ListAllMyBucketsResult>",
        ))
        self.assertEqual([bucket.name for bucket in result.buckets],
                         ["a", "b"])
        self.assertEqual(
            result.buckets[0].creation_date,
            datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )
        self.assertIsNone(result.buckets[1].creation_date)
        self.assertEqual(result.owner_id, "owner")
        self.assertEqual(result.owner_name, "name")

    def test_no_buckets(self):
        result = ListAllMyBucketsResult.fromdict(parse_xml(
            "<ListAllMyBucketsResult><Buckets/></ListAllMyBucketsResult>",
        ))
        self.assertEqual(result.buckets, [])


class ObjectStatTest(TestCase):
    def test_fromheaders(self):
        stat = ObjectStat.fromheaders("bucket", "object", HTTPHeaderDict({
            "Content-Length": "11",
            "ETag": '"abc"',
            "Content-Type": "text/plain",
            "Last-Modified": "Mon, 02 Mar 2015 07:28:00 GMT",
            "x-amz-version-id": "v1",
            "X-Amz-Meta-Owner": "alice",
        }))
        self.assertEqual(stat.size, 11)
        self.assertEqual(stat.etag, "abc")
        self.assertEqual(stat.content_type, "text/plain")
        self.assertEqual(
            stat.last_modified,
            datetime(2015, 3, 2, 7, 28, tzinfo=timezone.utc),
        )
        self.assertEqual(stat.version_id, "v1")
        self.assertEqual(stat.metadata, {"owner": "alice"})
        self.assertEqual(stat.size_formatted, "11 Bytes")

    def test_size_formatted_without_size(self):
        stat = ObjectStat.fromheaders("bucket", "object", HTTPHeaderDict())
        self.assertIsNone(stat.size)
        self.assertEqual(stat.size_formatted, "0 Bytes")


class MultipartResultTest(TestCase):
    def test_list_parts(self):
        result = ListPartsResult.fromdict(parse_xml(
            "<ListPartsResult><Bucket>bucket</Bucket><Key>object</Key>"
            "<UploadId>upload</UploadId><MaxParts>1000</MaxParts>"
            "<IsTruncated>false</IsTruncated><Part>"
            "<PartNumber>1</PartNumber><ETag>&quot;e1&quot;</ETag>"
            "<Size>5242880</Size></Part></ListPartsResult>",
        ))
        self.assertEqual(result.upload_id, "upload")
        self.assertEqual(result.max_parts, 1000)
        self.assertEqual(len(result.parts), 1)
        self.assertEqual(result.parts[0].part_number, 1)
        self.assertEqual(result.parts[0].etag, "e1")
        self.assertEqual(result.parts[0].size, 5242880)
        self.assertEqual(result.parts[0].size_formatted, "5 MB")

    def test_complete(self):
        result = CompleteMultipartUploadResult.fromdict(parse_xml(
            "<CompleteMultipartUploadResult><Location>loc</Location>"
            "<Bucket>bucket</Bucket><Key>object</Key>"
            "<ETag>&quot;e-2&quot;</ETag></CompleteMultipartUploadResult>",
        ), "v1")
        self.assertEqual(result.bucket_name, "bucket")
        self.assertEqual(result.etag, "e-2")
        self.assertEqual(result.version_id, "v1")


class DeleteObjectsTest(TestCase):
    def test_request(self):
        body = DeleteRequest(
            [DeleteObject("a"), DeleteObject("b", "v1")], True,
        ).toxml()
        self.assertEqual(
            body,
            b'<?xml version="1.0" encoding="UTF-8"?><Delete>'
            b'<Object><Key>a</Key></Object>'
            b'<Object><Key>b</Key><VersionId>v1</VersionId></Object>'
            b'<Quiet>true</Quiet></Delete>',
        )

    def test_result_with_single_error(self):
        result = DeleteResult.fromdict(parse_xml(
            "<DeleteResult><Deleted><Key>a</Key>"
            "<DeleteMarker>true</DeleteMarker></Deleted>"
            "<Deleted><Key>b</Key></Deleted>"
            "<Error><Key>c</Key><Code>AccessDenied</Code>"
            "<Message>Access Denied</Message></Error></DeleteResult>",
        ))
        self.assertEqual([obj.name for obj in result.object_list], ["a", "b"])
        self.assertTrue(result.object_list[0].delete_marker)
        self.assertFalse(result.object_list[1].delete_marker)
        self.assertEqual(len(result.error_list), 1)
        self.assertEqual(result.error_list[0].code, "AccessDenied")
        self.assertEqual(result.error_list[0].name, "c")


class PolicyResultTest(TestCase):
    def test_policy(self):
        policy = Policy.fromdict(parse_xml(
            "<Policy><PolicyName>read-only</PolicyName>"
            "<Arn>arn:aws:iam::123456789012:policy/read-only</Arn>"
            "<DefaultVersionId>v2</DefaultVersionId>"
            "<AttachmentCount>3</AttachmentCount>"
            "<IsAttachable>true</IsAttachable>"
            "<CreateDate>2024-01-02T03:04:05Z</CreateDate></Policy>",
        )["Policy"])
        self.assertEqual(policy.policy_name, "read-only")
        self.assertEqual(policy.default_version_id, "v2")
        self.assertEqual(policy.attachment_count, 3)
        self.assertTrue(policy.is_attachable)
        self.assertEqual(
            policy.create_date,
            datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )

    def test_policy_version_document_is_decoded(self):
        version = PolicyVersion.fromdict(parse_xml(
            "<GetPolicyVersionResponse><GetPolicyVersionResult>"
            "<PolicyVersion><VersionId>v1</VersionId>"
            "<IsDefaultVersion>true</IsDefaultVersion>"
            "<Document>%7B%22Version%22%3A%222012-10-17%22%7D</Document>"
            "</PolicyVersion></GetPolicyVersionResult>"
            "</GetPolicyVersionResponse>",
        ))
        self.assertEqual(version.version_id, "v1")
        self.assertTrue(version.is_default_version)
        self.assertEqual(version.document, '{"Version":"2012-10-17"}')

    def test_list_policies_single_member(self):
        result = ListPoliciesResult.fromdict(parse_xml(
            "<ListPoliciesResponse><ListPoliciesResult>"
            "<IsTruncated>true</IsTruncated><Marker>m1</Marker>"
            "<Policies><member><PolicyName>p1</PolicyName></member>"
            "</Policies></ListPoliciesResult></ListPoliciesResponse>",
        ))
        self.assertEqual([p.policy_name for p in result.policies], ["p1"])
        self.assertTrue(result.is_truncated)
        self.assertEqual(result.marker, "m1")

    def test_list_attached_policies(self):
        result = ListAttachedPoliciesResult.fromdict(parse_xml(
            "<ListAttachedGroupPoliciesResponse>"
            "<ListAttachedGroupPoliciesResult><AttachedPolicies>"
            "<member><PolicyName>a</PolicyName><PolicyArn>arn-a</PolicyArn>"
            "</member><member><PolicyName>b</PolicyName>"
            "<PolicyArn>arn-b</PolicyArn></member></AttachedPolicies>"
            "<IsTruncated>false</IsTruncated>"
            "</ListAttachedGroupPoliciesResult>"
            "<ResponseMetadata><RequestId>r</RequestId></ResponseMetadata>"
            "</ListAttachedGroupPoliciesResponse>",
        ))
        self.assertEqual(
            [(p.policy_name, p.policy_arn) for p in result.attached_policies],
            [("a", "arn-a"), ("b", "arn-b")],
        )
        self.assertFalse(result.is_truncated)
