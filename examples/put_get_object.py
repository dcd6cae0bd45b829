# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage,
# (C) 2024 MinIO, Inc.
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

from megas4 import S4
from megas4.datatypes import NotModified

client = S4(
    access_key="YOUR-ACCESSKEYID",
    secret_key="YOUR-SECRETACCESSKEY",
    region="eu-central-1",
)

# Upload data with user metadata.
result = client.put_object(
    bucket_name="my-bucket",
    object_name="my-object",
    data=b"hello",
    content_type="text/plain",
    metadata={"owner": "alice"},
)
print(
    f"created {result.object_name} object; etag: {result.etag}, "
    f"version-id: {result.version_id}",
)

# Get data of an object.
result = client.get_object(bucket_name="my-bucket", object_name="my-object")
print(result.stat.size, result.stat.metadata, result.data)

# Get data of an object only if it changed since last read.
result = client.get_object(
    bucket_name="my-bucket",
    object_name="my-object",
    not_match_etag=result.stat.etag,
    modified_since=datetime(2024, 1, 1, tzinfo=timezone.utc),
)
if isinstance(result, NotModified):
    print("object is not modified")

# Get object information.
stat = client.stat_object(bucket_name="my-bucket", object_name="my-object")
print(stat.etag, stat.content_type, stat.last_modified)

# Copy an object with replaced metadata.
result = client.copy_object(
    bucket_name="my-bucket",
    object_name="my-copy",
    source_bucket_name="my-bucket",
    source_object_name="my-object",
    metadata_directive="REPLACE",
    metadata={"owner": "bob"},
)
print(result.etag, result.last_modified)
