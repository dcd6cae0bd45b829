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

from megas4 import S4

client = S4(
    access_key="YOUR-ACCESSKEYID",
    secret_key="YOUR-SECRETACCESSKEY",
    region="eu-central-1",
)

upload_id = client.create_multipart_upload(
    bucket_name="my-bucket",
    object_name="my-object",
)
try:
    parts = []
    for part_number, data in enumerate(
            [b"a" * 5 * 1024 * 1024, b"b" * 1024], start=1,
    ):
        parts.append(
            client.upload_part(
                bucket_name="my-bucket",
                object_name="my-object",
                upload_id=upload_id,
                part_number=part_number,
                data=data,
            ),
        )
    result = client.complete_multipart_upload(
        bucket_name="my-bucket",
        object_name="my-object",
        upload_id=upload_id,
        parts=parts,
    )
    print(f"created {result.object_name} object; etag: {result.etag}")
except Exception:
    client.abort_multipart_upload(
        bucket_name="my-bucket",
        object_name="my-object",
        upload_id=upload_id,
    )
    raise
