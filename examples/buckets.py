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

# Create bucket unless it exists.
if not client.bucket_exists(bucket_name="my-bucket"):
    client.make_bucket(bucket_name="my-bucket")

result = client.list_buckets()
for bucket in result.buckets:
    print(bucket.name, bucket.creation_date)

print("location", client.get_bucket_location(bucket_name="my-bucket"))
