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
from megas4.deleteobjects import DeleteObject

client = S4(
    access_key="YOUR-ACCESSKEYID",
    secret_key="YOUR-SECRETACCESSKEY",
    region="eu-central-1",
)

# Remove an object.
client.remove_object(bucket_name="my-bucket", object_name="my-object")

# Remove list of objects.
result = client.remove_objects(
    bucket_name="my-bucket",
    delete_object_list=[
        DeleteObject(name="my-object1"),
        DeleteObject(name="my-object2"),
        DeleteObject(
            name="my-object3",
            version_id="13f88b18-8dcd-4c83-88f2-8631fdb6250c",
        ),
    ],
)
for error in result.error_list:
    print("error occurred when deleting object", error)
