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

import sys

import urllib3

from megas4 import S4, S3Error, TransportError

# Retry idempotent requests on transient failures.
client = S4(
    access_key="YOUR-ACCESSKEYID",
    secret_key="YOUR-SECRETACCESSKEY",
    region="eu-central-1",
    http_client=urllib3.PoolManager(
        retries=urllib3.Retry(
            total=5,
            backoff_factor=0.2,
            status_forcelist=[500, 502, 503, 504],
        ),
    ),
)
client.trace_on(sys.stderr)

for index, name in enumerate(["a.txt", "b.txt", "missing.txt"]):
    try:
        stat = client.stat_object("my-bucket", name, item_index=index)
        print(name, stat.size)
    except S3Error as exc:
        print(f"item {exc.item_index} failed with {exc.code}")
    except TransportError as exc:
        print("network failure", exc.reason)
