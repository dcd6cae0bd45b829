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

import json

from megas4 import IAM
from megas4.credentials import ChainedProvider, EnvAWSProvider, EnvS4Provider

iam = IAM(credentials=ChainedProvider([EnvS4Provider(), EnvAWSProvider()]))

policy_arn = "arn:aws:iam::123456789012:policy/read-only"

policy = iam.get_policy(policy_arn)
print(policy.policy_name, policy.default_version_id, policy.attachment_count)

version = iam.get_policy_version(policy_arn, policy.default_version_id)
print(json.loads(version.document))

marker = None
while True:
    result = iam.list_policies(scope="Local", marker=marker)
    for item in result.policies:
        print(item.policy_name, item.arn)
    if not result.is_truncated:
        break
    marker = result.marker

iam.attach_user_policy("alice", policy_arn)
for attached in iam.list_attached_user_policies("alice").attached_policies:
    print(attached.policy_name, attached.policy_arn)

if not iam.detach_user_policy("alice", policy_arn):
    print("policy was not attached")
