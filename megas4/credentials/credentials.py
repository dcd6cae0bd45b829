# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage,
# (C) 2020 MinIO, Inc.
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

"""Credential definitions to access S4 service."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..helpers import DEFAULT_REGION, check_region


@dataclass(frozen=True)
class Credentials:
    """
    Represents access key, secret key and the endpoint settings they are
    valid for.
    """

    access_key: str
    secret_key: str = field(repr=False)
    region: str = DEFAULT_REGION
    custom_endpoint: Optional[str] = None
    force_path_style: bool = True

    def __post_init__(self):
        if not self.access_key:
            raise ValueError("Access key must not be empty")

        if not self.secret_key:
            raise ValueError("Secret key must not be empty")

        if not self.region:
            object.__setattr__(self, "region", DEFAULT_REGION)
        check_region(self.region)

        if not self.custom_endpoint:
            object.__setattr__(self, "custom_endpoint", None)
