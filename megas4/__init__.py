# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage, (C)
# 2015, 2016, 2017 MinIO, Inc.
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
megas4 - Python SDK for Mega S4 object storage and its IAM API

    >>> from megas4 import S4
    >>> client = S4(
    ...     access_key="ACCESS-KEY",
    ...     secret_key="SECRET-KEY",
    ...     region="eu-central-1",
    ... )
    >>> result = client.list_buckets()
    >>> for bucket in result.buckets:
    ...     print(bucket.name, bucket.creation_date)

:license: Apache 2.0, see LICENSE for more details.
"""

__title__ = "megas4-py"
__author__ = "megas4 developers"
__version__ = "1.0.0"
__license__ = "Apache 2.0"

# pylint: disable=unused-import,useless-import-alias
from .api import S4 as S4
from .error import IAMError as IAMError
from .error import S3Error as S3Error
from .error import S4Exception as S4Exception
from .error import SigningError as SigningError
from .error import TransportError as TransportError
from .iam import IAM as IAM
