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
Date and time conversions used by S4 requests and responses.

All parsed values are timezone aware in UTC. Naive values passed for
formatting are taken to be UTC already.
"""

from __future__ import absolute_import, annotations

import re
from datetime import datetime, timezone

_WEEK_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# IMF-fixdate of RFC 7231, e.g. "Mon, 02 Mar 2015 07:28:00 GMT".
_HTTP_DATE_REGEX = re.compile(
    rf"({'|'.join(_WEEK_DAYS)}), (\d{{2}}) ({'|'.join(_MONTHS)}) "
    r"(\d{4}) (\d{2}):(\d{2}):(\d{2}) GMT",
)
_ISO8601_FORMATS = ("%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%dT%H:%M:%SZ")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_iso8601utc(value: str | None) -> datetime | None:
    """Parse S3 timestamp like ``2024-01-02T03:04:05.000Z``."""
    if value is None:
        return None
    for fmt in _ISO8601_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise ValueError(f"time data {value} does not match ISO-8601 UTC format")


def from_http_header(value: str) -> datetime:
    """Parse HTTP date header value; the weekday must match the date."""
    match = _HTTP_DATE_REGEX.fullmatch(value)
    if not match:
        raise ValueError(
            f"time data {value} does not match HTTP header format",
        )
    weekday, day, month, year, hour, minute, second = match.groups()
    parsed = datetime(
        int(year), _MONTHS.index(month) + 1, int(day),
        int(hour), int(minute), int(second),
        tzinfo=timezone.utc,
    )
    if _WEEK_DAYS[parsed.weekday()] != weekday:
        raise ValueError(
            f"time data {value} does not match HTTP header format",
        )
    return parsed


def to_http_header(value: datetime) -> str:
    """Format datetime as HTTP date header value, independent of locale."""
    value = _as_utc(value)
    return (
        f"{_WEEK_DAYS[value.weekday()]}, {value.day:02d} "
        f"{_MONTHS[value.month - 1]} {value.year:04d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d} GMT"
    )


def to_amz_date(value: datetime) -> str:
    """Format datetime as ``x-amz-date`` value, e.g. 20150830T123600Z."""
    value = _as_utc(value)
    return f"{to_signer_date(value)}T{value:%H%M%S}Z"


def to_signer_date(value: datetime) -> str:
    """Format date part of credential scope, e.g. 20150830."""
    value = _as_utc(value)
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def utcnow() -> datetime:
    """Get current time in UTC."""
    return datetime.now(timezone.utc)
