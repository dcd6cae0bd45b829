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

"""Credential providers."""

from __future__ import annotations

import os
from abc import ABCMeta, abstractmethod
from typing import cast

from ..helpers import DEFAULT_REGION
from .credentials import Credentials

_TRUE_VALUES = ("1", "true", "yes", "on")


class Provider(metaclass=ABCMeta):  # pylint: disable=too-few-public-methods
    """Credential retriever."""

    @abstractmethod
    def retrieve(self) -> Credentials:
        """Retrieve credentials."""


class ChainedProvider(Provider):
    """Chained credential provider."""

    def __init__(self, providers: list[Provider]):
        self._providers = providers
        self._provider: Provider | None = None

    def retrieve(self) -> Credentials:
        """Retrieve credentials from one of available provider."""
        if self._provider:
            try:
                return self._provider.retrieve()
            except ValueError:
                # Ignore this error and iterate other providers.
                pass

        for provider in self._providers:
            try:
                credentials = provider.retrieve()
                self._provider = provider
                return credentials
            except ValueError:
                # Ignore this error and iterate other providers.
                pass

        raise ValueError("All providers fail to fetch credentials")


class EnvAWSProvider(Provider):
    """Credential provider from AWS environment variables."""

    def retrieve(self) -> Credentials:
        """Retrieve credentials."""
        return Credentials(
            access_key=(
                cast(
                    str,
                    os.environ.get("AWS_ACCESS_KEY_ID") or
                    os.environ.get("AWS_ACCESS_KEY"),
                )
            ),
            secret_key=(
                cast(
                    str,
                    os.environ.get("AWS_SECRET_ACCESS_KEY") or
                    os.environ.get("AWS_SECRET_KEY"),
                )
            ),
            region=(
                os.environ.get("AWS_REGION") or
                os.environ.get("AWS_DEFAULT_REGION") or
                DEFAULT_REGION
            ),
        )


class EnvS4Provider(Provider):
    """Credential provider from S4 environment variables."""

    def retrieve(self) -> Credentials:
        """Retrieve credentials."""
        force_path_style = os.environ.get("S4_FORCE_PATH_STYLE")
        return Credentials(
            access_key=os.environ.get("S4_ACCESS_KEY_ID") or "",
            secret_key=os.environ.get("S4_SECRET_ACCESS_KEY") or "",
            region=os.environ.get("S4_REGION") or DEFAULT_REGION,
            custom_endpoint=os.environ.get("S4_ENDPOINT"),
            force_path_style=(
                force_path_style is None or
                force_path_style.strip().lower() in _TRUE_VALUES
            ),
        )


class StaticProvider(Provider):
    """Fixed credential provider."""

    def __init__(
            self,
            access_key: str,
            secret_key: str,
            region: str = DEFAULT_REGION,
            custom_endpoint: str | None = None,
            force_path_style: bool = True,
    ):
        self._credentials = Credentials(
            access_key,
            secret_key,
            region,
            custom_endpoint,
            force_path_style,
        )

    def retrieve(self) -> Credentials:
        """Return passed credentials."""
        return self._credentials
