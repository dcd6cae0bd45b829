# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage,
# (C) 2021 MinIO, Inc.
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

# pylint: disable=too-many-arguments
# pylint: disable=too-many-positional-arguments

"""Mega S4 IAM client to manage managed policies of users and groups."""

from __future__ import absolute_import, annotations

import os
from datetime import timedelta
from typing import Any, Optional, TextIO

import certifi
import urllib3

try:
    from urllib3.response import BaseHTTPResponse  # type: ignore[attr-defined]
except ImportError:
    from urllib3.response import HTTPResponse as BaseHTTPResponse

from urllib3.util import Timeout

from .credentials import Provider, StaticProvider
from .datatypes import (ListAttachedPoliciesResult, ListPoliciesResult, Policy,
                        PolicyVersion)
from .error import IAMError, TransportError
from .helpers import (_DEFAULT_USER_AGENT, BaseURL, check_iam_name,
                      check_policy_arn, get_iam_endpoint, headers_to_strings,
                      safe_str)
from .request import build_iam_request, check_response
from .xml import findvalue, parse_xml

_POLICY_SCOPES = ("All", "AWS", "Local")


class IAM:
    """
    Client for the form POST based IAM API of Mega S4.

    Requests are signed with AWS Signature Version 4 for service ``iam``.
    Failures raise :class:`IAMError`.
    """

    def __init__(
            self,
            endpoint: Optional[str] = None,
            access_key: Optional[str] = None,
            secret_key: Optional[str] = None,
            region: Optional[str] = None,
            secure: bool = True,
            http_client: Optional[urllib3.PoolManager] = None,
            credentials: Optional[Provider] = None,
            cert_check: bool = True,
    ):
        if http_client and not isinstance(http_client, urllib3.PoolManager):
            raise TypeError(
                "HTTP client should be urllib3.PoolManager like object, "
                f"got {type(http_client).__name__}",
            )

        if access_key:
            if not secret_key:
                raise ValueError("secret key must be provided with access key")
            credentials = StaticProvider(access_key, secret_key, region or "")
        if credentials is None:
            raise ValueError(
                "access key and secret key or credentials provider must be "
                "provided",
            )

        # IAM does not honor custom S3 endpoint of credentials.
        self._base_url = BaseURL(
            endpoint or get_iam_endpoint(credentials.retrieve().region),
            secure,
        )
        self._provider = credentials
        self._user_agent = _DEFAULT_USER_AGENT
        self._trace_stream: Optional[TextIO] = None

        timeout = timedelta(minutes=5).seconds
        self._http = http_client or urllib3.PoolManager(
            timeout=Timeout(connect=timeout, read=timeout),
            maxsize=10,
            cert_reqs='CERT_REQUIRED' if cert_check else 'CERT_NONE',
            ca_certs=os.environ.get('SSL_CERT_FILE') or certifi.where(),
            retries=False,
        )

    def __del__(self):
        if hasattr(self, "_http"):  # Only required for unit test run
            self._http.clear()

    def _url_open(
            self,
            action: str,
            params: Optional[dict[str, Optional[str]]] = None,
            item_index: Optional[int] = None,
    ) -> BaseHTTPResponse:
        """Execute IAM action."""
        request = build_iam_request(
            self._base_url,
            self._provider.retrieve(),
            action,
            params,
            headers={"User-Agent": self._user_agent},
        )

        if self._trace_stream:
            self._trace_stream.write("---------START-HTTP---------\n")
            self._trace_stream.write("POST / HTTP/1.1\n")
            self._trace_stream.write(
                headers_to_strings(request.headers, titled_key=True),
            )
            self._trace_stream.write("\n\n")
            self._trace_stream.write(safe_str(request.body))
            self._trace_stream.write("\n\n")

        try:
            response = self._http.urlopen(
                request.method,
                request.url,
                body=request.body,
                headers=request.headers,
                preload_content=True,
            )
        except urllib3.exceptions.HTTPError as exc:
            if self._trace_stream:
                self._trace_stream.write("----------END-HTTP----------\n")
            raise TransportError("POST", request.url, str(exc)) from exc

        if self._trace_stream:
            self._trace_stream.write(f"HTTP/1.1 {response.status}\n")
            self._trace_stream.write(
                headers_to_strings(response.headers),
            )
            self._trace_stream.write("\n")
            if response.data:
                self._trace_stream.write("\n")
                self._trace_stream.write(safe_str(response.data))
                self._trace_stream.write("\n")
            self._trace_stream.write("----------END-HTTP----------\n")

        check_response(
            request,
            response.status,
            response.headers,
            response.data,
            item_index=item_index,
            error_class=IAMError,
        )
        return response

    def _execute(
            self,
            action: str,
            params: Optional[dict[str, Optional[str]]] = None,
            item_index: Optional[int] = None,
    ) -> Any:
        """Execute IAM action and return decoded response."""
        response = self._url_open(action, params, item_index)
        return parse_xml(response.data)

    def set_app_info(self, app_name: str, app_version: str):
        """Set your application name and version to user agent header."""
        if not (app_name and app_version):
            raise ValueError("Application name/version cannot be empty.")
        self._user_agent = f"{_DEFAULT_USER_AGENT} {app_name}/{app_version}"

    def trace_on(self, stream: TextIO):
        """Enable http trace."""
        if not stream:
            raise ValueError('Input stream for trace output is invalid.')
        self._trace_stream = stream

    def trace_off(self):
        """Disable HTTP trace."""
        self._trace_stream = None

    def get_policy(
            self,
            policy_arn: str,
            *,
            item_index: Optional[int] = None,
    ) -> Policy:
        """
        Get information of a managed policy.

        Args:
            policy_arn (str):
                ARN of the policy.

        Returns:
            Policy:
                Policy information.

        Example:
            >>> policy = iam.get_policy(
            ...     "arn:aws:iam::123456789012:policy/read-only",
            ... )
            >>> print(policy.policy_name, policy.default_version_id)
        """
        check_policy_arn(policy_arn)
        node = self._execute(
            "GetPolicy", {"PolicyArn": policy_arn}, item_index,
        )
        policy = findvalue(node, "GetPolicyResponse/GetPolicyResult/Policy")
        return Policy.fromdict(policy if isinstance(policy, dict) else {})

    def get_policy_version(
            self,
            policy_arn: str,
            version_id: str,
            *,
            item_index: Optional[int] = None,
    ) -> PolicyVersion:
        """
        Get a version of a managed policy including its JSON document.

        Example:
            >>> version = iam.get_policy_version(
            ...     "arn:aws:iam::123456789012:policy/read-only", "v1",
            ... )
            >>> print(json.loads(version.document))
        """
        check_policy_arn(policy_arn)
        if not version_id:
            raise ValueError("version ID cannot be empty")
        node = self._execute(
            "GetPolicyVersion",
            {"PolicyArn": policy_arn, "VersionId": version_id},
            item_index,
        )
        return PolicyVersion.fromdict(node if isinstance(node, dict) else {})

    def list_policies(
            self,
            scope: Optional[str] = None,
            path_prefix: Optional[str] = None,
            only_attached: bool = False,
            max_items: Optional[int] = None,
            marker: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> ListPoliciesResult:
        """
        List managed policies.

        Args:
            scope (Optional[str], default=None):
                One of ``All``, ``AWS`` or ``Local``.

            path_prefix (Optional[str], default=None):
                List policies whose path starts with the prefix.

            only_attached (bool, default=False):
                List only policies attached to a user, group or role.

            max_items (Optional[int], default=None):
                Maximum number of policies in the page.

            marker (Optional[str], default=None):
                Marker of the page to fetch, taken from previous result.

        Returns:
            ListPoliciesResult:
                Policies of the page.
        """
        if scope is not None and scope not in _POLICY_SCOPES:
            raise ValueError(f"scope must be one of {_POLICY_SCOPES}")
        node = self._execute(
            "ListPolicies",
            {
                "Scope": scope,
                "PathPrefix": path_prefix,
                "OnlyAttached": "true" if only_attached else None,
                "MaxItems": str(max_items) if max_items else None,
                "Marker": marker,
            },
            item_index,
        )
        return ListPoliciesResult.fromdict(
            node if isinstance(node, dict) else {},
        )

    def list_attached_user_policies(
            self,
            user_name: str,
            max_items: Optional[int] = None,
            marker: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> ListAttachedPoliciesResult:
        """List managed policies attached to a user."""
        check_iam_name(user_name, "user")
        node = self._execute(
            "ListAttachedUserPolicies",
            {
                "UserName": user_name,
                "MaxItems": str(max_items) if max_items else None,
                "Marker": marker,
            },
            item_index,
        )
        return ListAttachedPoliciesResult.fromdict(
            node if isinstance(node, dict) else {},
        )

    def list_attached_group_policies(
            self,
            group_name: str,
            max_items: Optional[int] = None,
            marker: Optional[str] = None,
            *,
            item_index: Optional[int] = None,
    ) -> ListAttachedPoliciesResult:
        """List managed policies attached to a group."""
        check_iam_name(group_name, "group")
        node = self._execute(
            "ListAttachedGroupPolicies",
            {
                "GroupName": group_name,
                "MaxItems": str(max_items) if max_items else None,
                "Marker": marker,
            },
            item_index,
        )
        return ListAttachedPoliciesResult.fromdict(
            node if isinstance(node, dict) else {},
        )

    def attach_user_policy(
            self,
            user_name: str,
            policy_arn: str,
            *,
            item_index: Optional[int] = None,
    ):
        """
        Attach a managed policy to a user.

        Example:
            >>> iam.attach_user_policy(
            ...     "alice", "arn:aws:iam::123456789012:policy/read-only",
            ... )
        """
        check_iam_name(user_name, "user")
        check_policy_arn(policy_arn)
        self._url_open(
            "AttachUserPolicy",
            {"UserName": user_name, "PolicyArn": policy_arn},
            item_index,
        )

    def attach_group_policy(
            self,
            group_name: str,
            policy_arn: str,
            *,
            item_index: Optional[int] = None,
    ):
        """Attach a managed policy to a group."""
        check_iam_name(group_name, "group")
        check_policy_arn(policy_arn)
        self._url_open(
            "AttachGroupPolicy",
            {"GroupName": group_name, "PolicyArn": policy_arn},
            item_index,
        )

    def detach_user_policy(
            self,
            user_name: str,
            policy_arn: str,
            *,
            item_index: Optional[int] = None,
    ) -> bool:
        """
        Detach a managed policy from a user.

        Detaching a policy which is not attached is not an error.

        Returns:
            bool:
                True if the policy was attached, False otherwise.
        """
        check_iam_name(user_name, "user")
        check_policy_arn(policy_arn)
        try:
            self._url_open(
                "DetachUserPolicy",
                {"UserName": user_name, "PolicyArn": policy_arn},
                item_index,
            )
            return True
        except IAMError as exc:
            if exc.code != "NoSuchEntity":
                raise
        return False

    def detach_group_policy(
            self,
            group_name: str,
            policy_arn: str,
            *,
            item_index: Optional[int] = None,
    ) -> bool:
        """
        Detach a managed policy from a group.

        Detaching a policy which is not attached is not an error.

        Returns:
            bool:
                True if the policy was attached, False otherwise.
        """
        check_iam_name(group_name, "group")
        check_policy_arn(policy_arn)
        try:
            self._url_open(
                "DetachGroupPolicy",
                {"GroupName": group_name, "PolicyArn": policy_arn},
                item_index,
            )
            return True
        except IAMError as exc:
            if exc.code != "NoSuchEntity":
                raise
        return False
