# Licensed to the Apache Software Foundation (ASF) under one or more
# contributor license agreements.  See the NOTICE file distributed with
# this work for additional information regarding copyright ownership.
# The ASF licenses this file to You under the Apache License, Version 2.0
# (the "License"); you may not use this file except in compliance with
# the License.  You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import Optional

if False:
    # Work around for MYPY for cyclic import problem
    from bucketdemo.storage.base import StorageDriver

__all__ = [
    "BucketDemoError",
    "ArgumentError",
    "ConfigurationError",
    "LocalIOError",
    "ServiceError",
    "WaitTimeoutError",
    "RunFailedError"
]


class BucketDemoError(Exception):
    """The base class for other bucketdemo exceptions"""

    def __init__(self, value, driver=None):
        # type: (str, Optional[StorageDriver]) -> None
        super(BucketDemoError, self).__init__(value)
        self.value = value
        self.driver = driver

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return ("<BucketDemoError in " +
                repr(self.driver) +
                " " +
                repr(self.value) + ">")


class ArgumentError(BucketDemoError):
    """Exception used when the command line arguments are insufficient."""

    def __init__(self, value, usage=None):
        # type: (str, Optional[str]) -> None
        super(ArgumentError, self).__init__(value=value)
        self.usage = usage


class ConfigurationError(BucketDemoError):
    """Exception used when a configuration value can't be parsed."""

    def __init__(self, value, key=None):
        # type: (str, Optional[str]) -> None
        super(ConfigurationError, self).__init__(value=value)
        self.key = key


class LocalIOError(BucketDemoError):
    """Exception used when a local file can't be opened or read."""

    def __init__(self, value, path, cause=None):
        # type: (str, str, Optional[BaseException]) -> None
        super(LocalIOError, self).__init__(value=value)
        self.path = path
        self.cause = cause


class ServiceError(BucketDemoError):
    """
    Exception used when the storage provider returns an error for a
    request after the client's retry budget is exhausted.

    Specific sub types are derived for errors like an existing or a
    missing container.
    """

    def __init__(self, value, driver=None, cause=None):
        # type: (str, Optional[StorageDriver], Optional[BaseException]) -> None  # noqa: E501
        super(ServiceError, self).__init__(value=value, driver=driver)
        self.cause = cause

    def __str__(self):
        if self.cause is None:
            return str(self.value)
        return '%s (%s)' % (self.value, self.cause)

    def __repr__(self):
        return ('<%s in %s, value=%r>' %
                (self.__class__.__name__, repr(self.driver), self.value))


class WaitTimeoutError(ServiceError):
    """Exception used when an existence poll doesn't converge in time."""

    def __init__(self, value, driver=None, resource_name=None, timeout=None,
                 cause=None):
        super(WaitTimeoutError, self).__init__(value=value, driver=driver,
                                               cause=cause)
        self.resource_name = resource_name
        self.timeout = timeout


class RunFailedError(BucketDemoError):
    """
    Exception which aborts a run. ``value`` names the operation which
    failed and ``cause`` holds the underlying error.
    """

    def __init__(self, value, cause):
        # type: (str, BucketDemoError) -> None
        super(RunFailedError, self).__init__(value=value,
                                             driver=cause.driver)
        self.cause = cause

    def __str__(self):
        return '%s, %s' % (self.value, self.cause)
