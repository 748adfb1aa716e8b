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

"""
Process wide configuration which is built once at startup and handed to
the storage driver and the orchestrator.
"""

import os
import math
import logging

from typing import Dict
from typing import Optional

from bucketdemo.common.types import ConfigurationError
from bucketdemo.storage.types import Provider

__all__ = [
    'Config',

    'DEFAULT_REGION',
    'DEFAULT_MAX_RETRIES',
    'ENV_PREFIX'
]

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = Provider.S3
DEFAULT_REGION = 'ap-southeast-2'
DEFAULT_MAX_RETRIES = 5

# Matches the defaults of the boto3 bucket_exists / bucket_not_exists
# waiters
DEFAULT_WAIT_DELAY = 5
DEFAULT_WAIT_MAX_ATTEMPTS = 20

ENV_PREFIX = 'BUCKETDEMO_'


class Config(object):
    """
    Read-only settings for a single run.

    Attributes can't be reassigned once the instance is constructed.
    """

    _fields = ('provider', 'region', 'credentials_file', 'profile',
               'max_retries', 'endpoint_url', 'wait_delay',
               'wait_max_attempts')

    def __init__(self,
                 provider=DEFAULT_PROVIDER,  # type: str
                 region=DEFAULT_REGION,  # type: str
                 credentials_file=None,  # type: Optional[str]
                 profile=None,  # type: Optional[str]
                 max_retries=DEFAULT_MAX_RETRIES,  # type: int
                 endpoint_url=None,  # type: Optional[str]
                 wait_delay=DEFAULT_WAIT_DELAY,  # type: float
                 wait_max_attempts=DEFAULT_WAIT_MAX_ATTEMPTS,  # type: int
                 ):
        """
        :param provider: Storage provider constant, see
                         :class:`bucketdemo.storage.types.Provider`.
        :type  provider: ``str``

        :param region: Region every container is created in.
        :type  region: ``str``

        :param credentials_file: Path to a shared credentials file. ``None``
                                 means the SDK default location.
        :type  credentials_file: ``str``

        :param profile: Credential profile name inside the credentials file.
        :type  profile: ``str``

        :param max_retries: Retry budget of every remote call. The
                            orchestrator itself never retries.
        :type  max_retries: ``int``

        :param endpoint_url: Optional endpoint of an S3 compatible service.
        :type  endpoint_url: ``str``

        :param wait_delay: Seconds between two existence polls.
        :type  wait_delay: ``float``

        :param wait_max_attempts: Number of polls before giving up.
        :type  wait_max_attempts: ``int``
        """
        if max_retries < 0:
            raise ConfigurationError('max_retries must be >= 0',
                                     key='max_retries')
        if wait_max_attempts < 1:
            raise ConfigurationError('wait_max_attempts must be >= 1',
                                     key='wait_max_attempts')
        if not math.isfinite(wait_delay) or wait_delay < 0:
            raise ConfigurationError('wait_delay must be a finite number >= 0',
                                     key='wait_delay')

        self._set('provider', provider)
        self._set('region', region)
        self._set('credentials_file', credentials_file)
        self._set('profile', profile)
        self._set('max_retries', max_retries)
        self._set('endpoint_url', endpoint_url)
        self._set('wait_delay', wait_delay)
        self._set('wait_max_attempts', wait_max_attempts)

    def _set(self, name, value):
        object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError('Config is read-only, can\'t set %s' % (name))

    def __delattr__(self, name):
        raise AttributeError('Config is read-only, can\'t delete %s' % (name))

    @property
    def wait_timeout(self):
        # type: () -> float
        return self.wait_delay * self.wait_max_attempts

    @classmethod
    def from_env(cls, environ=None):
        # type: (Optional[Dict[str, str]]) -> Config
        """
        Build a config from ``BUCKETDEMO_*`` environment variables. Unset
        variables fall back to the defaults.

        :param environ: Mapping to read from (defaults to ``os.environ``).
        :type  environ: ``dict``

        :rtype: :class:`Config`
        """
        if environ is None:
            environ = os.environ

        def get(name, default=None):
            value = environ.get(ENV_PREFIX + name)
            if value is None or value.strip() == '':
                return default
            return value.strip()

        def get_number(name, default, type_=int):
            value = get(name)
            if value is None:
                return default
            try:
                return type_(value)
            except ValueError:
                raise ConfigurationError(
                    'Invalid value for %s%s: %r' % (ENV_PREFIX, name, value),
                    key=ENV_PREFIX + name)

        config = cls(
            provider=get('PROVIDER', DEFAULT_PROVIDER),
            region=get('REGION', DEFAULT_REGION),
            credentials_file=get('CREDENTIALS_FILE'),
            profile=get('PROFILE'),
            max_retries=get_number('MAX_RETRIES', DEFAULT_MAX_RETRIES),
            endpoint_url=get('ENDPOINT_URL'),
            wait_delay=get_number('WAIT_DELAY', DEFAULT_WAIT_DELAY, float),
            wait_max_attempts=get_number('WAIT_MAX_ATTEMPTS',
                                         DEFAULT_WAIT_MAX_ATTEMPTS),
        )
        logger.debug('Loaded configuration: %r', config)
        return config

    def __repr__(self):
        values = ', '.join('%s=%r' % (name, getattr(self, name))
                           for name in self._fields)
        return '<Config: %s>' % (values)
