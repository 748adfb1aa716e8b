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

import sys

import mock

from bucketdemo.config import Config
from bucketdemo.common.types import ConfigurationError

from bucketdemo.test import unittest


class ConfigTests(unittest.TestCase):

    def test_defaults(self):
        config = Config()

        self.assertEqual(config.provider, 's3')
        self.assertEqual(config.region, 'ap-southeast-2')
        self.assertIsNone(config.credentials_file)
        self.assertIsNone(config.profile)
        self.assertEqual(config.max_retries, 5)
        self.assertIsNone(config.endpoint_url)
        self.assertEqual(config.wait_delay, 5)
        self.assertEqual(config.wait_max_attempts, 20)
        self.assertEqual(config.wait_timeout, 100)

    def test_read_only(self):
        config = Config()

        with self.assertRaises(AttributeError):
            config.region = 'us-east-1'

        with self.assertRaises(AttributeError):
            del config.region

        self.assertEqual(config.region, 'ap-southeast-2')

    def test_invalid_values(self):
        invalid = [
            {'max_retries': -1},
            {'wait_max_attempts': 0},
            {'wait_delay': -0.5},
        ]

        for kwargs in invalid:
            with self.assertRaises(ConfigurationError) as ctx:
                Config(**kwargs)

            self.assertEqual(ctx.exception.key, list(kwargs.keys())[0])

    def test_from_env(self):
        environ = {
            'BUCKETDEMO_PROVIDER': 'dummy',
            'BUCKETDEMO_REGION': 'eu-central-1',
            'BUCKETDEMO_CREDENTIALS_FILE': '/etc/demo/credentials',
            'BUCKETDEMO_PROFILE': 'ci',
            'BUCKETDEMO_MAX_RETRIES': '2',
            'BUCKETDEMO_ENDPOINT_URL': 'http://localhost:9000',
            'BUCKETDEMO_WAIT_DELAY': '0.25',
            'BUCKETDEMO_WAIT_MAX_ATTEMPTS': '8',
            'AWS_REGION': 'us-west-2',
        }

        config = Config.from_env(environ)

        self.assertEqual(config.provider, 'dummy')
        self.assertEqual(config.region, 'eu-central-1')
        self.assertEqual(config.credentials_file, '/etc/demo/credentials')
        self.assertEqual(config.profile, 'ci')
        self.assertEqual(config.max_retries, 2)
        self.assertEqual(config.endpoint_url, 'http://localhost:9000')
        self.assertEqual(config.wait_delay, 0.25)
        self.assertEqual(config.wait_max_attempts, 8)
        self.assertEqual(config.wait_timeout, 2.0)

    def test_from_env_blank_values_use_defaults(self):
        config = Config.from_env({'BUCKETDEMO_REGION': '  ',
                                  'BUCKETDEMO_MAX_RETRIES': ''})

        self.assertEqual(config.region, 'ap-southeast-2')
        self.assertEqual(config.max_retries, 5)

    def test_from_env_invalid_number(self):
        with self.assertRaises(ConfigurationError) as ctx:
            Config.from_env({'BUCKETDEMO_WAIT_MAX_ATTEMPTS': 'lots'})

        self.assertEqual(ctx.exception.key, 'BUCKETDEMO_WAIT_MAX_ATTEMPTS')
        self.assertIn("'lots'", str(ctx.exception))

    def test_from_env_non_finite_wait_delay(self):
        for value in ('nan', 'inf', '-inf', 'Infinity'):
            with self.assertRaises(ConfigurationError) as ctx:
                Config.from_env({'BUCKETDEMO_WAIT_DELAY': value})

            self.assertEqual(ctx.exception.key, 'wait_delay')

        self.assertRaises(ConfigurationError, Config,
                          wait_delay=float('nan'))

    def test_from_env_out_of_range(self):
        self.assertRaises(ConfigurationError, Config.from_env,
                          {'BUCKETDEMO_MAX_RETRIES': '-3'})

    @mock.patch.dict('os.environ', {'BUCKETDEMO_REGION': 'sa-east-1'})
    def test_from_env_defaults_to_process_environment(self):
        config = Config.from_env()

        self.assertEqual(config.region, 'sa-east-1')

    def test_repr(self):
        config = Config(region='eu-west-1')

        self.assertTrue(repr(config).startswith('<Config: provider='))
        self.assertIn("region='eu-west-1'", repr(config))


if __name__ == '__main__':
    sys.exit(unittest.main())
