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

from bucketdemo.common.types import ArgumentError
from bucketdemo.common.types import BucketDemoError
from bucketdemo.common.types import ConfigurationError
from bucketdemo.common.types import LocalIOError
from bucketdemo.common.types import RunFailedError
from bucketdemo.common.types import ServiceError
from bucketdemo.common.types import WaitTimeoutError
from bucketdemo.storage.drivers.dummy import DummyStorageDriver
from bucketdemo.storage.types import ContainerAlreadyExistsError
from bucketdemo.storage.types import ContainerError
from bucketdemo.storage.types import ObjectDoesNotExistError

from bucketdemo.test import unittest


class ErrorTypesTests(unittest.TestCase):

    def test_hierarchy(self):
        for cls in (ArgumentError, ConfigurationError, LocalIOError,
                    ServiceError, RunFailedError):
            self.assertTrue(issubclass(cls, BucketDemoError))

        self.assertTrue(issubclass(WaitTimeoutError, ServiceError))
        self.assertTrue(issubclass(ContainerError, ServiceError))
        self.assertFalse(issubclass(WaitTimeoutError, TimeoutError))

    def test_service_error_str(self):
        self.assertEqual(str(ServiceError('request failed')),
                         'request failed')
        self.assertEqual(str(ServiceError('request failed',
                                          cause=ValueError('boom'))),
                         'request failed (boom)')

    def test_container_error_str(self):
        driver = DummyStorageDriver()
        error = ContainerAlreadyExistsError(value='taken', driver=driver,
                                            container_name='demo-bucket')

        self.assertEqual(str(error), 'ContainerAlreadyExistsError: '
                                     'container=demo-bucket, taken')
        self.assertIs(error.driver, driver)
        self.assertEqual(error.container_name, 'demo-bucket')

    def test_object_error_str_without_value(self):
        error = ObjectDoesNotExistError(value=None, driver=None,
                                        object_name='readme.txt',
                                        cause=KeyError('readme.txt'))

        self.assertEqual(str(error), "ObjectDoesNotExistError: "
                                     "object=readme.txt ('readme.txt')")

    def test_local_io_error(self):
        cause = IOError(2, 'No such file or directory')
        error = LocalIOError(value=cause.strerror, path='/tmp/missing',
                             cause=cause)

        self.assertEqual(str(error), 'No such file or directory')
        self.assertEqual(error.path, '/tmp/missing')
        self.assertIs(error.cause, cause)

    def test_run_failed_error(self):
        driver = DummyStorageDriver()
        cause = ServiceError('access denied', driver=driver)
        error = RunFailedError('Unable to list buckets', cause=cause)

        self.assertEqual(str(error), 'Unable to list buckets, access denied')
        self.assertIs(error.driver, driver)
        self.assertIs(error.cause, cause)

    def test_repr(self):
        error = BucketDemoError('broken')

        self.assertEqual(repr(error), "<BucketDemoError in None 'broken'>")


if __name__ == '__main__':
    sys.exit(unittest.main())
