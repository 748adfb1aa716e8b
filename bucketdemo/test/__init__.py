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

import os
import shutil
import tempfile
import unittest

from bucketdemo.config import Config
from bucketdemo.storage.drivers.dummy import DummyStorageDriver

__all__ = [
    'unittest',
    'make_config',
    'make_tmp_file',
    'RecordingStorageDriver',
    'BucketDemoTestCase'
]


def make_config(**kwargs):
    """
    Config with tiny wait settings so failing polls don't slow tests down.
    """
    kwargs.setdefault('wait_delay', 0)
    kwargs.setdefault('wait_max_attempts', 2)
    return Config(**kwargs)


def make_tmp_file(content=None, name=None):
    """
    Write ``content`` to a new file and return its path. ``name`` picks
    the base name of the file.
    """
    if content is None:
        content = b'blah' * 1024

    if name is None:
        fd, path = tempfile.mkstemp()
        os.close(fd)
    else:
        path = os.path.join(tempfile.mkdtemp(), name)

    with open(path, 'wb') as fp:
        fp.write(content)
    return path


class RecordingStorageDriver(DummyStorageDriver):
    """
    In-memory driver which records every operation the orchestrator calls
    and raises the exception configured in ``fail_on`` for an operation.
    """

    name = 'Recording Storage Provider'

    def __init__(self, config=None, fail_on=None, ex_require_empty=False):
        super(RecordingStorageDriver, self).__init__(
            config=config, ex_require_empty=ex_require_empty)
        self.calls = []
        self.fail_on = fail_on or {}

    def _record(self, name):
        self.calls.append(name)
        error = self.fail_on.get(name)
        if error is not None:
            if callable(error) and not isinstance(error, BaseException):
                error = error(self)
            raise error

    def list_containers(self):
        self._record('list_containers')
        return super(RecordingStorageDriver, self).list_containers()

    def create_container(self, container_name, region=None):
        self._record('create_container')
        return super(RecordingStorageDriver, self).create_container(
            container_name, region=region)

    def wait_until_container_exists(self, container_name):
        self._record('wait_until_container_exists')
        return super(RecordingStorageDriver,
                     self).wait_until_container_exists(container_name)

    def upload_object_via_stream(self, stream, container, object_name):
        self._record('upload_object_via_stream')
        return super(RecordingStorageDriver, self).upload_object_via_stream(
            stream, container, object_name)

    def list_container_objects(self, container, prefix=None):
        self._record('list_container_objects')
        return super(RecordingStorageDriver, self).list_container_objects(
            container, prefix=prefix)

    def copy_object(self, obj, destination_container_name):
        self._record('copy_object')
        return super(RecordingStorageDriver, self).copy_object(
            obj, destination_container_name)

    def wait_until_object_exists(self, container_name, object_name):
        self._record('wait_until_object_exists')
        return super(RecordingStorageDriver, self).wait_until_object_exists(
            container_name, object_name)

    def delete_container(self, container):
        self._record('delete_container')
        return super(RecordingStorageDriver, self).delete_container(container)

    def wait_until_container_not_exists(self, container_name):
        self._record('wait_until_container_not_exists')
        return super(RecordingStorageDriver,
                     self).wait_until_container_not_exists(container_name)


class BucketDemoTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp_paths = []

    def tearDown(self):
        for path in self._tmp_paths:
            if os.path.isdir(path):
                shutil.rmtree(path)
            elif os.path.exists(path):
                os.unlink(path)

    def make_tmp_file(self, content=None, name=None):
        path = make_tmp_file(content=content, name=name)
        self._tmp_paths.append(path)
        if name is not None:
            self._tmp_paths.append(os.path.dirname(path))
        return path

    def make_local_file(self, content=None, name='readme.txt'):
        """
        Create ``name`` inside a new directory, switch the working
        directory to it for the rest of the test and return ``name``.
        """
        path = self.make_tmp_file(content=content, name=name)
        self.addCleanup(os.chdir, os.getcwd())
        os.chdir(os.path.dirname(path))
        return name
