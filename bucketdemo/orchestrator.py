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
Runs a container through its whole life cycle against one storage driver:

1. list containers
2. create the container and wait until it exists
3. upload a local file into it
4. list the objects in it
5. list containers
6. delete the container and wait until it's gone
7. list containers

Every step blocks until the previous one is confirmed. The first error
aborts the run with :class:`bucketdemo.common.types.RunFailedError`,
nothing is retried or rolled back here.
"""

import sys
import logging
from contextlib import contextmanager
from enum import Enum

from typing import Iterator
from typing import Optional
from typing import TextIO

from bucketdemo.config import Config
from bucketdemo.common.types import BucketDemoError
from bucketdemo.common.types import LocalIOError
from bucketdemo.common.types import RunFailedError
from bucketdemo.storage.base import Container, Object, StorageDriver

__all__ = [
    'RunState',
    'Orchestrator'
]

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    INIT = 'init'
    LISTED = 'listed'
    CREATED = 'created'
    CONFIRMED_EXISTS = 'confirmed_exists'
    UPLOADED = 'uploaded'
    LISTED_OBJECTS = 'listed_objects'
    COPIED = 'copied'
    LISTED_AGAIN = 'listed_again'
    DELETED = 'deleted'
    CONFIRMED_ABSENT = 'confirmed_absent'
    LISTED_FINAL = 'listed_final'
    DONE = 'done'
    FAILED = 'failed'


class Orchestrator(object):
    """
    Drives a single run. Instances are meant to be used once.
    """

    def __init__(self,
                 driver,  # type: StorageDriver
                 config=None,  # type: Optional[Config]
                 stream=None,  # type: Optional[TextIO]
                 ):
        self.driver = driver
        self.config = config or driver.config
        self.stream = stream or sys.stdout
        self.state = RunState.INIT

    def run(self, container_name, file_path, copy_to=None):
        # type: (str, str, Optional[str]) -> None
        """
        Execute the whole sequence.

        :param container_name: Name of the container to create and delete.
        :type  container_name: ``str``

        :param file_path: Local file to upload. The path, exactly as
                          given, is used as the object key.
        :type  file_path: ``str``

        :param copy_to: Name of an existing container the uploaded object
                        is copied into before the teardown.
        :type  copy_to: ``str``

        :raises RunFailedError: On the first failing step.
        """
        try:
            self.list_containers()
            self._advance(RunState.LISTED)

            container = self.create_container(container_name)
            self._advance(RunState.CONFIRMED_EXISTS)

            obj = self.upload_object(container, file_path, file_path)
            self._advance(RunState.UPLOADED)

            self.list_objects(container)
            self._advance(RunState.LISTED_OBJECTS)

            if copy_to:
                self.copy_object(obj, copy_to)
                self._advance(RunState.COPIED)

            self.list_containers()
            self._advance(RunState.LISTED_AGAIN)

            self.delete_container(container)
            self._advance(RunState.CONFIRMED_ABSENT)

            self.list_containers()
            self._advance(RunState.LISTED_FINAL)
        except RunFailedError as e:
            logger.debug('Run failed in state %s: %r', self.state.value,
                         e.cause)
            self.state = RunState.FAILED
            raise

        self._advance(RunState.DONE)

    def list_containers(self):
        with self._failing_as('Unable to list buckets'):
            containers = self.driver.list_containers()

        self._write('My buckets now are:')
        for container in containers:
            self._write(container.name)
        self._write('')
        return containers

    def create_container(self, container_name):
        # type: (str) -> Container
        self._write('')
        self._write('Creating a new bucket named \'%s\'...' % container_name)
        self._write('')

        with self._failing_as('Unable to create bucket'):
            container = self.driver.create_container(
                container_name, region=self.config.region)
            self._advance(RunState.CREATED)
            self.driver.wait_until_container_exists(container_name)

        return container

    def upload_object(self, container, file_path, object_name):
        # type: (Container, str, str) -> Object
        with self._failing_as('Unable to open file "%s"' % file_path):
            fobj = self._open_local_file(file_path)

        with fobj:
            with self._failing_as('Unable to upload "%s" to "%s"' %
                                  (object_name, container.name)):
                try:
                    obj = self.driver.upload_object_via_stream(
                        fobj, container, object_name)
                except OSError as e:
                    raise LocalIOError(value=e.strerror or str(e),
                                       path=file_path, cause=e) from e

        self._write('Successfully uploaded "%s" to "%s"' %
                    (object_name, container.name))
        return obj

    def list_objects(self, container):
        # type: (Container) -> list
        with self._failing_as('Unable to list items in bucket "%s"' %
                              container.name):
            objects = self.driver.list_container_objects(container)

        for obj in objects:
            self._write('Name:          %s' % obj.name)
            self._write('Last modified: %s' % obj.last_modified)
            self._write('Size:          %s' % obj.size)
            self._write('Storage class: %s' % obj.storage_class)
            self._write('')

        self._write('Found %d items in bucket %s' % (len(objects),
                                                      container.name))
        self._write('')
        return objects

    def copy_object(self, obj, destination_container_name):
        # type: (Object, str) -> Object
        source_name = obj.container.name

        with self._failing_as('Unable to copy item from bucket "%s" to '
                              'bucket "%s"' % (source_name,
                                               destination_container_name)):
            self.driver.copy_object(obj, destination_container_name)

        with self._failing_as('Error occurred while waiting for item "%s" to '
                              'be copied to bucket "%s"' %
                              (obj.name, destination_container_name)):
            copied = self.driver.wait_until_object_exists(
                destination_container_name, obj.name)

        self._write('Item "%s" successfully copied from bucket "%s" to '
                    'bucket "%s"' % (obj.name, source_name,
                                     destination_container_name))
        return copied

    def delete_container(self, container):
        # type: (Container) -> None
        self._write('')
        self._write('Deleting the bucket named \'%s\'...' % container.name)
        self._write('')

        with self._failing_as('Unable to delete bucket'):
            self.driver.delete_container(container)
            self._advance(RunState.DELETED)
            self.driver.wait_until_container_not_exists(container.name)

    def _open_local_file(self, file_path):
        try:
            return open(file_path, 'rb')
        except OSError as e:
            raise LocalIOError(value=e.strerror or str(e), path=file_path,
                               cause=e) from e

    @contextmanager
    def _failing_as(self, message):
        # type: (str) -> Iterator[None]
        try:
            yield
        except BucketDemoError as e:
            raise RunFailedError(value=message, cause=e) from e

    def _advance(self, state):
        # type: (RunState) -> None
        logger.debug('%s -> %s', self.state.value, state.value)
        self.state = state

    def _write(self, line):
        # type: (str) -> None
        self.stream.write(line + '\n')
