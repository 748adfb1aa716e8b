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
Dummy Driver

Keeps every container and object in memory. Useful for dry runs and
tests, nothing leaves the process.
"""

import re
import hashlib
import logging
from datetime import datetime, timezone

from bucketdemo.storage.base import Object, Container, StorageDriver
from bucketdemo.storage.types import (
    Provider,
    ContainerAlreadyExistsError,
    ContainerDoesNotExistError,
    ContainerIsNotEmptyError,
    InvalidContainerNameError,
    ObjectDoesNotExistError,
)

__all__ = [
    'DummyStorageDriver'
]

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8096

DEFAULT_STORAGE_CLASS = 'STANDARD'

# Same rules S3 applies to new bucket names
VALID_CONTAINER_NAME_RE = re.compile(r'^[a-z0-9][a-z0-9.\-]{1,61}[a-z0-9]$')


class DummyStorageDriver(StorageDriver):
    """
    Dummy Storage driver.

    >>> from bucketdemo.storage.drivers.dummy import DummyStorageDriver
    >>> driver = DummyStorageDriver()
    >>> container = driver.create_container(container_name='test-container')
    >>> container
    <Container: name=test-container, region=ap-southeast-2, provider=Dummy Storage Provider>
    >>> container.name
    'test-container'
    """

    name = 'Dummy Storage Provider'
    type = Provider.DUMMY

    def __init__(self, config=None, ex_require_empty=False):
        """
        :param config: Driver settings.
        :type  config: :class:`bucketdemo.config.Config`

        :param ex_require_empty: Refuse to delete containers which still hold
                                 objects, the way S3 does. By default objects
                                 go away with their container.
        :type  ex_require_empty: ``bool``
        """
        super(DummyStorageDriver, self).__init__(config=config)
        self.ex_require_empty = ex_require_empty
        self._containers = {}

    def iterate_containers(self):
        """
        >>> driver = DummyStorageDriver()
        >>> driver.list_containers()
        []
        >>> container_name = 'test-container-1'
        >>> container = driver.create_container(container_name=container_name)
        >>> container_name = 'test-container-2'
        >>> container = driver.create_container(container_name=container_name)
        >>> [c.name for c in driver.list_containers()]
        ['test-container-1', 'test-container-2']
        """
        for item in list(self._containers.values()):
            yield item['container']

    def get_container(self, container_name):
        """
        >>> driver = DummyStorageDriver()
        >>> driver.get_container('unknown') #doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ContainerDoesNotExistError:
        >>> container_name = 'test-container'
        >>> container = driver.create_container(container_name=container_name)
        >>> driver.get_container('test-container').name
        'test-container'
        """
        if container_name not in self._containers:
            raise ContainerDoesNotExistError(value=None, driver=self,
                                             container_name=container_name)

        return self._containers[container_name]['container']

    def iterate_container_objects(self, container, prefix=None):
        objects = self._get_container_objects(container.name)

        for obj_name in sorted(objects):
            if prefix is None or obj_name.startswith(prefix):
                yield objects[obj_name]['object']

    def get_object(self, container_name, object_name):
        """
        >>> driver = DummyStorageDriver()
        >>> container = driver.create_container(container_name='test-container')
        >>> driver.get_object('test-container', 'unknown')
        ... #doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ObjectDoesNotExistError:
        """
        objects = self._get_container_objects(container_name)

        if object_name not in objects:
            raise ObjectDoesNotExistError(value=None, driver=self,
                                          object_name=object_name)

        return objects[object_name]['object']

    def get_object_data(self, container_name, object_name):
        """
        Return the bytes stored for an object.
        """
        self.get_object(container_name, object_name)
        return self._containers[container_name]['objects'][object_name]['data']

    def create_container(self, container_name, region=None):
        """
        >>> driver = DummyStorageDriver()
        >>> container = driver.create_container(container_name='test-container')
        >>> container = driver.create_container(container_name='test-container')
        ... #doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ContainerAlreadyExistsError:
        """
        if not VALID_CONTAINER_NAME_RE.match(container_name or ''):
            raise InvalidContainerNameError(
                value='Container name must be 3-63 lower case letters, '
                      'numbers, dots or dashes',
                driver=self, container_name=container_name)

        if container_name in self._containers:
            raise ContainerAlreadyExistsError(
                value='Container with this name already exists. The name '
                      'must be unique among all the containers in the '
                      'system',
                driver=self, container_name=container_name)

        extra = {'creation_date': datetime.now(timezone.utc)}
        container = Container(name=container_name,
                              region=region or self.config.region,
                              extra=extra, driver=self)

        self._containers[container_name] = {'container': container,
                                            'objects': {}}
        logger.debug('Created container %s', container_name)
        return container

    def delete_container(self, container):
        """
        >>> driver = DummyStorageDriver()
        >>> container = driver.create_container(container_name='test-container')
        >>> driver.delete_container(container)
        True
        >>> driver.delete_container(container) #doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ContainerDoesNotExistError:
        """
        container_name = container.name

        if container_name not in self._containers:
            raise ContainerDoesNotExistError(container_name=container_name,
                                             value=None, driver=self)

        objects = self._containers[container_name]['objects']
        if objects and self.ex_require_empty:
            raise ContainerIsNotEmptyError(
                value='Container must be empty before it can be deleted.',
                container_name=container_name, driver=self)

        del self._containers[container_name]
        logger.debug('Deleted container %s (%d objects)', container_name,
                     len(objects))
        return True

    def upload_object_via_stream(self, stream, container, object_name):
        """
        >>> from io import BytesIO
        >>> driver = DummyStorageDriver()
        >>> container = driver.create_container(container_name='test-container')
        >>> obj = driver.upload_object_via_stream(BytesIO(b'hello'),
        ...                                       container, 'hello.txt')
        >>> obj.size
        5
        """
        objects = self._get_container_objects(container.name)

        chunks = []
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
        data = b''.join(chunks)

        return self._add_object(container=self.get_container(container.name),
                                object_name=object_name, data=data,
                                objects=objects)

    def copy_object(self, obj, destination_container_name):
        data = self.get_object_data(obj.container.name, obj.name)
        destination = self.get_container(destination_container_name)
        objects = self._get_container_objects(destination_container_name)

        return self._add_object(container=destination, object_name=obj.name,
                                data=data, objects=objects,
                                storage_class=obj.storage_class)

    def _get_container_objects(self, container_name):
        if container_name not in self._containers:
            raise ContainerDoesNotExistError(value=None, driver=self,
                                             container_name=container_name)

        return self._containers[container_name]['objects']

    def _add_object(self, container, object_name, data, objects,
                    storage_class=DEFAULT_STORAGE_CLASS):
        obj = Object(name=object_name, size=len(data),
                     hash=hashlib.md5(data).hexdigest(),
                     last_modified=datetime.now(timezone.utc),
                     storage_class=storage_class,
                     container=container, driver=self)

        objects[object_name] = {'object': obj, 'data': data}
        return obj


if __name__ == "__main__":
    import doctest
    doctest.testmod()
