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
Provides base classes for working with storage
"""

from typing import BinaryIO
from typing import Callable
from typing import Iterator
from typing import List
from typing import Optional

import time
import logging
from datetime import datetime

from bucketdemo.config import Config
from bucketdemo.common.types import WaitTimeoutError
from bucketdemo.storage.types import ContainerDoesNotExistError
from bucketdemo.storage.types import ObjectDoesNotExistError

__all__ = [
    'Object',
    'Container',
    'StorageDriver'
]

logger = logging.getLogger(__name__)


class Object(object):
    """
    Represents an object (BLOB).
    """

    def __init__(self,
                 name,  # type: str
                 size,  # type: int
                 hash,  # type: Optional[str]
                 last_modified,  # type: Optional[datetime]
                 storage_class,  # type: Optional[str]
                 container,  # type: Container
                 driver,  # type: StorageDriver
                 extra=None,  # type: Optional[dict]
                 meta_data=None,  # type: Optional[dict]
                 ):
        """
        :param name: Object name (key, must be unique per container).
        :type  name: ``str``

        :param size: Object size in bytes.
        :type  size: ``int``

        :param hash: Object hash (etag).
        :type  hash: ``str``

        :param last_modified: Time the object was last written.
        :type  last_modified: ``datetime.datetime``

        :param storage_class: Provider defined storage tier.
        :type  storage_class: ``str``

        :param container: Object container.
        :type  container: :class:`bucketdemo.storage.base.Container`

        :param driver: StorageDriver instance.
        :type  driver: :class:`bucketdemo.storage.base.StorageDriver`

        :param extra: Extra attributes.
        :type  extra: ``dict``

        :param meta_data: Optional object meta data.
        :type  meta_data: ``dict``
        """

        self.name = name
        self.size = size
        self.hash = hash
        self.last_modified = last_modified
        self.storage_class = storage_class
        self.container = container
        self.driver = driver
        self.extra = extra or {}
        self.meta_data = meta_data or {}

    def copy_to(self, destination_container_name):
        # type: (str) -> Object
        return self.driver.copy_object(
            obj=self, destination_container_name=destination_container_name)

    def __repr__(self):
        return ('<Object: name=%s, size=%s, storage_class=%s, provider=%s ...>'
                % (self.name, self.size, self.storage_class, self.driver.name))


class Container(object):
    """
    Represents a container (bucket) which can hold multiple objects.
    """

    def __init__(self,
                 name,  # type: str
                 region,  # type: Optional[str]
                 driver,  # type: StorageDriver
                 extra=None,  # type: Optional[dict]
                 ):
        """
        :param name: Container name (must be unique).
        :type name: ``str``

        :param region: Region the container lives in, if known.
        :type region: ``str``

        :param driver: StorageDriver instance.
        :type driver: :class:`bucketdemo.storage.base.StorageDriver`

        :param extra: Extra attributes.
        :type extra: ``dict``
        """

        self.name = name
        self.region = region
        self.driver = driver
        self.extra = extra or {}

    def list_objects(self, prefix=None):
        # type: (Optional[str]) -> List[Object]
        return self.driver.list_container_objects(container=self,
                                                  prefix=prefix)

    def get_object(self, object_name):
        # type: (str) -> Object
        return self.driver.get_object(container_name=self.name,
                                      object_name=object_name)

    def delete(self):
        # type: () -> bool
        return self.driver.delete_container(self)

    def __repr__(self):
        return ('<Container: name=%s, region=%s, provider=%s>'
                % (self.name, self.region, self.driver.name))


class StorageDriver(object):
    """
    A base StorageDriver to derive from.

    Every operation blocks until the provider responds. Retrying failed
    requests is the job of the driver (or the SDK it wraps), callers see
    either a result or a :class:`bucketdemo.common.types.ServiceError`.
    """

    name = None  # type: str
    type = None  # type: str

    def __init__(self, config=None):
        # type: (Optional[Config]) -> None
        """
        :param config: Settings for this driver, defaults to
                       ``Config()``.
        :type  config: :class:`bucketdemo.config.Config`
        """
        self.config = config or Config()

    def iterate_containers(self):
        # type: () -> Iterator[Container]
        """
        Return a iterator of containers for the given account

        :return: A iterator of Container instances.
        :rtype: ``iterator`` of :class:`bucketdemo.storage.base.Container`
        """
        raise NotImplementedError(
            'iterate_containers not implemented for this driver')

    def list_containers(self):
        # type: () -> List[Container]
        """
        Return a list of containers, in the order the provider returns
        them.

        :return: A list of Container instances.
        :rtype: ``list`` of :class:`Container`
        """
        return list(self.iterate_containers())

    def iterate_container_objects(self, container, prefix=None):
        # type: (Container, Optional[str]) -> Iterator[Object]
        """
        Return a iterator of objects for the given container.

        :param container: Container instance
        :type container: :class:`bucketdemo.storage.base.Container`

        :param prefix: Filter objects starting with a prefix.
        :type  prefix: ``str``

        :return: A iterator of Object instances.
        :rtype: ``iterator`` of :class:`bucketdemo.storage.base.Object`
        """
        raise NotImplementedError(
            'iterate_container_objects not implemented for this driver')

    def list_container_objects(self, container, prefix=None):
        # type: (Container, Optional[str]) -> List[Object]
        """
        Return a list of objects for the given container.

        :param container: Container instance.
        :type container: :class:`bucketdemo.storage.base.Container`

        :param prefix: Filter objects starting with a prefix.
        :type  prefix: ``str``

        :return: A list of Object instances.
        :rtype: ``list`` of :class:`bucketdemo.storage.base.Object`
        """
        return list(self.iterate_container_objects(container,
                                                   prefix=prefix))

    def get_container(self, container_name):
        # type: (str) -> Container
        """
        Return a container instance.

        :param container_name: Container name.
        :type container_name: ``str``

        :return: :class:`Container` instance.
        :rtype: :class:`bucketdemo.storage.base.Container`
        """
        raise NotImplementedError(
            'get_container not implemented for this driver')

    def get_object(self, container_name, object_name):
        # type: (str, str) -> Object
        """
        Return an object instance.

        :param container_name: Container name.
        :type  container_name: ``str``

        :param object_name: Object name.
        :type  object_name: ``str``

        :return: :class:`Object` instance.
        :rtype: :class:`bucketdemo.storage.base.Object`
        """
        raise NotImplementedError(
            'get_object not implemented for this driver')

    def create_container(self, container_name, region=None):
        # type: (str, Optional[str]) -> Container
        """
        Create a new container.

        :param container_name: Container name.
        :type container_name: ``str``

        :param region: Region to create the container in, defaults to the
                       configured region.
        :type region: ``str``

        :return: Container instance on success.
        :rtype: :class:`bucketdemo.storage.base.Container`
        """
        raise NotImplementedError(
            'create_container not implemented for this driver')

    def delete_container(self, container):
        # type: (Container) -> bool
        """
        Delete a container.

        :param container: Container instance
        :type container: :class:`bucketdemo.storage.base.Container`

        :return: ``True`` on success, ``False`` otherwise.
        :rtype: ``bool``
        """
        raise NotImplementedError(
            'delete_container not implemented for this driver')

    def upload_object_via_stream(self, stream, container, object_name):
        # type: (BinaryIO, Container, str) -> Object
        """
        Upload an object using a file-like object opened in binary mode.

        The stream is read until it's exhausted. Closing it is left to the
        caller.

        :param stream: File-like object to read the object data from.
        :type stream: ``file``

        :param container: Destination container.
        :type container: :class:`bucketdemo.storage.base.Container`

        :param object_name: Object name (key).
        :type object_name: ``str``

        :rtype: :class:`bucketdemo.storage.base.Object`
        """
        raise NotImplementedError(
            'upload_object_via_stream not implemented for this driver')

    def copy_object(self, obj, destination_container_name):
        # type: (Object, str) -> Object
        """
        Copy an object into another container, keeping its name.

        :param obj: Object to copy.
        :type obj: :class:`bucketdemo.storage.base.Object`

        :param destination_container_name: Name of an existing container.
        :type destination_container_name: ``str``

        :return: The object as it is known after the copy was issued.
        :rtype: :class:`bucketdemo.storage.base.Object`
        """
        raise NotImplementedError(
            'copy_object not implemented for this driver')

    def wait_until_container_exists(self, container_name):
        # type: (str) -> Container
        """
        Block until the provider reports the container as existing.

        :param container_name: Container name.
        :type container_name: ``str``

        :return: The container.
        :rtype: :class:`bucketdemo.storage.base.Container`
        """
        def check():
            try:
                return self.get_container(container_name)
            except ContainerDoesNotExistError:
                return None

        return self._wait_for(check, container_name,
                              'Container %s does not exist' % container_name)

    def wait_until_container_not_exists(self, container_name):
        # type: (str) -> bool
        """
        Block until the provider reports the container as gone.

        :param container_name: Container name.
        :type container_name: ``str``

        :rtype: ``bool``
        """
        def check():
            try:
                self.get_container(container_name)
            except ContainerDoesNotExistError:
                return True
            return None

        return self._wait_for(check, container_name,
                              'Container %s still exists' % container_name)

    def wait_until_object_exists(self, container_name, object_name):
        # type: (str, str) -> Object
        """
        Block until the provider reports the object as existing.

        :param container_name: Container name.
        :type container_name: ``str``

        :param object_name: Object name.
        :type object_name: ``str``

        :rtype: :class:`bucketdemo.storage.base.Object`
        """
        def check():
            try:
                return self.get_object(container_name, object_name)
            except (ContainerDoesNotExistError, ObjectDoesNotExistError):
                return None

        return self._wait_for(check, '%s/%s' % (container_name, object_name),
                              'Object %s does not exist in container %s' %
                              (object_name, container_name))

    def _wait_for(self, check, resource_name, message):
        # type: (Callable, str, str) -> object
        """
        Call ``check`` until it returns something other than ``None``.

        Polls at most ``config.wait_max_attempts`` times with
        ``config.wait_delay`` seconds in between.
        """
        delay = self.config.wait_delay
        attempts = self.config.wait_max_attempts

        for attempt in range(1, attempts + 1):
            result = check()
            if result is not None:
                return result

            logger.debug('Waiting for %s, attempt %d/%d', resource_name,
                         attempt, attempts)
            if attempt < attempts:
                time.sleep(delay)

        raise WaitTimeoutError(
            value='%s after %d attempts' % (message, attempts),
            driver=self, resource_name=resource_name,
            timeout=self.config.wait_timeout)

    def __repr__(self):
        return '<%s: region=%s>' % (self.__class__.__name__,
                                    self.config.region)
