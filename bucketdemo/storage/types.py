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

from bucketdemo.common.types import ServiceError

__all__ = [
    'Provider',
    'ContainerError',
    'ObjectError',
    'ContainerAlreadyExistsError',
    'ContainerDoesNotExistError',
    'ContainerIsNotEmptyError',
    'ObjectDoesNotExistError',
    'InvalidContainerNameError'
]


class Provider(object):
    """
    Defines for each of the supported providers

    :cvar DUMMY: In-memory provider, nothing leaves the process
    :cvar S3: Amazon S3 (and S3 compatible endpoints) through boto3
    """
    DUMMY = 'dummy'
    S3 = 's3'


class ContainerError(ServiceError):
    error_type = 'ContainerError'

    def __init__(self, value, driver, container_name, cause=None):
        self.container_name = container_name
        super(ContainerError, self).__init__(value=value, driver=driver,
                                             cause=cause)

    def __str__(self):
        message = '%s: container=%s' % (self.error_type, self.container_name)
        if self.value:
            message += ', %s' % (self.value)
        if self.cause is not None:
            message += ' (%s)' % (self.cause)
        return message

    def __repr__(self):
        return ('<%s in %s, container=%s, value=%s>' %
                (self.error_type, repr(self.driver),
                 self.container_name, self.value))


class ObjectError(ServiceError):
    error_type = 'ObjectError'

    def __init__(self, value, driver, object_name, cause=None):
        self.object_name = object_name
        super(ObjectError, self).__init__(value=value, driver=driver,
                                          cause=cause)

    def __str__(self):
        message = '%s: object=%s' % (self.error_type, self.object_name)
        if self.value:
            message += ', %s' % (self.value)
        if self.cause is not None:
            message += ' (%s)' % (self.cause)
        return message

    def __repr__(self):
        return '<%s in %s, value=%s, object = %s>' % (self.error_type,
                                                      repr(self.driver),
                                                      self.value,
                                                      self.object_name)


class ContainerAlreadyExistsError(ContainerError):
    error_type = 'ContainerAlreadyExistsError'


class ContainerDoesNotExistError(ContainerError):
    error_type = 'ContainerDoesNotExistError'


class ContainerIsNotEmptyError(ContainerError):
    error_type = 'ContainerIsNotEmptyError'


class ObjectDoesNotExistError(ObjectError):
    error_type = 'ObjectDoesNotExistError'


class InvalidContainerNameError(ContainerError):
    error_type = 'InvalidContainerNameError'
