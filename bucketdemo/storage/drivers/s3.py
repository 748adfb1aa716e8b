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
Amazon S3 storage driver.

Requests, retries, multipart uploads and the existence waiters are all
handled by boto3, this module only maps them onto the driver API and the
bucketdemo error types.
"""

import logging

import boto3
import botocore.session
from boto3.exceptions import S3UploadFailedError
from boto3.s3.transfer import TransferConfig
from botocore.config import Config as BotocoreConfig
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from bucketdemo.common.types import ServiceError, WaitTimeoutError
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
    'S3StorageDriver',

    'DEFAULT_REGION_WITHOUT_CONSTRAINT'
]

logger = logging.getLogger(__name__)

# Buckets in this region must be created without a LocationConstraint
DEFAULT_REGION_WITHOUT_CONSTRAINT = 'us-east-1'

CONTAINER_ERROR_CODES = {
    'BucketAlreadyExists': ContainerAlreadyExistsError,
    'BucketAlreadyOwnedByYou': ContainerAlreadyExistsError,
    'NoSuchBucket': ContainerDoesNotExistError,
    'BucketNotEmpty': ContainerIsNotEmptyError,
    'InvalidBucketName': InvalidContainerNameError,
}

OBJECT_ERROR_CODES = {
    'NoSuchKey': ObjectDoesNotExistError,
    '404': ObjectDoesNotExistError,
    'NotFound': ObjectDoesNotExistError,
}


class S3StorageDriver(StorageDriver):
    """
    Storage driver which talks to Amazon S3 (or an S3 compatible endpoint
    set with ``config.endpoint_url``) through boto3.
    """

    name = 'Amazon S3'
    type = Provider.S3

    def __init__(self, config=None, client=None, transfer_config=None):
        """
        :param config: Driver settings.
        :type  config: :class:`bucketdemo.config.Config`

        :param client: Pre-built boto3 S3 client. Built from ``config``
                       when not provided.

        :param transfer_config: Settings for managed uploads.
        :type  transfer_config: :class:`boto3.s3.transfer.TransferConfig`
        """
        super(S3StorageDriver, self).__init__(config=config)
        self.client = client or self._create_client()
        self.transfer_config = transfer_config or TransferConfig()

    def _create_client(self):
        core_session = botocore.session.Session()

        if self.config.credentials_file:
            core_session.set_config_variable('credentials_file',
                                             self.config.credentials_file)
        if self.config.profile:
            core_session.set_config_variable('profile', self.config.profile)

        session = boto3.session.Session(botocore_session=core_session,
                                        region_name=self.config.region)
        client_config = BotocoreConfig(
            region_name=self.config.region,
            retries={'max_attempts': self.config.max_retries})

        try:
            return session.client('s3', config=client_config,
                                  endpoint_url=self.config.endpoint_url)
        except BotoCoreError as e:
            raise ServiceError(value='Unable to create S3 client',
                               driver=self, cause=e) from e

    @property
    def _waiter_config(self):
        return {'Delay': self.config.wait_delay,
                'MaxAttempts': self.config.wait_max_attempts}

    def iterate_containers(self):
        try:
            response = self.client.list_buckets()
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e) from e

        for item in response.get('Buckets', []):
            yield self._to_container(item)

    def get_container(self, container_name):
        try:
            response = self.client.head_bucket(Bucket=container_name)
        except ClientError as e:
            if self._error_code(e) in ('404', 'NoSuchBucket', 'NotFound'):
                raise ContainerDoesNotExistError(
                    value=None, driver=self, container_name=container_name,
                    cause=e) from e
            raise self._translate_error(e, container_name=container_name) \
                from e
        except BotoCoreError as e:
            raise self._translate_error(e) from e

        headers = response.get('ResponseMetadata', {}).get('HTTPHeaders', {})
        region = response.get('BucketRegion',
                              headers.get('x-amz-bucket-region'))
        return Container(name=container_name, region=region, driver=self)

    def create_container(self, container_name, region=None):
        region = region or self.config.region
        params = {'Bucket': container_name}

        if region != DEFAULT_REGION_WITHOUT_CONSTRAINT:
            params['CreateBucketConfiguration'] = {
                'LocationConstraint': region
            }

        try:
            self.client.create_bucket(**params)
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e, container_name=container_name) \
                from e

        logger.debug('Created bucket %s in %s', container_name, region)
        return Container(name=container_name, region=region, driver=self)

    def delete_container(self, container):
        # Note: All the objects in the container must be deleted first
        try:
            self.client.delete_bucket(Bucket=container.name)
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e, container_name=container.name) \
                from e

        logger.debug('Deleted bucket %s', container.name)
        return True

    def wait_until_container_exists(self, container_name):
        self._wait('bucket_exists', container_name,
                   Bucket=container_name)
        return Container(name=container_name, region=None, driver=self)

    def wait_until_container_not_exists(self, container_name):
        self._wait('bucket_not_exists', container_name,
                   Bucket=container_name)
        return True

    def wait_until_object_exists(self, container_name, object_name):
        self._wait('object_exists', '%s/%s' % (container_name, object_name),
                   Bucket=container_name, Key=object_name)
        return self.get_object(container_name, object_name)

    def iterate_container_objects(self, container, prefix=None):
        params = {'Bucket': container.name}
        if prefix is not None:
            params['Prefix'] = prefix

        paginator = self.client.get_paginator('list_objects_v2')

        try:
            for page in paginator.paginate(**params):
                for item in page.get('Contents', []):
                    yield self._to_obj(item, container)
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e, container_name=container.name) \
                from e

    def get_object(self, container_name, object_name):
        try:
            response = self.client.head_object(Bucket=container_name,
                                               Key=object_name)
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e, container_name=container_name,
                                        object_name=object_name) from e

        container = Container(name=container_name, region=None, driver=self)
        return self._headers_to_object(object_name, container, response)

    def upload_object_via_stream(self, stream, container, object_name):
        try:
            self.client.upload_fileobj(stream, container.name, object_name,
                                       Config=self.transfer_config)
        except S3UploadFailedError as e:
            raise ServiceError(value='Upload of %s failed' % (object_name),
                               driver=self, cause=e) from e
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e, container_name=container.name,
                                        object_name=object_name) from e

        return self.get_object(container.name, object_name)

    def copy_object(self, obj, destination_container_name):
        source = {'Bucket': obj.container.name, 'Key': obj.name}

        try:
            response = self.client.copy_object(
                Bucket=destination_container_name, CopySource=source,
                Key=obj.name)
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(
                e, container_name=destination_container_name,
                object_name=obj.name) from e

        result = response.get('CopyObjectResult', {})
        container = Container(name=destination_container_name, region=None,
                              driver=self)
        return Object(name=obj.name, size=obj.size,
                      hash=(result.get('ETag') or '').replace('"', '') or None,
                      last_modified=result.get('LastModified'),
                      storage_class=obj.storage_class,
                      container=container, driver=self)

    def _wait(self, waiter_name, resource_name, **params):
        waiter = self.client.get_waiter(waiter_name)

        try:
            waiter.wait(WaiterConfig=self._waiter_config, **params)
        except WaiterError as e:
            raise WaitTimeoutError(
                value='Waiter %s failed for %s' % (waiter_name,
                                                   resource_name),
                driver=self, resource_name=resource_name,
                timeout=self.config.wait_timeout, cause=e) from e
        except (ClientError, BotoCoreError) as e:
            raise self._translate_error(e) from e

    def _error_code(self, error):
        if isinstance(error, ClientError):
            return error.response.get('Error', {}).get('Code')
        return None

    def _translate_error(self, error, container_name=None, object_name=None):
        """
        Map a botocore exception onto the matching bucketdemo error.
        """
        code = self._error_code(error)

        if container_name is not None and code in CONTAINER_ERROR_CODES:
            cls = CONTAINER_ERROR_CODES[code]
            return cls(value=None, driver=self, container_name=container_name,
                       cause=error)

        if object_name is not None and code in OBJECT_ERROR_CODES:
            cls = OBJECT_ERROR_CODES[code]
            return cls(value=None, driver=self, object_name=object_name,
                       cause=error)

        return ServiceError(value='S3 request failed', driver=self,
                            cause=error)

    def _to_container(self, item):
        extra = {'creation_date': item.get('CreationDate')}

        return Container(name=item['Name'],
                         region=item.get('BucketRegion'),
                         extra=extra,
                         driver=self)

    def _headers_to_object(self, object_name, container, response):
        extra = {'content_type': response.get('ContentType'),
                 'etag': response.get('ETag')}

        return Object(name=object_name,
                      size=response.get('ContentLength'),
                      hash=(response.get('ETag') or '').replace('"', ''),
                      last_modified=response.get('LastModified'),
                      # S3 leaves out the header for STANDARD objects
                      storage_class=response.get('StorageClass', 'STANDARD'),
                      extra=extra,
                      meta_data=response.get('Metadata', {}),
                      container=container,
                      driver=self)

    def _to_obj(self, item, container):
        owner = item.get('Owner', {})
        meta_data = {'owner': {'id': owner.get('ID'),
                               'display_name': owner.get('DisplayName')}}

        return Object(name=item['Key'],
                      size=int(item.get('Size', 0)),
                      hash=(item.get('ETag') or '').replace('"', ''),
                      last_modified=item.get('LastModified'),
                      storage_class=item.get('StorageClass'),
                      meta_data=meta_data,
                      container=container,
                      driver=self)
