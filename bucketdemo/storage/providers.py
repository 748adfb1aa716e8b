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
Methods for obtaining a reference to the storage driver class of a
provider.
"""

from bucketdemo.storage.types import Provider

__all__ = [
    'DRIVERS',
    'get_driver',
    'set_driver'
]

DRIVERS = {
    Provider.DUMMY:
    ('bucketdemo.storage.drivers.dummy', 'DummyStorageDriver'),
    Provider.S3:
    ('bucketdemo.storage.drivers.s3', 'S3StorageDriver'),
}


def get_driver(provider, drivers=None):
    """
    Get a driver.

    Driver modules are imported lazily so the SDK of a provider is only
    loaded when that provider is used.

    :param provider: Id (constant) of provider to get the driver for.
    :type provider: :class:`bucketdemo.storage.types.Provider`

    :param drivers: Dictionary containing valid providers, defaults to
                    ``DRIVERS``.
    :type drivers: ``dict``
    """
    if drivers is None:
        drivers = DRIVERS

    for provider_name, (mod_name, driver_name) in drivers.items():
        if provider.lower() == provider_name.lower():
            _mod = __import__(mod_name, globals(), locals(), [driver_name])
            return getattr(_mod, driver_name)

    raise AttributeError('Provider %s does not exist' % (provider))


def set_driver(provider, module, klass, drivers=None):
    """
    Sets a driver.

    :param provider: Id of provider to set driver for
    :type provider: ``str``

    :param module: The module which contains the driver
    :type module: ``str``

    :param klass: The driver class name
    :type klass: ``str``
    """
    if drivers is None:
        drivers = DRIVERS

    if provider in drivers:
        raise AttributeError('Provider %s already registered' % (provider))

    drivers[provider] = (module, klass)

    # Check if this driver is valid
    try:
        driver = get_driver(provider, drivers=drivers)
    except (ImportError, AttributeError) as exp:
        drivers.pop(provider)
        raise exp

    return driver
