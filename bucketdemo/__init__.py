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
bucketdemo walks an object storage service through a full bucket
lifecycle: list, create, upload, list objects, delete.

:var __version__: Current version of bucketdemo
"""

import logging
import os
import codecs
import atexit

__all__ = [
    '__version__',
    'enable_debug'
]

__version__ = '0.3.0'

# Loggers which receive debug output when debug mode is enabled
DEBUG_LOGGERS = ['bucketdemo', 'botocore', 'boto3', 's3transfer']

DEBUG_FORMAT = '%(asctime)s %(name)s [%(levelname)s] %(message)s'


def enable_debug(fo):
    """
    Enable library wide debugging to a file-like object.

    :param fo: Where to append debugging information
    :type fo: File like object, only write operations are used.
    """
    handler = logging.StreamHandler(fo)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
    handler.setLevel(logging.DEBUG)

    for name in DEBUG_LOGGERS:
        logger = logging.getLogger(name)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)

    # Ensure the file handle is closed on exit
    def close_file(fd):
        try:
            fd.close()
        except Exception:
            pass

    atexit.register(close_file, fo)
    return handler


def _init_once():
    """
    Utility function that is ran once on Library import.

    This checks for the BUCKETDEMO_DEBUG environment variable, which if it
    exists is where we will log debug information about the storage calls.
    """
    path = os.getenv('BUCKETDEMO_DEBUG')
    if path:
        mode = 'a'

        # Opening those files in append mode will throw "illegal seek"
        # exception there.
        if path in ['/dev/stderr', '/dev/stdout']:
            mode = 'w'

        fo = codecs.open(path, mode, encoding='utf8')
        enable_debug(fo)


_init_once()
