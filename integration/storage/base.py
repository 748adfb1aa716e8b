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

import io
import os
import random
import string
import unittest

from bucketdemo.storage import types, providers


class Integration:
    class TestBase(unittest.TestCase):
        provider = None
        config = None

        container_name_prefix = "bdit"
        container_name_max_length = 63

        def setUp(self):
            if self.provider is None or self.config is None:
                raise unittest.SkipTest("config not set")

            driver_class = providers.get_driver(self.provider)
            self.driver = driver_class(self.config)

        def test_containers(self):
            # make a new container
            container_name = self._random_container_name()
            container = self.driver.create_container(container_name)
            self.assertEqual(container.name, container_name)
            container = self.driver.wait_until_container_exists(
                container_name)
            self.assertEqual(container.name, container_name)

            # check that the new container can be listed
            containers = self.driver.list_containers()
            self.assertIn(container_name, [c.name for c in containers])

            # delete the container
            self.driver.delete_container(container)
            self.driver.wait_until_container_not_exists(container_name)

            # check that a deleted container can't be looked up
            with self.assertRaises(types.ContainerDoesNotExistError):
                self.driver.get_container(container_name)

            # check that the container is deleted
            containers = self.driver.list_containers()
            self.assertNotIn(container_name, [c.name for c in containers])

        def test_objects(self):
            content = os.urandom(1024)
            container_name = self._random_container_name()
            container = self.driver.create_container(container_name)
            self.driver.wait_until_container_exists(container_name)

            obj = self.driver.upload_object_via_stream(
                io.BytesIO(content), container, "testblob")
            self.assertEqual(obj.name, "testblob")
            self.assertEqual(obj.size, len(content))

            objects = self.driver.list_container_objects(container)
            self.assertEqual([o.name for o in objects], ["testblob"])
            self.assertEqual(objects[0].size, len(content))

            self.assert_non_empty_container_delete(container)

        def assert_non_empty_container_delete(self, container):
            self.driver.delete_container(container)

        def _random_container_name(self):
            suffix = "".join(random.choice(string.ascii_lowercase +
                                           string.digits)
                             for _ in range(10))
            name = "%s-%s" % (self.container_name_prefix, suffix)
            return name[:self.container_name_max_length]
