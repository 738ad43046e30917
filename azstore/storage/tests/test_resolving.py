# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the storage resolving module.
"""

import unittest

from azstore.storage import constants, resolving
from azstore.storage.tests import fakes
from azstore.utils import errors


def _pairs(resources):
    return [(r.container, r.name) for r in resources]


class TestBlobPatternResolver(unittest.TestCase):
    """
    Tests resolving blob patterns.
    """

    def setUp(self):
        self.backend = fakes.FakeBlobBackend(containers={
            'alpha': ['a1', 'shared', 'a2'],
            'beta': [],
            'gamma': ['shared', 'g1'],
        })
        self.resolver = resolving.BlobPatternResolver(self.backend)

    def test_literal_literal_makes_no_backend_calls(self):
        resources = self.resolver.resolve('alpha/a1')

        self.assertEqual(_pairs(resources), [('alpha', 'a1')])
        self.assertEqual(self.backend.calls, [])

    def test_literal_literal_is_not_validated(self):
        """
        Test that literal names are passed through even when the backend does not have them.
        """
        resources = self.resolver.resolve('missing/nothing')

        self.assertEqual(_pairs(resources), [('missing', 'nothing')])
        self.assertEqual(self.backend.calls, [])
        with self.assertRaises(KeyError):
            resources[0].get_client()

    def test_literal_container_wildcard_object(self):
        resources = self.resolver.resolve('alpha/*')

        self.assertEqual(_pairs(resources), [('alpha', 'a1'), ('alpha', 'shared'), ('alpha', 'a2')])
        self.assertEqual(self.backend.calls, [('list_objects', 'alpha')])

    def test_wildcard_container_literal_object(self):
        """
        Test that every listed container yields a handle for the literal name.
        """
        resources = self.resolver.resolve('*/shared')

        self.assertEqual(_pairs(resources), [('alpha', 'shared'), ('beta', 'shared'),
                                             ('gamma', 'shared')])
        self.assertEqual(self.backend.calls, [('list_containers',)])

    def test_wildcard_wildcard_is_cross_product(self):
        resources = self.resolver.resolve('*/*')

        self.assertEqual(_pairs(resources), [
            ('alpha', 'a1'), ('alpha', 'shared'), ('alpha', 'a2'),
            ('gamma', 'shared'), ('gamma', 'g1'),
        ])
        self.assertEqual(self.backend.calls, [
            ('list_containers',),
            ('list_objects', 'alpha'),
            ('list_objects', 'beta'),
            ('list_objects', 'gamma'),
        ])

    def test_wildcard_in_empty_account(self):
        resolver = resolving.BlobPatternResolver(fakes.FakeBlobBackend(containers={}))
        self.assertEqual(resolver.resolve('*/*'), [])

    def test_handles_look_up_clients_on_demand(self):
        resources = self.resolver.resolve('gamma/*')
        self.assertEqual(self.backend.calls, [('list_objects', 'gamma')])

        self.assertEqual(resources[1].get_client(), 'blob-client:gamma/g1')
        self.assertEqual(self.backend.calls[-1], ('get_object', 'gamma', 'g1'))
        self.assertEqual(resources[1].scheme, constants.StorageScheme.AZURE_BLOB)
        self.assertEqual(resources[1].uri, 'azure-blob://gamma/g1')

    def test_listing_failure_aborts_resolution(self):
        self.backend.failing_containers.add('gamma')

        with self.assertRaises(ConnectionError):
            self.resolver.resolve('*/*')

    def test_resolution_is_idempotent(self):
        first = self.resolver.resolve('*/*')
        second = self.resolver.resolve('*/*')
        self.assertEqual(first, second)

    def test_malformed_remainder(self):
        with self.assertRaises(errors.MalformedPatternError):
            self.resolver.resolve('alpha')
        with self.assertRaises(errors.MalformedPatternError):
            self.resolver.resolve('alpha/a1/extra')
        self.assertEqual(self.backend.calls, [])

    def test_invalid_max_workers(self):
        with self.assertRaises(ValueError):
            resolving.BlobPatternResolver(self.backend, max_workers=0)


class TestBlobPatternResolverValidateLiterals(unittest.TestCase):
    """
    Tests resolving blob patterns when literal names are validated against the backend.
    """

    def setUp(self):
        self.backend = fakes.FakeBlobBackend(containers={
            'alpha': ['a1', 'shared'],
            'beta': [],
            'gamma': ['shared'],
        })
        self.resolver = resolving.BlobPatternResolver(self.backend, validate_literals=True)

    def test_wildcard_container_literal_object_only_existing(self):
        """
        Test that only containers holding the literal name yield a handle.
        """
        resources = self.resolver.resolve('*/shared')

        self.assertEqual(_pairs(resources), [('alpha', 'shared'), ('gamma', 'shared')])

    def test_literal_literal_existing(self):
        self.assertEqual(_pairs(self.resolver.resolve('alpha/a1')), [('alpha', 'a1')])

    def test_literal_literal_missing_object(self):
        self.assertEqual(self.resolver.resolve('alpha/missing'), [])

    def test_literal_literal_missing_container(self):
        self.assertEqual(self.resolver.resolve('missing/a1'), [])
        self.assertEqual(self.backend.calls, [('list_containers',)])

    def test_wildcard_wildcard_unchanged(self):
        self.assertEqual(len(self.resolver.resolve('*/*')), 3)


class TestFileSharePatternResolver(unittest.TestCase):
    """
    Tests resolving file share patterns.
    """

    def setUp(self):
        self.backend = fakes.FakeFileShareBackend(shares={
            'myshare': ['myfile', 'subdir/', 'other'],
            'archive': ['myfile'],
        })
        self.resolver = resolving.FileSharePatternResolver(self.backend)

    def test_literal_literal(self):
        resources = self.resolver.resolve('myshare/myfile')

        self.assertEqual(_pairs(resources), [('myshare', 'myfile')])
        self.assertEqual(resources[0].uri, 'azure-file://myshare/myfile')
        self.assertEqual(resources[0].get_client(), 'file-client:myshare/myfile')
        self.assertEqual(self.backend.calls, [('get_file', 'myshare', 'myfile')])

    def test_literal_share_wildcard_file_skips_directories(self):
        resources = self.resolver.resolve('myshare/*')

        self.assertEqual(_pairs(resources), [('myshare', 'myfile'), ('myshare', 'other')])

    def test_wildcard_share_literal_file(self):
        resources = self.resolver.resolve('*/myfile')

        self.assertEqual(_pairs(resources), [('myshare', 'myfile'), ('archive', 'myfile')])
        self.assertEqual(self.backend.calls, [('list_shares',)])

    def test_wildcard_wildcard(self):
        resources = self.resolver.resolve('*/*')

        self.assertEqual(_pairs(resources), [
            ('myshare', 'myfile'), ('myshare', 'other'), ('archive', 'myfile'),
        ])

    def test_validate_literals_rejects_directory(self):
        resolver = resolving.FileSharePatternResolver(self.backend, validate_literals=True)

        self.assertEqual(resolver.resolve('myshare/subdir'), [])
        self.assertEqual(_pairs(resolver.resolve('*/other')), [('myshare', 'other')])


class TestParallelResolution(unittest.TestCase):
    """
    Tests fanning listings out over multiple workers.
    """

    def setUp(self):
        self.backend = fakes.FakeBlobBackend(containers={
            f'container-{i}': [f'blob-{i}-{j}' for j in range(3)] for i in range(8)
        })

    def test_order_matches_sequential_resolution(self):
        sequential = resolving.BlobPatternResolver(self.backend).resolve('*/*')
        parallel = resolving.BlobPatternResolver(self.backend, max_workers=4).resolve('*/*')

        self.assertEqual(len(parallel), 24)
        self.assertEqual(_pairs(parallel), _pairs(sequential))

    def test_failure_aborts_resolution(self):
        self.backend.failing_containers.add('container-5')
        resolver = resolving.BlobPatternResolver(self.backend, max_workers=4)

        with self.assertRaises(ConnectionError):
            resolver.resolve('*/*')


if __name__ == '__main__':
    unittest.main()
