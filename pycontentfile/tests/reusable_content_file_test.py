################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################

import unittest

from pycontentfile.common.file_format import FileFormat
from pycontentfile.manifest.schema.content_file import (DataFile,
                                                        EqualityDeleteFile)
from pycontentfile.manifest.schema.file_content import FileContent
from pycontentfile.manifest.schema.reusable_content_file import ReusableContentFile
from pycontentfile.table.row.generic_row import GenericRow


class ReusableContentFileTest(unittest.TestCase):

    def setUp(self):
        self.view = ReusableContentFile()
        self.view.set(content=0, spec_id=0, path="/warehouse/data/a.parquet", file_format="parquet",
                      partition=GenericRow.of(1), record_count=10, file_size_in_bytes=100, pos=0)
        self.view.set_stat("column_sizes", [(1, 40)])
        self.view.set_stat("lower_bounds", [(1, bytearray(b"\x01"))])
        self.view.set_split_offsets([4])

    def test_unset_stats_read_as_absent(self):
        self.assertEqual({1: 40}, self.view.column_sizes)
        self.assertIsNone(self.view.value_counts)
        self.assertIsNone(self.view.upper_bounds)
        self.assertEqual([], self.view.equality_field_ids)

    def test_copy_builds_owned_variant(self):
        copied = self.view.copy()

        self.assertIsInstance(copied, DataFile)
        self.assertEqual(FileFormat.PARQUET, copied.file_format)
        self.assertEqual({1: 40}, copied.column_sizes)
        self.assertEqual(b"\x01", copied.lower_bounds[1])
        self.assertEqual((4,), copied.split_offsets)
        self.assertEqual(0, copied.pos)

    def test_copy_survives_reuse(self):
        first = self.view.copy()
        first_without_stats = self.view.copy_without_stats()
        retained_map = self.view.column_sizes
        retained_bound = self.view.lower_bounds[1]

        self.view.set(content=2, spec_id=0, path="/warehouse/deletes/b.parquet", file_format="parquet",
                      partition=GenericRow.of(2), record_count=5, file_size_in_bytes=50, pos=1)
        self.view.set_stat("column_sizes", [(3, 7)])
        self.view.set_stat("lower_bounds", None)
        retained_bound[0] = 0x7F
        self.view.set_split_offsets(None)
        self.view.set_equality_field_ids([3])

        # the view's own containers are refilled in place, copies are not
        self.assertEqual({3: 7}, retained_map)
        self.assertEqual("/warehouse/data/a.parquet", first.path)
        self.assertEqual({1: 40}, first.column_sizes)
        self.assertEqual(b"\x01", first.lower_bounds[1])
        self.assertEqual((4,), first.split_offsets)
        self.assertEqual(GenericRow.of(1), first_without_stats.partition)
        self.assertIsNone(first_without_stats.column_sizes)

        second = self.view.copy()
        self.assertIsInstance(second, EqualityDeleteFile)
        self.assertEqual(FileContent.EQUALITY_DELETES, second.content)
        self.assertEqual((3,), second.equality_field_ids)
        self.assertIsNone(second.lower_bounds)
        self.assertIsNone(second.split_offsets)

    def test_empty_stat_is_not_absent(self):
        self.view.set_stat("value_counts", [])

        self.assertEqual({}, self.view.value_counts)
        self.assertEqual({}, self.view.copy().value_counts)

    def test_unknown_stat(self):
        with self.assertRaises(ValueError):
            self.view.set_stat("sizes", [(1, 1)])

    def test_not_hashable(self):
        with self.assertRaises(TypeError):
            hash(self.view)


if __name__ == '__main__':
    unittest.main()
