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

import pyarrow as pa

from pycontentfile.common.file_format import FileFormat
from pycontentfile.manifest.schema.content_file import (DataFile,
                                                        EqualityDeleteFile,
                                                        PositionDeleteFile)
from pycontentfile.schema.data_types import AtomicType, DataField, PyarrowFieldParser
from pycontentfile.table.inspect import ContentFilesInspector
from pycontentfile.table.row.generic_row import GenericRow


class ContentFilesInspectorTest(unittest.TestCase):

    def setUp(self):
        self.partition_fields = PyarrowFieldParser.to_data_fields(pa.schema([("dt", pa.string())]))
        partition = GenericRow(["2024-01-01"], self.partition_fields)
        self.files = [
            DataFile(spec_id=0, path="/tbl/a.parquet", file_format=FileFormat.PARQUET, partition=partition,
                     record_count=100, file_size_in_bytes=2048, column_sizes={1: 400}, value_counts={},
                     lower_bounds={1: b"\x01"}, split_offsets=[4]),
            PositionDeleteFile(spec_id=0, path="/tbl/pos.parquet", file_format=FileFormat.PARQUET,
                               partition=partition, record_count=2, file_size_in_bytes=100),
            EqualityDeleteFile(spec_id=0, path="/tbl/eq.avro", file_format=FileFormat.AVRO, partition=partition,
                               record_count=1, file_size_in_bytes=50, equality_field_ids=[1]),
        ]
        self.inspector = ContentFilesInspector(self.partition_fields)

    def test_files(self):
        table = self.inspector.files(self.files)

        self.assertEqual(3, table.num_rows)
        self.assertEqual(self.inspector.schema(), table.schema)
        self.assertEqual([0, 1, 2], table.column("content").to_pylist())
        self.assertEqual(["PARQUET", "PARQUET", "AVRO"], table.column("file_format").to_pylist())
        self.assertEqual([{"dt": "2024-01-01"}] * 3, table.column("partition").to_pylist())
        self.assertEqual([[(1, 400)], None, None], table.column("column_sizes").to_pylist())
        # an empty map stays empty, an absent one is null
        self.assertEqual([[], None, None], table.column("value_counts").to_pylist())
        self.assertEqual([[4], None, None], table.column("split_offsets").to_pylist())
        self.assertEqual([None, None, [1]], table.column("equality_ids").to_pylist())

    def test_content_filters(self):
        self.assertEqual(["/tbl/a.parquet"], self.inspector.data_files(self.files).column("file_path").to_pylist())
        self.assertEqual(["/tbl/pos.parquet", "/tbl/eq.avro"],
                         self.inspector.delete_files(self.files).column("file_path").to_pylist())

    def test_unpartitioned(self):
        inspector = ContentFilesInspector()
        data_file = DataFile(spec_id=0, path="/tbl/b.orc", file_format="orc", partition=GenericRow.empty(),
                             record_count=1, file_size_in_bytes=1)

        table = inspector.files([data_file])

        self.assertNotIn("partition", table.schema.names)
        self.assertEqual(1, table.num_rows)

    def test_partition_fields_from_pyarrow(self):
        self.assertEqual(1000, self.partition_fields[0].id)
        self.assertEqual("dt", self.partition_fields[0].name)
        self.assertEqual(AtomicType("STRING"), self.partition_fields[0].type)
        self.assertEqual(pa.string(), PyarrowFieldParser.from_data_field(
            DataField(1, "dt", AtomicType("STRING"))).type)


if __name__ == '__main__':
    unittest.main()
