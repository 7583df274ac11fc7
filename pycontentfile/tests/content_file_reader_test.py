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

import dataclasses
import unittest
from io import BytesIO

from pycontentfile.common.file_format import FileFormat
from pycontentfile.common.options.content_file_options import ContentFileOptions
from pycontentfile.common.options.options import Options
from pycontentfile.manifest.content_file_reader import ContentFileReader
from pycontentfile.manifest.content_file_writer import ContentFileWriter
from pycontentfile.manifest.schema.content_file import (DataFile,
                                                        EqualityDeleteFile,
                                                        PositionDeleteFile)
from pycontentfile.manifest.schema.file_content import FileContent
from pycontentfile.manifest.schema.reusable_content_file import ReusableContentFile
from pycontentfile.schema.data_types import AtomicType, DataField
from pycontentfile.table.row.generic_row import GenericRow


class ContentFileReaderTest(unittest.TestCase):

    def setUp(self):
        self.partition_fields = [
            DataField(1000, "dt", AtomicType("STRING")),
            DataField(1001, "bucket", AtomicType("INT")),
        ]
        partition = GenericRow(["2024-01-01", 3], self.partition_fields)
        self.files = [
            DataFile(
                spec_id=1, path="s3://bucket/tbl/data/a.parquet", file_format=FileFormat.PARQUET,
                partition=partition, record_count=100, file_size_in_bytes=2048,
                column_sizes={1: 400, 2: 1200}, value_counts={1: 100, 2: 100}, null_value_counts={},
                lower_bounds={1: b"\x01"}, upper_bounds={1: b"\x64"},
                split_offsets=[0, 512, 1024, 1536]),
            PositionDeleteFile(
                spec_id=1, path="s3://bucket/tbl/data/pos-deletes.parquet", file_format=FileFormat.PARQUET,
                partition=partition, record_count=2, file_size_in_bytes=300, key_metadata=b"\x01\x02"),
            EqualityDeleteFile(
                spec_id=1, path="s3://bucket/tbl/data/eq-deletes.avro", file_format=FileFormat.AVRO,
                partition=GenericRow(["2024-01-02", None], self.partition_fields),
                record_count=1, file_size_in_bytes=150, equality_field_ids=[3, 5],
                lower_bounds={3: b"a", 5: b"b", 7: b"c"}),
        ]
        self.avro_bytes = ContentFileWriter(self.partition_fields).to_bytes(self.files)

    def _reader(self, **options) -> ContentFileReader:
        return ContentFileReader(self.partition_fields, Options(options))

    def test_read_all_returns_owned_files(self):
        files = self._reader().read_all(self.avro_bytes)

        self.assertEqual(3, len(files))
        self.assertEqual([0, 1, 2], [f.pos for f in files])
        self.assertEqual([DataFile, PositionDeleteFile, EqualityDeleteFile], [type(f) for f in files])
        data_file = files[0]
        self.assertEqual((0, 512, 1024, 1536), data_file.split_offsets)
        self.assertEqual({}, data_file.null_value_counts)
        self.assertIsNone(data_file.nan_value_counts)
        self.assertEqual(self.files[0].partition, data_file.partition)
        self.assertEqual(b"\x01\x02", files[1].key_metadata)
        self.assertIsNone(files[1].column_sizes)
        self.assertEqual((3, 5), files[2].equality_field_ids)
        self.assertEqual(b"c", files[2].lower_bounds[7])
        self.assertIsNone(files[2].partition.get_field(1))

    def test_read_matches_written_files_apart_from_position(self):
        files = self._reader().read_all(BytesIO(self.avro_bytes))

        for pos, (written, read) in enumerate(zip(self.files, files)):
            self.assertEqual(pos, read.pos)
            self.assertEqual(written, dataclasses.replace(read, pos=None))

    def test_iterator_reuses_one_view(self):
        reader = self._reader()
        seen = []
        copies = []
        for content_file in reader.iterator(self.avro_bytes):
            seen.append(content_file)
            copies.append(content_file.copy())

        self.assertIsInstance(seen[0], ReusableContentFile)
        self.assertTrue(all(view is seen[0] for view in seen))
        # the retained view shows only the last record
        self.assertEqual(FileContent.EQUALITY_DELETES, seen[0].content)
        self.assertEqual([FileContent.DATA, FileContent.POSITION_DELETES, FileContent.EQUALITY_DELETES],
                         [f.content for f in copies])
        self.assertEqual({1: 400, 2: 1200}, copies[0].column_sizes)

    def test_iterator_without_reuse_yields_owned_files(self):
        reader = self._reader(**{ContentFileOptions.READ_REUSE_CONTAINERS.key(): "false"})
        files = list(reader.iterator(self.avro_bytes))

        self.assertEqual(3, len({id(f) for f in files}))
        self.assertIsInstance(files[0], DataFile)
        self.assertEqual({1: 400, 2: 1200}, files[0].column_sizes)

    def test_drop_stats(self):
        reader = self._reader(**{ContentFileOptions.READ_DROP_STATS.key(): "true"})
        files = reader.read_all(self.avro_bytes)

        for content_file in files:
            self.assertIsNone(content_file.column_sizes)
            self.assertIsNone(content_file.lower_bounds)
        self.assertEqual((0, 512, 1024, 1536), files[0].split_offsets)
        self.assertEqual((3, 5), files[2].equality_field_ids)

    def test_filter(self):
        files = self._reader().read_all(self.avro_bytes, lambda view: view.content.is_delete())

        self.assertEqual([1, 2], [f.pos for f in files])

    def test_read_invalid_bytes(self):
        with self.assertRaises(RuntimeError):
            self._reader().read_all(b"not an avro file")

    def test_read_truncated_block(self):
        truncated = self.avro_bytes[:-20]

        with self.assertRaises(RuntimeError):
            list(self._reader().iterator(truncated))
        with self.assertRaises(RuntimeError):
            self._reader().read_all(truncated)

    def test_writer_rejects_partition_of_other_arity(self):
        writer = ContentFileWriter([])
        with self.assertRaises(ValueError):
            writer.to_bytes(self.files[:1])

    def test_unpartitioned_round_trip(self):
        data_file = DataFile(spec_id=0, path="/tbl/a.orc", file_format="orc", partition=GenericRow.empty(),
                             record_count=1, file_size_in_bytes=10)

        files = ContentFileReader().read_all(ContentFileWriter().to_bytes([data_file]))

        self.assertEqual(1, len(files))
        self.assertEqual(0, len(files[0].partition))
        self.assertEqual(FileFormat.ORC, files[0].file_format)


if __name__ == '__main__':
    unittest.main()
