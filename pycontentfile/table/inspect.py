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

from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

import pyarrow as pa

from pycontentfile.manifest.schema.content_file import ContentFile
from pycontentfile.manifest.schema.file_content import FileContent
from pycontentfile.schema.data_types import DataField, PyarrowFieldParser


def _entries(stats: Optional[Mapping[int, Any]]) -> Optional[List[tuple]]:
    if stats is None:
        return None
    return list(stats.items())


class ContentFilesInspector:
    """Renders content file records of one partition spec as a pyarrow table."""

    def __init__(self, partition_fields: Optional[List[DataField]] = None):
        self.partition_fields = list(partition_fields or [])

    def schema(self) -> pa.Schema:
        fields = [
            pa.field("content", pa.int8(), nullable=False),
            pa.field("file_path", pa.string(), nullable=False),
            pa.field("file_format", pa.string(), nullable=False),
            pa.field("spec_id", pa.int32(), nullable=False),
        ]
        if self.partition_fields:
            partition_struct = pa.struct(list(PyarrowFieldParser.from_data_fields(self.partition_fields)))
            fields.append(pa.field("partition", partition_struct, nullable=False))
        fields.extend([
            pa.field("record_count", pa.int64(), nullable=False),
            pa.field("file_size_in_bytes", pa.int64(), nullable=False),
            pa.field("column_sizes", pa.map_(pa.int32(), pa.int64()), nullable=True),
            pa.field("value_counts", pa.map_(pa.int32(), pa.int64()), nullable=True),
            pa.field("null_value_counts", pa.map_(pa.int32(), pa.int64()), nullable=True),
            pa.field("nan_value_counts", pa.map_(pa.int32(), pa.int64()), nullable=True),
            pa.field("lower_bounds", pa.map_(pa.int32(), pa.binary()), nullable=True),
            pa.field("upper_bounds", pa.map_(pa.int32(), pa.binary()), nullable=True),
            pa.field("key_metadata", pa.binary(), nullable=True),
            pa.field("split_offsets", pa.list_(pa.int64()), nullable=True),
            pa.field("equality_ids", pa.list_(pa.int32()), nullable=True),
        ])
        return pa.schema(fields)

    def files(self, content_files: Iterable[ContentFile],
              content_filter: Optional[Set[FileContent]] = None) -> pa.Table:
        rows = []
        for content_file in content_files:
            if content_filter and content_file.content not in content_filter:
                continue
            rows.append(self._to_row(content_file))
        return pa.Table.from_pylist(rows, schema=self.schema())

    def data_files(self, content_files: Iterable[ContentFile]) -> pa.Table:
        return self.files(content_files, {FileContent.DATA})

    def delete_files(self, content_files: Iterable[ContentFile]) -> pa.Table:
        return self.files(content_files, {FileContent.POSITION_DELETES, FileContent.EQUALITY_DELETES})

    def _to_row(self, content_file: ContentFile) -> Dict[str, Any]:
        row = {
            "content": content_file.content.value,
            "file_path": content_file.path,
            "file_format": content_file.file_format.value,
            "spec_id": content_file.spec_id,
        }
        if self.partition_fields:
            row["partition"] = {
                field.name: content_file.partition.get_field(pos) for pos, field in enumerate(self.partition_fields)
            }
        row.update({
            "record_count": content_file.record_count,
            "file_size_in_bytes": content_file.file_size_in_bytes,
            "column_sizes": _entries(content_file.column_sizes),
            "value_counts": _entries(content_file.value_counts),
            "null_value_counts": _entries(content_file.null_value_counts),
            "nan_value_counts": _entries(content_file.nan_value_counts),
            "lower_bounds": _entries(content_file.lower_bounds),
            "upper_bounds": _entries(content_file.upper_bounds),
            "key_metadata": content_file.key_metadata,
            "split_offsets": list(content_file.split_offsets) if content_file.split_offsets is not None else None,
            "equality_ids": list(content_file.equality_field_ids) if content_file.equality_field_ids else None,
        })
        return row
