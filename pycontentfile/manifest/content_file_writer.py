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

import logging
from io import BytesIO
from typing import Any, BinaryIO, Dict, Iterable, List, Mapping, Optional

import fastavro

from pycontentfile.manifest.schema.content_file import (ContentFile,
                                                        content_file_schema)
from pycontentfile.schema.data_types import DataField

logger = logging.getLogger(__name__)


def _to_entries(stats: Optional[Mapping[int, Any]]) -> Optional[List[Dict[str, Any]]]:
    if stats is None:
        return None
    return [{"key": field_id, "value": value} for field_id, value in stats.items()]


class ContentFileWriter:
    """Writes content file records of one partition spec as an Avro container file."""

    def __init__(self, partition_fields: Optional[List[DataField]] = None):
        self.partition_fields = list(partition_fields or [])
        self.schema = fastavro.parse_schema(content_file_schema(self.partition_fields))

    def to_avro_record(self, content_file: ContentFile) -> Dict[str, Any]:
        partition = content_file.partition
        if len(partition) != len(self.partition_fields):
            raise ValueError(
                f"Partition arity {len(partition)} of {content_file.path} does not match "
                f"the {len(self.partition_fields)} partition fields of this writer")
        return {
            "content": content_file.content.value,
            "file_path": content_file.path,
            "file_format": content_file.file_format.value,
            "spec_id": content_file.spec_id,
            "partition": {field.name: partition.get_field(i) for i, field in enumerate(self.partition_fields)},
            "record_count": content_file.record_count,
            "file_size_in_bytes": content_file.file_size_in_bytes,
            "column_sizes": _to_entries(content_file.column_sizes),
            "value_counts": _to_entries(content_file.value_counts),
            "null_value_counts": _to_entries(content_file.null_value_counts),
            "nan_value_counts": _to_entries(content_file.nan_value_counts),
            "lower_bounds": _to_entries(content_file.lower_bounds),
            "upper_bounds": _to_entries(content_file.upper_bounds),
            "key_metadata": content_file.key_metadata,
            "split_offsets": list(content_file.split_offsets) if content_file.split_offsets is not None else None,
            "equality_ids": list(content_file.equality_field_ids) if content_file.equality_field_ids else None,
        }

    def write(self, output_stream: BinaryIO, files: Iterable[ContentFile]) -> int:
        """Writes the files to the stream and returns how many were written."""
        avro_records = [self.to_avro_record(content_file) for content_file in files]
        try:
            fastavro.writer(output_stream, self.schema, avro_records)
        except Exception as e:
            raise RuntimeError(f"Failed to write content files: {e}") from e
        logger.debug("Wrote %d content files", len(avro_records))
        return len(avro_records)

    def to_bytes(self, files: Iterable[ContentFile]) -> bytes:
        buffer = BytesIO()
        self.write(buffer, files)
        return buffer.getvalue()
