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
from typing import Any, List, Optional, Sequence, Union

from pycontentfile.common.file_format import FileFormat
from pycontentfile.common.options.content_file_options import ContentFileOptions
from pycontentfile.common.options.options import Options
from pycontentfile.manifest.schema.content_file import (ContentFile,
                                                        content_file_class)
from pycontentfile.manifest.schema.file_content import FileContent
from pycontentfile.manifest.schema.metrics import Metrics
from pycontentfile.schema.data_types import DataField
from pycontentfile.table.row.generic_row import GenericRow
from pycontentfile.table.row.struct_like import StructLike

logger = logging.getLogger(__name__)


class ContentFileBuilder:
    """
    Builds ContentFile records for newly written files of one partition spec.

    Example:
        data_file = ContentFileBuilder(spec_id=0, partition_fields=fields) \\
            .with_path("s3://bucket/db/tbl/data/dt=2024-01-01/00000-0.parquet") \\
            .with_partition_values(["2024-01-01"]) \\
            .with_file_size_in_bytes(2048) \\
            .with_metrics(metrics) \\
            .build()
    """

    def __init__(self, spec_id: int, partition_fields: Optional[List[DataField]] = None,
                 options: Optional[Options] = None):
        self.spec_id = spec_id
        self.partition_fields = list(partition_fields or [])
        self.options = ContentFileOptions(options or Options.from_none())
        self.clear()

    def clear(self) -> 'ContentFileBuilder':
        self._content = FileContent.DATA
        self._path: Optional[str] = None
        self._file_format: Optional[FileFormat] = None
        # unpartitioned specs need no partition to be set
        self._partition: Optional[StructLike] = None if self.partition_fields else GenericRow.empty()
        self._record_count: Optional[int] = None
        self._file_size_in_bytes: Optional[int] = None
        self._metrics = Metrics()
        self._key_metadata: Optional[bytes] = None
        self._split_offsets: Optional[List[int]] = None
        self._equality_field_ids: List[int] = []
        return self

    def of_data(self) -> 'ContentFileBuilder':
        self._content = FileContent.DATA
        self._equality_field_ids = []
        return self

    def of_position_deletes(self) -> 'ContentFileBuilder':
        self._content = FileContent.POSITION_DELETES
        self._equality_field_ids = []
        return self

    def of_equality_deletes(self, *field_ids: int) -> 'ContentFileBuilder':
        self._content = FileContent.EQUALITY_DELETES
        self._equality_field_ids = list(field_ids)
        return self

    def copy_from(self, content_file: ContentFile) -> 'ContentFileBuilder':
        """Starts from the given file, which must use this builder's partition spec."""
        if content_file.spec_id != self.spec_id:
            raise ValueError(
                f"Cannot copy a file of partition spec {content_file.spec_id} "
                f"into a builder for spec {self.spec_id}")
        self._content = content_file.content
        self._path = content_file.path
        self._file_format = content_file.file_format
        self._partition = content_file.partition
        self._record_count = content_file.record_count
        self._file_size_in_bytes = content_file.file_size_in_bytes
        self._metrics = Metrics(
            record_count=content_file.record_count,
            column_sizes=content_file.column_sizes,
            value_counts=content_file.value_counts,
            null_value_counts=content_file.null_value_counts,
            nan_value_counts=content_file.nan_value_counts,
            lower_bounds=content_file.lower_bounds,
            upper_bounds=content_file.upper_bounds,
        )
        self._key_metadata = content_file.key_metadata
        self._split_offsets = list(content_file.split_offsets) if content_file.split_offsets is not None else None
        self._equality_field_ids = list(content_file.equality_field_ids)
        return self

    def with_path(self, path: str) -> 'ContentFileBuilder':
        self._path = path
        return self

    def with_format(self, file_format: Union[FileFormat, str]) -> 'ContentFileBuilder':
        self._file_format = FileFormat(file_format)
        return self

    def with_partition(self, partition: StructLike) -> 'ContentFileBuilder':
        if len(partition) != len(self.partition_fields):
            raise ValueError(
                f"Partition arity {len(partition)} does not match partition spec {self.spec_id} "
                f"with {len(self.partition_fields)} fields")
        self._partition = partition
        return self

    def with_partition_values(self, values: Sequence[Any]) -> 'ContentFileBuilder':
        if len(values) != len(self.partition_fields):
            raise ValueError(
                f"Got {len(values)} partition values for partition spec {self.spec_id} "
                f"with {len(self.partition_fields)} fields")
        return self.with_partition(GenericRow(values, self.partition_fields))

    def with_record_count(self, record_count: int) -> 'ContentFileBuilder':
        self._record_count = record_count
        return self

    def with_file_size_in_bytes(self, file_size_in_bytes: int) -> 'ContentFileBuilder':
        self._file_size_in_bytes = file_size_in_bytes
        return self

    def with_metrics(self, metrics: Metrics) -> 'ContentFileBuilder':
        """Sets the column statistics, and the record count when the metrics carry one."""
        self._metrics = metrics
        if metrics.record_count is not None:
            self._record_count = metrics.record_count
        return self

    def with_split_offsets(self, split_offsets: Optional[Sequence[int]]) -> 'ContentFileBuilder':
        self._split_offsets = list(split_offsets) if split_offsets is not None else None
        return self

    def with_encryption_key_metadata(self, key_metadata: Optional[bytes]) -> 'ContentFileBuilder':
        self._key_metadata = key_metadata
        return self

    def build(self) -> ContentFile:
        if self._path is None:
            raise ValueError("Cannot build content file: path is not set")
        if self._partition is None:
            raise ValueError(f"Cannot build content file: partition is not set for partitioned spec {self.spec_id}")
        if self._record_count is None:
            raise ValueError("Cannot build content file: record count is not set")
        if self._file_size_in_bytes is None:
            raise ValueError("Cannot build content file: file size is not set")

        file_format = self._file_format
        if file_format is None:
            file_format = FileFormat.from_file_name(self._path)
            if file_format is None:
                file_format = self.options.default_file_format()
                logger.debug("Cannot infer file format of %s, using default %s", self._path, file_format.name)

        return content_file_class(self._content)(
            spec_id=self.spec_id,
            path=self._path,
            file_format=file_format,
            partition=self._partition,
            record_count=self._record_count,
            file_size_in_bytes=self._file_size_in_bytes,
            column_sizes=self._metrics.column_sizes,
            value_counts=self._metrics.value_counts,
            null_value_counts=self._metrics.null_value_counts,
            nan_value_counts=self._metrics.nan_value_counts,
            lower_bounds=self._metrics.lower_bounds,
            upper_bounds=self._metrics.upper_bounds,
            key_metadata=self._key_metadata,
            split_offsets=self._split_offsets,
            equality_field_ids=self._equality_field_ids,
        )
