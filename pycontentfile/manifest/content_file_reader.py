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
from typing import Any, BinaryIO, Callable, Dict, Iterator, List, Optional, Union

import fastavro

from pycontentfile.common.options.content_file_options import ContentFileOptions
from pycontentfile.common.options.options import Options
from pycontentfile.manifest.schema.content_file import STATS_FIELDS, ContentFile
from pycontentfile.manifest.schema.reusable_content_file import ReusableContentFile
from pycontentfile.schema.data_types import DataField
from pycontentfile.table.row.generic_row import GenericRow

logger = logging.getLogger(__name__)


class ContentFileReader:
    """
    Reads content file records written by ContentFileWriter.

    With container reuse enabled (the default) iterator() yields the same
    ReusableContentFile for every record; it is overwritten when the iteration
    advances, so callers must copy() anything they keep.
    """

    def __init__(self, partition_fields: Optional[List[DataField]] = None, options: Optional[Options] = None):
        self.partition_fields = list(partition_fields or [])
        self.options = ContentFileOptions(options or Options.from_none())

    def iterator(self, input_stream: Union[bytes, BinaryIO]) -> Iterator[Union[ReusableContentFile, ContentFile]]:
        reuse = self.options.reuse_containers()
        for view in self._read_views(input_stream):
            yield view if reuse else view.copy()

    def read_all(self, input_stream: Union[bytes, BinaryIO],
                 content_file_filter: Optional[Callable[[ReusableContentFile], bool]] = None) -> List[ContentFile]:
        """Reads every record into an owned ContentFile, dropping stats if so configured."""
        drop_stats = self.options.drop_stats()
        files = []
        for view in self._read_views(input_stream):
            if content_file_filter is not None and not content_file_filter(view):
                continue
            files.append(view.copy_without_stats() if drop_stats else view.copy())
        return files

    def _read_views(self, input_stream: Union[bytes, BinaryIO]) -> Iterator[ReusableContentFile]:
        if isinstance(input_stream, (bytes, bytearray)):
            input_stream = BytesIO(input_stream)
        view = ReusableContentFile()
        count = 0
        try:
            for pos, record in enumerate(fastavro.reader(input_stream)):
                self._fill(view, record, pos)
                count += 1
                yield view
        except Exception as e:
            raise RuntimeError(f"Failed to read content files: {e}") from e
        logger.debug("Read %d content files", count)

    def _fill(self, view: ReusableContentFile, record: Dict[str, Any], pos: int):
        partition_dict = record["partition"]
        partition = GenericRow([partition_dict.get(field.name) for field in self.partition_fields],
                               self.partition_fields)
        view.set(
            content=record["content"],
            spec_id=record["spec_id"],
            path=record["file_path"],
            file_format=record["file_format"],
            partition=partition,
            record_count=record["record_count"],
            file_size_in_bytes=record["file_size_in_bytes"],
            key_metadata=record.get("key_metadata"),
            pos=pos,
        )
        for name in STATS_FIELDS:
            entries = record.get(name)
            view.set_stat(name, None if entries is None else ((e["key"], e["value"]) for e in entries))
        view.set_split_offsets(record.get("split_offsets"))
        view.set_equality_field_ids(record.get("equality_ids"))
