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

from typing import Any, Dict, Iterable, List, Optional, Tuple

from pycontentfile.common.file_format import FileFormat
from pycontentfile.manifest.schema.content_file import (STATS_FIELDS,
                                                        ContentFile,
                                                        content_file_class)
from pycontentfile.manifest.schema.file_content import FileContent
from pycontentfile.table.row.struct_like import StructLike


class ReusableContentFile:
    """
    Borrowed, mutable view of a content file, overwritten in place by a reader for every record.

    The view also reuses its own stat dicts and offset lists between records, so anything
    taken from it, including its maps, is only valid until the reader moves on. Use copy()
    or copy_without_stats() to obtain a ContentFile that can be retained.
    """

    __hash__ = None

    def __init__(self):
        self.content: FileContent = FileContent.DATA
        self.spec_id: int = 0
        self.path: Optional[str] = None
        self.file_format: Optional[FileFormat] = None
        self.partition: Optional[StructLike] = None
        self.record_count: int = 0
        self.file_size_in_bytes: int = 0
        self.key_metadata: Optional[bytes] = None
        self.pos: Optional[int] = None

        self._column_sizes: Dict[int, int] = {}
        self._value_counts: Dict[int, int] = {}
        self._null_value_counts: Dict[int, int] = {}
        self._nan_value_counts: Dict[int, int] = {}
        self._lower_bounds: Dict[int, Any] = {}
        self._upper_bounds: Dict[int, Any] = {}
        self._split_offsets: List[int] = []
        self._equality_field_ids: List[int] = []
        # names of the containers currently holding a value; the others read as None
        self._present = set()

    def set(self, content: int, spec_id: int, path: str, file_format: Any, partition: StructLike,
            record_count: int, file_size_in_bytes: int, key_metadata: Optional[bytes] = None,
            pos: Optional[int] = None) -> 'ReusableContentFile':
        self.content = FileContent.from_id(content)
        self.spec_id = spec_id
        self.path = path
        self.file_format = FileFormat(file_format)
        self.partition = partition
        self.record_count = record_count
        self.file_size_in_bytes = file_size_in_bytes
        self.key_metadata = key_metadata
        self.pos = pos
        return self

    def set_stat(self, name: str, entries: Optional[Iterable[Tuple[int, Any]]]):
        """Refills the named statistic map in place, or marks it not collected when entries is None."""
        if name not in STATS_FIELDS:
            raise ValueError(f"Unknown statistic: {name}")
        self._refill(name, entries, dict)

    def set_split_offsets(self, offsets: Optional[Iterable[int]]):
        self._refill("split_offsets", offsets, list)

    def set_equality_field_ids(self, field_ids: Optional[Iterable[int]]):
        # never None on a record, only empty
        self._equality_field_ids.clear()
        if field_ids is not None:
            self._equality_field_ids.extend(field_ids)

    def _refill(self, name: str, values, kind):
        container = getattr(self, "_" + name)
        container.clear()
        if values is None:
            self._present.discard(name)
            return
        if kind is dict:
            container.update(values)
        else:
            container.extend(values)
        self._present.add(name)

    def _get(self, name: str):
        if name in self._present:
            return getattr(self, "_" + name)
        return None

    @property
    def column_sizes(self) -> Optional[Dict[int, int]]:
        return self._get("column_sizes")

    @property
    def value_counts(self) -> Optional[Dict[int, int]]:
        return self._get("value_counts")

    @property
    def null_value_counts(self) -> Optional[Dict[int, int]]:
        return self._get("null_value_counts")

    @property
    def nan_value_counts(self) -> Optional[Dict[int, int]]:
        return self._get("nan_value_counts")

    @property
    def lower_bounds(self) -> Optional[Dict[int, Any]]:
        return self._get("lower_bounds")

    @property
    def upper_bounds(self) -> Optional[Dict[int, Any]]:
        return self._get("upper_bounds")

    @property
    def split_offsets(self) -> Optional[List[int]]:
        return self._get("split_offsets")

    @property
    def equality_field_ids(self) -> List[int]:
        return self._equality_field_ids

    def copy(self) -> ContentFile:
        return self._to_content_file(with_stats=True)

    def copy_without_stats(self) -> ContentFile:
        return self._to_content_file(with_stats=False)

    def _to_content_file(self, with_stats: bool) -> ContentFile:
        stats = {name: getattr(self, name) if with_stats else None for name in STATS_FIELDS}
        return content_file_class(self.content)(
            spec_id=self.spec_id,
            path=self.path,
            file_format=self.file_format,
            partition=self.partition,
            record_count=self.record_count,
            file_size_in_bytes=self.file_size_in_bytes,
            key_metadata=self.key_metadata,
            split_offsets=self.split_offsets,
            equality_field_ids=self.equality_field_ids,
            pos=self.pos,
            **stats
        )

    def __repr__(self) -> str:
        return f"ReusableContentFile(content={self.content!r}, path={self.path!r}, pos={self.pos})"
