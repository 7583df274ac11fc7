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

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from pycontentfile.common.file_format import FileFormat
from pycontentfile.manifest.schema.file_content import FileContent
from pycontentfile.schema.data_types import DataField, PyarrowFieldParser
from pycontentfile.table.row.struct_like import StructLike

STATS_FIELDS = (
    "column_sizes",
    "value_counts",
    "null_value_counts",
    "nan_value_counts",
    "lower_bounds",
    "upper_bounds",
)


def _freeze_counts(counts: Optional[Mapping[int, int]]) -> Optional[Mapping[int, int]]:
    if counts is None:
        return None
    return MappingProxyType(dict(counts))


def _freeze_bounds(bounds: Optional[Mapping[int, Any]]) -> Optional[Mapping[int, bytes]]:
    if bounds is None:
        return None
    frozen = {}
    for field_id, value in bounds.items():
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"Bound of column {field_id} must be bytes-like, got {type(value).__name__}")
        # copies bytearray and memoryview buffers a pooled reader may overwrite
        frozen[field_id] = bytes(value)
    return MappingProxyType(frozen)


def _check_required_int(name: str, value: Any):
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int, got {value!r}")


def _check_non_negative(name: str, value: Optional[int]):
    if value is not None and value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


@dataclass(frozen=True)
class ContentFile(ABC):
    """
    Metadata of a physical data or delete file tracked by a table.

    Instances are immutable and independently owned: every container argument is
    copied on construction, so later changes to the caller's dicts, lists or buffers
    are never observed. Statistic maps are read-only mappings, or None when the
    statistic was not collected; an empty mapping is kept as-is and is not the same
    as None.

    Construction fails with ValueError when an invariant does not hold:
    split_offsets must be sorted in ascending order (they are never sorted here),
    equality_field_ids must be non-empty for equality delete files and empty for
    every other variant. spec_id, record_count and file_size_in_bytes are required ints,
    and counts and sizes must not be negative.
    """

    # id of the partition spec used to interpret partition
    spec_id: int
    # fully qualified location of the file
    path: str
    file_format: FileFormat
    partition: StructLike
    # number of top-level records in the file
    record_count: int
    file_size_in_bytes: int
    # column id -> size of the column in bytes
    column_sizes: Optional[Mapping[int, int]] = None
    # column id -> count of values, including nulls and NaNs
    value_counts: Optional[Mapping[int, int]] = None
    null_value_counts: Optional[Mapping[int, int]] = None
    nan_value_counts: Optional[Mapping[int, int]] = None
    # column id -> serialized lower/upper bound
    lower_bounds: Optional[Mapping[int, bytes]] = None
    upper_bounds: Optional[Mapping[int, bytes]] = None
    # encryption key metadata, None if the file is stored in plain text
    key_metadata: Optional[bytes] = None
    # recommended split locations, sorted ascending
    split_offsets: Optional[Tuple[int, ...]] = None
    # ids of the fields compared by an equality delete file
    equality_field_ids: Tuple[int, ...] = ()
    # ordinal position in the containing manifest, None if not read from a manifest
    pos: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.path, str) or not self.path:
            raise ValueError(f"Content file path must be a non-empty string, got {self.path!r}")
        if not isinstance(self.partition, StructLike):
            raise TypeError(f"Partition must be a StructLike, got {type(self.partition).__name__}")
        _check_required_int("spec_id", self.spec_id)
        _check_required_int("record_count", self.record_count)
        _check_required_int("file_size_in_bytes", self.file_size_in_bytes)
        _check_non_negative("pos", self.pos)
        _check_non_negative("record_count", self.record_count)
        _check_non_negative("file_size_in_bytes", self.file_size_in_bytes)

        object.__setattr__(self, "file_format", FileFormat(self.file_format))
        object.__setattr__(self, "column_sizes", _freeze_counts(self.column_sizes))
        object.__setattr__(self, "value_counts", _freeze_counts(self.value_counts))
        object.__setattr__(self, "null_value_counts", _freeze_counts(self.null_value_counts))
        object.__setattr__(self, "nan_value_counts", _freeze_counts(self.nan_value_counts))
        object.__setattr__(self, "lower_bounds", _freeze_bounds(self.lower_bounds))
        object.__setattr__(self, "upper_bounds", _freeze_bounds(self.upper_bounds))
        if self.key_metadata is not None:
            object.__setattr__(self, "key_metadata", bytes(self.key_metadata))

        if self.split_offsets is not None:
            offsets = tuple(self.split_offsets)
            for offset in offsets:
                _check_non_negative("split offset", offset)
            if any(a > b for a, b in zip(offsets, offsets[1:])):
                raise ValueError(f"Split offsets must be sorted in ascending order: {list(offsets)}")
            object.__setattr__(self, "split_offsets", offsets)

        object.__setattr__(self, "equality_field_ids", tuple(self.equality_field_ids or ()))
        self._check_equality_field_ids()

    def _check_equality_field_ids(self):
        if self.equality_field_ids:
            raise ValueError(
                f"Equality field ids are only allowed on equality delete files, "
                f"got {list(self.equality_field_ids)} for {self.content.name}")

    @property
    @abstractmethod
    def content(self) -> FileContent:
        """Type of content stored in the file, fixed per variant."""

    def copy(self) -> 'ContentFile':
        """Returns an independently owned copy of this file, statistics included."""
        return replace(self)

    def copy_without_stats(self) -> 'ContentFile':
        """
        Returns an independently owned copy of this file without column sizes, value counts,
        null value counts, NaN value counts, lower bounds or upper bounds.
        """
        return replace(self, **{name: None for name in STATS_FIELDS})

    def __hash__(self) -> int:
        return hash((self.content, self.spec_id, self.path))


class DataFile(ContentFile):
    """A file holding table rows."""

    @property
    def content(self) -> FileContent:
        return FileContent.DATA


class PositionDeleteFile(ContentFile):
    """A delete file whose rows reference deleted rows by file path and row position."""

    @property
    def content(self) -> FileContent:
        return FileContent.POSITION_DELETES


class EqualityDeleteFile(ContentFile):
    """
    A delete file whose rows delete every data row with equal values in the equality fields.

    The file may carry additional columns used to reconstruct changes. Those are not listed
    in equality_field_ids, but their metrics are kept like any other column's.
    """

    @property
    def content(self) -> FileContent:
        return FileContent.EQUALITY_DELETES

    def _check_equality_field_ids(self):
        if not self.equality_field_ids:
            raise ValueError("Equality delete files must have at least one equality field id")


CONTENT_FILE_CLASSES: Dict[FileContent, Type[ContentFile]] = {
    FileContent.DATA: DataFile,
    FileContent.POSITION_DELETES: PositionDeleteFile,
    FileContent.EQUALITY_DELETES: EqualityDeleteFile,
}


def content_file_class(content: int) -> Type[ContentFile]:
    return CONTENT_FILE_CLASSES[FileContent.from_id(content)]


def _optional(avro_type) -> List[Any]:
    return ["null", avro_type]


def _map_schema(key_id: int, value_id: int, value_type: str) -> Dict[str, Any]:
    # Avro maps only allow string keys, so int-keyed maps are arrays of key/value records
    return {
        "type": "array",
        "items": {
            "type": "record",
            "name": f"k{key_id}_v{value_id}",
            "fields": [
                {"name": "key", "type": "int", "field-id": key_id},
                {"name": "value", "type": value_type, "field-id": value_id},
            ],
        },
    }


def partition_schema(partition_fields: List[DataField]) -> Dict[str, Any]:
    return {
        "type": "record",
        "name": "r102",
        "fields": [
            {
                "name": field.name,
                "type": _optional(PyarrowFieldParser.to_avro_type(field.type, field.name)),
                "default": None,
                "field-id": field.id,
            }
            for field in partition_fields
        ],
    }


def content_file_schema(partition_fields: List[DataField]) -> Dict[str, Any]:
    """Avro schema of a content file record whose partition has the given fields."""
    return {
        "type": "record",
        "name": "content_file",
        "fields": [
            {"name": "content", "type": "int", "field-id": 134},
            {"name": "file_path", "type": "string", "field-id": 100},
            {"name": "file_format", "type": "string", "field-id": 101},
            {"name": "spec_id", "type": "int", "field-id": 141},
            {"name": "partition", "type": partition_schema(partition_fields), "field-id": 102},
            {"name": "record_count", "type": "long", "field-id": 103},
            {"name": "file_size_in_bytes", "type": "long", "field-id": 104},
            {"name": "column_sizes", "type": _optional(_map_schema(117, 118, "long")),
             "default": None, "field-id": 108},
            {"name": "value_counts", "type": _optional(_map_schema(119, 120, "long")),
             "default": None, "field-id": 109},
            {"name": "null_value_counts", "type": _optional(_map_schema(121, 122, "long")),
             "default": None, "field-id": 110},
            {"name": "nan_value_counts", "type": _optional(_map_schema(138, 139, "long")),
             "default": None, "field-id": 137},
            {"name": "lower_bounds", "type": _optional(_map_schema(126, 127, "bytes")),
             "default": None, "field-id": 125},
            {"name": "upper_bounds", "type": _optional(_map_schema(129, 130, "bytes")),
             "default": None, "field-id": 128},
            {"name": "key_metadata", "type": ["null", "bytes"], "default": None, "field-id": 131},
            {"name": "split_offsets", "type": _optional({"type": "array", "items": "long"}),
             "default": None, "field-id": 132},
            {"name": "equality_ids", "type": _optional({"type": "array", "items": "int"}),
             "default": None, "field-id": 135},
        ],
    }
