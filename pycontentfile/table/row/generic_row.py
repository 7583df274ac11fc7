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

from typing import Any, Dict, List, Optional, Sequence, Tuple

from pycontentfile.schema.data_types import DataField
from pycontentfile.table.row.struct_like import StructLike


class GenericRow(StructLike):
    """StructLike backed by a tuple of values; the values are copied on construction."""

    __slots__ = ('_values', '_fields')

    def __init__(self, values: Sequence[Any], fields: Optional[List[DataField]] = None):
        self._values: Tuple[Any, ...] = tuple(values)
        self._fields: Tuple[DataField, ...] = tuple(fields) if fields is not None else ()
        if self._fields and len(self._fields) != len(self._values):
            raise ValueError(
                f"Row arity {len(self._values)} does not match the number of fields {len(self._fields)}")

    @classmethod
    def of(cls, *values: Any) -> 'GenericRow':
        return cls(values)

    @classmethod
    def empty(cls) -> 'GenericRow':
        return cls(())

    @property
    def values(self) -> Tuple[Any, ...]:
        return self._values

    @property
    def fields(self) -> Tuple[DataField, ...]:
        return self._fields

    def to_dict(self) -> Dict[str, Any]:
        if not self._fields:
            raise ValueError("Cannot convert a row without field names to a dict")
        return {field.name: value for field, value in zip(self._fields, self._values)}

    def get_field(self, pos: int) -> Any:
        if pos < 0 or pos >= len(self._values):
            raise IndexError(f"Position {pos} is out of bounds for row arity {len(self._values)}")
        return self._values[pos]

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        if self._fields:
            field_strs = [f"{field.name}={value!r}" for field, value in zip(self._fields, self._values)]
        else:
            field_strs = [repr(value) for value in self._values]
        return f"GenericRow({', '.join(field_strs)})"
