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

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import pyarrow
from pyarrow import types


class DataType(ABC):
    def __init__(self, nullable: bool = True):
        self.nullable = nullable

    @abstractmethod
    def __str__(self) -> str:
        pass


@dataclass
class AtomicType(DataType):
    type: str

    def __init__(self, type: str, nullable: bool = True):
        super().__init__(nullable)
        self.type = type

    def __str__(self) -> str:
        null_suffix = "" if self.nullable else " NOT NULL"
        return "{}{}".format(self.type, null_suffix)


@dataclass
class DataField:
    """A named, id-carrying field; partition specs describe their fields with these."""

    id: int
    name: str
    type: DataType
    description: Optional[str] = None

    def __init__(
            self,
            id: int,
            name: str,
            type: DataType,
            description: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.type = type
        self.description = description


class PyarrowFieldParser:

    @staticmethod
    def from_data_type(data_type: DataType) -> pyarrow.DataType:
        if isinstance(data_type, AtomicType):
            type_name = data_type.type.upper()
            if type_name == 'TINYINT':
                return pyarrow.int8()
            elif type_name == 'SMALLINT':
                return pyarrow.int16()
            elif type_name in ('INT', 'INTEGER'):
                return pyarrow.int32()
            elif type_name == 'BIGINT':
                return pyarrow.int64()
            elif type_name == 'FLOAT':
                return pyarrow.float32()
            elif type_name == 'DOUBLE':
                return pyarrow.float64()
            elif type_name == 'BOOLEAN':
                return pyarrow.bool_()
            elif type_name == 'STRING' or type_name.startswith('CHAR') or type_name.startswith('VARCHAR'):
                return pyarrow.string()
            elif type_name == 'BYTES' or type_name.startswith('VARBINARY'):
                return pyarrow.binary()
            elif type_name == 'DATE':
                return pyarrow.date32()
            elif type_name.startswith('DECIMAL'):
                match_ps = re.fullmatch(r'DECIMAL\((\d+),\s*(\d+)\)', type_name)
                if match_ps:
                    precision, scale = map(int, match_ps.groups())
                    return pyarrow.decimal128(precision, scale)
                return pyarrow.decimal128(10, 0)
            elif type_name.startswith('TIMESTAMP'):
                return pyarrow.timestamp('us', tz=None)
        raise ValueError("Unsupported data type: {}".format(data_type))

    @staticmethod
    def from_data_field(data_field: DataField) -> pyarrow.Field:
        pa_field_type = PyarrowFieldParser.from_data_type(data_field.type)
        metadata = {}
        if data_field.description:
            metadata[b'description'] = data_field.description.encode('utf-8')
        return pyarrow.field(data_field.name, pa_field_type, nullable=data_field.type.nullable, metadata=metadata)

    @staticmethod
    def from_data_fields(data_fields: List[DataField]) -> pyarrow.Schema:
        return pyarrow.schema([PyarrowFieldParser.from_data_field(field) for field in data_fields])

    @staticmethod
    def to_data_type(pa_type: pyarrow.DataType, nullable: bool) -> DataType:
        type_name = None
        if types.is_int8(pa_type):
            type_name = 'TINYINT'
        elif types.is_int16(pa_type):
            type_name = 'SMALLINT'
        elif types.is_int32(pa_type):
            type_name = 'INT'
        elif types.is_int64(pa_type):
            type_name = 'BIGINT'
        elif types.is_float32(pa_type):
            type_name = 'FLOAT'
        elif types.is_float64(pa_type):
            type_name = 'DOUBLE'
        elif types.is_boolean(pa_type):
            type_name = 'BOOLEAN'
        elif types.is_string(pa_type):
            type_name = 'STRING'
        elif types.is_binary(pa_type):
            type_name = 'BYTES'
        elif types.is_decimal(pa_type):
            type_name = f'DECIMAL({pa_type.precision}, {pa_type.scale})'
        elif types.is_date32(pa_type):
            type_name = 'DATE'
        elif types.is_timestamp(pa_type) and pa_type.tz is None:
            type_name = 'TIMESTAMP(6)'
        if type_name is not None:
            return AtomicType(type_name, nullable)
        raise ValueError("Unsupported pyarrow type: {}".format(pa_type))

    @staticmethod
    def to_data_fields(pa_schema: pyarrow.Schema, first_field_id: int = 1000) -> List[DataField]:
        """Converts a pyarrow schema to fields, numbering them from first_field_id."""
        fields = []
        for i, pa_field in enumerate(pa_schema):
            data_type = PyarrowFieldParser.to_data_type(pa_field.type, pa_field.nullable)
            description = pa_field.metadata.get(b'description', b'').decode('utf-8') \
                if pa_field.metadata and b'description' in pa_field.metadata else None
            fields.append(DataField(
                id=first_field_id + i,
                name=pa_field.name,
                type=data_type,
                description=description,
            ))
        return fields

    @staticmethod
    def to_avro_type(data_type: DataType, field_name: str) -> Union[str, Dict[str, Any]]:
        if not isinstance(data_type, AtomicType):
            raise ValueError("Unsupported data type for Avro conversion: {}".format(data_type))
        type_name = data_type.type.upper()
        if type_name in ('TINYINT', 'SMALLINT', 'INT', 'INTEGER'):
            return "int"
        elif type_name == 'BIGINT':
            return "long"
        elif type_name == 'FLOAT':
            return "float"
        elif type_name == 'DOUBLE':
            return "double"
        elif type_name == 'BOOLEAN':
            return "boolean"
        elif type_name == 'STRING' or type_name.startswith('CHAR') or type_name.startswith('VARCHAR'):
            return "string"
        elif type_name == 'BYTES' or type_name.startswith('VARBINARY'):
            return "bytes"
        elif type_name == 'DATE':
            return {"type": "int", "logicalType": "date"}
        elif type_name.startswith('TIMESTAMP'):
            return {"type": "long", "logicalType": "timestamp-micros"}
        elif type_name.startswith('DECIMAL'):
            pa_type = PyarrowFieldParser.from_data_type(data_type)
            return {
                "type": "bytes",
                "logicalType": "decimal",
                "precision": pa_type.precision,
                "scale": pa_type.scale,
            }
        raise ValueError("Unsupported data type for Avro conversion of {}: {}".format(field_name, data_type))
