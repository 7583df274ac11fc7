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

from enum import Enum
from typing import Optional

_EXTENSIONS = {
    "AVRO": ("avro", True),
    "ORC": ("orc", True),
    "PARQUET": ("parquet", True),
    "PUFFIN": ("puffin", False),
    "METADATA": ("metadata.json", False),
}


class FileFormat(str, Enum):
    """Physical encoding of a content file."""

    AVRO = "AVRO"
    ORC = "ORC"
    PARQUET = "PARQUET"
    PUFFIN = "PUFFIN"
    METADATA = "METADATA"

    @classmethod
    def _missing_(cls, value: object) -> Optional['FileFormat']:
        for member in cls:
            if member.value == str(value).upper():
                return member
        return None

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self.value][0]

    def is_splittable(self) -> bool:
        return _EXTENSIONS[self.value][1]

    def add_extension(self, filename: str) -> str:
        if filename.endswith("." + self.extension):
            return filename
        return f"{filename}.{self.extension}"

    @staticmethod
    def from_file_name(filename: str) -> Optional['FileFormat']:
        """Returns the format whose extension ends the given name, or None if none does."""
        lower_name = filename.lower()
        for file_format in FileFormat:
            if lower_name.endswith("." + file_format.extension):
                return file_format
        return None

    def __repr__(self) -> str:
        return f"FileFormat.{self.name}"
