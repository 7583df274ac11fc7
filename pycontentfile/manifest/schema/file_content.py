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


class FileContent(int, Enum):
    """Type of content stored in a content file."""

    DATA = 0
    POSITION_DELETES = 1
    EQUALITY_DELETES = 2

    def is_delete(self) -> bool:
        return self in (FileContent.POSITION_DELETES, FileContent.EQUALITY_DELETES)

    @staticmethod
    def from_id(content_id: int) -> 'FileContent':
        for content in FileContent:
            if content.value == content_id:
                return content
        raise ValueError(f"Unknown file content id: {content_id}")

    def __repr__(self) -> str:
        return f"FileContent.{self.name}"
