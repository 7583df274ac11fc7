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
from typing import Any, Iterator


class StructLike(ABC):
    """
    Ordered, fixed-arity value whose fields are typed by an external partition spec.

    Two values are equal if they have the same arity and all their fields are equal.
    Implementations must not change after construction.
    """

    @abstractmethod
    def get_field(self, pos: int) -> Any:
        """
        Returns the value at the given position.
        """

    @abstractmethod
    def __len__(self) -> int:
        """
        Returns the number of fields in this value.
        """

    def is_null_at(self, pos: int) -> bool:
        return self.get_field(pos) is None

    def __iter__(self) -> Iterator[Any]:
        for pos in range(len(self)):
            yield self.get_field(pos)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StructLike):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __str__(self) -> str:
        return " ".join(str(value) for value in self)
