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

from pycontentfile.common.file_format import FileFormat
from pycontentfile.manifest.content_file_builder import ContentFileBuilder
from pycontentfile.manifest.content_file_reader import ContentFileReader
from pycontentfile.manifest.content_file_writer import ContentFileWriter
from pycontentfile.manifest.schema.content_file import (ContentFile, DataFile,
                                                        EqualityDeleteFile,
                                                        PositionDeleteFile)
from pycontentfile.manifest.schema.file_content import FileContent
from pycontentfile.manifest.schema.metrics import Metrics
from pycontentfile.manifest.schema.reusable_content_file import ReusableContentFile
from pycontentfile.table.row.generic_row import GenericRow
from pycontentfile.table.row.struct_like import StructLike

__all__ = [
    'ContentFile',
    'DataFile',
    'PositionDeleteFile',
    'EqualityDeleteFile',
    'FileContent',
    'FileFormat',
    'Metrics',
    'ReusableContentFile',
    'ContentFileBuilder',
    'ContentFileReader',
    'ContentFileWriter',
    'StructLike',
    'GenericRow',
]
