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
from pycontentfile.common.options.config_option import ConfigOption
from pycontentfile.common.options.config_options import ConfigOptions
from pycontentfile.common.options.options import Options


class ContentFileOptions:
    """Known keys for reading, writing and building content file records."""

    READ_REUSE_CONTAINERS: ConfigOption[bool] = (
        ConfigOptions.key("manifest.read.reuse-containers")
        .boolean_type()
        .default_value(True)
        .with_description("Whether the content file reader yields a single reused record view. "
                          "Callers must copy() a reused view before retaining it.")
    )

    READ_DROP_STATS: ConfigOption[bool] = (
        ConfigOptions.key("manifest.read.drop-stats")
        .boolean_type()
        .default_value(False)
        .with_description("Whether records collected by read_all() drop column statistics.")
    )

    WRITE_FORMAT_DEFAULT: ConfigOption[FileFormat] = (
        ConfigOptions.key("write.format.default")
        .enum_type(FileFormat)
        .default_value(FileFormat.PARQUET)
        .with_description("File format assumed when it cannot be inferred from a file path.")
    )

    def __init__(self, options: Options):
        self.options = options

    @classmethod
    def from_dict(cls, data: dict) -> 'ContentFileOptions':
        return cls(Options(dict(data)))

    def reuse_containers(self) -> bool:
        return self.options.get(ContentFileOptions.READ_REUSE_CONTAINERS)

    def drop_stats(self) -> bool:
        return self.options.get(ContentFileOptions.READ_DROP_STATS)

    def default_file_format(self) -> FileFormat:
        return self.options.get(ContentFileOptions.WRITE_FORMAT_DEFAULT)
