# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project-level configuration for goenums."""

from goenums.project.config import (
    CONFIG_FILENAME,
    ProjectConfigError,
    find_project_config,
    load_project_config,
    merge_flags,
)

__all__ = [
    "CONFIG_FILENAME",
    "ProjectConfigError",
    "find_project_config",
    "load_project_config",
    "merge_flags",
]
