# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""goenums: type-safe wrappers for iota-based Go enums."""

from goenums.version import CURRENT as __version__

__all__ = ["__version__"]
