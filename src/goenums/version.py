# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Version information for the goenums tool.

BUILD and COMMIT are filled in by release packaging. Both stay empty for
development installs.
"""

CURRENT = "v0.3.6"
BUILD = ""
COMMIT = ""
