# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session-based authentication: salted credentials and revalidated login sessions."""

__version__ = "0.1.0"
