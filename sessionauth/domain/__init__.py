# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain layer for account credentials and login sessions."""
