# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Sales CRM backend with scoped, role-based visibility."""

__version__ = "0.1.0"
