# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
HTTP API for triggering and inspecting workflow executions.
"""

from .executions import router as executions_router

__all__ = ["executions_router"]
