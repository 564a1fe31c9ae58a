# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/enums/__init__.py
"""

from .timeframe_enum import Timeframe

__all__ = ["Timeframe"]
