# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/metrics/__init__.py
"""
