# -*- coding: utf-8 -*-
"""
Show Wizard Application Core Module
"""

from .config import Config

__all__ = ["Config"]
