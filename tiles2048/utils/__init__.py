# -*- coding: utf-8 -*-
"""
This module provides the collaborators around a game session: keyboard mapping and the Matplotlib window.

The window is imported lazily by callers, so that the key mapping does not require Matplotlib.
"""

from .keys import KEY_DIRECTIONS, QUIT_KEY, RESET_KEY, key_to_direction

__all__ = ["KEY_DIRECTIONS", "QUIT_KEY", "RESET_KEY", "key_to_direction"]
