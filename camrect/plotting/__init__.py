# -*- coding: utf-8 -*-
"""
Plotting Module - Visual checks for rectification results.

Dependencies
------------
matplotlib

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

from camrect.plotting.rectified import plot_extent, plot_rectified

__all__ = ['plot_extent', 'plot_rectified']
