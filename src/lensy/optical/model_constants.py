#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" optical model constants

.. Created on Mon Oct 12 16:00:55 2026

.. codeauthor: Michael H. Williamson
"""

# ray/surface interaction modes for a trace stage
interact_modes = ('reflect', 'refract', 'diffract', 'impact', 'dummy')

# index of refraction of air and vacuum
IN_AIR = 1.000293
IN_VACUUM = 1.000

# quadratic intersection equations fall back to the linear solution when
#  abs(leading coefficient) <= LEAD_COEF_TOL. Zero means exact equality.
LEAD_COEF_TOL = 0.0

# detector image buffer: counts added per ray and the saturation level
DETECTOR_COUNTS = 100
DETECTOR_SATURATION = 65000
