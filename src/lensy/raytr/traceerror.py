#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" Support for ray trace exception handling

    Every failure of a single ray at a surface derives from
    :class:`TraceError`. A trace pipeline catches these and drops the ray.
    :class:`WavelengthOutOfRangeError` is a configuration error instead and
    is not a :class:`TraceError`.

.. Created on Mon Oct 19 15:22:40 2026

.. codeauthor: Michael H. Williamson
"""


class TraceError(Exception):
    """ Exception raised when ray tracing a model """


class TraceMissedSurfaceError(TraceError):
    """ Exception raised when ray misses an interface """
    def __init__(self, ifc=None, msg=None):
        super().__init__(msg if msg is not None else "ray missed surface")
        self.ifc = ifc


class TraceDegenerateGeometryError(TraceMissedSurfaceError):
    """ Exception raised for zero length axis, normal, ruling or direction """


class TraceRayBlockedError(TraceError):
    """ Exception raised when ray is blocked by an aperture on an interface

    The intersection point and normal are retained so that callers can
    still render the blocked ray segment.
    """
    def __init__(self, ifc, int_pt, normal=None):
        super().__init__("ray outside surface aperture")
        self.ifc = ifc
        self.int_pt = int_pt
        self.normal = normal


class TraceTIRError(TraceError):
    """ Exception raised when ray TIRs at an interface """
    def __init__(self, inc_dir, normal, m):
        super().__init__("total internal reflection")
        self.ifc = None
        self.int_pt = None
        self.inc_dir = inc_dir
        self.normal = normal
        self.m = m


class TraceEvanescentRayError(TraceError):
    """ Exception raised when ray diffracts evanescently at an interface """
    def __init__(self, inc_dir, normal, order, sin_diffract):
        super().__init__(f"diffraction order {order} is evanescent")
        self.ifc = None
        self.int_pt = None
        self.inc_dir = inc_dir
        self.normal = normal
        self.order = order
        self.sin_diffract = sin_diffract


class WavelengthOutOfRangeError(ValueError):
    """ Exception raised when a wavelength is outside a dispersion model's
    valid range """
    def __init__(self, wvl, wvl_range):
        super().__init__(f"wavelength {wvl} m outside limits "
                         f"[{wvl_range[0]}, {wvl_range[1]}] m")
        self.wvl = wvl
        self.wvl_range = wvl_range
