#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" A flat, pixelated detector

    The detector is a rectangular array of pixels. The vectors **vx** and
    **vy** give the directions of the pixel rows and columns; their lengths
    are the pixel sizes. The vertex is the center of the array.

.. Created on Thu Oct 15 16:53:07 2026

.. codeauthor: Michael H. Williamson
"""

import logging
import math

import attr
import numpy as np

import lensy.optical.model_constants as mc
from lensy.elem.profiles import Plane
from lensy.raytr.traceerror import TraceDegenerateGeometryError
from lensy.util.misc_math import as_vector, inner3, mag3, cross3

logger = logging.getLogger(__name__)


@attr.s(eq=False)
class Detector:
    """ A detector with an image buffer of (y_nmax, x_nmax) 16 bit pixels

    Attributes:
        vertex: position of the array center
        vx: pixel step along a row
        vy: pixel step along a column
        x_nmax: number of pixels along a row
        y_nmax: number of pixels along a column
    """
    vertex = attr.ib(converter=as_vector)
    vx = attr.ib(converter=as_vector)
    vy = attr.ib(converter=as_vector)
    x_nmax = attr.ib(converter=int)
    y_nmax = attr.ib(converter=int)
    image = attr.ib(init=False)

    @image.default
    def _image_default(self):
        return np.zeros((self.y_nmax, self.x_nmax), dtype=np.uint16)

    @property
    def plane(self):
        """ the :class:`~.profiles.Plane` rays are intersected with

        The normal is vx x vy; the aperture diameter is
        2*(x_nmax*|vx| + y_nmax*|vy|).
        """
        w = cross3(self.vx, self.vy)
        w_len = mag3(w)
        if w_len == 0.0:
            raise TraceDegenerateGeometryError(self, "invalid detector "
                                               "vectors vx, vy")
        aperture = 2*(self.x_nmax*mag3(self.vx) + self.y_nmax*mag3(self.vy))
        return Plane(self.vertex, w/w_len, aperture)

    def pixel_coords(self, pt):
        """ return the (i, j) pixel indices of the point pt

        Indices are counted from the corner of the array, so the vertex maps
        to (x_nmax//2, y_nmax//2). The result may be outside the array.
        """
        w = pt - self.vertex
        i = math.floor(inner3(w, self.vx)/inner3(self.vx, self.vx))
        j = math.floor(inner3(w, self.vy)/inner3(self.vy, self.vy))
        return i + self.x_nmax//2, j + self.y_nmax//2

    def in_bounds(self, i, j):
        return 0 <= i < self.x_nmax and 0 <= j < self.y_nmax

    def accumulate(self, rays, counts=mc.DETECTOR_COUNTS,
                   saturation=mc.DETECTOR_SATURATION):
        """ add `counts` to the pixel hit by each ray

        Pixels already at or above `saturation` are left unchanged. Rays
        falling outside the array are ignored.

        Returns:
            the number of rays that landed on the array
        """
        num_hits = 0
        for ray in rays:
            i, j = self.pixel_coords(ray.origin)
            if not self.in_bounds(i, j):
                continue
            num_hits += 1
            if self.image[j, i] < saturation:
                self.image[j, i] += counts
        logger.debug(f"detector: {num_hits} of {len(rays)} rays on array")
        return num_hits

    def clear(self):
        self.image[:] = 0
