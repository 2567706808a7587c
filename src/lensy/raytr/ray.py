#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" The light ray record traced by lensy

.. Created on Tue Oct 13 10:12:31 2026

.. codeauthor: Michael H. Williamson
"""

import attr

from lensy.util.misc_math import as_vector, mag3


@attr.s(eq=False)
class Ray:
    """ A light ray: position, direction, wavelength and grouping key.

    The ray is mutated in place by the redirection functions in
    :mod:`~.raytrace`. The length of **direction** is not normalized and may
    be any positive value.

    Attributes:
        origin: 3d position of the ray (meters)
        direction: 3d direction vector of the ray
        wavelength: wavelength in vacuum (meters)
        path_key: string identifying rays with identical source parameters,
                  used to group rays for spot size calculations
        color: (red, green, blue) tag, only used for display
    """
    origin = attr.ib(converter=as_vector)
    direction = attr.ib(converter=as_vector)
    wavelength = attr.ib(converter=float)
    path_key = attr.ib(default='')
    color = attr.ib(default=(255, 255, 255))

    def copy(self):
        """ return an independent copy of the ray """
        return attr.evolve(self)

    def point_at(self, t):
        """ return the point at parameter `t` along the ray direction """
        return self.origin + t*self.direction

    def listobj_str(self):
        o_str = f"ray: {self.path_key!r}\n"
        o_str += (f"origin: {self.origin[0]:12.6g} {self.origin[1]:12.6g} "
                  f"{self.origin[2]:12.6g}\n")
        o_str += (f"direction: {self.direction[0]:10.6f} "
                  f"{self.direction[1]:10.6f} {self.direction[2]:10.6f}"
                  f"   |d|={mag3(self.direction):.6g}\n")
        o_str += f"wavelength: {1e9*self.wavelength:.3f} nm\n"
        return o_str
