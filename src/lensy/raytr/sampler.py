#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
"""Generators for 2d sample distributions and the ray ensembles built on them

    :func:`cone` produces a fan of rays diverging from the origin of a chief
    ray, :func:`beam` a bundle of parallel rays filling a circular aperture.
    The rays of an ensemble share a path key, so that spot statistics can
    later be grouped by source.

.. Created on Wed Oct 14 21:14:31 2026

.. codeauthor: Michael H. Williamson
"""

import logging
import math

import numpy as np

from lensy.util.misc_math import mag3, cross3

logger = logging.getLogger(__name__)


def path_key(vec, wavelength):
    """ the path key for rays sharing the 3d vector `vec` and `wavelength` """
    return "%e%e%e%e" % (vec[0], vec[1], vec[2], wavelength)


def square_grid_generator(dia, step):
    """Generator function for a square grid clipped to a circle.

    Both coordinates start at -dia/2 and advance by `step` while < dia/2;
    points farther than dia/2 from the center are skipped.

    Yields:
        (x, y) offsets from the center
    """
    radius = dia/2
    x = -radius
    while x < radius:
        y = -radius
        while y < radius:
            if math.sqrt(x*x + y*y) <= radius:
                yield x, y
            y += step
        x += step


def cone_angle_generator(cone_dia, cone_step):
    """Generator function for ring samples of a cone, excluding the axis.

    Rings are spaced `cone_step` apart in half angle out to cone_dia/2; each
    ring holds floor(sin(half angle)*2*pi/cone_step) equally spaced samples.

    Args:
        cone_dia: full cone angle, radians
        cone_step: angular sample spacing, radians

    Yields:
        (half_angle, azimuth) in radians
    """
    num_rings = math.floor((cone_dia/2)/cone_step)
    for j in range(1, num_rings+1):
        half_angle = j*cone_step
        num_pts = math.floor(math.sin(half_angle)*2*math.pi/cone_step)
        for k in range(num_pts):
            yield half_angle, k*(2*math.pi/num_pts)


def _cone_basis(d):
    """ rows of the rotation taking the z axis to the direction of d """
    azim = math.atan2(d[1], d[0])
    elev = math.asin(d[2]/mag3(d))
    pol = math.pi/2 - elev
    u0 = np.array([math.cos(math.pi/2 - azim),
                   math.cos(azim)*math.cos(pol),
                   math.cos(azim)*math.sin(pol)])
    u1 = np.array([math.sin(-(math.pi/2 - azim)),
                   math.cos(-(math.pi/2 - azim))*math.cos(pol),
                   math.cos(-(math.pi/2 - azim))*math.sin(pol)])
    u2 = np.array([0.0, math.sin(-pol), math.cos(-pol)])
    return u0, u1, u2


def cone(chief, cone_dia, cone_step):
    """ generate a cone of rays about a chief ray.

    All rays start at the chief ray origin. The chief ray is first in the
    list, followed by rings of rays at half angles of cone_step,
    2*cone_step, ... up to cone_dia/2.

    Args:
        chief: the chief :class:`~.ray.Ray`, it is not modified
        cone_dia: full cone angle, degrees
        cone_step: angular spacing of the rays, degrees

    Returns:
        list of new rays sharing the path key of the chief ray origin and
        wavelength, or an empty list if the chief direction is null
    """
    d = chief.direction
    d_len = mag3(d)
    if d_len == 0.0:
        logger.warning("cone: ray direction is null")
        return []

    key = path_key(chief.origin, chief.wavelength)
    rays = []
    ray = chief.copy()
    ray.path_key = key
    rays.append(ray)

    step = math.radians(cone_step)
    u0, u1, u2 = _cone_basis(d)
    z_dir = np.array([0., 0., 1.])
    for half_angle, azimuth in cone_angle_generator(math.radians(cone_dia),
                                                    step):
        elev = math.pi/2 - half_angle
        w1 = np.array([math.cos(elev)*math.cos(azimuth),
                       math.cos(elev)*math.sin(azimuth),
                       math.sin(elev)])
        w2 = w1 - z_dir
        ray = chief.copy()
        ray.direction = d + d_len*np.array([w2.dot(u0), w2.dot(u1),
                                            w2.dot(u2)])
        ray.path_key = key
        rays.append(ray)

    logger.debug(f"cone: {len(rays)} rays, key {key}")
    return rays


def _beam_basis(w0):
    """ unit vectors perpendicular to unit direction w0 """
    h = math.sqrt(w0[0]*w0[0] + w0[1]*w0[1])
    if h == 0.0:
        u0 = np.array([1., 0., 0.])
    else:
        u0 = np.array([w0[1]/h, -w0[0]/h, 0.])
    u1 = cross3(w0, u0)
    return u0, u1


def beam(chief, beam_dia, beam_step):
    """ generate a beam of parallel rays about a chief ray.

    The ray origins fill a square grid with spacing beam_step, clipped to a
    circle of diameter beam_dia, in the plane through the chief ray origin
    perpendicular to the chief ray.

    Args:
        chief: the chief :class:`~.ray.Ray`, it is not modified
        beam_dia: beam diameter, meters
        beam_step: grid spacing, meters

    Returns:
        list of new rays sharing the path key of the chief ray direction and
        wavelength, or an empty list if the chief direction is null
    """
    d = chief.direction
    d_len = mag3(d)
    if d_len == 0.0:
        logger.warning("beam: ray direction is null")
        return []

    u0, u1 = _beam_basis(d/d_len)
    key = path_key(d, chief.wavelength)
    rays = []
    for x, y in square_grid_generator(beam_dia, beam_step):
        ray = chief.copy()
        ray.origin = chief.origin + x*u0 + y*u1
        ray.path_key = key
        rays.append(ray)

    logger.debug(f"beam: {len(rays)} rays, key {key}")
    return rays
