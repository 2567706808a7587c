#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" Functions to redirect a ray at a surface

    The direction functions, :func:`reflect`, :func:`bend` and
    :func:`diffract`, take an incoming direction vector and return the
    outgoing one. The `redirect_` functions apply them to a
    :class:`~.ray.Ray`, moving the ray to the intersection point and
    replacing its direction in place.

    The magnitude of the direction vector is preserved by :func:`bend` and
    :func:`diffract`.

.. Created on Mon Oct 12 11:01:04 2026

.. codeauthor: Michael H. Williamson
"""

from math import sqrt, asin, atan2, sin, cos

from lensy.util.misc_math import as_vector, inner3, mag3, cross3
from .traceerror import (TraceDegenerateGeometryError, TraceTIRError,
                         TraceEvanescentRayError)



def reflect(d_in, normal):
    """ reflect incoming direction, d_in, about unit normal """
    cosI = inner3(d_in, normal)
    d_out = d_in - 2.0*cosI*normal
    return d_out


def bend(d_in, normal, m):
    """ refract incoming direction, d_in, about normal

    Args:
        d_in: incoming direction vector, any non-zero length
        normal: unit surface normal, either orientation
        m: index ratio, n_incident/n_transmitted

    Returns:
        the refracted direction, with the same magnitude as d_in

    Raises:
        :exc:`~.TraceDegenerateGeometryError`: zero length d_in
        :exc:`~.TraceTIRError`: total internal reflection
    """
    d_len = mag3(d_in)
    if d_len == 0.0:
        raise TraceDegenerateGeometryError(msg="zero length ray direction")
    u = -d_in/d_len

    # orient the normal toward the incoming ray
    n = normal if inner3(u, normal) >= 0.0 else -normal

    w = cross3(u, n)
    sinI = mag3(w)
    if abs(m*sinI) >= 1.0:
        raise TraceTIRError(d_in, normal, m)
    theta_t = asin(m*sinI)

    if sinI > 0.0:
        v = cross3(w/sinI, n)
        d_out = d_len*(cos(theta_t)*(-n) + sin(theta_t)*v)
    else:
        d_out = d_len*(-n)
    return d_out


def diffract(d_in, normal, ruling, wl_in, wl_out, order):
    """ diffract incoming direction, d_in, at a ruled grating

    The grating equation is applied in the plane containing the normal and
    the ruling vector. The out of plane component of the ray is preserved
    and the wavelengths are scaled by :math:`1/\\sqrt{1 - (u \\cdot t)^2}`,
    where `t` is the direction of the grating lines.

    The ray leaves on the side of the surface the normal points to: a normal
    facing the incoming ray gives a reflection grating, a normal facing away
    gives a transmission grating.

    Args:
        d_in: incoming direction vector, any non-zero length
        normal: surface normal
        ruling: vector perpendicular to the grating lines, whose length is
                the line spacing. Only its component perpendicular to the
                normal is used.
        wl_in: wavelength in the incident medium
        wl_out: wavelength in the diffracted medium
        order: diffraction order (integer, may be negative or zero)

    Returns:
        the diffracted direction, with the same magnitude as d_in

    Raises:
        :exc:`~.TraceDegenerateGeometryError`: zero length vectors, ruling
            parallel to the normal or ray tangent to the surface
        :exc:`~.TraceEvanescentRayError`: the order does not propagate
    """
    d_len = mag3(d_in)
    if d_len == 0.0:
        raise TraceDegenerateGeometryError(msg="zero length ray direction")
    w0 = d_in/d_len

    n_len = mag3(normal)
    if n_len == 0.0:
        raise TraceDegenerateGeometryError(msg="zero length grating normal")
    n1 = normal/n_len

    spacing = mag3(ruling)
    a1 = ruling - inner3(ruling, n1)*n1
    a1_len = mag3(a1)
    if a1_len == 0.0:
        raise TraceDegenerateGeometryError(msg="ruling parallel to normal")
    a1 = a1/a1_len
    t1 = cross3(a1, n1)

    cos_n = inner3(w0, n1)
    cos_a = inner3(w0, a1)
    cos_t = inner3(w0, t1)
    if cos_n == 0.0:
        raise TraceDegenerateGeometryError(msg="ray tangent to grating")
    if cos_t == 1.0:
        raise TraceDegenerateGeometryError(msg="ray parallel to grating lines")

    scale = 1.0/sqrt(1.0 - cos_t*cos_t)
    theta_i = atan2(cos_a, -cos_n)
    sin_d = (sin(theta_i)/(wl_in*scale) + order/spacing)*wl_out*scale
    if abs(sin_d) >= 1.0:
        raise TraceEvanescentRayError(d_in, normal, order, sin_d)
    theta_d = asin(sin_d)

    d_out = d_len*(cos_t*t1 + (cos(theta_d)/scale)*n1 +
                   (sin(theta_d)/scale)*a1)
    return d_out


def redirect_reflect(ray, pt, normal):
    """ move ray to pt and reflect it about normal """
    ray.origin = as_vector(pt)
    ray.direction = reflect(ray.direction, normal)
    return ray


def redirect_refract(ray, pt, normal, m):
    """ move ray to pt and refract it with index ratio m = n_in/n_out

    The ray is moved to pt even when the refraction fails.
    """
    ray.origin = as_vector(pt)
    ray.direction = bend(ray.direction, normal, m)
    return ray


def redirect_diffract(ray, pt, normal, ruling, order, wl_out=None,
                      wl_in=None):
    """ move ray to pt and diffract it into `order`

    `wl_in` defaults to the ray wavelength and `wl_out` to `wl_in`, as for a
    reflection grating in a single medium.
    """
    wl_in = ray.wavelength if wl_in is None else wl_in
    wl_out = wl_in if wl_out is None else wl_out
    ray.origin = as_vector(pt)
    ray.direction = diffract(ray.direction, normal, ruling,
                             wl_in, wl_out, order)
    return ray


def redirect_impact(ray, pt, normal=None):
    """ terminate ray at pt, the direction is unchanged """
    ray.origin = as_vector(pt)
    return ray
