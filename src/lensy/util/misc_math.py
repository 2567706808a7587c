#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" miscellaneous functions for working with numpy vectors and floats

.. Created on Tue Oct 13 15:27:06 2026

.. codeauthor: Michael H. Williamson
"""
import numpy as np
from math import sqrt
import transforms3d as t3d


def as_vector(v):
    """ return a float copy of array-like input v """
    return np.array(v, dtype=np.float64)


def inner3(a, b):
    """ return the inner (dot) product of 3d vectors a and b """
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def mag3(a):
    """ return the length of 3d vector a """
    return sqrt(inner3(a, a))


def cross3(a, b):
    """ return the cross product a x b of 3d vectors a and b """
    return np.array([a[1]*b[2] - b[1]*a[2],
                     -(a[0]*b[2] - b[0]*a[2]),
                     a[0]*b[1] - b[0]*a[1]])


def normalize(v):
    """ return normalized version of input vector v """
    length = mag3(v)
    if length == 0.0:
        return v
    else:
        return v/length


def perpendicular_part(v, axis):
    """ return the component of v perpendicular to the unit vector axis """
    return v - inner3(v, axis)*axis


def euler2opt(e):
    """ convert right-handed euler angles to optical design convention,
        i.e. alpha and beta are left-handed
    """
    return np.array([-e[0], -e[1], e[2]])


def euler2rot3d(euler):
    """ convert euler angle vector (degrees) to a rotation matrix. """
    rot_mat = t3d.euler.euler2mat(*np.deg2rad(euler2opt(euler)))
    return rot_mat


def isanumber(a):
    """ returns true if input a can be converted to floating point number """
    try:
        float(a)
        bool_a = True
    except ValueError:
        bool_a = False
    except TypeError:
        bool_a = False

    return bool_a
