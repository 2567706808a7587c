#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" Spot size statistics and focus searches for traced ray ensembles

    Rays sharing a path key came from the same source parameters, e.g. the
    same field point, wavelength and diffraction order. Ideally they meet at
    a single point on the detector; the rms spread of their impact points
    about the centroid is the spot size.

    The spot statistics are computed in two passes over the rays: the first
    accumulates the centroid of each group, the second the squared
    deviations from it.

.. Created on Sun Oct 18 22:01:56 2026

.. codeauthor: Michael H. Williamson
"""

import logging
from math import sqrt

import attr
import numpy as np
import pandas as pd
from scipy.optimize import minimize_scalar

from lensy.raytr import SpotSize
from lensy.raytr.trace import trace_stages
from lensy.util.misc_math import as_vector, normalize

logger = logging.getLogger(__name__)


class SpotAccumulator():
    """ Accumulates impact point statistics, keyed by path key.

    Call :meth:`add` for every ray, then :meth:`add_deviation` for every ray,
    then :meth:`finalize`.
    """

    def __init__(self):
        self.sums = {}
        self.counts = {}
        self.sq_devs = {}
        self.sq_radii = {}

    def add(self, key, pt):
        if key in self.sums:
            self.sums[key] = self.sums[key] + pt
            self.counts[key] += 1
        else:
            self.sums[key] = as_vector(pt)
            self.counts[key] = 1

    def centroid(self, key):
        return self.sums[key]/self.counts[key]

    def add_deviation(self, key, pt):
        w = pt - self.centroid(key)
        sq_dev = w*w
        if key in self.sq_devs:
            self.sq_devs[key] = self.sq_devs[key] + sq_dev
            self.sq_radii[key] += sq_dev.sum()
        else:
            self.sq_devs[key] = sq_dev
            self.sq_radii[key] = sq_dev.sum()

    def finalize(self, min_count=2):
        """ return a dict of :class:`~.raytr.SpotSize` by path key

        Groups with fewer than `min_count` rays are left out.
        """
        spots = {}
        for key, n in self.counts.items():
            if n < min_count:
                continue
            rms_v = np.sqrt(self.sq_devs[key]/n)
            rms = sqrt(self.sq_radii[key]/n)
            spots[key] = SpotSize(n, self.centroid(key), rms_v, rms)
        return spots


def spot_sizes(rays, min_count=2):
    """ spot statistics for each group of rays sharing a path key

    The ray origins are the impact points, i.e. the rays are expected to
    have been traced to a detector surface.

    Returns:
        dict of :class:`~.raytr.SpotSize` keyed by path key
    """
    acc = SpotAccumulator()
    for ray in rays:
        acc.add(ray.path_key, ray.origin)
    for ray in rays:
        acc.add_deviation(ray.path_key, ray.origin)
    spots = acc.finalize(min_count=min_count)
    logger.debug(f"spot_sizes: {len(rays)} rays, {len(spots)} groups")
    return spots


def mean_spot_size(spots):
    """ average of the per axis rms spot sizes over all groups

    Returns NaN for each axis if there are no groups.
    """
    if len(spots) == 0:
        return np.full(3, np.nan)
    return np.mean([s.rms_v for s in spots.values()], axis=0)


def spot_table(spots):
    """ return a pandas DataFrame of spot statistics indexed by path key """
    cols = ['count', 'cx', 'cy', 'cz', 'rms_x', 'rms_y', 'rms_z', 'rms']
    data = [[s.count, *s.centroid, *s.rms_v, s.rms] for s in spots.values()]
    df = pd.DataFrame(data, columns=cols, index=list(spots.keys()))
    df.index.name = 'path_key'
    return df


def shift_stage(stages, stage_indx, offset):
    """ return a copy of stages with one stage's surface translated """
    shifted = list(stages)
    stage = stages[stage_indx]
    shifted[stage_indx] = attr.evolve(stage,
                                      surface=stage.surface.translate(offset))
    return shifted


def _trace_spots(rays, stages, **kwargs):
    result = trace_stages([r.copy() for r in rays], stages, **kwargs)
    return spot_sizes(result.rays)


def through_focus(rays, stages, stage_indx, shift_dir, shifts, **kwargs):
    """ trace rays for a series of shifts of one stage's surface

    The input rays are copied for each trace and are not modified.

    Args:
        rays: the list of starting rays
        stages: the list of :class:`~.trace.Stage`
        stage_indx: index of the stage whose surface is shifted
        shift_dir: direction of the shift
        shifts: sequence of shift distances along shift_dir, meters
        kwargs: passed to :func:`~.trace.trace_stages`

    Returns:
        pandas DataFrame indexed by shift, with the number of spot groups,
        the mean per axis rms spot size and the mean rms spot radius
    """
    shift_dir = normalize(as_vector(shift_dir))
    records = []
    for shift in shifts:
        shifted = shift_stage(stages, stage_indx, shift*shift_dir)
        spots = _trace_spots(rays, shifted, **kwargs)
        mean_v = mean_spot_size(spots)
        rms = (np.mean([s.rms for s in spots.values()])
               if len(spots) > 0 else np.nan)
        records.append({'shift': shift, 'groups': len(spots),
                        'rms_x': mean_v[0], 'rms_y': mean_v[1],
                        'rms_z': mean_v[2], 'rms': rms})
        logger.debug(f"through_focus: shift={shift:.6g}, rms={rms:.6g}")
    df = pd.DataFrame.from_records(
        records,
        columns=['shift', 'groups', 'rms_x', 'rms_y', 'rms_z', 'rms'])
    return df.set_index('shift')


def best_focus(rays, stages, stage_indx, shift_dir, bounds, **kwargs):
    """ find the shift of one stage's surface minimizing the mean rms spot

    Uses a bounded scalar minimization over the shift distance.

    Returns:
        (shift, rms) at the minimum
    """
    shift_dir = normalize(as_vector(shift_dir))

    def mean_rms(shift):
        shifted = shift_stage(stages, stage_indx, shift*shift_dir)
        spots = _trace_spots(rays, shifted, **kwargs)
        if len(spots) == 0:
            return np.inf
        return np.mean([s.rms for s in spots.values()])

    res = minimize_scalar(mean_rms, bounds=bounds, method='bounded')
    logger.info(f"best_focus: shift={res.x:.6g}, rms={res.fun:.6g}")
    return res.x, res.fun
