#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" Supports tracing ray ensembles through an ordered list of surfaces

    An optical train is described by a list of :class:`Stage` descriptors,
    each one pairing a surface profile with the way rays interact with it.
    :func:`trace_stages` advances every active ray through stage N before any
    ray proceeds to stage N+1. A ray that misses a surface, falls outside its
    aperture or fails to redirect is dropped and recorded in the result.

.. Created on Mon Oct 19 11:01:04 2026

.. codeauthor: Michael H. Williamson
"""

import logging

import attr
import pandas as pd

import lensy.optical.model_constants as mc
from lensy.raytr import RayFailure, TraceResult
from lensy.raytr import raytrace as rt
from lensy.raytr.traceerror import TraceError, TraceRayBlockedError
from lensy.seq.medium import index_ratio, medium_index
from lensy.util.misc_math import as_vector

logger = logging.getLogger(__name__)


def _orders_tuple(orders):
    if isinstance(orders, int):
        return (orders,)
    return tuple(int(o) for o in orders)


def _check_interact_mode(instance, attribute, value):
    if value not in mc.interact_modes:
        raise ValueError(f"interact_mode must be one of {mc.interact_modes}, "
                         f"got {value!r}")


@attr.s(frozen=True, eq=False)
class Stage:
    """ One surface of an optical train and how rays interact with it

    Attributes:
        surface: a surface profile from :mod:`~.elem.profiles`
        interact_mode: 'reflect', 'refract', 'diffract', 'impact' or 'dummy'
        n_before: medium preceding the surface, a number or glass
        n_after: medium following the surface, a number or glass
        ruling: grating ruling vector, required for 'diffract'
        orders: diffraction orders; more than one fans each ray out into a
                copy per order
        label: name used in log messages
    """
    surface = attr.ib()
    interact_mode = attr.ib(validator=_check_interact_mode)
    n_before = attr.ib(default=mc.IN_VACUUM)
    n_after = attr.ib(default=mc.IN_VACUUM)
    ruling = attr.ib(default=None,
                     converter=attr.converters.optional(as_vector))
    orders = attr.ib(default=(1,), converter=_orders_tuple)
    label = attr.ib(default='')

    @ruling.validator
    def _check_ruling(self, attribute, value):
        if self.interact_mode == 'diffract' and value is None:
            raise ValueError("a diffract stage requires a ruling vector")

    def name(self, indx):
        return self.label if self.label else f"stage {indx}"


def _tag_failure(err, stage, pt):
    """ record the interface and point on errors raised by redirection """
    if getattr(err, 'ifc', None) is None:
        err.ifc = stage.surface
    if getattr(err, 'int_pt', None) is None:
        err.int_pt = pt
    return err


def _diffract(ray, stage, stage_indx, pt, normal, dropped):
    wvl = ray.wavelength
    wl_in = wvl/medium_index(stage.n_before, wvl)
    wl_out = wvl/medium_index(stage.n_after, wvl)

    fan_out = len(stage.orders) > 1
    diffracted = []
    for order in stage.orders:
        r = ray.copy() if fan_out else ray
        if fan_out:
            r.path_key += str(order)
        try:
            rt.redirect_diffract(r, pt, normal, stage.ruling, order,
                                 wl_out=wl_out, wl_in=wl_in)
        except TraceError as err:
            dropped.append(RayFailure(r, stage_indx,
                                      _tag_failure(err, stage, pt)))
            logger.debug(f"{stage.name(stage_indx)}: order {order} "
                         f"dropped, {err}")
        else:
            diffracted.append(r)
    return diffracted


def interact(ray, stage, stage_indx, pt, normal, dropped):
    """ apply the interaction of `stage` to a ray at pt.

    Returns:
        the list of rays that continue from this stage, empty if the ray
        failed; failures are appended to `dropped`
    """
    mode = stage.interact_mode
    if mode == 'diffract':
        return _diffract(ray, stage, stage_indx, pt, normal, dropped)

    try:
        if mode == 'reflect':
            rt.redirect_reflect(ray, pt, normal)
        elif mode == 'refract':
            m = index_ratio(stage.n_before, stage.n_after, ray.wavelength)
            rt.redirect_refract(ray, pt, normal, m)
        else:
            # impact and dummy leave the direction unchanged
            rt.redirect_impact(ray, pt, normal)
    except TraceError as err:
        dropped.append(RayFailure(ray, stage_indx,
                                  _tag_failure(err, stage, pt)))
        logger.debug(f"{stage.name(stage_indx)}: ray dropped, {err}")
        return []
    return [ray]


def trace_stages(rays, stages, segment_cb=None,
                 lead_coef_tol=mc.LEAD_COEF_TOL):
    """ trace a list of rays through an ordered list of stages

    The rays are modified in place. Rays reaching an 'impact' stage are
    terminated there and take no part in subsequent stages.

    Args:
        rays: list of :class:`~.ray.Ray`
        stages: list of :class:`Stage`, in the order rays encounter them
        segment_cb: optional callable, segment_cb(ray, stage_indx, start_pt,
                    end_pt), called for every ray segment traced, including
                    segments ending on an aperture block
        lead_coef_tol: passed to the surface intersection functions

    Returns:
        :class:`~.raytr.TraceResult`: the terminated or surviving rays and
        a list of :class:`~.raytr.RayFailure` for the dropped rays

    Raises:
        :exc:`~.WavelengthOutOfRangeError`: a ray wavelength is outside the
            range of a dispersion model
    """
    active = list(rays)
    terminated = []
    dropped = []
    for indx, stage in enumerate(stages):
        num_dropped = len(dropped)
        next_rays = []
        for ray in active:
            start_pt = ray.origin
            try:
                pt, normal = stage.surface.intersect(
                    ray, lead_coef_tol=lead_coef_tol)
            except TraceRayBlockedError as err:
                if segment_cb is not None:
                    segment_cb(ray, indx, start_pt, err.int_pt)
                dropped.append(RayFailure(ray, indx, err))
                continue
            except TraceError as err:
                dropped.append(RayFailure(ray, indx, err))
                continue

            if segment_cb is not None:
                segment_cb(ray, indx, start_pt, pt)
            out_rays = interact(ray, stage, indx, pt, normal, dropped)
            if stage.interact_mode == 'impact':
                terminated.extend(out_rays)
            else:
                next_rays.extend(out_rays)

        logger.info(f"{stage.name(indx)}: {len(next_rays)} active rays, "
                    f"{len(dropped) - num_dropped} dropped")
        active = next_rays

    return TraceResult(terminated + active, dropped)


def failure_table(dropped):
    """ return a DataFrame summarizing the dropped rays of a trace """
    records = [{'stage': f.stage,
                'error': type(f.err).__name__,
                'path_key': f.ray.path_key,
                'wavelength': f.ray.wavelength}
               for f in dropped]
    return pd.DataFrame.from_records(
        records, columns=['stage', 'error', 'path_key', 'wavelength'])
