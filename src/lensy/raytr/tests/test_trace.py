#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Oct 15 11:42:50 2026

@author: Michael H. Williamson
"""


import unittest
from pytest import approx
import numpy as np
import numpy.testing as npt

from lensy.elem.profiles import Plane, Paraboloid
from lensy.raytr import sampler
from lensy.raytr.ray import Ray
from lensy.raytr.trace import Stage, trace_stages, failure_table
from lensy.raytr.traceerror import (TraceRayBlockedError, TraceTIRError,
                                    TraceEvanescentRayError,
                                    WavelengthOutOfRangeError)
from lensy.seq.medium import N_BK7, fsilica
from lensy.util.misc_math import normalize


def telescope(primary_aperture=1.0):
    """ paraboloid primary with focal length 1 and a focal plane """
    primary = Paraboloid([0., 0., 0.], [0., 0., 1.], primary_aperture)
    focal_plane = Plane([0., 0., 1.], [0., 0., 1.], 0.1)
    return [Stage(primary, 'reflect', label='primary'),
            Stage(focal_plane, 'impact', label='focal plane')]


class TelescopeTestCase(unittest.TestCase):
    def setUp(self):
        self.chief = Ray([0., 0., 2.], [0., 0., -1.], 550e-9)

    def test_perfect_focus(self):
        rays = sampler.beam(self.chief, 0.8, 0.1)
        result = trace_stages(rays, telescope())
        assert len(result.dropped) == 0
        assert len(result.rays) == len(rays)
        for r in result.rays:
            npt.assert_allclose(r.origin, [0., 0., 1.], atol=1e-9)

    def test_aperture_block(self):
        rays = sampler.beam(self.chief, 0.8, 0.1)
        segments = []

        def segment_cb(ray, stage_indx, start_pt, end_pt):
            segments.append((stage_indx, start_pt, end_pt))

        result = trace_stages(rays, telescope(0.5), segment_cb=segment_cb)
        assert len(result.dropped) > 0
        assert len(result.rays) + len(result.dropped) == len(rays)
        for f in result.dropped:
            assert f.stage == 0
            assert isinstance(f.err, TraceRayBlockedError)
        # blocked rays still report their segment to the primary
        assert len([s for s in segments if s[0] == 0]) == len(rays)

        df = failure_table(result.dropped)
        assert len(df) == len(result.dropped)
        assert (df['error'] == 'TraceRayBlockedError').all()


class RefractTestCase(unittest.TestCase):
    def test_plane_parallel_plate(self):
        d = normalize(np.array([0.2, 0.1, 1.]))
        ray = Ray([0., 0., 0.], d, 550e-9)
        stages = [Stage(Plane([0., 0., 1.], [0., 0., 1.], 10.), 'refract',
                        n_before=1.0, n_after=N_BK7),
                  Stage(Plane([0., 0., 2.], [0., 0., 1.], 10.), 'refract',
                        n_before=N_BK7, n_after=1.0),
                  Stage(Plane([0., 0., 3.], [0., 0., 1.], 10.), 'impact')]
        result = trace_stages([ray], stages)
        assert len(result.rays) == 1
        npt.assert_allclose(result.rays[0].direction, d, atol=1e-12)
        assert result.rays[0].origin[2] == approx(3.0)

    def test_tir_dropped(self):
        ray = Ray([0., 0., 0.], [1., 0., 1.], 550e-9)
        surf = Plane([0., 0., 1.], [0., 0., 1.], 10.)
        result = trace_stages([ray], [Stage(surf, 'refract', n_before=1.5,
                                            n_after=1.0)])
        assert len(result.rays) == 0
        assert len(result.dropped) == 1
        err = result.dropped[0].err
        assert isinstance(err, TraceTIRError)
        assert err.ifc is surf
        npt.assert_allclose(err.int_pt, [1., 0., 1.])

    def test_wavelength_out_of_range(self):
        ray = Ray([0., 0., 0.], [0., 0., 1.], 2.5e-6)
        stage = Stage(Plane([0., 0., 1.], [0., 0., 1.], 10.), 'refract',
                      n_before=1.0, n_after=fsilica)
        with self.assertRaises(WavelengthOutOfRangeError):
            trace_stages([ray], [stage])

    def test_impact_terminates(self):
        ray = Ray([0., 0., 0.], [0., 0., 1.], 550e-9)
        stages = [Stage(Plane([0., 0., 1.], [0., 0., 1.], 10.), 'impact'),
                  Stage(Plane([0., 0., 2.], [0., 0., 1.], 10.), 'reflect')]
        result = trace_stages([ray], stages)
        assert len(result.rays) == 1
        assert len(result.dropped) == 0
        npt.assert_allclose(result.rays[0].origin, [0., 0., 1.])

    def test_dummy_passes_through(self):
        ray = Ray([0., 0., 0.], [0., 0.1, 1.], 550e-9)
        stages = [Stage(Plane([0., 0., 1.], [0., 0., 1.], 10.), 'dummy'),
                  Stage(Plane([0., 0., 2.], [0., 0., 1.], 10.), 'impact')]
        result = trace_stages([ray], stages)
        npt.assert_allclose(result.rays[0].origin, [0., 0.2, 2.])
        npt.assert_allclose(result.rays[0].direction, [0., 0.1, 1.])


class DiffractStageTestCase(unittest.TestCase):
    def setUp(self):
        self.grating = Plane([0., 0., 0.], [0., 0., 1.], 1.0)
        self.ruling = [1e-6, 0., 0.]

    def test_order_fan_out(self):
        ray = Ray([0., 0., 1.], [0., 0., -1.], 600e-9, path_key='k')
        stage = Stage(self.grating, 'diffract', ruling=self.ruling,
                      orders=range(-3, 4))
        result = trace_stages([ray], [stage])
        keys = sorted(r.path_key for r in result.rays)
        assert keys == ['k-1', 'k0', 'k1']
        # orders +-2 and +-3 are evanescent
        assert len(result.dropped) == 4
        for f in result.dropped:
            assert isinstance(f.err, TraceEvanescentRayError)
            assert f.err.ifc is self.grating
        assert ray.path_key == 'k'

    def test_single_order(self):
        ray = Ray([0., 0., 1.], [0., 0., -1.], 500e-9, path_key='k')
        stage = Stage(self.grating, 'diffract', ruling=self.ruling, orders=1)
        result = trace_stages([ray], [stage])
        assert len(result.rays) == 1
        assert result.rays[0] is ray
        assert ray.path_key == 'k'
        npt.assert_allclose(ray.direction, [0.5, 0., np.sqrt(0.75)])


class StageTestCase(unittest.TestCase):
    def test_bad_mode(self):
        with self.assertRaises(ValueError):
            Stage(Plane([0., 0., 0.], [0., 0., 1.], 1.), 'absorb')

    def test_diffract_requires_ruling(self):
        with self.assertRaises(ValueError):
            Stage(Plane([0., 0., 0.], [0., 0., 1.], 1.), 'diffract')

    def test_defaults(self):
        stage = Stage(Plane([0., 0., 0.], [0., 0., 1.], 1.), 'reflect')
        assert stage.orders == (1,)
        assert stage.n_before == 1.0
        assert stage.name(3) == 'stage 3'


if __name__ == '__main__':
    unittest.main(verbosity=2)
