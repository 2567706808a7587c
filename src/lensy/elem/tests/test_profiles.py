#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Oct 13 10:59:29 2026

@author: Michael H. Williamson
"""


import unittest
from pytest import approx
from lensy.elem.profiles import (Plane, Sphere, Cylinder, Paraboloid,
                                 Hyperboloid, intersect_surface)
from lensy.raytr.ray import Ray
from lensy.raytr.raytrace import reflect
from lensy.raytr.traceerror import (TraceMissedSurfaceError,
                                    TraceDegenerateGeometryError,
                                    TraceRayBlockedError)
from lensy.util.misc_math import normalize, mag3
import numpy as np
import numpy.testing as npt
from math import sqrt


def check_on_surface(surface, ray):
    pt, normal = surface.intersect(ray)
    assert surface.f(pt) == approx(0.0, abs=1e-9)
    assert mag3(normal) == approx(1.0)
    npt.assert_allclose(normal, surface.surface_normal(pt), atol=1e-9)
    return pt, normal


class PlaneTestCase(unittest.TestCase):
    def setUp(self):
        self.plane = Plane([0., 0., 1.], [0., 0., 2.], 2.0)

    def test_normal_incidence(self):
        ray = Ray([0.1, 0.2, 0.], [0., 0., 1.], 500e-9)
        pt, normal = self.plane.intersect(ray)
        npt.assert_allclose(pt, [0.1, 0.2, 1.0])
        npt.assert_allclose(normal, [0., 0., 1.])

    def test_parallel_ray_misses(self):
        ray = Ray([0., 0., 0.], [1., 0., 0.], 500e-9)
        with self.assertRaises(TraceMissedSurfaceError):
            self.plane.intersect(ray)

    def test_plane_behind_ray(self):
        ray = Ray([0., 0., 2.], [0., 0., 1.], 500e-9)
        with self.assertRaises(TraceMissedSurfaceError):
            self.plane.intersect(ray)

    def test_outside_aperture(self):
        ray = Ray([2., 0., 0.], [0., 0., 1.], 500e-9)
        with self.assertRaises(TraceRayBlockedError) as cm:
            self.plane.intersect(ray)
        npt.assert_allclose(cm.exception.int_pt, [2., 0., 1.])
        npt.assert_allclose(cm.exception.normal, [0., 0., 1.])
        assert cm.exception.ifc is self.plane

    def test_tilted_rays(self):
        for d in ([0.1, 0.2, 1.], [-0.3, 0.05, 2.], [0., 0., 0.5]):
            check_on_surface(self.plane, Ray([0.05, -0.1, 0.], d, 500e-9))

    def test_surface_normal(self):
        npt.assert_allclose(self.plane.normal, [0., 0., 2.])
        npt.assert_allclose(self.plane.surface_normal(np.array([0., 0., 1.])),
                            [0., 0., 1.])

    def test_zero_normal_is_degenerate(self):
        plane = Plane([0., 0., 1.], [0., 0., 0.], 2.0)
        ray = Ray([0., 0., 0.], [0., 0., 1.], 500e-9)
        with self.assertRaises(TraceDegenerateGeometryError):
            plane.intersect(ray)

    def test_translate_rotate(self):
        p2 = self.plane.translate([0., 0., 1.])
        npt.assert_allclose(p2.vertex, [0., 0., 2.])
        npt.assert_allclose(self.plane.vertex, [0., 0., 1.])

        p3 = self.plane.rotate([90., 0., 0.])
        npt.assert_allclose(p3.vertex, [0., 0., 1.])
        npt.assert_allclose(normalize(p3.normal), [0., 1., 0.], atol=1e-12)

    def test_intersect_surface(self):
        ray = Ray([0.1, 0.2, 0.], [0., 0., 1.], 500e-9)
        pt1, n1 = intersect_surface(ray, self.plane)
        pt2, n2 = self.plane.intersect(ray)
        npt.assert_array_equal(pt1, pt2)
        npt.assert_array_equal(n1, n2)


class SphereTestCase(unittest.TestCase):
    def setUp(self):
        # radius 2, center at z=3
        self.sphere = Sphere([0., 0., 1.], [0., 0., 2.], 2.0)

    def test_axial_ray(self):
        ray = Ray([0.5, 0., 0.], [0., 0., 1.], 500e-9)
        pt, normal = check_on_surface(self.sphere, ray)
        z = 3.0 - sqrt(4.0 - 0.25)
        npt.assert_allclose(pt, [0.5, 0., z])
        npt.assert_allclose(normal, [0.25, 0., (z - 3.0)/2.0])

    def test_vertex_side_from_inside(self):
        # ray starting inside the sphere, heading toward the vertex
        ray = Ray([0.1, 0., 2.5], [0., 0., -1.], 500e-9)
        pt, normal = check_on_surface(self.sphere, ray)
        assert pt[2] < 3.0

    def test_tilted_rays(self):
        for p, d in (([0.2, 0.1, -1.], [0.1, 0.05, 1.]),
                     ([-0.4, 0.3, 0.], [0.2, -0.1, 3.]),
                     ([0., 0., 0.], [0., 0., 1.])):
            pt, normal = check_on_surface(self.sphere, Ray(p, d, 500e-9))
            assert self.sphere.point_inside(pt)

    def test_outside_aperture(self):
        ray = Ray([0.9, 0.9, 0.], [0., 0., 1.], 500e-9)
        with self.assertRaises(TraceRayBlockedError):
            self.sphere.intersect(ray)

    def test_miss(self):
        ray = Ray([3., 0., 0.], [0., 0., 1.], 500e-9)
        with self.assertRaises(TraceMissedSurfaceError):
            self.sphere.intersect(ray)

    def test_zero_radius(self):
        s = Sphere([0., 0., 1.], [0., 0., 0.], 2.0)
        with self.assertRaises(TraceDegenerateGeometryError):
            s.intersect(Ray([0., 0., 0.], [0., 0., 1.], 500e-9))

    def test_listobj_str(self):
        assert 'Sphere' in self.sphere.listobj_str()
        assert 'center_offset' in self.sphere.listobj_str()


class CylinderTestCase(unittest.TestCase):
    def setUp(self):
        # radius 1, axis parallel to y through (0, 0, 1)
        self.cyl = Cylinder([0., 0., 0.], [0., 0., 1.], [0., 1., 0.], 1.0)

    def test_axial_ray(self):
        ray = Ray([0.3, 0.2, -1.], [0., 0., 1.], 500e-9)
        pt, normal = check_on_surface(self.cyl, ray)
        z = 1.0 - sqrt(0.91)
        npt.assert_allclose(pt, [0.3, 0.2, z])
        npt.assert_allclose(normal, [0.3, 0., z - 1.0])

    def test_axis_orthogonalized(self):
        c2 = Cylinder([0., 0., 0.], [0., 0., 1.], [0., 1., 1.], 1.0)
        ray = Ray([0.3, 0.2, -1.], [0., 0., 1.], 500e-9)
        pt1, n1 = self.cyl.intersect(ray)
        pt2, n2 = c2.intersect(ray)
        npt.assert_allclose(pt1, pt2)
        npt.assert_allclose(n1, n2)

    def test_tilted_rays(self):
        for p, d in (([0.1, 0.1, -1.], [0.1, 0.3, 1.]),
                     ([-0.2, 0., 0.5], [0.05, 0., -1.])):
            check_on_surface(self.cyl, Ray(p, d, 500e-9))

    def test_degenerate_axis(self):
        c2 = Cylinder([0., 0., 0.], [0., 0., 1.], [0., 0., 2.], 1.0)
        with self.assertRaises(TraceDegenerateGeometryError):
            c2.intersect(Ray([0., 0., -1.], [0., 0., 1.], 500e-9))

    def test_outside_aperture(self):
        ray = Ray([0.45, 0.3, -1.], [0., 0., 1.], 500e-9)
        with self.assertRaises(TraceRayBlockedError):
            self.cyl.intersect(ray)


class ParaboloidTestCase(unittest.TestCase):
    def setUp(self):
        # focal length 1
        self.para = Paraboloid([0., 0., 0.], [0., 0., 1.], 2.0)

    def test_axial_ray_linear_solution(self):
        ray = Ray([0.5, 0., 5.], [0., 0., -1.], 500e-9)
        pt, normal = check_on_surface(self.para, ray)
        npt.assert_allclose(pt, [0.5, 0., 0.0625])
        npt.assert_allclose(normal, normalize(np.array([-0.25, 0., 1.])))

    def test_reflection_through_focus(self):
        ray = Ray([0.5, 0., 5.], [0., 0., -1.], 500e-9)
        pt, normal = self.para.intersect(ray)
        d = reflect(ray.direction, normal)
        s = -pt[0]/d[0]
        npt.assert_allclose(pt + s*d, self.para.focus, atol=1e-12)

    def test_on_axis(self):
        ray = Ray([0., 0., 5.], [0., 0., -1.], 500e-9)
        pt, normal = self.para.intersect(ray)
        npt.assert_allclose(pt, [0., 0., 0.])
        npt.assert_array_equal(normal, [0., 0., 1.])

    def test_tilted_rays(self):
        for p, d in (([0.2, 0.1, 3.], [0.1, -0.05, -1.]),
                     ([-0.5, 0.3, 2.], [0.2, 0., -1.])):
            check_on_surface(self.para, Ray(p, d, 500e-9))

    def test_behind_ray(self):
        ray = Ray([0.5, 0., 5.], [0., 0., 1.], 500e-9)
        with self.assertRaises(TraceMissedSurfaceError):
            self.para.intersect(ray)

    def test_linear_fallback_tolerance(self):
        ray = Ray([0.5, 0., 5.], [1e-9, 0., -1.], 500e-9)
        pt1, _ = self.para.intersect(ray)
        pt2, _ = self.para.intersect(ray, lead_coef_tol=1e-12)
        npt.assert_allclose(pt1, pt2, atol=1e-9)

    def test_zero_focal_length(self):
        p = Paraboloid([0., 0., 0.], [0., 0., 0.], 2.0)
        with self.assertRaises(TraceDegenerateGeometryError):
            p.intersect(Ray([0., 0., 5.], [0., 0., -1.], 500e-9))


class HyperboloidTestCase(unittest.TestCase):
    def setUp(self):
        # semi-axis 1, eccentricity 2, vertex sheet toward -z
        self.hyp = Hyperboloid([0., 0., 0.], [0., 0., 1.], 2.0, 2.0)

    def test_axial_ray(self):
        ray = Ray([0.3, 0., -2.], [0., 0., 1.], 500e-9)
        pt, normal = check_on_surface(self.hyp, ray)
        z = 1.0 - sqrt(1.0 + 0.09/3.0)
        npt.assert_allclose(pt, [0.3, 0., z])
        assert normal[2] < 0.0

    def test_focus(self):
        npt.assert_allclose(self.hyp.focus, [0., 0., -1.])

    def test_on_axis(self):
        ray = Ray([0., 0., -2.], [0., 0., 1.], 500e-9)
        pt, normal = self.hyp.intersect(ray)
        npt.assert_allclose(pt, [0., 0., 0.], atol=1e-12)
        npt.assert_array_equal(normal, [0., 0., -1.])

    def test_tilted_rays(self):
        for p, d in (([0.1, 0.2, -3.], [0.05, -0.1, 1.]),
                     ([-0.4, 0., -1.], [0., 0.1, 1.])):
            check_on_surface(self.hyp, Ray(p, d, 500e-9))

    def test_eccentricity_validation(self):
        with self.assertRaises(ValueError):
            Hyperboloid([0., 0., 0.], [0., 0., 1.], 1.0, 2.0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
