#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" Module for the different surface shapes a ray can intersect

    The profiles module captures the geometric shape of an optical surface.
    Five surface families are supported: :class:`Plane`, :class:`Sphere`,
    :class:`Cylinder`, :class:`Paraboloid` and :class:`Hyperboloid`. Each one
    is an immutable record of 3d vectors and scalars, in meters, positioned
    directly in the global coordinate system; there are no local coordinate
    transforms.

    Intersection reduces to a quadratic (linear for the plane) in the ray
    parameter `t`, found by substituting the parametric ray
    :math:`\\boldsymbol{p} + t\\boldsymbol{d}` into the implicit equation of
    the surface. When two real roots exist, the root on the vertex side of the
    surface is chosen. If the leading coefficient of the quadratic vanishes,
    i.e. the ray travels parallel to the principal axis, the linear remainder
    is solved instead.

    Every surface has a circular aperture centered on the vertex. The aperture
    test compares the distance of the intersection point from the vertex,
    measured perpendicular to the principal axis, with half the aperture
    diameter.

.. Created on Mon Oct 12 13:18:57 2026

.. codeauthor: Michael H. Williamson
"""
from math import sqrt

import attr

import lensy.optical.model_constants as mc
from lensy.raytr import Intersection
from lensy.raytr.traceerror import (TraceMissedSurfaceError,
                                    TraceDegenerateGeometryError,
                                    TraceRayBlockedError)
from lensy.util.misc_math import (as_vector, inner3, mag3, normalize,
                                  perpendicular_part, euler2rot3d)


def _solve_linear(b, c, ifc):
    """ solve b*t + c = 0, the remainder of a quadratic with a == 0 """
    if b == 0.0:
        raise TraceMissedSurfaceError(ifc)
    return -c/b


def _vertex_side_point(p, d, a, b, c, center, axis_vec, ifc, lead_coef_tol):
    """ Intersection point on the vertex side of a surface's center.

    Solves a*t**2 + b*t + c = 0 and picks the root whose point lies on the
    vertex side of `center`, i.e. where (q - center).axis_vec < 0. `axis_vec`
    points from the vertex toward the center.
    """
    if abs(a) <= lead_coef_tol:
        t = _solve_linear(b, c, ifc)
    else:
        disc = b*b - 4*a*c
        if disc < 0.0:
            raise TraceMissedSurfaceError(ifc)
        sqrt_disc = sqrt(disc)
        t = (-b + sqrt_disc)/(2*a)
        if inner3(p + t*d - center, axis_vec) >= 0.0:
            t = (-b - sqrt_disc)/(2*a)

    q = p + t*d
    if inner3(q - center, axis_vec) >= 0.0:
        raise TraceMissedSurfaceError(ifc)
    if t < 0.0:
        raise TraceMissedSurfaceError(ifc, "surface is behind the ray")
    return q


def intersect_plane(p, d, plane, lead_coef_tol=mc.LEAD_COEF_TOL):
    ''' Intersect a plane, starting from an arbitrary point.

    Args:
        p: start point of the ray
        d: direction vector of the ray
        plane: the :class:`Plane` to intersect
        lead_coef_tol: unused, the plane equation is linear

    Returns:
        :class:`~.raytr.Intersection` of the intersection point and the unit
        normal of the plane

    Raises:
        :exc:`~.TraceMissedSurfaceError`: ray parallel to the plane or plane
            behind the ray
        :exc:`~.TraceDegenerateGeometryError`: zero length plane normal
        :exc:`~.TraceRayBlockedError`: intersection outside the aperture
    '''
    n = plane.normal
    n_len = mag3(n)
    if n_len == 0.0:
        raise TraceDegenerateGeometryError(plane, "zero length plane normal")

    cos_dn = inner3(d, n)
    if cos_dn == 0.0:
        raise TraceMissedSurfaceError(plane, "ray parallel to plane")

    t = (inner3(plane.vertex, n) - inner3(p, n))/cos_dn
    if t < 0.0:
        raise TraceMissedSurfaceError(plane, "surface is behind the ray")
    q = p + t*d
    normal = n/n_len

    if mag3(q - plane.vertex) > plane.aperture/2.0:
        raise TraceRayBlockedError(plane, q, normal)
    return Intersection(q, normal)


def intersect_sphere(p, d, sphere, lead_coef_tol=mc.LEAD_COEF_TOL):
    ''' Intersect a sphere, starting from an arbitrary point.

    The returned normal points away from the center of the sphere.
    '''
    vr = sphere.center_offset
    radius = mag3(vr)
    if radius == 0.0:
        raise TraceDegenerateGeometryError(sphere, "zero radius sphere")
    center = sphere.vertex + vr

    # For quadratic equation a*t**2 + b*t + c = 0:
    w0 = p - center
    a = inner3(d, d)
    b = 2*inner3(d, w0)
    c = inner3(w0, w0) - inner3(vr, vr)
    q = _vertex_side_point(p, d, a, b, c, center, vr, sphere, lead_coef_tol)

    normal = normalize(q - center)

    rho = mag3(perpendicular_part(q - sphere.vertex, vr/radius))
    if rho > sphere.aperture/2.0:
        raise TraceRayBlockedError(sphere, q, normal)
    return Intersection(q, normal)


def intersect_cylinder(p, d, cylinder, lead_coef_tol=mc.LEAD_COEF_TOL):
    ''' Intersect a cylinder, starting from an arbitrary point.

    The axis direction of the cylinder is made perpendicular to the vector
    from the vertex to the axis. The returned normal points away from the
    cylinder axis.
    '''
    va = cylinder.axis_offset
    radius = mag3(va)
    if radius == 0.0:
        raise TraceDegenerateGeometryError(cylinder, "zero radius cylinder")
    w0 = va/radius

    axis = perpendicular_part(cylinder.axis_dir, w0)
    axis_len = mag3(axis)
    if axis_len == 0.0:
        raise TraceDegenerateGeometryError(cylinder,
                                           "cylinder axis parallel to radius")
    axis = axis/axis_len

    center = cylinder.vertex + va
    # components perpendicular to the cylinder axis
    d_perp = perpendicular_part(d, axis)
    w_perp = perpendicular_part(p - center, axis)

    a = inner3(d_perp, d_perp)
    b = 2*inner3(d_perp, w_perp)
    c = inner3(w_perp, w_perp) - inner3(va, va)
    q = _vertex_side_point(p, d, a, b, c, center, va, cylinder,
                           lead_coef_tol)

    w5 = q - center
    normal = perpendicular_part(w5, axis)
    n_len = mag3(normal)
    if n_len == 0.0:
        raise TraceMissedSurfaceError(cylinder)
    normal = normal/n_len

    if mag3(perpendicular_part(w5, w0)) > cylinder.aperture/2.0:
        raise TraceRayBlockedError(cylinder, q, normal)
    return Intersection(q, normal)


def intersect_paraboloid(p, d, paraboloid, lead_coef_tol=mc.LEAD_COEF_TOL):
    ''' Intersect a paraboloid, starting from an arbitrary point.

    The paraboloid is the set of points equidistant from the focus and from
    the directrix plane, located a focal length behind the vertex. The
    returned normal points toward the focus side of the surface.
    '''
    f = paraboloid.focus_offset
    flen = mag3(f)
    if flen == 0.0:
        raise TraceDegenerateGeometryError(paraboloid, "zero focal length")
    w0 = f/flen
    w1 = p - paraboloid.vertex - f

    # For quadratic equation a*t**2 + b*t + c = 0:
    #  |w1 + t*d|**2 = (k + t*d.w0)**2
    d_ax = inner3(d, w0)
    k = 2*flen + inner3(w1, w0)
    a = inner3(d, d) - d_ax*d_ax
    b = 2*inner3(d, w1) - 2*d_ax*k
    c = inner3(w1, w1) - k*k
    if abs(a) <= lead_coef_tol:
        t = _solve_linear(b, c, paraboloid)
    else:
        disc = b*b - 4*a*c
        if disc < 0.0:
            raise TraceMissedSurfaceError(paraboloid)
        sqrt_disc = sqrt(disc)
        t = (-b + sqrt_disc)/(2*a)
        t2 = (-b - sqrt_disc)/(2*a)
        if t < 0.0 or (t2 > 0.0 and t2 < t):
            t = t2
    if t < 0.0:
        raise TraceMissedSurfaceError(paraboloid, "surface is behind the ray")
    q = p + t*d

    radial = perpendicular_part(q - paraboloid.vertex, w0)
    rho = mag3(radial)
    if rho == 0.0:
        normal = w0
    else:
        normal = normalize(w0 - radial/(2*flen))

    if rho > paraboloid.aperture/2.0:
        raise TraceRayBlockedError(paraboloid, q, normal)
    return Intersection(q, normal)


def intersect_hyperboloid(p, d, hyperboloid, lead_coef_tol=mc.LEAD_COEF_TOL):
    ''' Intersect a hyperboloid, starting from an arbitrary point.

    The quadratic comes from the focus-directrix definition,
    :math:`|q - F| = e \\cdot dist(q, directrix)`, which describes both
    sheets. The sheet containing the vertex is selected. The returned normal
    points away from the center.
    '''
    ac = hyperboloid.center_offset
    e = hyperboloid.eccentricity
    semi_a = mag3(ac)
    if semi_a == 0.0:
        raise TraceDegenerateGeometryError(hyperboloid,
                                           "zero length center vector")
    center = hyperboloid.vertex + ac
    focus = center - e*ac
    # unit axis, pointing from the center toward the vertex
    w2 = -ac/semi_a

    w3 = p - center + ac/e
    w4 = p - focus

    # For quadratic equation a*t**2 + b*t + c = 0:
    e2 = e*e
    d_ax = inner3(w2, d)
    w3_ax = inner3(w2, w3)
    a = inner3(d, d) - e2*d_ax*d_ax
    b = 2*(inner3(d, w4) - e2*d_ax*w3_ax)
    c = inner3(w4, w4) - e2*w3_ax*w3_ax
    q = _vertex_side_point(p, d, a, b, c, center, ac, hyperboloid,
                           lead_coef_tol)

    radial = perpendicular_part(q - hyperboloid.vertex, w2)
    rho = mag3(radial)
    if rho == 0.0:
        normal = w2
    else:
        semi_b = sqrt(semi_a*semi_a*(e2 - 1))
        slope = (semi_a/semi_b)*(rho/sqrt(semi_b*semi_b + rho*rho))
        normal = w2 - slope*radial/rho

    n_len = mag3(normal)
    if n_len == 0.0:
        raise TraceMissedSurfaceError(hyperboloid)
    normal = normal/n_len

    if rho > hyperboloid.aperture/2.0:
        raise TraceRayBlockedError(hyperboloid, q, normal)
    return Intersection(q, normal)


def intersect_surface(ray, surface, lead_coef_tol=mc.LEAD_COEF_TOL):
    """ Intersect `ray` with any surface profile.

    Args:
        ray: a :class:`~.raytr.ray.Ray`
        surface: a :class:`SurfaceProfile` instance
        lead_coef_tol: the linear solution is used when the magnitude of the
                       leading quadratic coefficient is <= lead_coef_tol

    Returns:
        :class:`~.raytr.Intersection` (pt, normal)

    Raises:
        :exc:`~.TraceMissedSurfaceError`,
        :exc:`~.TraceDegenerateGeometryError`,
        :exc:`~.TraceRayBlockedError`
    """
    return surface.intersect(ray, lead_coef_tol=lead_coef_tol)


class SurfaceProfile:
    """ Base class for surface profiles.

    Subclasses are frozen attrs classes. Use :meth:`translate`,
    :meth:`rotate` or :func:`attr.evolve` to produce perturbed copies, e.g.
    for a focus search.
    """
    # names of the direction-like vector fields, rotated by rotate()
    vector_fields = ()

    def listobj_str(self):
        o_str = f"profile: {type(self).__name__}\n"
        for fld in attr.fields(type(self)):
            o_str += f"{fld.name}={getattr(self, fld.name)}\n"
        return o_str

    def intersect(self, ray, lead_coef_tol=mc.LEAD_COEF_TOL):
        ''' Intersect the profile with `ray`.

        Returns:
            :class:`~.raytr.Intersection` (pt, normal)

        Raises:
            :exc:`~lensy.raytr.traceerror.TraceMissedSurfaceError`
            :exc:`~lensy.raytr.traceerror.TraceRayBlockedError`
        '''
        return self.intersect_fn(ray.origin, ray.direction, self,
                                 lead_coef_tol=lead_coef_tol)

    def f(self, p):
        """Returns the value of the profile surface function at point
        :math:`\\boldsymbol{p}`.

        :math:`f({\\boldsymbol{p}}) = 0` on the surface
        """
        raise NotImplementedError

    def df(self, p):
        """Returns the gradient of the profile surface function at point
        :math:`\\boldsymbol{p}`.
        """
        raise NotImplementedError

    def surface_normal(self, p):
        """Returns the unit normal of the profile at point
        :math:`\\boldsymbol{p}`. """
        return normalize(self.df(p))

    def aperture_distance(self, pt):
        """ distance of `pt` from the vertex, perpendicular to the axis """
        raise NotImplementedError

    def point_inside(self, pt):
        """ True if `pt` is within the circular aperture of the surface """
        return self.aperture_distance(pt) <= self.aperture/2.0

    def translate(self, offset):
        """ return a copy of the surface with the vertex moved by `offset` """
        return attr.evolve(self, vertex=self.vertex + as_vector(offset))

    def rotate(self, euler, about=None):
        """ return a copy of the surface rotated by euler angles (degrees).

        The rotation is about the point `about`, which defaults to the
        vertex of the surface.
        """
        rot = euler2rot3d(euler)
        about = self.vertex if about is None else as_vector(about)
        changes = {'vertex': about + rot.dot(self.vertex - about)}
        for fld in self.vector_fields:
            changes[fld] = rot.dot(getattr(self, fld))
        return attr.evolve(self, **changes)


@attr.s(frozen=True, eq=False)
class Plane(SurfaceProfile):
    """ A flat surface.

    Attributes:
        vertex: vertex position
        normal: normal vector to the plane
        aperture: circular aperture diameter
    """
    vertex = attr.ib(converter=as_vector)
    normal = attr.ib(converter=as_vector)
    aperture = attr.ib(converter=float)

    vector_fields = ('normal',)
    intersect_fn = staticmethod(intersect_plane)

    def unit_normal(self):
        return normalize(self.normal)

    def f(self, p):
        return inner3(p - self.vertex, self.unit_normal())

    def df(self, p):
        return self.unit_normal()

    def aperture_distance(self, pt):
        return mag3(pt - self.vertex)


@attr.s(frozen=True, eq=False)
class Sphere(SurfaceProfile):
    """ A spherical surface.

    Attributes:
        vertex: vertex position
        center_offset: vector from the vertex to the center of the sphere; its
                       length is the radius
        aperture: circular aperture diameter
    """
    vertex = attr.ib(converter=as_vector)
    center_offset = attr.ib(converter=as_vector)
    aperture = attr.ib(converter=float)

    vector_fields = ('center_offset',)
    intersect_fn = staticmethod(intersect_sphere)

    @property
    def radius(self):
        return mag3(self.center_offset)

    @property
    def center(self):
        return self.vertex + self.center_offset

    def f(self, p):
        w = p - self.center
        return inner3(w, w) - inner3(self.center_offset, self.center_offset)

    def df(self, p):
        return 2*(p - self.center)

    def aperture_distance(self, pt):
        return mag3(perpendicular_part(pt - self.vertex,
                                       normalize(self.center_offset)))


@attr.s(frozen=True, eq=False)
class Cylinder(SurfaceProfile):
    """ A cylindrical surface.

    Attributes:
        vertex: vertex position
        axis_offset: vector from the vertex to the cylinder axis; its length
                     is the radius
        axis_dir: vector parallel to the cylinder axis. Only the component
                  perpendicular to axis_offset is used.
        aperture: circular aperture diameter
    """
    vertex = attr.ib(converter=as_vector)
    axis_offset = attr.ib(converter=as_vector)
    axis_dir = attr.ib(converter=as_vector)
    aperture = attr.ib(converter=float)

    vector_fields = ('axis_offset', 'axis_dir')
    intersect_fn = staticmethod(intersect_cylinder)

    @property
    def radius(self):
        return mag3(self.axis_offset)

    def unit_axis(self):
        """ unit cylinder axis, perpendicular to axis_offset """
        return normalize(perpendicular_part(self.axis_dir,
                                            normalize(self.axis_offset)))

    def _radial(self, p):
        return perpendicular_part(p - self.vertex - self.axis_offset,
                                  self.unit_axis())

    def f(self, p):
        r = self._radial(p)
        return inner3(r, r) - inner3(self.axis_offset, self.axis_offset)

    def df(self, p):
        return 2*self._radial(p)

    def aperture_distance(self, pt):
        return mag3(perpendicular_part(pt - self.vertex,
                                       normalize(self.axis_offset)))


@attr.s(frozen=True, eq=False)
class Paraboloid(SurfaceProfile):
    """ A paraboloid of revolution.

    The surface function is :math:`f = 4 F z - \\rho^2`, where `z` is the
    distance from the vertex along the axis and :math:`\\rho` the distance
    from the axis.

    Attributes:
        vertex: vertex position
        focus_offset: vector from the vertex to the focus
        aperture: circular aperture diameter
    """
    vertex = attr.ib(converter=as_vector)
    focus_offset = attr.ib(converter=as_vector)
    aperture = attr.ib(converter=float)

    vector_fields = ('focus_offset',)
    intersect_fn = staticmethod(intersect_paraboloid)

    @property
    def focal_length(self):
        return mag3(self.focus_offset)

    @property
    def focus(self):
        return self.vertex + self.focus_offset

    def _axial_radial(self, p):
        w0 = normalize(self.focus_offset)
        w = p - self.vertex
        return inner3(w, w0), perpendicular_part(w, w0), w0

    def f(self, p):
        z, radial, _ = self._axial_radial(p)
        return 4*self.focal_length*z - inner3(radial, radial)

    def df(self, p):
        _, radial, w0 = self._axial_radial(p)
        return 4*self.focal_length*w0 - 2*radial

    def aperture_distance(self, pt):
        return mag3(self._axial_radial(pt)[1])


def _check_eccentricity(instance, attribute, value):
    if not value > 1.0:
        raise ValueError(f"hyperboloid eccentricity must be > 1, got {value}")


@attr.s(frozen=True, eq=False)
class Hyperboloid(SurfaceProfile):
    """ One sheet of a hyperboloid of two sheets.

    With semi-axes :math:`A = |center\\_offset|` and
    :math:`B = A \\sqrt{e^2 - 1}`, the surface function is
    :math:`f = z^2/A^2 - \\rho^2/B^2 - 1`, where `z` is measured from the
    center toward the vertex.

    Attributes:
        vertex: vertex position
        center_offset: vector from the vertex to the center of the hyperboloid
        eccentricity: eccentricity, e > 1
        aperture: circular aperture diameter
    """
    vertex = attr.ib(converter=as_vector)
    center_offset = attr.ib(converter=as_vector)
    eccentricity = attr.ib(converter=float, validator=_check_eccentricity)
    aperture = attr.ib(converter=float)

    vector_fields = ('center_offset',)
    intersect_fn = staticmethod(intersect_hyperboloid)

    @property
    def center(self):
        return self.vertex + self.center_offset

    @property
    def focus(self):
        return self.center - self.eccentricity*self.center_offset

    def semi_axes(self):
        semi_a = mag3(self.center_offset)
        e = self.eccentricity
        return semi_a, semi_a*sqrt(e*e - 1)

    def _axial_radial(self, p):
        w2 = -normalize(self.center_offset)
        w = p - self.center
        return inner3(w, w2), perpendicular_part(w, w2), w2

    def f(self, p):
        semi_a, semi_b = self.semi_axes()
        z, radial, _ = self._axial_radial(p)
        return z*z/(semi_a*semi_a) - inner3(radial, radial)/(semi_b*semi_b) - 1

    def df(self, p):
        semi_a, semi_b = self.semi_axes()
        z, radial, w2 = self._axial_radial(p)
        return 2*z*w2/(semi_a*semi_a) - 2*radial/(semi_b*semi_b)

    def aperture_distance(self, pt):
        w2 = -normalize(self.center_offset)
        return mag3(perpendicular_part(pt - self.vertex, w2))
