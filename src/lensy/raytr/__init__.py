""" Package for optical ray tracing and calculations

    The :mod:`~.raytr` subpackage provides core classes and functions
    for ray tracing and analyses. These include:

        - The mutable ray record, :mod:`~.ray`
        - Base level ray redirection (reflect, refract, diffract, impact),
          :mod:`~.raytrace`
        - Generation of ray cones and beams, :mod:`~.sampler`
        - Ordered trace pipelines built from stage descriptors, :mod:`~.trace`
        - Spot size statistics and focus searches, :mod:`~.analyses`
        - Exception classes for reporting ray trace errors, :mod:`~.traceerror`
"""

from collections import namedtuple

Intersection = namedtuple('Intersection', ['pt', 'normal'])
Intersection.__doc__ = "Ray/surface intersection data"
Intersection.pt.__doc__ = "the point of incidence"
Intersection.normal.__doc__ = "unit surface normal at the point of incidence"

RayFailure = namedtuple('RayFailure', ['ray', 'stage', 'err'])
RayFailure.__doc__ = "A ray dropped from a trace, with the reason"
RayFailure.ray.__doc__ = "the dropped Ray"
RayFailure.stage.__doc__ = "index of the stage where the ray failed"
RayFailure.err.__doc__ = "the TraceError raised"

TraceResult = namedtuple('TraceResult', ['rays', 'dropped'])
TraceResult.__doc__ = "Rays surviving a trace plus the failed rays"
TraceResult.rays.__doc__ = "list of Rays that completed every stage"
TraceResult.dropped.__doc__ = "list of RayFailures"

SpotSize = namedtuple('SpotSize', ['count', 'centroid', 'rms_v', 'rms'])
SpotSize.__doc__ = "Spot statistics for one group of rays"
SpotSize.count.__doc__ = "number of rays in the group"
SpotSize.centroid.__doc__ = "mean impact position"
SpotSize.rms_v.__doc__ = "rms deviation from the centroid along x, y and z"
SpotSize.rms.__doc__ = "rms radial deviation from the centroid"
