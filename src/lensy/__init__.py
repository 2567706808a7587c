# -*- coding: utf-8 -*-
""" The **lensy** geometric ray tracing package for simple optical surfaces

    Rays are traced through a caller supplied sequence of planes, spheres,
    cylinders, paraboloids and hyperboloids. At each surface the ray is
    reflected, refracted, diffracted by a grating or stopped on a detector.

        - :mod:`~.elem`: surface profiles and ray intersection, detectors
        - :mod:`~.raytr`: ray redirection, ray generation, trace pipelines
          and spot size analysis
        - :mod:`~.seq`: index of refraction models for optical media

        - :mod:`opticalglass`: this package interfaces with glass manufacturer
          optical data, see :func:`~.seq.medium.decode_medium`

    The :mod:`~.mpl` subpackage implements spot diagram plotting using the
    :doc:`matplotlib <matplotlib:index>` package.

    The :mod:`~.util` subpackage provides vector math support.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = 'unknown'


def listobj(obj):
    """ Print wrapper function for listobj_str() method of `obj`.

    Classes may implement the `listobj_str` method that returns a string
    containing a formatted description of the object, e.g. the surface
    profiles in :mod:`~.elem.profiles`.
    """
    try:
        print(obj.listobj_str())
    except AttributeError:
        print(repr(obj))
