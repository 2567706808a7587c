""" package implementing lensy graphics using matplotlib

    The :mod:`~.mpl` subpackage provides a spot diagram of ray impact
    points, :mod:`~.spotdiagram`.
"""
