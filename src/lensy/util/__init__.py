""" package supplying utility functions for math and numpy support

    The :mod:`~lensy.util` subpackage provides the 3d vector primitives and
    other geometric helpers used by the ray tracing kernel, in
    :mod:`~.misc_math`.
"""
