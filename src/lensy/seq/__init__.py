""" Package for the optical media rays travel through

    The :mod:`~.seq` subpackage provides index of refraction models,
    :mod:`~.medium`. Reference glasses are defined by polynomial or
    Sellmeier dispersion coefficients; catalog glasses are available through
    the :mod:`opticalglass` package.
"""
