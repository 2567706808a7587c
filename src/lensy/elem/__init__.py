""" Package providing the geometric elements rays interact with

    The :mod:`~.elem` subpackage provides classes and functions
    for the surfaces of an optical train. These include:

        - Surface shapes and ray intersection, :mod:`~.profiles`
        - A pixelated focal plane that accumulates ray impacts,
          :mod:`~.detector`

    Surfaces are positioned directly in global coordinates; there is no
    element model or coordinate transform tree.
"""
