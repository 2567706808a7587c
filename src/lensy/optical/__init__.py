""" Package holding constants shared by the lensy ray tracing modules

    The ``lensy.optical`` subpackage provides the model constants used for
    ray/surface interaction modes, media and numeric policies, in
    :mod:`~.model_constants`.
"""
