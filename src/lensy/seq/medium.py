#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2013 - 2015 FSF
# SPDX-License-Identifier: GPL-2.0-or-later
""" Module building on :mod:`opticalglass` for lensy material support

    Two dispersion models are provided, each a pure function of the vacuum
    wavelength (meters) and a coefficient record:

        - :func:`index_polynomial`, a 6 coefficient power series in
          :math:`\\lambda^2`, valid from 0.3 to 2.0 micrometers
        - :func:`index_sellmeier`, the 3 term Sellmeier formula

    :class:`PolynomialGlass` and :class:`SellmeierGlass` bundle a coefficient
    record with a material name. They respond to `rindex` (wavelength in nm)
    like :mod:`opticalglass` media do, so either kind can be used wherever a
    trace needs an index of refraction.

.. Created on Fri Oct 16 17:06:17 2026

.. codeauthor: Michael H. Williamson
"""
import logging
import numbers
from math import sqrt

import attr

from opticalglass import glassfactory as gfact
from opticalglass import opticalmedium as om
from opticalglass import glasserror

from lensy.optical.model_constants import IN_AIR, IN_VACUUM  # noqa: F401
from lensy.raytr.traceerror import WavelengthOutOfRangeError
from lensy.util.misc_math import isanumber

logger = logging.getLogger(__name__)

# valid wavelength range of the polynomial model, meters
POLYNOMIAL_WVL_RANGE = (0.3e-6, 2.0e-6)


def index_polynomial(wl, coefs):
    """ index of refraction from the 6 coefficient polynomial model

    :math:`n^2 = a_0 + a_1\\lambda^2 + a_2\\lambda^{-2} + a_3\\lambda^{-4}
    + a_4\\lambda^{-6} + a_5\\lambda^{-8}`, with :math:`\\lambda` in
    micrometers.

    Args:
        wl: vacuum wavelength in meters
        coefs: sequence of the 6 coefficients a0..a5

    Raises:
        :exc:`~.WavelengthOutOfRangeError`: wl outside
            :data:`POLYNOMIAL_WVL_RANGE`
    """
    if wl < POLYNOMIAL_WVL_RANGE[0] or wl > POLYNOMIAL_WVL_RANGE[1]:
        raise WavelengthOutOfRangeError(wl, POLYNOMIAL_WVL_RANGE)

    wl_um = wl*1.0e6
    wl2 = wl_um*wl_um
    a = coefs
    return sqrt(a[0] + a[1]*wl2 + a[2]/wl2 + a[3]/wl2**2 +
                a[4]/wl2**3 + a[5]/wl2**4)


def index_sellmeier(wl, coefs):
    """ index of refraction from the 3 term Sellmeier formula

    :math:`n^2 = 1 + \\sum_{i=1}^3 b_i\\lambda^2/(\\lambda^2 - c_i)`, with
    :math:`\\lambda` in micrometers.

    Args:
        wl: vacuum wavelength in meters
        coefs: (b1, b2, b3, c1, c2, c3)
    """
    b1, b2, b3, c1, c2, c3 = coefs
    wl_um = wl*1.0e6
    wl2 = wl_um*wl_um
    return sqrt(1.0 + b1*wl2/(wl2 - c1) + b2*wl2/(wl2 - c2) +
                b3*wl2/(wl2 - c3))


def _coef_tuple(coefs):
    return tuple(float(c) for c in coefs)


@attr.s(frozen=True)
class PolynomialGlass:
    """ A material described by the 6 coefficient polynomial model """
    label = attr.ib()
    coefs = attr.ib(converter=_coef_tuple)
    catalog = attr.ib(default='lensy')

    @coefs.validator
    def _check_coefs(self, attribute, value):
        if len(value) != 6:
            raise ValueError(f"{self.label}: 6 coefficients required")

    def name(self):
        return self.label

    def catalog_name(self):
        return self.catalog

    def index(self, wl):
        """ index of refraction at vacuum wavelength `wl` in meters """
        return index_polynomial(wl, self.coefs)

    def rindex(self, wvl):
        """ index of refraction at wavelength `wvl` in nm """
        return self.index(wvl*1.0e-9)


@attr.s(frozen=True)
class SellmeierGlass:
    """ A material described by the 3 term Sellmeier formula

    Attributes:
        label: material name
        b: (b1, b2, b3) oscillator strengths
        c: (c1, c2, c3) resonance wavelengths squared, in square micrometers
    """
    label = attr.ib()
    b = attr.ib(converter=_coef_tuple)
    c = attr.ib(converter=_coef_tuple)
    catalog = attr.ib(default='lensy')

    @property
    def coefs(self):
        return self.b + self.c

    def name(self):
        return self.label

    def catalog_name(self):
        return self.catalog

    def index(self, wl):
        """ index of refraction at vacuum wavelength `wl` in meters """
        return index_sellmeier(wl, self.coefs)

    def rindex(self, wvl):
        """ index of refraction at wavelength `wvl` in nm """
        return self.index(wvl*1.0e-9)


# --- polynomial model reference materials
CaF2 = PolynomialGlass('CaF2', (2.0388472e0, -3.2320997e-3, 6.1568960e-3,
                                5.6612714e-5, -4.0951444e-9, 2.2406560e-8))
tsu2 = PolynomialGlass('tsu2', (2.5310795e0, -1.0750804e-2, 1.4091541e-2,
                                2.4479041e-4, -4.3396907e-6, 4.2269287e-7))
tsu4 = PolynomialGlass('tsu4', (2.5310397e0, -1.0751078e-2, 1.4089396e-2,
                                2.4455705e-4, -4.3189009e-6, 4.2184152e-7))
tsu5 = PolynomialGlass('tsu5', (2.2182723e0, -5.2937745e-3, 8.4751835e-3,
                                9.0035648e-5, -2.1638749e-7, 8.8532657e-8))
tsu6 = PolynomialGlass('tsu6', (2.3863743e0, -9.2750923e-3, 1.2963764e-2,
                                2.6012532e-4, -7.1806739e-6, 6.4902518e-7))
tsu7 = PolynomialGlass('tsu7', (2.5309288e0, -1.0751176e-2, 1.4087125e-2,
                                2.4433615e-4, -4.2994607e-6, 4.2104219e-7))
fsilica = PolynomialGlass('fsilica', (2.1045254e0, -9.5251763e-3,
                                      8.5795589e-3, 1.2770234e-4,
                                      -2.2841020e-6, 1.2397250e-7))

# --- Sellmeier model reference materials
N_BAF10 = SellmeierGlass('N-BAF10', (1.58514950, 0.143559385, 1.08521269),
                         (9.26681282e-3, 4.24489805e-2, 105.613573))
N_SF6 = SellmeierGlass('N-SF6', (1.77931763, 0.338149866, 2.08734474),
                       (1.33714182e-2, 6.17533621e-2, 174.017590))
N_BK7 = SellmeierGlass('N-BK7', (1.03961212, 0.231792344, 1.01046945),
                       (6.00069867e-3, 2.00179144e-2, 103.560653))
SF2 = SellmeierGlass('SF2', (1.40301821, 0.231767504, 0.939056586),
                     (1.05795466e-2, 4.93226978e-2, 112.405955))

lensy_catalog = {mat.name(): mat
                 for mat in (CaF2, tsu2, tsu4, tsu5, tsu6, tsu7, fsilica,
                             N_BAF10, N_SF6, N_BK7, SF2)}


def find_material(name):
    """ return the reference material `name`, or None

    Names match with or without case and with '_' in place of '-'.
    """
    key = name.strip().upper().replace('_', '-')
    for mat_name, mat in lensy_catalog.items():
        if mat_name.upper() == key:
            return mat
    return None


def medium_index(medium, wl):
    """ index of refraction of `medium` at vacuum wavelength `wl` (meters)

    `medium` may be a number, a lensy glass with an `index` method, or any
    :mod:`opticalglass` medium with an `rindex` method (wavelength in nm).
    """
    if isinstance(medium, numbers.Real):
        return float(medium)
    elif isinstance(medium, (PolynomialGlass, SellmeierGlass)):
        return medium.index(wl)
    elif hasattr(medium, 'rindex'):
        return float(medium.rindex(wl*1.0e9))
    else:
        raise TypeError(f"no index of refraction for {medium!r}")


def index_ratio(n_in, n_out, wl):
    """ return m = n_in/n_out at vacuum wavelength `wl`, as used by refract """
    return medium_index(n_in, wl)/medium_index(n_out, wl)


def decode_medium(*inputs):
    """ Input utility for parsing various forms of glass input.

    The **inputs** can have several forms:

        - **refractive_index**: float ->
          :class:`opticalglass.opticalmedium.ConstantIndex`
        - **air**: str -> :class:`opticalglass.opticalmedium.Air`
        - **material_name**: str -> one of the lensy reference materials
        - **glass_name, catalog_name** as 1 or 2 strings -> an
          :mod:`opticalglass` catalog glass
        - an instance with a `rindex` attribute
        - blank -> defaults to :class:`opticalglass.opticalmedium.Air`

    A catalog glass that cannot be found is replaced by air.
    """
    mat = None
    if len(inputs) == 0:
        return om.Air()

    logger.debug(f"num inputs = {len(inputs)}, inputs[0] = {inputs[0]}, "
                 f"{type(inputs[0])}")
    if isanumber(inputs[0]) and not isinstance(inputs[0], str):
        n = float(inputs[0])
        if n == 1.0:
            mat = om.Air()
        else:
            mat = om.ConstantIndex(n, f"n:{n:.3f}")

    elif isinstance(inputs[0], str):
        str_args = [tkn.strip() for tkn in inputs
                    if isinstance(tkn, str) and len(tkn.strip()) > 0]
        if len(str_args) == 0 or str_args[0].upper() == 'AIR':
            mat = om.Air()
        elif len(str_args) == 1 and ',' not in str_args[0]:
            mat = find_material(str_args[0])
            if mat is None:
                raise ValueError(f"unknown material {str_args[0]!r}, "
                                 "use 'glass_name, catalog_name'")
        else:
            if len(str_args) == 1:
                name, cat = (tkn.strip() for tkn in str_args[0].split(',', 1))
            else:
                name, cat = str_args[0], str_args[1]
            try:
                mat = gfact.create_glass(name, cat)
            except glasserror.GlassNotFoundError as gerr:
                logger.info('%s glass data type %s not found',
                            gerr.catalog,
                            gerr.name)
                logger.info('Replacing material with air.')
                mat = om.Air()

    # glass instance args. if they respond to `rindex`, they're in
    elif hasattr(inputs[0], 'rindex'):
        mat = inputs[0]

    if mat is None:
        raise TypeError(f"cannot decode medium from {inputs!r}")
    logger.info(f"mat = {mat.name()}, {mat.catalog_name()}, {type(mat)}")
    return mat
