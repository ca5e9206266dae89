# uHDR: HDR image editing software
#   Copyright (C) 2021  remi cozot
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
# hdrCore project 2020
# author: remi.cozot@univ-littoral.fr

# -----------------------------------------------------------------------------
# --- Package tfCore ----------------------------------------------------------
# -----------------------------------------------------------------------------
"""
tfCore Numba Compiled Functions Module

This module provides compiled element-wise versions of the transfer curves
used by tfCore.transfer. They are selected when the computation preference is
'numba' and follow exactly the same floating-point semantics as the NumPy
versions: out of domain values give NaN, nothing is clamped.

Single and double precision loops are compiled, so float32 images stay
float32. The kernels never divide: the HDR inverse receives the reciprocal
exposure already computed by the caller.

Functions:
    numba_gamma_encoding: x^(1/2.2)
    numba_gamma_decoding: x^2.2
    numba_hdr_forward: log2 compression followed by gamma encoding
    numba_hdr_inverse: gamma decoding followed by exp2 expansion
"""

# -----------------------------------------------------------------------------
# --- Import ------------------------------------------------------------------
# -----------------------------------------------------------------------------
import numba
import numpy as np

# -----------------------------------------------------------------------------
# --- Constants ---------------------------------------------------------------
# -----------------------------------------------------------------------------
GAMMA = 2.2
HDR_LOG_SCALE = 16.0
# -----------------------------------------------------------------------------
# --- Functions: numba version ------------------------------------------------
# -----------------------------------------------------------------------------
@numba.vectorize(['float32(float32)', 'float64(float64)'])
def numba_gamma_encoding(x):
    """
    Gamma encoding: linear to perceptual.

    Args:
        x (float or numpy.ndarray): linear values, valid for x >= 0

    Returns:
        numpy.floating or numpy.ndarray: x^(1/2.2), NaN for x < 0
    """
    return np.power(x, 1.0 / GAMMA)
# -----------------------------------------------------------------------------
@numba.vectorize(['float32(float32)', 'float64(float64)'])
def numba_gamma_decoding(x):
    """
    Gamma decoding: perceptual to linear.

    Args:
        x (float or numpy.ndarray): encoded values, valid for x >= 0

    Returns:
        numpy.floating or numpy.ndarray: x^2.2, NaN for x < 0
    """
    return np.power(x, GAMMA)
# -----------------------------------------------------------------------------
@numba.vectorize(['float32(float32, float32)', 'float64(float64, float64)'])
def numba_hdr_forward(x, exposure):
    """
    HDR forward curve: scale, log2 compress, gamma encode.

    Args:
        x (float or numpy.ndarray): linear radiance
        exposure (float): linear scaling applied before compression

    Returns:
        numpy.floating or numpy.ndarray: compressed values, [0..65536] maps to [0..1]
    """
    y = np.log2(x * exposure + 1.0) * (1.0 / HDR_LOG_SCALE)
    return np.power(y, 1.0 / GAMMA)
# -----------------------------------------------------------------------------
@numba.vectorize(['float32(float32, float32)', 'float64(float64, float64)'])
def numba_hdr_inverse(x, rcpExposure):
    """
    HDR inverse curve: gamma decode, exp2 expand, unscale.

    Args:
        x (float or numpy.ndarray): compressed values
        rcpExposure (float): reciprocal of the exposure

    Returns:
        numpy.floating or numpy.ndarray: linear radiance
    """
    y = np.power(x, GAMMA)
    return (np.exp2(y * HDR_LOG_SCALE) - 1.0) * rcpExposure
# -----------------------------------------------------------------------------
