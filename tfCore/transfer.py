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
tfCore Transfer Functions Module

This module provides the transfer functions applied around an image processing
stage (e.g. a denoiser): forward maps pixel values from the working radiance
domain into a bounded [0,1] processing domain, inverse maps the processed
values back.

Classes:
    - transferType: Enumeration of the available transfer functions
    - TransferFunction: Abstract forward/inverse contract and factory
    - LinearTransferFunction: Identity, no transformation
    - SRGBTransferFunction: Gamma 2.2 curve
    - HDRTransferFunction: log2 + gamma 2.2 curve, compresses [0..65536] to [0..1]

Functions:
    - floatType: floating type used to process a value
    - gammaEncoding / gammaDecoding: gamma 2.2 curves
    - makeTransferFunction: choose the transfer function from the input kind
    - fromPreferences: build the transfer function selected in preferences

Values are numeric or array_like and processed element-wise. Out of domain
values are not clamped and no error is raised: negative bases of fractional
powers and non-positive logarithm arguments give NaN, a zero exposure gives an
infinite reciprocal exposure. Validation is the caller's job.

Floating-point input keeps its precision (float32 images are processed as
float32), any other input is processed as float64.
"""

# -----------------------------------------------------------------------------
# --- Import ------------------------------------------------------------------
# -----------------------------------------------------------------------------
import enum
from abc import ABC, abstractmethod

import numpy as np
from colour.utilities import as_float, as_float_array

from . import numbafun
import preferences.preferences as pref

# -----------------------------------------------------------------------------
# --- Constants ---------------------------------------------------------------
# -----------------------------------------------------------------------------
GAMMA = numbafun.GAMMA
HDR_LOG_SCALE = numbafun.HDR_LOG_SCALE
# upper bound of the HDR range mapped to 1.0 with exposure 1.0
HDR_MAX = 2.0**HDR_LOG_SCALE

# -----------------------------------------------------------------------------
# --- Functions gamma ---------------------------------------------------------
# -----------------------------------------------------------------------------
def floatType(x):
    """
    Floating type used to process x.

    Floating-point input keeps its precision, anything else is processed as
    float64.

    Args:
        x (numeric or array_like)

    Returns:
        type: numpy.float16, numpy.float32 or numpy.float64
    """
    dtype = getattr(x, 'dtype', None)
    if dtype is not None and dtype in (np.float16, np.float32, np.float64): return dtype.type
    return np.float64
# -----------------------------------------------------------------------------
def gammaEncoding(x):
    """
    Gamma encoding: x^(1/2.2).

    Args:
        x (numeric or array_like): linear values, valid for x >= 0

    Returns:
        numeric or ndarray: encoded values with the precision of x, NaN where x < 0
    """
    dtype = floatType(x)
    x = as_float_array(x, dtype)
    with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
        if pref.computation == 'numba': return as_float(numbafun.numba_gamma_encoding(x), dtype)
        return as_float(np.power(x, 1.0 / GAMMA), dtype)
# -----------------------------------------------------------------------------
def gammaDecoding(x):
    """
    Gamma decoding: x^2.2.

    Args:
        x (numeric or array_like): encoded values, valid for x >= 0

    Returns:
        numeric or ndarray: linear values with the precision of x, NaN where x < 0
    """
    dtype = floatType(x)
    x = as_float_array(x, dtype)
    with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
        if pref.computation == 'numba': return as_float(numbafun.numba_gamma_decoding(x), dtype)
        return as_float(np.power(x, GAMMA), dtype)
# -----------------------------------------------------------------------------
# --- Class transferType ------------------------------------------------------
# -----------------------------------------------------------------------------
class transferType(enum.Enum):
    """
    Enumeration of the transfer functions.

    Attributes:
        - LINEAR (int): no transformation, data already in a stable range
        - SRGB (int): gamma 2.2, LDR linear data
        - HDR (int): log2 + gamma 2.2, HDR linear radiance
    """

    LINEAR  = 0
    SRGB    = 1
    HDR     = 2

    @staticmethod
    def toTransferType(s):
        """
        Convert a transfer function name to its enumeration value.

        Args:
            s (str): 'linear', 'srgb' or 'hdr' (case insensitive)

        Returns:
            transferType or None: None if the name is unknown
        """
        s = str(s).lower()
        if s == 'linear' :  return transferType.LINEAR
        elif s == 'srgb' :  return transferType.SRGB
        elif s == 'hdr' :   return transferType.HDR
        else:               return None
# -----------------------------------------------------------------------------
# --- Class TransferFunction --------------------------------------------------
# -----------------------------------------------------------------------------
class TransferFunction(ABC):
    """
    Color transfer function: abstract forward/inverse pair.

    forward maps values from the working radiance domain toward the bounded
    processing domain, inverse maps them back. inverse is the inverse of
    forward up to floating-point rounding. Both are pure and can be called
    any number of times, in any order, from any number of threads.
    """

    type = None

    @abstractmethod
    def forward(self, x):
        """
        Map values from the working domain to the processing domain.

        Args:
            x (numeric or array_like): input values

        Returns:
            numeric or ndarray: transformed values
        """
        pass

    @abstractmethod
    def inverse(self, x):
        """
        Map values from the processing domain back to the working domain.

        Args:
            x (numeric or array_like): processed values

        Returns:
            numeric or ndarray: values in the working domain
        """
        pass

    def __repr__(self):
        return "<class " + self.__class__.__name__ + ">"

    def __str__(self):
        return self.__repr__()

    @staticmethod
    def build(name='linear', exposure=1.0):
        """
        Factory method to create transfer functions by name.

        Args:
            name (str or transferType, optional): 'linear', 'srgb' or 'hdr'
                                                 Defaults to 'linear'
            exposure (float, optional): exposure of the HDR transfer function
                                        Defaults to 1.0

        Returns:
            TransferFunction or None: requested transfer function or None if unknown
        """
        if pref.verbose: print(" [TF] >> TransferFunction.build(",name,",",exposure,")")
        tt = name if isinstance(name, transferType) else transferType.toTransferType(name)
        tf = None
        if tt == transferType.LINEAR:   tf = LinearTransferFunction()
        if tt == transferType.SRGB:     tf = SRGBTransferFunction()
        if tt == transferType.HDR:      tf = HDRTransferFunction(exposure)
        if tf is None: print("WARNING[TransferFunction.build(",name,"): unknown transfer function!]")
        return tf
# -----------------------------------------------------------------------------
# --- Class LinearTransferFunction --------------------------------------------
# -----------------------------------------------------------------------------
class LinearTransferFunction(TransferFunction):
    """Identity transfer function."""

    type = transferType.LINEAR

    def forward(self, x): return x

    def inverse(self, x): return x
# -----------------------------------------------------------------------------
# --- Class SRGBTransferFunction ----------------------------------------------
# -----------------------------------------------------------------------------
class SRGBTransferFunction(TransferFunction):
    """
    sRGB transfer function, approximated by a pure 2.2 gamma.

    Defined for x >= 0; negative values give NaN. forward(0) = inverse(0) = 0
    and forward(1) = inverse(1) = 1.
    """

    type = transferType.SRGB

    def forward(self, x): return gammaEncoding(x)

    def inverse(self, x): return gammaDecoding(x)
# -----------------------------------------------------------------------------
# --- Class HDRTransferFunction -----------------------------------------------
# -----------------------------------------------------------------------------
class HDRTransferFunction(TransferFunction):
    """
    HDR transfer function: log2 + sRGB (gamma 2.2) curve.

    Compresses [0..65536] to [0..1] with exposure 1.0:
        forward(x) = (log2(x*exposure + 1) / 16)^(1/2.2)
        inverse(x) = (2^(16 * x^2.2) - 1) / exposure

    Attributes:
        - exposure (float): linear scaling of the input radiance, must be > 0
        - rcpExposure (float): 1/exposure, used by inverse

    Note:
        setExposure is not thread safe: it must be called while a single
        thread owns the instance, before it is shared with the threads calling
        forward/inverse. The exposure is not validated: x <= -1/exposure gives
        a non-finite forward, exposure == 0 gives an infinite rcpExposure.
    """

    type = transferType.HDR

    def __init__(self, exposure=1.0):
        """
        Initialize the HDR transfer function.

        Args:
            exposure (float, optional): linear scaling applied before compression
                                        Defaults to 1.0
        """
        if pref.verbose: print(" [TF] >> HDRTransferFunction.__init__(",exposure,")")
        self._exposure = None
        self.setExposure(exposure)

    def setExposure(self, exposure):
        """
        Set the exposure and its reciprocal.

        Both values are replaced by a single assignment so they never diverge.

        Args:
            exposure (float): new exposure, the caller guarantees exposure > 0
        """
        if pref.verbose: print(" [TF] >> HDRTransferFunction.setExposure(",exposure,")")
        exposure = float(exposure)
        with np.errstate(divide='ignore'):
            rcpExposure = float(np.float64(1.0) / np.float64(exposure))
        self._exposure = (exposure, rcpExposure)

    def getExposure(self):
        return self._exposure[0]

    @property
    def exposure(self): return self._exposure[0]

    @property
    def rcpExposure(self): return self._exposure[1]

    def forward(self, x):
        exposure, _ = self._exposure
        dtype = floatType(x)
        x = as_float_array(x, dtype)
        with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
            if pref.computation == 'numba': return as_float(numbafun.numba_hdr_forward(x, exposure), dtype)
            y = np.log2(x * exposure + 1.0) * (1.0 / HDR_LOG_SCALE)
            return as_float(np.power(y, 1.0 / GAMMA), dtype)

    def inverse(self, x):
        _, rcpExposure = self._exposure
        dtype = floatType(x)
        x = as_float_array(x, dtype)
        with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
            if pref.computation == 'numba': return as_float(numbafun.numba_hdr_inverse(x, rcpExposure), dtype)
            y = np.power(x, GAMMA)
            return as_float((np.exp2(y * HDR_LOG_SCALE) - 1.0) * rcpExposure, dtype)

    def __repr__(self):
        res =   "<class HDRTransferFunction:\n" + \
                "\t exposure: " + str(self.exposure) + "\n" + \
                "\t rcpExposure: " + str(self.rcpExposure) + ">"
        return res
# -----------------------------------------------------------------------------
# --- Functions factory -------------------------------------------------------
# -----------------------------------------------------------------------------
def makeTransferFunction(hdr=False, srgb=False, exposure=1.0):
    """
    Choose the transfer function from the kind of input data.

    Args:
        hdr (bool, optional): input is HDR linear radiance
        srgb (bool, optional): LDR input is already sRGB (display) encoded
        exposure (float, optional): exposure used by the HDR transfer function

    Returns:
        TransferFunction:
            - HDRTransferFunction for HDR input
            - LinearTransferFunction for LDR input already encoded
            - SRGBTransferFunction for LDR linear input
    """
    if pref.verbose: print(" [TF] >> makeTransferFunction(hdr=",hdr,", srgb=",srgb,", exposure=",exposure,")")
    if hdr:     return HDRTransferFunction(exposure)
    elif srgb:  return LinearTransferFunction()
    else:       return SRGBTransferFunction()
# -----------------------------------------------------------------------------
def fromPreferences():
    """
    Build the transfer function selected in the preferences.

    'hdr' builds the HDR transfer function with the preferred exposure.
    'srgb' selects LDR input: it is gamma encoded unless the srgb preference
    says it is already display encoded, then it is left linear.

    Returns:
        TransferFunction or None: None if the preference names an unknown function
    """
    tt = transferType.toTransferType(pref.getTransferFunction())
    if tt == transferType.SRGB: return makeTransferFunction(hdr=False, srgb=pref.isSRGB())
    return TransferFunction.build(pref.getTransferFunction(), pref.getExposure())
# -----------------------------------------------------------------------------
