"""
tfCore module: transfer functions applied around an image processing stage.

This module provides the forward/inverse transfer functions (linear, sRGB
gamma, HDR log) used to condition pixel values before processing and to
restore them afterwards.
"""

from . import numbafun
from . import transfer
from .transfer import (TransferFunction, LinearTransferFunction, SRGBTransferFunction,
                       HDRTransferFunction, transferType, makeTransferFunction, fromPreferences)

__all__ = ['numbafun', 'transfer', 'TransferFunction', 'LinearTransferFunction',
           'SRGBTransferFunction', 'HDRTransferFunction', 'transferType',
           'makeTransferFunction', 'fromPreferences']
