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
# --- Package preferences -----------------------------------------------------
# -----------------------------------------------------------------------------
"""
uTF Preferences Management Module

This module holds the global configuration used when a pipeline selects its
transfer function: which curve to use, the HDR exposure, how the curves are
computed and whether configuration calls are traced.

Preferences are persisted to a JSON file stored next to this module. When the
file does not exist the built-in defaults below are used. No prefs.json is
shipped with the package: savePref creates it beside the installed module, so
an application installed read-only should point prefsFile at a writable
location before saving.

Global Variables:
    computation (str): Computation backend ('python', 'numba')
    verbose (bool): Enable verbose tracing of configuration calls
    transferFunction (str): Selected transfer function ('linear', 'srgb', 'hdr')
    exposure (float): HDR exposure, linear pre-scaling of the input radiance
    srgb (bool): Whether LDR input is already sRGB (display) encoded
    prefsFile (str): Path of the JSON preferences file

Functions:
    loadPref: Load preferences from JSON configuration file
    savePref: Save current preferences to JSON file
    getComputationMode: Get current computation backend setting
    setComputationMode: Set computation backend
    getTransferFunction: Get selected transfer function name
    setTransferFunction: Select transfer function by name
    getExposure: Get HDR exposure
    setExposure: Set HDR exposure
    applyPref: Apply a preferences dictionary
    isSRGB: Whether LDR input is already display encoded
    setSRGB: Set whether LDR input is already display encoded
"""

# -----------------------------------------------------------------------------
# --- Import ------------------------------------------------------------------
# -----------------------------------------------------------------------------
import json, os

# -----------------------------------------------------------------------------
# --- Preferences -------------------------------------------------------------
# -----------------------------------------------------------------------------
target = ['python','numba']
computation = target[0]
# verbose mode: print function call
#   usefull for debug
verbose = False
# transfer functions taken into account
#   'linear':   no transformation
#   'srgb':     gamma 2.2 curve
#   'hdr':      log2 + gamma 2.2 curve, compresses [0..65536] to [0..1]
transferFunctions = ['linear','srgb','hdr']
transferFunction = 'hdr'
# hdr exposure: must be > 0, not checked
exposure = 1.0
# ldr input already display encoded
srgb = False
# preferences file
prefsFile = os.path.join(os.path.dirname(os.path.abspath(__file__)),'prefs.json')
# -----------------------------------------------------------------------------
# --- Functions preferences --------------------------------------------------
# -----------------------------------------------------------------------------
def loadPref():
    """
    Load preferences from the configuration file.

    Reads preferences from prefsFile and returns the configuration dictionary.

    Returns:
        dict or None: Preferences dictionary if the file exists, None otherwise
    """
    if not os.path.exists(prefsFile): return None
    with open(prefsFile) as f: return json.load(f)
# -----------------------------------------------------------------------------
def savePref():
    """
    Save current preferences to the configuration file.

    Writes the computation mode, the selected transfer function, the exposure
    and the srgb flag to prefsFile.
    """
    pUpdate = {
            "computation"       : computation,
            "transferFunction"  : transferFunction,
            "exposure"          : exposure,
            "srgb"              : srgb
        }
    if verbose: print(" [PREF] >> savePref(",pUpdate,")")
    with open(prefsFile, "w") as f: json.dump(pUpdate,f)
# -----------------------------------------------------------------------------
def applyPref(p):
    """
    Apply a preferences dictionary to the module globals.

    Missing keys keep their current value.

    Args:
        p (dict): preferences as returned by loadPref
    """
    global computation
    global transferFunction
    global exposure
    global srgb
    computation = p.get("computation", computation)
    transferFunction = p.get("transferFunction", transferFunction)
    exposure = float(p.get("exposure", exposure))
    srgb = bool(p.get("srgb", srgb))
# -----------------------------------------------------------------------------
# -----------------------------------------------------------------------------
# loading pref
# -----------------------------------------------------------------------------
# -----------------------------------------------------------------------------
p = loadPref()
if p : applyPref(p)
if verbose:
    print("uTF: loading preferences")
    print(f"       transfer function: {transferFunction}")
    print(f"       exposure: {exposure}")
# -----------------------------------------------------------------------------
# --- Functions computation ---------------------------------------------------
# -----------------------------------------------------------------------------
def getComputationMode():
    """
    Get the current computation backend mode.

    Returns:
        str: Current computation mode ('python' or 'numba')

    Note:
        - 'python': NumPy implementation
        - 'numba': Numba compiled element-wise kernels
    """
    return computation
# -----------------------------------------------------------------------------
def setComputationMode(mode):
    """
    Set the computation backend mode.

    Unknown modes are ignored and the current mode is kept.

    Args:
        mode (str): 'python' or 'numba'
    """
    global computation
    if mode in target: computation = mode
    else: print("WARNING[preferences.setComputationMode(",mode,"): unknown mode, keep:",computation,"!]")
    if verbose: print(" [PREF] >> setComputationMode(",mode,"):",computation)
# -----------------------------------------------------------------------------
# --- Functions transfer function ---------------------------------------------
# -----------------------------------------------------------------------------
def getTransferFunction():
    """
    Get the name of the selected transfer function.

    Returns:
        str: 'linear', 'srgb' or 'hdr'
    """
    return transferFunction
# -----------------------------------------------------------------------------
def setTransferFunction(name):
    """
    Select the transfer function used by the pipeline.

    Args:
        name (str): transfer function name, must be in transferFunctions
                    (case insensitive)
    """
    global transferFunction
    name = str(name).lower()
    if name in transferFunctions: transferFunction = name
    else: print("WARNING[preferences.setTransferFunction(",name,"): unknown transfer function, keep:",transferFunction,"!]")
    if verbose: print(" [PREF] >> setTransferFunction(",name,"):",transferFunction)
# -----------------------------------------------------------------------------
def getExposure():
    """
    Get the HDR exposure.

    Returns:
        float: linear scaling applied before log compression
    """
    return exposure
# -----------------------------------------------------------------------------
def setExposure(e):
    """
    Set the HDR exposure.

    Args:
        e (float): exposure, the caller guarantees e > 0
    """
    global exposure
    exposure = float(e)
    if verbose: print(" [PREF] >> setExposure(",e,"):",exposure)
# -----------------------------------------------------------------------------
def isSRGB():
    """
    Whether LDR input data is already sRGB (display) encoded.

    Returns:
        bool
    """
    return srgb
# ----------------------------------------------------------------------------
def setSRGB(b):
    """
    Set whether LDR input data is already sRGB (display) encoded.

    Args:
        b (bool)
    """
    global srgb
    srgb = bool(b)
    if verbose: print(" [PREF] >> setSRGB(",b,"):",srgb)
# ----------------------------------------------------------------------------
