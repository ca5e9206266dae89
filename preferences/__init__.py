"""
preferences module: global configuration of the uTF transfer functions.
"""
