"""
The CONTROLLER layer drives the engine: one tick per timer timeout.
"""
