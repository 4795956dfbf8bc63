"""
Hamiltonian Field Viewer.

The ENGINE layer (hamiltonianfield.engine) is pure NumPy and turns camera
frames into an energy field, render buffers and a status report. The CAPTURE,
CONTROLLER and VIEW layers feed it frames and display its output.
"""
