"""
The CAPTURE layer delivers RGBA canvases from a camera or a video file.
"""
