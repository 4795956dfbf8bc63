"""
The VIEW layer (Qt + PyVista) displays the point cloud and the status report.
"""
