"""
3D Point Cloud Widget (PyVista Wrapper)
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pyvista as pv
from PySide6.QtWidgets import QVBoxLayout, QWidget
from pyvistaqt import QtInteractor

from hamiltonianfield.engine.engine import FieldEngine

logger = logging.getLogger(__name__)

COLORS_NAME = "rgb"
CAMERA_DISTANCE = 150.0
VIEW_ANGLE = 75.0
POINT_SIZE = 2.0


class PointCloudWidget(QWidget):
    """
    Shows the engine's render buffers as colored points.
    The PolyData is rebuilt only when the engine flags a topology change,
    otherwise points and colors are swapped in place every frame.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)
        self.plotter.set_background("black")

        self._cloud: Optional[pv.PolyData] = None
        self._actor: Optional[pv.Actor] = None

    def update_from_engine(self, engine: FieldEngine) -> None:
        """Push the latest positions/colors to VTK and render."""
        if self._cloud is None or engine.geometry_dirty:
            self._rebuild(engine)
            engine.acknowledge_geometry()
        else:
            self._cloud.points = engine.positions
            self._cloud.point_data[COLORS_NAME] = self._colors_u8(engine)

        self.plotter.render()

    def clear(self) -> None:
        if self._actor is not None:
            self.plotter.remove_actor(self._actor)
        self._actor = None
        self._cloud = None

    def close_plotter(self) -> None:
        self.plotter.close()

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    @staticmethod
    def _colors_u8(engine: FieldEngine) -> np.ndarray:
        return (np.clip(engine.colors, 0.0, 1.0) * 255.0).astype(np.uint8)

    def _rebuild(self, engine: FieldEngine) -> None:
        logger.info(f"Rebuilding point cloud for a {engine.resolution}x{engine.resolution} grid.")
        self.clear()

        cloud = pv.PolyData(engine.positions.copy())
        cloud.point_data[COLORS_NAME] = self._colors_u8(engine)

        self._actor = self.plotter.add_mesh(
            cloud,
            scalars=COLORS_NAME,
            rgb=True,
            point_size=POINT_SIZE,
            render_points_as_spheres=False,
            show_scalar_bar=False,
            pickable=False,
        )
        self._cloud = cloud

        self.plotter.camera_position = [(0.0, 0.0, CAMERA_DISTANCE), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
        self.plotter.camera.view_angle = VIEW_ANGLE
