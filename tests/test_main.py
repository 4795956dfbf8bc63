import logging
from typing import List, Optional

import numpy as np
import pytest

from hamiltonianfield.config import EngineConfig
from hamiltonianfield.engine.engine import FieldEngine
from hamiltonianfield.main import build_parser, main, run_headless


class FakeSource:
    def __init__(self, frames: List[np.ndarray]) -> None:
        self.frames = list(frames)
        self.opened = False
        self.closed = False

    def open(self) -> None:
        self.opened = True

    def read_frame(self) -> Optional[np.ndarray]:
        return self.frames.pop(0) if self.frames else None

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _restore_package_logger():
    yield
    logger = logging.getLogger("hamiltonianfield")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_headless_runs_until_stream_ends(make_canvas):
    engine = FieldEngine(EngineConfig(canvas_size=4, resolution=2))
    source = FakeSource([make_canvas(4, (v, v, v)) for v in (0, 100, 200)])

    count = run_headless(engine, source)

    assert count == 3
    assert source.opened and source.closed
    assert engine.frame_count == 3
    assert engine.latest_report.startswith("SYSTEM STATE:")


def test_headless_frame_limit(make_canvas):
    engine = FieldEngine(EngineConfig(canvas_size=4, resolution=2))
    source = FakeSource([make_canvas(4) for _ in range(5)])

    assert run_headless(engine, source, frames=2) == 2
    assert source.closed


def test_headless_logs_reports(make_canvas, caplog):
    engine = FieldEngine(EngineConfig(canvas_size=4, resolution=2))
    source = FakeSource([make_canvas(4, (255, 255, 255))])

    with caplog.at_level(logging.INFO, logger="hamiltonianfield"):
        run_headless(engine, source)

    assert "High Energy Concentration" in caplog.text


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.source == "0"
    assert args.resolution == 128
    assert args.preset == "standard"
    assert not args.headless


def test_main_reports_missing_source(tmp_path):
    assert main(["--headless", "--source", str(tmp_path / "missing.mp4")]) == 1


def test_main_rejects_invalid_resolution():
    assert main(["--headless", "--resolution", "0"]) == 2
