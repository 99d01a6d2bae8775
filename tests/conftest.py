"""
Pytest fixtures for overlay engine tests.
"""
import pytest

from gridiron_overlay.config import Settings, reset_settings
from gridiron_overlay.core import (
    AnnotationFrame, PlayerAnnotation, ArrowAnnotation, TerminologyAnnotation,
    CanvasDimensions
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Keep the global settings isolated from the environment."""
    monkeypatch.setenv("GRIDIRON_CONFIG", str(tmp_path / "missing.json"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def dimensions():
    """1280x720 canvas with no letterboxing."""
    return CanvasDimensions(width=1280, height=720)


@pytest.fixture
def square_dimensions():
    return CanvasDimensions(width=1000, height=1000)


@pytest.fixture
def moving_player_frames():
    """PlayerA crosses from x=20 to x=80 over two seconds."""
    return [
        AnnotationFrame(timestamp=0.0, players=[PlayerAnnotation(id="PlayerA", x=20, y=50, label="QB")]),
        AnnotationFrame(timestamp=2.0, players=[PlayerAnnotation(id="PlayerA", x=80, y=50, label="QB")]),
    ]


@pytest.fixture
def handoff_frames():
    """Players entering and leaving, one persistent arrow and overlapping terms."""
    return [
        AnnotationFrame(
            timestamp=0.0,
            players=[
                PlayerAnnotation(id="off_qb", x=50, y=60, label="QB", highlight=True),
                PlayerAnnotation(id="def_lb", x=40, y=40, label="LB"),
            ],
            arrows=[ArrowAnnotation(from_xy=(50, 60), to_xy=(50, 70), label="Drop back", id="arrow_1")],
            terminology=[
                TerminologyAnnotation(x=20, y=10, term="Shotgun", definition="QB lines up deep", duration=5.0),
            ]
        ),
        AnnotationFrame(
            timestamp=4.0,
            players=[
                PlayerAnnotation(id="off_qb", x=50, y=70, label="QB", highlight=True),
                PlayerAnnotation(id="off_wr", x=80, y=30, label="WR"),
            ],
            arrows=[ArrowAnnotation(from_xy=(50, 70), to_xy=(60, 80), label="Scramble", id="arrow_1")],
            terminology=[
                TerminologyAnnotation(x=22, y=12, term="shotgun", definition="QB lines up deep", duration=5.0),
                TerminologyAnnotation(x=70, y=50, term="Pocket", definition="Protected area", duration=3.0),
            ]
        ),
    ]


@pytest.fixture
def raw_callout():
    def make(callout_id="c1", start=1.0, end=5.0, text="Pursuit", detail="Linebacker pursuit cut off the lane",
             **extra):
        raw = {
            "id": callout_id,
            "start_time": start,
            "end_time": end,
            "text": text,
            "detail": detail,
            "anchor": {"x": 50, "y": 50}
        }
        raw.update(extra)
        return raw
    return make


@pytest.fixture
def raw_play(raw_callout):
    """Raw analysis document as produced by the vision service."""
    return {
        "video_duration": 12.0,
        "video_url": "https://example.com/play.mp4",
        "play_summary": "QB scrambles right. Linebacker closes.",
        "frames": [
            {
                "timestamp": 2.0,
                "players": [
                    {"id": "off_qb", "x": 52, "y": 62, "label": "QB", "highlight": True, "color": "#FFD700"},
                    {"id": "def_lb", "x": 45, "y": 40, "label": "LB", "color": "#0000FF"},
                ],
                "arrows": [{"from": [52, 62], "to": [70, 62], "color": "#FF0000", "label": "Scramble"}],
                "terminology": [{"x": 70, "y": 50, "term": "Pocket", "definition": "Protected area"}],
            },
            {
                "timestamp": 0.0,
                "players": [
                    {"id": "off_qb", "x": 50, "y": 60, "label": "QB", "highlight": True, "color": "#FFD700"},
                    {"id": "off_qb", "x": 10, "y": 10, "label": "dup", "color": "#FFFFFF"},
                    {"id": "def_lb", "x": "bad", "y": 140, "label": "LB", "color": "blue"},
                ],
                "arrows": [{"from": [50, 60], "to": [68, 61], "color": "#FF0000", "label": "Scramble"}],
                "terminology": [{"x": 20, "y": 10, "term": "Shotgun", "definition": "QB lines up deep"}],
            },
        ],
        "callouts": [
            raw_callout("c1", 1.0, 5.0, "Pursuit", "Linebacker pursuit cut off the lane"),
            raw_callout("c2", 6.0, 9.5, "Pass Rush", "Edge pass rush prevented the throw"),
            raw_callout("bad", "soon", 9.0, "Broken", "Not a number"),
        ],
    }
