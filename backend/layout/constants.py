"""
Canvas constants for the task dependency graph.
Rendering parameters only: changing them moves nodes, never changes levels or columns.
"""

from pydantic import BaseModel, ConfigDict, Field

# Node box drawn around each task
DEFAULT_NODE_W = 160
DEFAULT_NODE_H = 60

# Centre-to-centre distance between columns of one level
DEFAULT_COLUMN_GAP = 200

# Centre-to-centre distance between levels
DEFAULT_LEVEL_GAP = 120

# y of level 0; also the bottom margin below the last level
DEFAULT_BASE_OFFSET = 60

# Rows are centred on this nominal width
DEFAULT_CANVAS_W = 800
DEFAULT_MIN_CANVAS_H = 400


class LayoutSettings(BaseModel):
    """Tunable canvas parameters. Loaded from settings.json (see config)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    node_w: float = Field(default=DEFAULT_NODE_W, alias="nodeWidth", gt=0)
    node_h: float = Field(default=DEFAULT_NODE_H, alias="nodeHeight", gt=0)
    column_gap: float = Field(default=DEFAULT_COLUMN_GAP, alias="columnGap", gt=0)
    level_gap: float = Field(default=DEFAULT_LEVEL_GAP, alias="levelGap", gt=0)
    base_offset: float = Field(default=DEFAULT_BASE_OFFSET, alias="baseOffset", ge=0)
    canvas_w: float = Field(default=DEFAULT_CANVAS_W, alias="canvasWidth", gt=0)
    min_canvas_h: float = Field(default=DEFAULT_MIN_CANVAS_H, alias="minCanvasHeight", ge=0)
