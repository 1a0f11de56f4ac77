# Layoutscale imports
from layoutscale.layout_types import Wall

# Standard library imports
from typing import Iterable, Optional, Tuple

# Third-party imports
import pandas as pd


VERTEX_COLUMNS = ["x_coords", "y_coords"]


def walls_to_vertex_frame(walls: Iterable[Wall]) -> pd.DataFrame:
    """
    Collects every wall endpoint into a vertex DataFrame.

    Args:
        walls (Iterable[Wall]): Wall segments in a single coordinate system.

    Returns:
        pd.DataFrame: Two rows per wall (start then end) with columns
                      ['x_coords', 'y_coords']. Empty when no walls are given.
    """
    rows = []
    for wall in walls:
        rows.append((wall.start.x, wall.start.y))
        rows.append((wall.end.x, wall.end.y))
    return pd.DataFrame(rows, columns=VERTEX_COLUMNS, dtype=float)


def get_extent_from_point_coordinates(point_dataframe: pd.DataFrame) -> Optional[Tuple[float, float, float, float]]:
    """
    Returns (min_x, min_y, max_x, max_y) of a 2D vertex frame.

    NaN vertices are ignored. Returns None for a non-DataFrame, an empty frame,
    missing columns, or a frame with no finite vertex at all.
    """
    # --- 1. Input Validation ---
    if not isinstance(point_dataframe, pd.DataFrame) or point_dataframe.empty:
        return None
    if not all(col in point_dataframe.columns for col in VERTEX_COLUMNS):
        return None
    for col in VERTEX_COLUMNS:
        if not pd.api.types.is_numeric_dtype(point_dataframe[col]):
            return None

    # --- 2. Min/Max ---
    min_x = point_dataframe["x_coords"].min()
    max_x = point_dataframe["x_coords"].max()
    min_y = point_dataframe["y_coords"].min()
    max_y = point_dataframe["y_coords"].max()
    if any(pd.isna(v) for v in (min_x, min_y, max_x, max_y)):
        return None

    return float(min_x), float(min_y), float(max_x), float(max_y)


