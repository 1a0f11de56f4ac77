from .layout_types import (
    AnchorPoint,
    CanvasSize,
    ConfigurableDimensions,
    ElementKind,
    ElementRenderData,
    FixedDimensions,
    GridConfig,
    InvalidGeometryError,
    LayoutElement,
    Point,
    SpaceBounds,
    Wall,
)
from .scale_calculator import (
    ScaleInputs,
    ScaleState,
    calculate_scale,
    calculate_scale_for_ratio,
    calculate_zoom_at_point,
    recompute_scale,
    try_calculate_scale,
)
from .element_render import calculate_render_data, get_element_render_data, get_real_dimensions
from .drag_controller import DragController
from .zoom_controller import ZoomController
from .viewport import ViewportObserver
from .layout_session import LayoutSession
from . import config, scale_utils, space_bounds, element_catalog, sample_layouts
