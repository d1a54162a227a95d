from scopeplot.api import raster_graph
from scopeplot.canvas import Canvas, FontSpec, TextMetrics
from scopeplot.config import GraphConfig, PlotStyle, load_graph_config
from scopeplot.errors import PlotDataError
from scopeplot.feed import Sample, SampleFeed
from scopeplot.graph import Graph
from scopeplot.layout import PlotLayout, TickSet, solve_layout
from scopeplot.raster import RasterCanvas
from scopeplot.scales import AxisRange, format_label, nice_step, required_precision
from scopeplot.theme import DEFAULT_THEME, PlotTheme, validate_theme

__all__ = [
    "AxisRange",
    "Canvas",
    "DEFAULT_THEME",
    "FontSpec",
    "Graph",
    "GraphConfig",
    "PlotDataError",
    "PlotLayout",
    "PlotStyle",
    "PlotTheme",
    "RasterCanvas",
    "Sample",
    "SampleFeed",
    "TextMetrics",
    "TickSet",
    "format_label",
    "load_graph_config",
    "nice_step",
    "raster_graph",
    "required_precision",
    "solve_layout",
    "validate_theme",
]
