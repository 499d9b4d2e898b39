"""
3D Load Plan Visualization using Plotly

Interactive 3D view of a packing result: one mesh per loaded box, coloured by
fragility, inside a wireframe of the truck.

The packer uses y as the vertical axis; plotly scenes draw z upwards, so
boxes are drawn at (x, z, y) with extents (length, width, height).
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple

import numpy as np
import plotly.graph_objects as go

from ..loading.dimensions import Dimensions
from ..loading.item import Item, PlacedItem
from ..loading.shelf_packer import PackingResult
from ..loading.utilization import calculate_utilization

SOLID_COLOR = "#2563eb"
FRAGILE_COLOR = "#dc2626"

# 12 triangles (2 per face) over the 8 box vertices
_MESH_I = [7, 0, 0, 0, 4, 4, 6, 6, 4, 0, 3, 2]
_MESH_J = [3, 4, 1, 2, 5, 6, 5, 2, 0, 1, 6, 3]
_MESH_K = [0, 7, 2, 3, 6, 7, 1, 1, 5, 5, 7, 6]


def to_scene_coordinates(item: PlacedItem) -> Tuple[Tuple[float, float, float], Tuple[float, float, float]]:
    """
    Map a placed box into plotly scene axes.

    Returns:
        ((x, y, z) corner, (dx, dy, dz) extents) with z vertical
    """
    position = item.position
    return (
        (position.x, position.z, position.y),
        (item.length, item.width, item.height),
    )


class LayoutVisualizer:
    """
    Interactive 3D visualization for truck load plans.

    Example:
        >>> visualizer = LayoutVisualizer()
        >>> visualizer.visualize_result(result, items)
        >>> visualizer.save_html("outputs/load_plan.html")
    """

    def __init__(self, opacity: float = 0.8):
        """
        Initialize visualizer.

        Args:
            opacity: Box mesh opacity
        """
        self.opacity = opacity
        self.fig = None

    def visualize_result(
        self,
        result: PackingResult,
        items: Optional[Iterable[Item]] = None,
        show_container_bounds: bool = True,
        title: Optional[str] = None,
    ) -> go.Figure:
        """
        Visualize a packing result in 3D.

        Args:
            result: Packing result to draw
            items: Boxes offered to the packer, for the utilization title;
                defaults to placed + excluded boxes
            show_container_bounds: Whether to draw the truck wireframe
            title: Plot title

        Returns:
            Plotly figure object
        """
        fig = go.Figure()

        for placed in result.placed:
            self._add_box(fig, placed)

        if show_container_bounds:
            self._add_container_bounds(fig, result.container)

        if title is None:
            if items is None:
                items = list(result.placed) + [entry.item for entry in result.excluded]
            utilization = calculate_utilization(items, result.container)
            title = (f"Truck Load Plan (Utilization: {utilization}%, "
                     f"{result.num_placed} loaded, {result.num_excluded} left out)")

        container = result.container
        fig.update_layout(
            title=title,
            scene=dict(
                xaxis=dict(title="Length", range=[0, container.length]),
                yaxis=dict(title="Width", range=[0, container.width]),
                zaxis=dict(title="Height", range=[0, container.height]),
                aspectmode="data",
            ),
            showlegend=True,
            hovermode="closest",
        )

        self.fig = fig
        return fig

    def _add_box(self, fig: go.Figure, item: PlacedItem):
        """
        Add one box mesh to the figure.

        Args:
            fig: Plotly figure
            item: Placed box
        """
        (x, y, z), (l, w, h) = to_scene_coordinates(item)

        vertices = np.array([
            [x, y, z],
            [x + l, y, z],
            [x + l, y + w, z],
            [x, y + w, z],
            [x, y, z + h],
            [x + l, y, z + h],
            [x + l, y + w, z + h],
            [x, y + w, z + h],
        ])

        label = f"{item.item_id} (fragile)" if item.is_fragile else item.item_id
        hover = (f"{item.item_id}<br>Destination: {item.destination or '-'}"
                 f"<br>Weight: {item.weight:g}"
                 f"<br>Pos: ({item.position.x:g}, {item.position.y:g}, {item.position.z:g})"
                 f"<br>Dim: {item.length:g}×{item.width:g}×{item.height:g}")

        fig.add_trace(
            go.Mesh3d(
                x=vertices[:, 0],
                y=vertices[:, 1],
                z=vertices[:, 2],
                i=_MESH_I,
                j=_MESH_J,
                k=_MESH_K,
                color=FRAGILE_COLOR if item.is_fragile else SOLID_COLOR,
                opacity=self.opacity,
                name=label,
                hovertext=hover,
                hoverinfo="text",
                showlegend=True,
            )
        )

    def _add_container_bounds(self, fig: go.Figure, container: Dimensions):
        """
        Add truck boundary wireframe.

        Args:
            fig: Plotly figure
            container: Truck interior
        """
        L, W, H = container.length, container.width, container.height

        edges = [
            # Floor
            ([0, L], [0, 0], [0, 0]),
            ([L, L], [0, W], [0, 0]),
            ([L, 0], [W, W], [0, 0]),
            ([0, 0], [W, 0], [0, 0]),
            # Roof
            ([0, L], [0, 0], [H, H]),
            ([L, L], [0, W], [H, H]),
            ([L, 0], [W, W], [H, H]),
            ([0, 0], [W, 0], [H, H]),
            # Vertical edges
            ([0, 0], [0, 0], [0, H]),
            ([L, L], [0, 0], [0, H]),
            ([L, L], [W, W], [0, H]),
            ([0, 0], [W, W], [0, H]),
        ]

        for x, y, z in edges:
            fig.add_trace(
                go.Scatter3d(
                    x=x,
                    y=y,
                    z=z,
                    mode="lines",
                    line=dict(color="black", width=2),
                    showlegend=False,
                    hoverinfo="skip",
                )
            )

    def save_html(self, filepath: str) -> Path:
        """
        Save current figure as HTML.

        Args:
            filepath: Path to save HTML file

        Returns:
            Path written
        """
        if self.fig is None:
            raise ValueError("No figure to save. Call visualize_result first.")

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        self.fig.write_html(str(filepath))
        return filepath

    def show(self):
        """Display current figure."""
        if self.fig is None:
            raise ValueError("No figure to show. Call visualize_result first.")

        self.fig.show()
