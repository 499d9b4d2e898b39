"""Unit tests for load plan visualization."""

import pytest

from truckload.loading.dimensions import Position
from truckload.loading.shelf_packer import pack
from truckload.visualization.plotly_3d import (
    FRAGILE_COLOR,
    SOLID_COLOR,
    LayoutVisualizer,
    to_scene_coordinates,
)


class TestLayoutVisualizer:
    """Test LayoutVisualizer."""

    def test_scene_coordinates_put_height_on_z(self, make_box):
        placed = make_box("a", 40, 30, 25).place(Position(1.0, 2.0, 3.0))
        assert to_scene_coordinates(placed) == ((1.0, 3.0, 2.0), (40, 30, 25))

    def test_one_mesh_per_box_plus_wireframe(self, sample_boxes, truck):
        result = pack(sample_boxes, truck)
        fig = LayoutVisualizer().visualize_result(result, sample_boxes)

        meshes = [trace for trace in fig.data if trace.type == "mesh3d"]
        lines = [trace for trace in fig.data if trace.type == "scatter3d"]
        assert len(meshes) == 5
        assert len(lines) == 12

    def test_fragile_boxes_coloured(self, sample_boxes, truck):
        fig = LayoutVisualizer().visualize_result(pack(sample_boxes, truck))
        colours = {trace.name: trace.color for trace in fig.data if trace.type == "mesh3d"}

        assert colours["BOX003"] == SOLID_COLOR
        assert colours["BOX002 (fragile)"] == FRAGILE_COLOR

    def test_title_reports_utilization(self, make_box, truck):
        result = pack([make_box("a", 1000, 250, 150)], truck)
        fig = LayoutVisualizer().visualize_result(result, show_container_bounds=False)

        assert "50%" in fig.layout.title.text
        assert len(fig.data) == 1

    def test_save_html(self, sample_boxes, truck, tmp_path):
        visualizer = LayoutVisualizer()
        visualizer.visualize_result(pack(sample_boxes, truck))
        path = visualizer.save_html(str(tmp_path / "out" / "plan.html"))

        assert path.exists()
        assert path.stat().st_size > 0

    def test_save_without_figure(self, tmp_path):
        with pytest.raises(ValueError):
            LayoutVisualizer().save_html(str(tmp_path / "plan.html"))
