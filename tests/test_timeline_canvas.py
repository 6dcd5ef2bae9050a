"""Unit tests for TimelineCanvas."""

import pytest
from PySide6.QtGui import QImage

from tlapp.services.renderer import SceneRenderer
from tlapp.ui.timeline_canvas import TimelineCanvas


@pytest.fixture
def canvas(qapp, q1_settings, swimlanes, alpha, launch):
    """A canvas showing the Q1 test timeline."""
    widget = TimelineCanvas()
    widget.set_timeline([alpha, launch], swimlanes, q1_settings)
    return widget


class TestTimelineCanvas:
    """Test cases for TimelineCanvas."""

    def test_set_timeline_renders(self, canvas):
        """Test setting a timeline renders it at display resolution."""
        image = canvas.current_image()
        assert image is not None
        ratio = canvas.devicePixelRatioF()
        assert image.width() == round(460 * ratio)
        assert canvas.current_scale == max(1.0, ratio)

    def test_widget_takes_logical_canvas_size(self, canvas):
        """Test the widget is sized to the logical canvas."""
        assert (canvas.width(), canvas.height()) == (460, 240)

    def test_empty_canvas_has_no_image(self, qapp):
        """Test a canvas that never rendered has no image."""
        assert TimelineCanvas().current_image() is None

    def test_render_for_export_scales(self, canvas):
        """Test an export render multiplies the display resolution."""
        ratio = canvas.devicePixelRatioF()
        image = canvas.render_for_export(4)
        assert image is not None
        assert (image.width(), image.height()) == (
            round(460 * ratio * 4),
            round(240 * ratio * 4),
        )
        assert canvas.current_scale == ratio * 4

    def test_empty_export_render_keeps_display_image(self, canvas, monkeypatch):
        """Test a failed export render leaves the display image in place."""
        display_image = canvas.current_image()
        display_scale = canvas.current_scale
        monkeypatch.setattr(
            SceneRenderer, "render", lambda renderer, scale=1.0: QImage()
        )

        assert canvas.render_for_export(4) is None
        assert canvas.current_image() is display_image
        assert canvas.current_scale == display_scale

    def test_export_high_quality(self, canvas):
        """Test the high quality shortcut renders at four times."""
        image = canvas.export_high_quality()
        assert image is not None
        assert image.width() == round(460 * canvas.devicePixelRatioF() * 4)

    def test_rendered_signal(self, canvas):
        """Test every render reports its scale."""
        scales = []
        canvas.rendered.connect(scales.append)
        canvas.render_for_export(2)
        canvas.render_interactive()
        assert scales == [canvas.devicePixelRatioF() * 2, canvas.current_scale]


class TestSurfaceOwnership:
    """Test cases for acquire() and release()."""

    def test_acquire_is_exclusive(self, canvas):
        """Test the surface can only be held once."""
        assert canvas.acquire() is True
        assert canvas.busy is True
        assert canvas.acquire() is False

    def test_redraw_is_deferred_while_busy(self, canvas, q1_settings, swimlanes):
        """Test a data change during an export does not redraw the surface."""
        canvas.acquire()
        export_image = canvas.render_for_export(4)
        canvas.set_timeline([], swimlanes, q1_settings)
        assert canvas.redraw_pending is True
        assert canvas.current_image() == export_image

    def test_release_redraws_for_display(self, canvas, q1_settings, swimlanes):
        """Test releasing the surface brings back the display render."""
        display_scale = canvas.current_scale
        canvas.acquire()
        canvas.render_for_export(4)
        canvas.set_timeline([], swimlanes, q1_settings)
        canvas.release()
        assert canvas.busy is False
        assert canvas.redraw_pending is False
        assert canvas.current_scale == display_scale
        image = canvas.current_image()
        assert image is not None
        assert image.width() == round(460 * canvas.devicePixelRatioF())
