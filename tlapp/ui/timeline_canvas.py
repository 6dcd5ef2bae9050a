"""Timeline canvas UI component."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QPointF, Signal
from PySide6.QtGui import QImage, QPainter, QPaintEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from tlapp.models.settings import TimelineSettings
from tlapp.services.layout import compute_layout
from tlapp.services.renderer import SceneRenderer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tlapp.models.project import Project
    from tlapp.models.swimlane import Swimlane
    from tlapp.services.layout import TimelineLayout

logger = logging.getLogger(__name__)


class TimelineCanvas(QWidget):
    """
    Widget that owns the timeline's raster surface.

    The surface is shared by two mutually exclusive operations:

    - :meth:`render_interactive` draws at the screen's device pixel ratio for
      display, and runs every time the timeline data changes.
    - :meth:`render_for_export` draws the same scene at a multiple of that
      resolution and returns the image.

    An exporter holds the surface with :meth:`acquire` for the duration of an
    export.  Data changes that arrive meanwhile are remembered, and the
    surface is redrawn for the screen on :meth:`release`.

    Args:
        parent: Parent widget

    """

    #: Scale factor used by :meth:`export_high_quality`.
    EXPORT_SCALE_FACTOR: Final[int] = 4

    #: Emitted after each render with the scale it was drawn at.
    rendered = Signal(float)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        #: Projects of the current snapshot.
        self._projects: tuple[Project, ...] = ()
        #: Swimlanes of the current snapshot.
        self._swimlanes: tuple[Swimlane, ...] = ()
        #: Settings of the current snapshot.
        self._settings = TimelineSettings()
        #: The last rendered image.
        self._image: QImage | None = None
        #: Scale the surface was last rendered at.
        self.current_scale: float = 1.0
        #: Whether an export holds the surface.
        self._busy = False
        #: Whether a data change arrived while the surface was held.
        self._redraw_pending = False
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)

    @property
    def busy(self) -> bool:
        """Whether an export currently holds the surface."""
        return self._busy

    @property
    def redraw_pending(self) -> bool:
        """Whether an on-screen redraw is waiting for the surface."""
        return self._redraw_pending

    def timeline_layout(self) -> TimelineLayout:
        """Layout of the current snapshot."""
        return compute_layout(self._settings, len(self._swimlanes))

    def set_timeline(
        self,
        projects: Iterable[Project],
        swimlanes: Iterable[Swimlane],
        settings: TimelineSettings,
    ) -> None:
        """
        Replace the snapshot being drawn and redraw it.

        Args:
            projects: Projects to draw
            swimlanes: Swimlanes to draw
            settings: Timeline settings

        """
        self._projects = tuple(projects)
        self._swimlanes = tuple(swimlanes)
        self._settings = settings
        self.render_interactive()

    def render_interactive(self) -> None:
        """
        Render for display at the widget's device pixel ratio.

        If an export holds the surface, the redraw is postponed until
        :meth:`release`.
        """
        if self._busy:
            self._redraw_pending = True
            return
        self._redraw_pending = False
        layout = self.timeline_layout()
        scale = self.devicePixelRatioF()
        self._commit(self._draw(layout, scale), scale)
        self.setFixedSize(
            math.ceil(layout.canvas_width), math.ceil(layout.canvas_height)
        )
        self.update()

    def render_for_export(self, scale_factor: float) -> QImage | None:
        """
        Render at ``scale_factor`` times the device pixel ratio.

        The surface keeps this resolution until the next render.  A render
        that produces no image leaves the surface as it was, so
        :meth:`current_image` still returns the last good image.

        Args:
            scale_factor: Multiplier over the display resolution

        Returns:
            The rendered image, or ``None`` if rendering produced nothing

        """
        scale = self.devicePixelRatioF() * scale_factor
        image = self._draw(self.timeline_layout(), scale)
        if image.isNull():
            logger.warning(f"Render at {scale}x produced no image")
            return None
        self._commit(image, scale)
        return image

    def export_high_quality(self) -> QImage | None:
        """Render for export at :attr:`EXPORT_SCALE_FACTOR`."""
        return self.render_for_export(self.EXPORT_SCALE_FACTOR)

    def current_image(self) -> QImage | None:
        """The image the surface currently holds, if any."""
        if self._image is None or self._image.isNull():
            return None
        return self._image

    def acquire(self) -> bool:
        """
        Hold the surface for an export.

        Returns:
            False if the surface is already held

        """
        if self._busy:
            return False
        self._busy = True
        return True

    def release(self) -> None:
        """Release the surface and redraw it at the display resolution."""
        self._busy = False
        self.render_interactive()

    def _draw(self, layout: TimelineLayout, scale: float) -> QImage:
        renderer = SceneRenderer(layout, self._swimlanes, self._projects, self._settings)
        return renderer.render(scale)

    def _commit(self, image: QImage, scale: float) -> None:
        # Lets the widget paint a high resolution image at its logical size.
        image.setDevicePixelRatio(max(1.0, scale))
        self._image = image
        self.current_scale = max(1.0, scale)
        self.rendered.emit(self.current_scale)

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        """Paint the last rendered image."""
        super().paintEvent(event)
        if self._image is None:
            return
        painter = QPainter(self)
        try:
            painter.drawImage(QPointF(0, 0), self._image)
        finally:
            painter.end()
