"""
Scene renderer for the timeline chart.

:class:`SceneRenderer` paints a :class:`~tlapp.services.layout.TimelineLayout`
plus the swimlanes, projects and settings onto a :class:`QImage`.  Layers are
painted in a fixed order, each one completely before the next:

1. Background
2. Month header row (and vertical grid lines)
3. Year labels
4. Swimlane bands, names, horizontal grid lines and tick marks
5. Projects: range bars and milestone markers
6. Border around the swimlane grid

All coordinates are logical; :meth:`SceneRenderer.render` scales the painter
so the same drawing code serves the on-screen and the export resolutions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QLineF, QPointF, QRectF, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QImage,
    QPainter,
    QPen,
    QPolygonF,
)

from tlapp.models.project import ProjectKind
from tlapp.models.settings import MonthFormat
from tlapp.models.swimlane import sort_swimlanes
from tlapp.services.dates import parse_date
from tlapp.services.layout import DEFAULT_GEOMETRY, compute_layout

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from tlapp.models.project import Project
    from tlapp.models.settings import TimelineSettings
    from tlapp.models.swimlane import Swimlane
    from tlapp.services.layout import LayoutGeometry, TimelineLayout

logger = logging.getLogger(__name__)


def _color(value: str | None, fallback: str) -> QColor:
    """
    Build a :class:`QColor` from a ``#RRGGBB`` string.

    Args:
        value: Color string
        fallback: Color to use when ``value`` cannot be parsed

    Returns:
        The color

    """
    color = QColor(value) if value else QColor()
    if not color.isValid():
        color = QColor(fallback)
    return color


def _font(pixel_size: int, *, bold: bool = False) -> QFont:
    font = QFont()
    font.setStyleHint(QFont.StyleHint.SansSerif)
    font.setPixelSize(pixel_size)
    font.setBold(bold)
    return font


class SceneRenderer:
    """
    Paints one timeline chart.

    The renderer only reads its inputs; calling :meth:`render` twice with the
    same scale produces identical images.

    Args:
        layout: Layout computed by :func:`~tlapp.services.layout.compute_layout`
        swimlanes: Swimlanes, in any order
        projects: Projects, in data order
        settings: Timeline settings

    """

    #: Height of a range bar.
    BAR_HEIGHT: Final[float] = 20
    #: Corner radius of a range bar.
    BAR_RADIUS: Final[float] = 4
    #: Width a zero-length bar is widened to so it stays visible.
    MIN_BAR_WIDTH: Final[float] = 2
    #: Space a bar label must leave free inside its bar.
    BAR_LABEL_MARGIN: Final[float] = 10
    #: Half the width of a milestone marker.
    MILESTONE_HALF_WIDTH: Final[float] = 8
    #: Distance from the band centre up to the milestone's flat top.
    MILESTONE_TOP: Final[float] = 12
    #: Distance from the band centre down to the milestone's tip.
    MILESTONE_TIP: Final[float] = 8
    #: Baseline of the month labels.
    MONTH_LABEL_BASELINE: Final[float] = 25
    #: Vertical step between stacked year labels.
    YEAR_LABEL_STEP: Final[float] = 30
    #: Number of tick marks per month.
    TICKS_PER_MONTH: Final[int] = 4
    #: Color of the text inside range bars.
    BAR_TEXT_COLOR: Final[str] = "#ffffff"
    #: Alpha of the swimlane band tint.
    BAND_ALPHA: Final[int] = 0x10

    def __init__(
        self,
        layout: TimelineLayout,
        swimlanes: Iterable[Swimlane],
        projects: Iterable[Project],
        settings: TimelineSettings,
    ) -> None:
        self.layout = layout
        self.swimlanes = sort_swimlanes(swimlanes)
        self.projects = tuple(projects)
        self.settings = settings
        self.text_color = _color(settings.text_color, "#111827")
        self.grid_color = _color(settings.grid_color, "#d1d5db")

    def render(self, scale: float = 1.0) -> QImage:
        """
        Render the chart into a new image.

        Args:
            scale: Resolution multiplier; values below 1 are raised to 1

        Returns:
            An image of ``canvas_width * scale`` by ``canvas_height * scale``
            pixels

        """
        scale = max(1.0, float(scale))
        width = max(1, round(self.layout.canvas_width * scale))
        height = max(1, round(self.layout.canvas_height * scale))
        image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(Qt.GlobalColor.transparent)
        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
            painter.scale(scale, scale)
            self.paint(painter)
        finally:
            painter.end()
        return image

    def paint(self, painter: QPainter) -> None:
        """
        Paint every layer with ``painter``, in logical coordinates.

        Args:
            painter: An active painter

        """
        self._paint_background(painter)
        self._paint_month_header(painter)
        if self.settings.show_year_labels:
            self._paint_year_labels(painter)
        for index, swimlane in enumerate(self.swimlanes):
            self._paint_swimlane(painter, index, swimlane)
        for index, swimlane in enumerate(self.swimlanes):
            self._paint_swimlane_projects(painter, index, swimlane)
        self._paint_border(painter)

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def _paint_background(self, painter: QPainter) -> None:
        painter.fillRect(
            QRectF(0, 0, self.layout.canvas_width, self.layout.canvas_height),
            _color(self.settings.background_color, "#ffffff"),
        )

    def _paint_month_header(self, painter: QPainter) -> None:
        """
        Paint the month labels, and the vertical grid lines if enabled.

        Each label is centred over its column.  Grid lines are drawn at the
        left edge of every column; the border supplies the right-hand one.
        """
        layout = self.layout
        geometry = layout.geometry
        month_format = self._month_format()
        painter.setFont(_font(12))
        painter.setPen(self.text_color)
        metrics = QFontMetricsF(painter.font())
        grid_lines: list[QLineF] = []
        for index, month in enumerate(layout.month_starts()):
            x = layout.month_x(index)
            label = month_format.label(month)
            label_width = metrics.horizontalAdvance(label)
            label_x = x + geometry.month_width / 2 - label_width / 2
            painter.drawText(QPointF(label_x, self.MONTH_LABEL_BASELINE), label)
            grid_lines.append(
                QLineF(x, geometry.header_height, x, layout.canvas_height)
            )
        if self.settings.show_grid:
            painter.setPen(QPen(self.grid_color, 1))
            painter.drawLines(grid_lines)

    def _paint_year_labels(self, painter: QPainter) -> None:
        """
        Stack one label per calendar year in the column right of the grid.
        """
        layout = self.layout
        geometry = layout.geometry
        x = layout.canvas_width - geometry.year_column_width + 10
        painter.setFont(_font(14, bold=True))
        painter.setPen(self.text_color)
        for offset, year in enumerate(layout.years()):
            y = geometry.header_height + 30 + offset * self.YEAR_LABEL_STEP
            painter.drawText(QPointF(x, y), str(year))

    def _paint_swimlane(self, painter: QPainter, index: int, swimlane: Swimlane) -> None:
        """
        Paint one swimlane band with its name, top grid line and tick marks.

        Args:
            painter: Active painter
            index: Row of the swimlane after sorting
            swimlane: The swimlane

        """
        layout = self.layout
        geometry = layout.geometry
        left = geometry.padding
        right = left + layout.grid_width
        y = layout.swimlane_y(index)

        band = _color(swimlane.color, "#3B82F6")
        band.setAlpha(self.BAND_ALPHA)
        painter.fillRect(QRectF(left, y, layout.grid_width, geometry.row_height), band)

        painter.setFont(_font(12, bold=True))
        painter.setPen(self.text_color)
        painter.drawText(QPointF(left + 10, y + 20), swimlane.name)

        if self.settings.show_grid:
            painter.setPen(QPen(self.grid_color, 1))
            painter.drawLine(QLineF(left, y, right, y))

        tick_top = y + geometry.row_height - 10
        tick_bottom = y + geometry.row_height - 5
        step = geometry.month_width / self.TICKS_PER_MONTH
        ticks = [
            QLineF(x, tick_top, x, tick_bottom)
            for x in (
                layout.month_x(month) + tick * step
                for month in range(layout.total_months)
                for tick in range(self.TICKS_PER_MONTH)
            )
        ]
        painter.setPen(QPen(self.grid_color, 0.5))
        painter.drawLines(ticks)

    def _paint_swimlane_projects(
        self, painter: QPainter, index: int, swimlane: Swimlane
    ) -> None:
        y = self.layout.swimlane_y(index)
        for project in self.projects:
            if project.swimlane_id != swimlane.id:
                continue
            if project.kind == ProjectKind.MILESTONE:
                self._paint_milestone(painter, y, project)
            else:
                self._paint_range(painter, y, project)

    def _paint_range(self, painter: QPainter, y: float, project: Project) -> None:
        """
        Paint a range project as a rounded bar centred in its band.

        The name is drawn inside the bar only when it fits with
        :attr:`BAR_LABEL_MARGIN` to spare; otherwise the bar has no label.
        Projects without both dates are skipped.

        Args:
            painter: Active painter
            y: Top of the project's swimlane band
            project: The project

        """
        start = parse_date(project.start_date)
        end = parse_date(project.end_date)
        if start is None or end is None:
            logger.debug(f"Skipping range project {project.id!r}: missing dates")
            return
        if start > end:
            start, end = end, start

        start_x = self.layout.x_for_date(start)
        end_x = self.layout.x_for_date(end)
        bar_width = end_x - start_x
        bar_y = y + self.layout.geometry.row_height / 2 - self.BAR_HEIGHT / 2

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(_color(project.color, "#3B82F6")))
        painter.drawRoundedRect(
            QRectF(start_x, bar_y, max(bar_width, self.MIN_BAR_WIDTH), self.BAR_HEIGHT),
            self.BAR_RADIUS,
            self.BAR_RADIUS,
        )
        painter.setBrush(Qt.BrushStyle.NoBrush)

        font = _font(11)
        metrics = QFontMetricsF(font)
        text_width = metrics.horizontalAdvance(project.name)
        if text_width < bar_width - self.BAR_LABEL_MARGIN:
            painter.setFont(font)
            painter.setPen(QColor(self.BAR_TEXT_COLOR))
            painter.drawText(
                QPointF((start_x + end_x) / 2 - text_width / 2, bar_y + 14),
                project.name,
            )

    def _paint_milestone(self, painter: QPainter, y: float, project: Project) -> None:
        """
        Paint a milestone as a downward-pointing triangle with its name below.

        Milestones outside the window are positioned outside the grid, and
        whatever falls off the image is simply not visible.
        """
        delivery = parse_date(project.delivery_date)
        if delivery is None:
            logger.debug(f"Skipping milestone {project.id!r}: missing delivery date")
            return
        x = self.milestone_x(delivery)
        center_y = y + self.layout.geometry.row_height / 2

        marker = QPolygonF(
            [
                QPointF(x - self.MILESTONE_HALF_WIDTH, center_y - self.MILESTONE_TOP),
                QPointF(x + self.MILESTONE_HALF_WIDTH, center_y - self.MILESTONE_TOP),
                QPointF(x, center_y + self.MILESTONE_TIP),
            ]
        )
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(_color(project.color, "#EF4444")))
        painter.drawPolygon(marker)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        font = _font(10)
        painter.setFont(font)
        painter.setPen(self.text_color)
        text_width = QFontMetricsF(font).horizontalAdvance(project.name)
        painter.drawText(QPointF(x - text_width / 2, center_y + 22), project.name)

    def _paint_border(self, painter: QPainter) -> None:
        geometry = self.layout.geometry
        painter.setPen(QPen(self.grid_color, 2))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(
            QRectF(
                geometry.padding,
                geometry.header_height,
                self.layout.grid_width,
                self.layout.grid_height,
            )
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def milestone_x(self, delivery: date) -> float:
        """
        X position of a milestone marker's tip.

        Args:
            delivery: Delivery day

        Returns:
            The logical x coordinate; may lie outside the canvas

        """
        return self.layout.x_for_date(delivery)

    def _month_format(self) -> MonthFormat:
        try:
            return MonthFormat(self.settings.month_format)
        except ValueError:
            return MonthFormat.SHORT


def render_timeline(  # noqa: PLR0913
    projects: Iterable[Project],
    swimlanes: Iterable[Swimlane],
    settings: TimelineSettings,
    scale: float = 1.0,
    geometry: LayoutGeometry = DEFAULT_GEOMETRY,
    today: date | None = None,
) -> QImage:
    """
    Lay out and render a timeline in one call.

    Args:
        projects: Projects to draw
        swimlanes: Swimlanes to draw
        settings: Timeline settings

    Keyword Args:
        scale: Resolution multiplier
        geometry: Fixed sizes to lay out with
        today: Override for the current day, used for window defaults

    Returns:
        The rendered image

    """
    swimlanes = list(swimlanes)
    layout = compute_layout(settings, len(swimlanes), geometry=geometry, today=today)
    return SceneRenderer(layout, swimlanes, projects, settings).render(scale)
