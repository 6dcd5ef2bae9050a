"""PNG export service for Timeline Creator."""

from __future__ import annotations

import logging
import re
from datetime import UTC, date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Final, Protocol

from tlapp.exc import ExportFailed, ExportInProgress

if TYPE_CHECKING:
    from PySide6.QtGui import QImage

logger = logging.getLogger(__name__)


class RenderSurface(Protocol):
    """
    The raster surface the timeline is drawn on and exported from.

    The surface's resolution is shared between the on-screen view and the
    export, so an exporter must hold it (:meth:`acquire`) for the whole
    export and hand it back (:meth:`release`) afterwards.
    """

    def acquire(self) -> bool:
        """Take the surface; ``False`` if someone else holds it."""

    def release(self) -> None:
        """Hand the surface back and restore the on-screen resolution."""

    def render_interactive(self) -> None:
        """Redraw at the display resolution."""

    def render_for_export(self, scale_factor: float) -> QImage | None:
        """Re-render at ``scale_factor`` times the display resolution."""

    def current_image(self) -> QImage | None:
        """Whatever image the surface currently holds."""


def export_filename(title: str, on: date | None = None) -> str:
    """
    Build the file name a timeline is exported under.

    Whitespace runs become underscores and path separators are dropped, so
    "Project Timeline 2024" exported on 2024-05-01 becomes
    ``Project_Timeline_2024_2024-05-01.png``.

    Args:
        title: Timeline title

    Keyword Args:
        on: Export day; defaults to today's UTC date

    Returns:
        The file name

    """
    base = re.sub(r"\s+", "_", title.strip())
    base = re.sub(r"[\\/]", "", base) or "timeline"
    on = on or datetime.now(UTC).date()
    return f"{base}_{on.isoformat()}.png"


class PNGExporter:
    """
    Exports the timeline surface to a PNG file at high resolution.

    Only one export can run at a time; a second :meth:`export` while one is in
    flight is refused.

    Args:
        surface: Surface to export

    Keyword Args:
        scale_factor: Resolution multiplier over the on-screen render

    """

    #: Default resolution multiplier for exported images.
    DEFAULT_SCALE_FACTOR: Final[int] = 4
    #: Image quality handed to the PNG writer.
    PNG_QUALITY: Final[int] = 100

    def __init__(
        self, surface: RenderSurface, scale_factor: float = DEFAULT_SCALE_FACTOR
    ) -> None:
        #: The surface to export.
        self.surface = surface
        #: Resolution multiplier.
        self.scale_factor = scale_factor
        #: Whether an export is running.
        self._busy = False

    @property
    def busy(self) -> bool:
        """Whether an export is running."""
        return self._busy

    def export(self, output_path: Path) -> bool:
        """
        Export the timeline to a PNG file.

        Args:
            output_path: Path of the PNG file to write

        Returns:
            True if successful, False otherwise

        """
        try:
            self._begin()
        except ExportInProgress as e:
            logger.warning(f"{e}; ignoring export to {output_path}")
            return False
        try:
            image = self._obtain_image()
            self._write(image, output_path)
        except ExportFailed:
            logger.exception(f"Could not export timeline to {output_path}")
            return False
        finally:
            self._end()
        logger.info(
            f"Exported {image.width()}x{image.height()} timeline to {output_path}"
        )
        return True

    def export_to_directory(
        self, filename_base: str, directory: Path, on: date | None = None
    ) -> Path | None:
        """
        Export into ``directory`` under the name from :func:`export_filename`.

        Args:
            filename_base: Timeline title
            directory: Directory to write into

        Keyword Args:
            on: Export day used in the file name

        Returns:
            Path of the written file, or ``None`` if the export failed

        """
        output_path = Path(directory) / export_filename(filename_base, on)
        if self.export(output_path):
            return output_path
        return None

    def _begin(self) -> None:
        if self._busy or not self.surface.acquire():
            raise ExportInProgress
        self._busy = True

    def _end(self) -> None:
        self._busy = False
        self.surface.release()

    def _obtain_image(self) -> QImage:
        """
        Get the image to write.

        The high resolution render is tried first; if the surface cannot
        provide one, the image it currently shows is used instead.

        Raises:
            ExportFailed: Neither image is available

        Returns:
            The image

        """
        image = self.surface.render_for_export(self.scale_factor)
        if image is None or image.isNull():
            logger.warning("High resolution render unavailable; using current image")
            image = self.surface.current_image()
        if image is None or image.isNull():
            msg = "no raster image available"
            raise ExportFailed(msg)
        return image

    def _write(self, image: QImage, output_path: Path) -> None:
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportFailed(str(e)) from e
        if not image.save(str(output_path), "PNG", self.PNG_QUALITY):
            msg = f"could not write {output_path}"
            raise ExportFailed(msg)
