class DoesNotExist(Exception):  # noqa: N818
    """Exception raised when a resource does not exist."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f'{resource_type} with ID "{resource_id!s}" does not exist')


class ExportFailed(Exception):  # noqa: N818
    """Exception raised when no raster image could be produced for export."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Export failed: {reason}")


class ExportInProgress(Exception):  # noqa: N818
    """Exception raised when an export is requested while another is running."""

    def __init__(self):
        super().__init__("An export is already in progress")
